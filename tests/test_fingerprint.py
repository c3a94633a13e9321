"""
Unit tests for CatalogFingerprint and the xxHash algorithm wrapper.
"""
import xxhash

from datkeeper.core.fingerprint import CatalogFingerprint, XXHashAlgorithmImpl
from datkeeper.core.index import group_by_unit
from conftest import make_file


class TestXXHashAlgorithmImpl:

    def test_returns_xxh64_digest(self):
        assert XXHashAlgorithmImpl.hash(b"catalog") == xxhash.xxh64(b"catalog").digest()
        assert len(XXHashAlgorithmImpl.hash(b"")) == 8


class TestCatalogFingerprint:

    def test_render_layout(self):
        index = {"game1": [make_file(name="a.bin")]}
        lines = CatalogFingerprint.render(index).decode("utf-8").split("\n")

        assert lines[0] == "[game1]"
        fields = lines[1].split("\t")
        assert fields[:4] == ["file", "game1", "a.bin", "100"]
        assert fields[4] == "deadbeef"

    def test_equal_indexes_equal_fingerprints(self):
        items = [make_file(name="a.bin"), make_file(name="b.bin", unit="game2")]
        fingerprint = CatalogFingerprint()
        assert fingerprint.compute(group_by_unit(items, False)) == fingerprint.compute(group_by_unit(items, False))

    def test_order_sensitive(self):
        a, b = make_file(name="a.bin"), make_file(name="b.bin")
        fingerprint = CatalogFingerprint()
        assert fingerprint.compute({"g": [a, b]}) != fingerprint.compute({"g": [b, a]})

    def test_field_sensitive(self):
        fingerprint = CatalogFingerprint()
        a = fingerprint.compute({"g": [make_file(sys_id=1)]})
        b = fingerprint.compute({"g": [make_file(sys_id=2)]})
        assert a != b

    def test_custom_algorithm(self):
        class FixedAlgorithm:
            @staticmethod
            def hash(data: bytes) -> bytes:
                return b"\x01\x02"

        assert CatalogFingerprint(FixedAlgorithm()).compute({}) == "0102"
