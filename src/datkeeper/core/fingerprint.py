"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/fingerprint.py
Fingerprints an ordered catalog index so two runs can be compared cheaply.
The digest covers unit keys, item order and every item field.
"""

from typing import Dict, List

import xxhash

from datkeeper.core.index import canonical_fields
from datkeeper.core.interfaces import HashAlgorithm
from datkeeper.core.models import DatItem


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    @staticmethod
    def hash(data: bytes) -> bytes:
        return xxhash.xxh64(data).digest()


class CatalogFingerprint:
    """
    Renders an index as unit key lines followed by tab separated item lines
    and hashes the result with the injected algorithm (xxHash64 by default).
    """

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or XXHashAlgorithmImpl()

    @staticmethod
    def render(index: Dict[str, List[DatItem]]) -> bytes:
        lines = []
        for key, items in index.items():
            lines.append(f"[{key}]")
            lines.extend("\t".join(canonical_fields(item)) for item in items)
        return "\n".join(lines).encode("utf-8")

    def compute(self, index: Dict[str, List[DatItem]]) -> str:
        """Hex digest of the rendered index; order sensitive."""
        return self.algorithm.hash(self.render(index)).hex()
