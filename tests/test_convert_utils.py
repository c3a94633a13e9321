"""
Tests for size and digest conversion utilities used by item filters and digest parsing.
"""
import pytest
from datkeeper.utils.convert_utils import ConvertUtils


class TestHumanToBytes:
    """Test conversion from human-readable sizes (e.g., "500KB") to bytes."""

    def test_bytes_without_suffix(self):
        """Plain numbers should be interpreted as bytes."""
        assert ConvertUtils.human_to_bytes("0") == 0
        assert ConvertUtils.human_to_bytes("1024") == 1024
        assert ConvertUtils.human_to_bytes("1024B") == 1024

    def test_binary_multipliers(self):
        """Suffixes multiply by powers of 1024, short and long forms alike."""
        assert ConvertUtils.human_to_bytes("1KB") == 1024
        assert ConvertUtils.human_to_bytes("1K") == 1024
        assert ConvertUtils.human_to_bytes("1.5KB") == 1536
        assert ConvertUtils.human_to_bytes("1M") == 1024 * 1024
        assert ConvertUtils.human_to_bytes("0.5GB") == 512 * 1024 * 1024

    def test_case_and_whitespace_insensitive(self):
        assert ConvertUtils.human_to_bytes(" 1kb ") == 1024
        assert ConvertUtils.human_to_bytes("\t1Mb\n") == 1024 * 1024

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-1")
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes("-1KB")

    def test_rejects_invalid_formats(self):
        """Garbage input must raise ValueError."""
        for value in ["", "invalid", "1.2.3KB", "1KB2", "1 XB", "KB"]:
            with pytest.raises(ValueError):
                ConvertUtils.human_to_bytes(value)


class TestHexDigests:
    """Test digest string parsing used by Hashes.from_hex and filters."""

    def test_round_trip(self):
        assert ConvertUtils.hex_to_bytes("DEADbeef") == b"\xde\xad\xbe\xef"
        assert ConvertUtils.bytes_to_hex(b"\xde\xad\xbe\xef") == "deadbeef"

    def test_absent_values(self):
        assert ConvertUtils.hex_to_bytes(None) is None
        assert ConvertUtils.hex_to_bytes("") is None
        assert ConvertUtils.hex_to_bytes("  ") is None
        assert ConvertUtils.bytes_to_hex(None) is None

    def test_rejects_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            ConvertUtils.hex_to_bytes("abc")

    def test_rejects_non_hex(self):
        with pytest.raises(ValueError, match="Invalid hex digest"):
            ConvertUtils.hex_to_bytes("zz")
