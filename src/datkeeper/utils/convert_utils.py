"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import string
from typing import Optional


class ConvertUtils:
    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '1.5GB', '2048KB', '1000', '1K', '1M', '1G', etc.
        Raises ValueError for negative sizes or invalid formats.
        """
        size_str = size_str.strip().upper()

        units = {
            'PB': 1024 ** 5, 'P': 1024 ** 5,
            'TB': 1024 ** 4, 'T': 1024 ** 4,
            'GB': 1024 ** 3, 'G': 1024 ** 3,
            'MB': 1024 ** 2, 'M': 1024 ** 2,
            'KB': 1024, 'K': 1024,
            'B': 1,
        }

        # Longest suffix first so 'KB' is not read as 'K' + 'B'
        for unit in sorted(units.keys(), key=len, reverse=True):
            if size_str.endswith(unit):
                value_str = size_str[:-len(unit)].strip()
                try:
                    value = float(value_str)
                except ValueError:
                    raise ValueError(f"Invalid numeric value in size: '{value_str}'")

                if value < 0:
                    raise ValueError(f"Negative size not allowed: '{size_str}'")
                return int(value * units[unit])

        try:
            value = int(size_str)
        except ValueError:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, etc."
            )

        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")
        return value

    @staticmethod
    def hex_to_bytes(hex_str: Optional[str]) -> Optional[bytes]:
        """
        Convert a hex digest string to bytes.
        None and empty strings mean "absent" and return None.
        Raises ValueError for odd lengths or non-hex characters.
        """
        if hex_str is None:
            return None
        hex_str = hex_str.strip().lower()
        if not hex_str:
            return None
        if len(hex_str) % 2 != 0:
            raise ValueError(f"Hex digest must have an even length: '{hex_str}'")
        if any(c not in string.hexdigits for c in hex_str):
            raise ValueError(f"Invalid hex digest: '{hex_str}'")
        return bytes.fromhex(hex_str)

    @staticmethod
    def bytes_to_hex(value: Optional[bytes]) -> Optional[str]:
        """Render a digest as lower-case hex, keeping None as None."""
        if value is None:
            return None
        return value.hex()
