"""Conversion helpers shared by the core and host applications."""

from .convert_utils import ConvertUtils

__all__ = ["ConvertUtils"]
