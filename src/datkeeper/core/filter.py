"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/filter.py
Selects catalog items by name, type, size, digest and dump status.

Name and digest patterns are case-insensitive:
    "*abc*" → contains "abc"
    "*abc"  → ends with "abc"
    "abc*"  → starts with "abc"
    "abc"   → equals "abc"
An empty pattern matches everything. Digest patterns never match an item
that lacks the digest.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from datkeeper.core.models import DatItem, ItemType
from datkeeper.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


def matches_pattern(value: Optional[str], pattern: str) -> bool:
    if not pattern:
        return True
    if value is None:
        return False

    value = value.lower()
    pattern = pattern.lower()
    starts, ends = pattern.startswith("*"), pattern.endswith("*")
    core = pattern.replace("*", "")

    if starts and ends:
        return core in value
    if starts:
        return value.endswith(core)
    if ends:
        return value.startswith(core)
    return value == core


@dataclass(frozen=True)
class ItemFilter:
    """
    Item selection criteria; the defaults let every item through.
    Size bounds are inclusive and -1 disables them. `size_equals` takes
    precedence over the bounds. `nodump`: None = all, True = only nodump
    items, False = no nodump items.
    """
    machine_name: str = ""
    item_name: str = ""
    item_type: Optional[ItemType] = None
    size_at_least: int = -1
    size_at_most: int = -1
    size_equals: int = -1
    crc: str = ""
    md5: str = ""
    sha1: str = ""
    nodump: Optional[bool] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        for name in ("size_at_least", "size_at_most", "size_equals"):
            if getattr(self, name) < -1:
                raise ValueError(f"{name} cannot be negative")

        if -1 not in (self.size_at_least, self.size_at_most) and self.size_at_most < self.size_at_least:
            raise ValueError("Maximum size cannot be less than minimum size")

        if self.item_type is not None and not isinstance(self.item_type, ItemType):
            raise ValueError(f"Unsupported item type: {self.item_type!r}")

    @property
    def is_noop(self) -> bool:
        return self == ItemFilter()

    def _size_matches(self, size: int) -> bool:
        if self.size_equals != -1:
            return size == self.size_equals
        if self.size_at_least != -1 and size < self.size_at_least:
            return False
        if self.size_at_most != -1 and size > self.size_at_most:
            return False
        return True

    def matches(self, item: DatItem) -> bool:
        if self.nodump is not None and item.is_nodump != self.nodump:
            return False
        if not matches_pattern(item.machine.name, self.machine_name):
            return False
        if not matches_pattern(item.name, self.item_name):
            return False
        if self.item_type is not None and item.item_type != self.item_type:
            return False
        if not self._size_matches(item.size):
            return False
        return (
            matches_pattern(item.hashes.hex("crc"), self.crc)
            and matches_pattern(item.hashes.hex("md5"), self.md5)
            and matches_pattern(item.hashes.hex("sha1"), self.sha1)
        )

    def apply(self, items: Iterable[DatItem]) -> List[DatItem]:
        """Returns the matching items in their original order."""
        items = list(items)
        if self.is_noop:
            return items
        kept = [item for item in items if self.matches(item)]
        logger.debug(f"Filter kept {len(kept)} of {len(items)} items")
        return kept

    @staticmethod
    def from_human_readable(
            machine_name: str = "",
            item_name: str = "",
            item_type: str = "",
            size_at_least: str = "",
            size_at_most: str = "",
            size_equals: str = "",
            crc: str = "",
            md5: str = "",
            sha1: str = "",
            nodump: Optional[bool] = None,
    ) -> 'ItemFilter':
        """
        Factory method to create a filter from human-readable inputs,
        e.g. size_at_least="500K", item_type="disk".
        """
        def to_size(size_str: str) -> int:
            return ConvertUtils.human_to_bytes(size_str) if size_str.strip() else -1

        kind = None
        if item_type.strip():
            try:
                kind = ItemType(item_type.strip().lower())
            except ValueError:
                raise ValueError(f"Unknown item type: '{item_type}'")

        return ItemFilter(
            machine_name=machine_name.strip(),
            item_name=item_name.strip(),
            item_type=kind,
            size_at_least=to_size(size_at_least),
            size_at_most=to_size(size_at_most),
            size_equals=to_size(size_equals),
            crc=crc.strip(),
            md5=md5.strip(),
            sha1=sha1.strip(),
            nodump=nodump,
        )
