"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Splits catalog items into buckets that bound the cost of merging.
Buckets are a hint only: two items sharing a bucket may still differ, and
the merge never relies on bucketing being exact.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Tuple

from datkeeper.core.interfaces import ItemGrouper
from datkeeper.core.models import BucketBy, DatItem

logger = logging.getLogger(__name__)


class ItemGrouperImpl(ItemGrouper):
    """
    Groups items by coarse key, a single digest, size or owning unit.
    Keys come out in first-seen order, so a fixed input sequence always
    yields the same bucket sequence.
    """

    def group_by_coarse_key(self, items: Iterable[DatItem]) -> Dict[Tuple[int, str], List[DatItem]]:
        """
        Groups items by (size, primary digest).
        A size where any item lacks its primary digest stays a single (size, "")
        bucket, so every pair of matching items shares a bucket.
        """
        groups = self._group_by(items, lambda i: i.coarse_key)
        open_sizes = {size for size, digest in groups if not digest}

        buckets = defaultdict(list)
        for (size, digest), bucket in groups.items():
            key = (size, "") if size in open_sizes else (size, digest)
            buckets[key].extend(bucket)
        return dict(buckets)

    def group_by_size(self, items: Iterable[DatItem]) -> Dict[int, List[DatItem]]:
        return self._group_by(items, lambda i: i.size)

    def group_by_digest(self, items: Iterable[DatItem], digest: str) -> Dict[str, List[DatItem]]:
        """Groups items by one digest class; items lacking it share the "" bucket."""
        return self._group_by(items, lambda i: i.hashes.hex(digest) or "")

    def group_by_machine(self, items: Iterable[DatItem]) -> Dict[str, List[DatItem]]:
        return self._group_by(items, lambda i: i.machine.name.lower())

    def group(self, items: Iterable[DatItem], bucket_by: BucketBy) -> Dict[Any, List[DatItem]]:
        """Dispatches to the grouping selected by `bucket_by`."""
        if bucket_by == BucketBy.COARSE:
            return self.group_by_coarse_key(items)
        if bucket_by == BucketBy.SIZE:
            return self.group_by_size(items)
        if bucket_by == BucketBy.MACHINE:
            return self.group_by_machine(items)
        return self.group_by_digest(items, bucket_by.value)

    @staticmethod
    def _group_by(items: Iterable[DatItem], key_func: Callable[[DatItem], Any]) -> Dict[Any, List[DatItem]]:
        """
        Helper method to group items by any computed key.
        Args:
            items: Items to group
            key_func: Function that computes a hashable key from a DatItem
        Returns:
            Dict[key, List[DatItem]] in first-seen key order, singletons included
        """
        groups = defaultdict(list)
        for item in items:
            key = key_func(item)
            groups[key].append(item)

        logger.debug(f"Grouped items into {len(groups)} buckets")
        return dict(groups)
