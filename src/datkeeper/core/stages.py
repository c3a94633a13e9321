"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Reconciliation pipeline stages.

CLASS HIERARCHY
---------------
FilterStageImpl    : Drops items rejected by the configured ItemFilter (ItemStage)
BucketingStageImpl : Splits items into comparison buckets (PartitionStage)
MergeStage         : Deduplicates every bucket independently (BucketStage)

STAGE CONTRACTS
---------------
Each stage implements a `process()` interface that:
  • Accepts the output of the previous stage
  • Returns new containers; input lists and items are never modified
  • Reports progress via callback (stage name, processed count, total count)

Buckets never share item identity, so merging one bucket cannot affect
another and bucket order only decides output order before indexing.
"""

import logging
from typing import Callable, List, Optional

from datkeeper.core.filter import ItemFilter
from datkeeper.core.grouper import ItemGrouperImpl
from datkeeper.core.interfaces import BucketStage, ItemStage, PartitionStage
from datkeeper.core.merger import merge_items
from datkeeper.core.models import BucketBy, DatItem

logger = logging.getLogger(__name__)


class FilterStageImpl(ItemStage):
    def __init__(self, item_filter: ItemFilter):
        self.item_filter = item_filter

    def get_stage_name(self) -> str:
        return "filter"

    def process(
            self,
            items: List[DatItem],
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DatItem]:
        kept = self.item_filter.apply(items)
        if progress_callback:
            progress_callback(self.get_stage_name(), len(items), len(items))
        return kept


class BucketingStageImpl(PartitionStage):
    def __init__(self, grouper: ItemGrouperImpl, bucket_by: BucketBy = BucketBy.COARSE):
        self.grouper = grouper
        self.bucket_by = bucket_by

    def get_stage_name(self) -> str:
        return "bucket"

    def process(
            self,
            items: List[DatItem],
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[List[DatItem]]:
        """
        Group by the configured bucket key.
        Single-item buckets are kept: every item must reach the output.
        """
        buckets = list(self.grouper.group(items, self.bucket_by).values())
        logger.debug(f"Bucketed {len(items)} items by {self.bucket_by.value} into {len(buckets)} buckets")

        if progress_callback:
            progress_callback(self.get_stage_name(), len(items), len(items))
        return buckets


class MergeStage(BucketStage):
    def get_stage_name(self) -> str:
        return "merge"

    def process(
            self,
            buckets: List[List[DatItem]],
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[List[DatItem]]:
        total_items = sum(len(bucket) for bucket in buckets)
        processed_items = 0
        merged_buckets = []

        for bucket in buckets:
            merged_buckets.append(merge_items(bucket))

            processed_items += len(bucket)
            if progress_callback:
                progress_callback(self.get_stage_name(), processed_items, total_items)

        return merged_buckets
