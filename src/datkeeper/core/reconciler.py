"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

reconciler.py
Implements the pipeline that turns parsed catalog items into a unit index:
    filter → bucket → merge (optional) → group by unit → order units
"""
import logging
import time
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from datkeeper.core.grouper import ItemGrouperImpl
from datkeeper.core.index import count_items, group_by_unit, order_units
from datkeeper.core.interfaces import Reconciler
from datkeeper.core.models import DatItem, ReconcileStats
from datkeeper.core.params import ReconcileParams
from datkeeper.core.stages import BucketingStageImpl, FilterStageImpl, MergeStage

logger = logging.getLogger(__name__)


# =============================
# Main Reconciler Class
# =============================
class ReconcilerImpl(Reconciler):
    """
    Runs the reconciliation stages in sequence and collects statistics.
    Empty input produces an empty index, never an error.
    """
    def __init__(self, grouper=None):
        self.grouper = grouper or ItemGrouperImpl()

    def reconcile(
        self,
        items: Iterable[DatItem],
        params: ReconcileParams,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[Dict[str, List[DatItem]], ReconcileStats]:
        """
        Args:
            items: Parsed items in parser emission order
            params: Reconciliation settings
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per stage.
        Returns:
            Tuple[Dict[str, List[DatItem]], ReconcileStats]
        """
        stats = ReconcileStats()
        total_start_time = time.time()
        items = list(items)
        logger.debug(f"Reconciling {len(items)} items (merge={params.merge}, "
                     f"renaming={params.renaming_enabled}, bucket_by={params.bucket_by.value})")

        filter_stage = FilterStageImpl(params.item_filter)
        start_time = time.time()
        items = filter_stage.process(items, progress_callback=progress_callback)
        ReconcilerImpl._update_stats(stats, filter_stage.get_stage_name(), time.time() - start_time, [items])

        bucket_stage = BucketingStageImpl(self.grouper, params.bucket_by)
        start_time = time.time()
        buckets = bucket_stage.process(items, progress_callback=progress_callback)
        ReconcilerImpl._update_stats(stats, bucket_stage.get_stage_name(), time.time() - start_time, buckets)

        if params.merge:
            merge_stage = MergeStage()
            start_time = time.time()
            buckets = merge_stage.process(buckets, progress_callback=progress_callback)
            ReconcilerImpl._update_stats(stats, merge_stage.get_stage_name(), time.time() - start_time, buckets)

        start_time = time.time()
        reconciled = [item for bucket in buckets for item in bucket]
        index = group_by_unit(reconciled, params.renaming_enabled)
        index = order_units(index, params.unit_order)
        ReconcilerImpl._update_stats(stats, "index", time.time() - start_time, list(index.values()))
        if progress_callback:
            progress_callback("index", len(reconciled), len(reconciled))

        stats.count_dupes(reconciled)
        stats.total_time = time.time() - total_start_time
        logger.info(f"A total of {count_items(index)} file hashes will be written out")

        return index, stats

    @staticmethod
    def _update_stats(
        stats: ReconcileStats,
        stage: str,
        duration: float,
        buckets: List[List[DatItem]]
    ):
        """Helper to update ReconcileStats object; empty buckets are not counted."""
        stats.update_stage(
            stage_name=stage,
            groups_found=sum(1 for bucket in buckets if bucket),
            items_processed=sum(len(bucket) for bucket in buckets),
            duration=duration
        )
