"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the reconciliation pipeline.

Key Components:
---------------
- HashAlgorithm: Standardized interface for hash functions used to fingerprint output.
- ItemGrouper: Interface for splitting items into comparison buckets.
- ItemStage / PartitionStage / BucketStage: Interfaces for individual stages in the pipeline.
- Reconciler: Interface for the engine coordinating all stages.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from datkeeper.core.models import BucketBy, DatItem, ReconcileStats

if TYPE_CHECKING:
    from datkeeper.core.params import ReconcileParams


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like xxHash or SHA-256
    without affecting the fingerprinting logic.
    """

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the hash of the provided byte data."""
        ...


class ItemGrouper(Protocol):
    """
    Interface for grouping items into buckets before merging.
    """
    def group_by_coarse_key(self, items: Iterable[DatItem]) -> Dict[Any, List[DatItem]]:
        """Group items by (size, primary digest)."""
        ...

    def group(self, items: Iterable[DatItem], bucket_by: BucketBy) -> Dict[Any, List[DatItem]]:
        """Group items by the selected key."""
        ...


# =============================
# Stage Interfaces
# =============================

class ItemStage(Protocol):
    """
    A stage that turns a flat item list into another flat item list.
    """

    def get_stage_name(self) -> str:
        """Return the name of this stage (used in logging and stats)."""
        ...

    def process(
        self,
        items: List[DatItem],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DatItem]:
        ...


class PartitionStage(Protocol):
    """
    A stage that splits a flat item list into buckets.
    """

    def get_stage_name(self) -> str:
        ...

    def process(
        self,
        items: List[DatItem],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[List[DatItem]]:
        ...


class BucketStage(Protocol):
    """
    A stage that works on buckets of items and returns buckets.
    """

    def get_stage_name(self) -> str:
        ...

    def process(
        self,
        buckets: List[List[DatItem]],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[List[DatItem]]:
        """
        Args:
            buckets: Item buckets produced by an earlier stage.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Refined buckets for the next stage.
        """
        ...


class Reconciler(Protocol):
    """
    Interface for the main reconciliation engine.

    Coordinates filter → bucket → merge → index and collects statistics.
    """
    def reconcile(
        self,
        items: Iterable[DatItem],
        params: 'ReconcileParams',
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[Dict[str, List[DatItem]], ReconcileStats]:
        """
        Run the full pipeline.

        Args:
            items: Parsed items, in the order the parsers emitted them.
            params: Merge, renaming, bucketing, ordering and filter settings.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            A tuple containing:
                - Unit key → ordered items, iterated in the configured unit order
                - Statistics collected during processing
        """
        ...
