"""
Unified command orchestrator for catalog reconciliation.
This is the single entry point for host applications (format converters,
archive builders); it holds no parser or writer logic.
"""
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from datkeeper.core.fingerprint import CatalogFingerprint
from datkeeper.core.models import DatItem, ReconcileStats
from datkeeper.core.params import ReconcileParams
from datkeeper.core.reconciler import ReconcilerImpl


class ReconcileCommand:
    """
    Orchestrates a reconciliation pass over already parsed items.

    Usage:
        params = ReconcileParams(merge=True, renaming_enabled=False)
        command = ReconcileCommand()
        index, stats = command.execute(
            items,
            params,
            progress_callback=cli_progress_printer,
        )
        for unit_key, unit_items in index.items():
            writer.write(unit_key, unit_items)
    """

    def __init__(self):
        self._reconciler = ReconcilerImpl()
        self._fingerprint = CatalogFingerprint()
        self._index: Dict[str, List[DatItem]] = {}

    def execute(
            self,
            items: Iterable[DatItem],
            params: Optional[ReconcileParams] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[Dict[str, List[DatItem]], ReconcileStats]:
        """
        Execute reconciliation with given parameters.

        Args:
            items: Items in parser emission order
            params: Validated parameters, defaults to ReconcileParams()
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (unit index, statistics)
        """
        params = params or ReconcileParams()
        index, stats = self._reconciler.reconcile(
            items,
            params,
            progress_callback=progress_callback
        )
        self._index = index
        return index, stats

    def get_index(self) -> Dict[str, List[DatItem]]:
        """Get the index of the last execution."""
        return {key: list(items) for key, items in self._index.items()}

    def fingerprint(self) -> str:
        """xxHash64 fingerprint of the last index, stable across identical runs."""
        return self._fingerprint.compute(self._index)
