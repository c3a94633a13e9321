"""
datkeeper: catalog reconciliation for software / media collections.

Core features:
- Canonical catalog item model (files, disks, samples, releases, BIOS sets, archives)
- Partial-hash identity that tolerates missing digests
- Cross-source merging with provenance tie-breaking and duplicate classification
- Deterministic unit index and natural string ordering for reproducible output
"""

try:
    from importlib.metadata import PackageNotFoundError, version as _version
    __version__ = _version("datkeeper")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from datkeeper.commands import ReconcileCommand
from datkeeper.core import (
    DatItem, Hashes, Machine, Provenance, ItemType, ItemStatus, DupeType,
    BucketBy, UnitOrder, ItemFilter, ReconcileParams, ReconcileStats,
    identity_equal, merge_items, group_by_unit, sort_items, natural_sorted)
from datkeeper.utils.convert_utils import ConvertUtils

__all__ = [
    "ReconcileCommand",
    "DatItem",
    "Hashes",
    "Machine",
    "Provenance",
    "ItemType",
    "ItemStatus",
    "DupeType",
    "BucketBy",
    "UnitOrder",
    "ItemFilter",
    "ReconcileParams",
    "ReconcileStats",
    "identity_equal",
    "merge_items",
    "group_by_unit",
    "sort_items",
    "natural_sorted",
    "ConvertUtils",
    "__version__",
]
