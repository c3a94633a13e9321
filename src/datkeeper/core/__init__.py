"""
Core reconciliation engine: item model, matcher, merger, grouper, index and pipeline.

This package contains the whole normalization / merge / ordering logic:
- Models: DatItem, Hashes, Machine, Provenance and the variant/status enums
- identity_equal: partial-hash identity of two items
- merge_items / merge_into: cross-source deduplication with provenance tie-breaking
- ItemGrouperImpl: coarse-key bucketing
- group_by_unit / sort_items: deterministic unit index
- natural_compare: natural string ordering shared with archive writers
- ReconcilerImpl: filter → bucket → merge → index pipeline

Everything is pure Python over in-memory items; nothing here reads or writes files.
"""

from .models import (
    DatItem, Hashes, Machine, Provenance, ItemType, ItemStatus, DupeType,
    BucketBy, UnitOrder, ReconcileStats, HASH_FIELDS)
from .matcher import identity_equal
from .merger import merge_items, merge_into
from .grouper import ItemGrouperImpl
from .index import group_by_unit, sort_items, order_units
from .natural import natural_compare, natural_reversed_compare, natural_sorted
from .filter import ItemFilter
from .params import ReconcileParams
from .reconciler import ReconcilerImpl
from .fingerprint import CatalogFingerprint, XXHashAlgorithmImpl

__all__ = [
    "DatItem",
    "Hashes",
    "Machine",
    "Provenance",
    "ItemType",
    "ItemStatus",
    "DupeType",
    "BucketBy",
    "UnitOrder",
    "ReconcileStats",
    "HASH_FIELDS",
    "identity_equal",
    "merge_items",
    "merge_into",
    "ItemGrouperImpl",
    "group_by_unit",
    "sort_items",
    "order_units",
    "natural_compare",
    "natural_reversed_compare",
    "natural_sorted",
    "ItemFilter",
    "ReconcileParams",
    "ReconcilerImpl",
    "CatalogFingerprint",
    "XXHashAlgorithmImpl",
]
