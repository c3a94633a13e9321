"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/index.py
Regroups reconciled items by owning unit and puts them in a stable order.

With renaming enabled, unit keys are prefixed with the zero-padded system and
source ids so items of different provenance never share a unit bucket and
numeric provenance order wins over the unit name. Keys are computed once,
before an item enters any bucket.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from datkeeper.core.models import DatItem, UnitOrder
from datkeeper.core.natural import natural_key, natural_reversed_key

logger = logging.getLogger(__name__)

ID_WIDTH = 10


def _text(value) -> str:
    return "" if value is None else str(value)


def canonical_fields(item: DatItem) -> Tuple[str, ...]:
    """Flat string rendering of every field of an item."""
    machine, provenance = item.machine, item.provenance
    return (
        item.item_type.value,
        machine.name,
        item.name,
        str(item.size),
        *(_text(h) for h in item.hashes.hex_tuple()),
        item.status.value,
        item.dupe_type.value,
        str(provenance.system_id),
        provenance.system,
        str(provenance.source_id),
        provenance.source,
        machine.description,
        _text(machine.clone_of),
        _text(machine.rom_of),
        _text(machine.sample_of),
        _text(machine.year),
        _text(machine.manufacturer),
        _text(machine.comment),
        _text(item.region),
        _text(item.language),
        _text(item.date),
        _text(item.description),
        _text(item.default),
        _text(item.merge_tag),
    )


def unit_key(item: DatItem, renaming_enabled: bool) -> str:
    name = item.machine.name.lower()
    if not renaming_enabled:
        return name
    provenance = item.provenance
    return f"{provenance.system_id:0{ID_WIDTH}d}-{provenance.source_id:0{ID_WIDTH}d}-{name}"


def item_sort_key(item: DatItem, renaming_enabled: bool) -> Tuple:
    """
    (system_id, source_id, unit, name) without renaming, (unit, name) with it.
    The remaining fields break ties so the order never depends on input order.
    """
    if renaming_enabled:
        head = (item.machine.name, item.name)
    else:
        head = (item.provenance.system_id, item.provenance.source_id, item.machine.name, item.name)
    return head + canonical_fields(item)


def sort_items(items: Iterable[DatItem], renaming_enabled: bool) -> List[DatItem]:
    """Returns a new, totally ordered list; the input is left untouched."""
    return sorted(items, key=lambda item: item_sort_key(item, renaming_enabled))


def group_by_unit(items: Iterable[DatItem], renaming_enabled: bool) -> Dict[str, List[DatItem]]:
    """
    Buckets items by unit key. The returned dict iterates in ascending key
    order and every bucket is sorted with sort_items().
    """
    buckets = defaultdict(list)
    for item in items:
        key = unit_key(item, renaming_enabled)
        buckets[key].append(item)

    return {key: sort_items(buckets[key], renaming_enabled) for key in sorted(buckets)}


def order_units(index: Dict[str, List[DatItem]], unit_order: UnitOrder) -> Dict[str, List[DatItem]]:
    """Re-orders unit keys for presentation; buckets are left as they are."""
    if unit_order == UnitOrder.NATURAL:
        keys = sorted(index, key=natural_key)
    elif unit_order == UnitOrder.NATURAL_REVERSED:
        keys = sorted(index, key=natural_reversed_key)
    else:
        keys = sorted(index)
    return {key: index[key] for key in keys}


def count_items(index: Dict[str, List[DatItem]]) -> int:
    return sum(len(items) for items in index.values())
