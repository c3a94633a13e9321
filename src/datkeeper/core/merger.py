"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/merger.py
Collapses catalog items that denote the same physical object into one entry.

Items are scanned in a canonical (size, digests) order. Each item is folded
into the first earlier entry it matches, otherwise it starts a new entry.
Folding fills in missing digests, records whether the duplicate came from the
same provenance (internal) or another one (external), and hands the displayed
identity to the lowest (system_id, source_id).

Partial identity is not transitive: after a backfill, two entries that did not
match during the scan can match each other. The scan is therefore repeated on
its own output until nothing more collapses.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from datkeeper.core.matcher import identity_equal
from datkeeper.core.models import DatItem, DupeType, ItemType

logger = logging.getLogger(__name__)


def scan_order_key(item: DatItem) -> Tuple:
    """(size, crc, md5, sha1, ...) with absent digests ordered first."""
    return item.size, tuple((h is not None, h or "") for h in item.hashes.hex_tuple())


def classify_dupe(existing: DatItem, incoming: DatItem) -> DupeType:
    names_match = (
        existing.machine.name == incoming.machine.name
        and existing.name == incoming.name
    )
    if existing.dupe_type.is_external or existing.provenance.rank != incoming.provenance.rank:
        return DupeType.EXTERNAL_ALL if names_match else DupeType.EXTERNAL_HASH
    return DupeType.INTERNAL_ALL if names_match else DupeType.INTERNAL_HASH


def merge_into(existing: DatItem, incoming: DatItem) -> DatItem:
    """
    Folds `incoming` into `existing` and returns the merged record.
    Neither argument is modified.
    """
    updates = {
        "hashes": existing.hashes.backfill(incoming.hashes),
        "dupe_type": classify_dupe(existing, incoming),
    }

    if incoming.provenance.rank < existing.provenance.rank:
        updates["provenance"] = incoming.provenance
        updates["machine"] = incoming.machine
        updates["name"] = incoming.name

    return replace(existing, **updates)


def _warn_md5_mismatch(existing: DatItem, incoming: DatItem) -> None:
    """Flags files that agree on size, CRC and SHA-1 but not on MD5."""
    if existing.item_type != ItemType.FILE or incoming.item_type != ItemType.FILE:
        return
    a, b = existing.hashes, incoming.hashes
    if (
        existing.size == incoming.size
        and a.crc is not None and a.crc == b.crc
        and a.sha1 is not None and a.sha1 == b.sha1
        and a.md5 is not None and b.md5 is not None and a.md5 != b.md5
    ):
        logger.warning(
            f"MD5 mismatch for {incoming.machine.name}/{incoming.name}: "
            f"existing {a.md5.hex()}, new {b.md5.hex()}"
        )


def _find_match(merged: List[DatItem], item: DatItem, warn: bool = True) -> Optional[int]:
    """Position of the first entry matching `item`, scanning in output order."""
    if item.is_nodump:
        # Only digest-less nodump disks sharing a name may collapse
        if item.item_type != ItemType.DISK:
            return None
        for pos, candidate in enumerate(merged):
            if candidate.is_nodump and identity_equal(candidate, item):
                return pos
        return None

    for pos, candidate in enumerate(merged):
        if candidate.is_nodump:
            continue
        if warn:
            _warn_md5_mismatch(candidate, item)
        if identity_equal(candidate, item):
            return pos
    return None


def _merge_pass(items: Iterable[DatItem], warn: bool = True) -> List[DatItem]:
    merged: List[DatItem] = []
    for item in sorted(items, key=scan_order_key):
        pos = _find_match(merged, item, warn)
        if pos is None:
            merged.append(item)
        else:
            merged[pos] = merge_into(merged[pos], item)
    return merged


def merge_items(items: Iterable[DatItem]) -> List[DatItem]:
    """
    Deduplicates `items` and returns a new list with one entry per physical object.
    Entries come out in scan order, so merging the result again returns it
    unchanged. Empty input gives an empty list.
    """
    items = list(items)
    if not items:
        return []

    merged = _merge_pass(items)
    passes = 1
    while True:
        again = _merge_pass(merged, warn=False)
        passes += 1
        if len(again) == len(merged):
            break
        merged = again

    logger.debug(f"Merged {len(items)} items into {len(again)} entries ({passes} pass(es))")
    return again
