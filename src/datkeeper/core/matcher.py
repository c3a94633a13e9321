"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/matcher.py
Decides whether two catalog items denote the same physical object.

RULES (FILE and DISK)
---------------------
1. Two DISK items that are both nodump, share a name and carry no digests
   at all are the same disk.
2. Every digest class present on both sides must be byte-for-byte equal.
3. At least one digest class must be present on both sides. Items with no
   overlapping evidence are never equal.
4. FILE items must also agree on size; DISK items carry no size.

A digest known on only one side does not block equality. Nodump items take
part only through rule 1, blank sentinels never match anything.

Other variants compare on their names and descriptive fields, and items of
different variants are never equal.
"""

from typing import Tuple

from datkeeper.core.models import DatItem, ItemType, HASH_FIELDS, SECURE_HASH_FIELDS, Hashes

# Digest classes taken into account per variant
_DIGESTS_BY_TYPE = {
    ItemType.FILE: HASH_FIELDS,
    ItemType.DISK: SECURE_HASH_FIELDS,
}


def digests_compatible(a: Hashes, b: Hashes, keys: Tuple[str, ...] = HASH_FIELDS) -> bool:
    """
    True when no digest class disagrees and at least one class is known on both sides.
    """
    shared = 0
    for key in keys:
        left = a.get(key)
        right = b.get(key)
        if left is None or right is None:
            continue
        if left != right:
            return False
        shared += 1
    return shared > 0


def _nodump_disks_equal(a: DatItem, b: DatItem) -> bool:
    return (
        a.is_nodump and b.is_nodump
        and a.name == b.name
        and a.hashes.is_empty(SECURE_HASH_FIELDS)
        and b.hashes.is_empty(SECURE_HASH_FIELDS)
    )


def identity_equal(a: DatItem, b: DatItem) -> bool:
    """
    Partial-hash identity of two items; see module docstring for the rules.
    Never raises, cross-variant comparisons simply return False.
    """
    if a.item_type != b.item_type:
        return False

    if a.item_type == ItemType.DISK:
        if _nodump_disks_equal(a, b):
            return True
        if a.is_nodump or b.is_nodump:
            return False
        return digests_compatible(a.hashes, b.hashes, _DIGESTS_BY_TYPE[ItemType.DISK])

    if a.item_type == ItemType.FILE:
        if a.is_nodump or b.is_nodump or a.is_blank or b.is_blank:
            return False
        if a.size != b.size:
            return False
        return digests_compatible(a.hashes, b.hashes, _DIGESTS_BY_TYPE[ItemType.FILE])

    if a.item_type == ItemType.RELEASE:
        return (
            a.name == b.name
            and a.region == b.region
            and a.language == b.language
            and a.date == b.date
            and a.default == b.default
        )

    if a.item_type == ItemType.BIOS_SET:
        return a.name == b.name and a.description == b.description and a.default == b.default

    # SAMPLE and ARCHIVE are identified by name alone
    return a.name == b.name
