"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for catalog items, their owning units and reconciliation statistics.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from datkeeper.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


# =============================
# Enums
# =============================

class ItemType(Enum):
    """Variant tag of a catalog item."""
    FILE = "file"
    DISK = "disk"
    SAMPLE = "sample"
    RELEASE = "release"
    BIOS_SET = "biosset"
    ARCHIVE = "archive"

    def __repr__(self) -> str:
        return self.value


class ItemStatus(Enum):
    NONE = "none"
    GOOD = "good"
    BAD_DUMP = "baddump"
    NODUMP = "nodump"
    VERIFIED = "verified"


class DupeType(Enum):
    """
    Records how an item absorbed a duplicate during merging.
    Internal means the duplicate came from the same system/source,
    External means it came from another one. "All" means unit and item
    names matched too, "Hash" means only the digests did.
    """
    NONE = "none"
    INTERNAL_HASH = "internal-hash"
    INTERNAL_ALL = "internal-all"
    EXTERNAL_HASH = "external-hash"
    EXTERNAL_ALL = "external-all"

    @property
    def is_external(self) -> bool:
        return self in (DupeType.EXTERNAL_HASH, DupeType.EXTERNAL_ALL)

    @property
    def display_name(self) -> str:
        """Human-readable name for summaries."""
        mapping = {
            DupeType.NONE: "Unique",
            DupeType.INTERNAL_HASH: "Internal (hash)",
            DupeType.INTERNAL_ALL: "Internal (all)",
            DupeType.EXTERNAL_HASH: "External (hash)",
            DupeType.EXTERNAL_ALL: "External (all)",
        }
        return mapping.get(self, self.value)


class BucketBy(Enum):
    """
    Key used to split items into buckets before merging.
    Buckets only bound the cost of comparisons, merging never relies on them.
    """
    COARSE = "coarse"
    SIZE = "size"
    CRC = "crc"
    MD5 = "md5"
    SHA1 = "sha1"
    MACHINE = "machine"

    @property
    def description(self) -> str:
        mapping = {
            BucketBy.COARSE: "Size + CRC (all disks share one bucket)",
            BucketBy.SIZE: "Size only",
            BucketBy.CRC: "CRC only",
            BucketBy.MD5: "MD5 only",
            BucketBy.SHA1: "SHA-1 only",
            BucketBy.MACHINE: "Owning unit name",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class UnitOrder(Enum):
    """Presentation order of units in the final index."""
    ORDINAL = "ordinal"
    NATURAL = "natural"
    NATURAL_REVERSED = "natural-reversed"

    @property
    def display_name(self) -> str:
        mapping = {
            UnitOrder.ORDINAL: "Ordinal",
            UnitOrder.NATURAL: "Natural",
            UnitOrder.NATURAL_REVERSED: "Natural (numbers descending)",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

# Digest classes in comparison order; crc is the fast digest
HASH_FIELDS: Tuple[str, ...] = ("crc", "md5", "sha1", "sha256", "sha384", "sha512")
SECURE_HASH_FIELDS: Tuple[str, ...] = HASH_FIELDS[1:]


@dataclass(frozen=True)
class Hashes:
    """
    Independently optional digests of an item.
    None means "unknown", never "zero". Empty byte strings are stored as None.
    """
    crc: Optional[bytes] = None
    md5: Optional[bytes] = None
    sha1: Optional[bytes] = None
    sha256: Optional[bytes] = None
    sha384: Optional[bytes] = None
    sha512: Optional[bytes] = None

    def __post_init__(self):
        for key in HASH_FIELDS:
            value = getattr(self, key)
            if value is not None and not isinstance(value, bytes):
                raise ValueError(f"Field '{key}' must be bytes or None")
            if value == b"":
                object.__setattr__(self, key, None)

    @staticmethod
    def from_hex(**digests: Optional[str]) -> 'Hashes':
        """
        Build digests from hex strings, e.g. Hashes.from_hex(crc="deadbeef").
        """
        unknown = set(digests) - set(HASH_FIELDS)
        if unknown:
            raise ValueError(f"Unknown digest fields: {sorted(unknown)}")
        return Hashes(**{key: ConvertUtils.hex_to_bytes(value) for key, value in digests.items()})

    def get(self, key: str) -> Optional[bytes]:
        return getattr(self, key)

    def hex(self, key: str) -> Optional[str]:
        return ConvertUtils.bytes_to_hex(getattr(self, key))

    def hex_tuple(self) -> Tuple[Optional[str], ...]:
        """All digest classes as hex strings, in HASH_FIELDS order."""
        return tuple(self.hex(key) for key in HASH_FIELDS)

    def present(self) -> Tuple[str, ...]:
        """Names of the digest classes that are known."""
        return tuple(key for key in HASH_FIELDS if getattr(self, key) is not None)

    def is_empty(self, keys: Tuple[str, ...] = HASH_FIELDS) -> bool:
        return all(getattr(self, key) is None for key in keys)

    def backfill(self, other: 'Hashes') -> 'Hashes':
        """
        Returns a copy where every absent digest is taken from `other`.
        Present digests are never overwritten.
        """
        updates = {
            key: getattr(other, key)
            for key in HASH_FIELDS
            if getattr(self, key) is None and getattr(other, key) is not None
        }
        return replace(self, **updates) if updates else self


@dataclass(frozen=True)
class Machine:
    """
    Owning unit ("machine" / "game") of catalog items.
    Everything besides the name is carried through untouched.
    """
    name: str
    description: str = ""
    clone_of: Optional[str] = None
    rom_of: Optional[str] = None
    sample_of: Optional[str] = None
    year: Optional[str] = None
    manufacturer: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class Provenance:
    """Originating system and source of an item, lower ids take precedence."""
    system_id: int = 0
    system: str = ""
    source_id: int = 0
    source: str = ""

    def __post_init__(self):
        if self.system_id < 0 or self.source_id < 0:
            raise ValueError("System and source ids cannot be negative")

    @property
    def rank(self) -> Tuple[int, int]:
        return self.system_id, self.source_id


BLANK_NAME = "null"


@dataclass(frozen=True)
class DatItem:
    """
    A single catalog entry. `item_type` tags the variant; variant specific
    extras stay None where they do not apply.
    """
    item_type: ItemType
    name: str
    machine: Machine
    size: int = -1  # -1 = unknown / not applicable
    hashes: Hashes = field(default_factory=Hashes)
    status: ItemStatus = ItemStatus.NONE
    dupe_type: DupeType = DupeType.NONE
    provenance: Provenance = field(default_factory=Provenance)

    # Release / BiosSet / Disk extras
    region: Optional[str] = None
    language: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    default: Optional[bool] = None
    merge_tag: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.size, int) or isinstance(self.size, bool):
            raise ValueError(f"Size of '{self.name}' must be an integer")
        if self.size < -1:
            raise ValueError(f"Invalid size {self.size} for '{self.name}'")
        if self.item_type == ItemType.DISK:
            if self.size != -1:
                raise ValueError(f"Disk '{self.name}' cannot carry a size")
            if self.hashes.crc is not None:
                raise ValueError(f"Disk '{self.name}' cannot carry a CRC")

    @staticmethod
    def blank(machine: Machine, provenance: Optional[Provenance] = None) -> 'DatItem':
        """Sentinel for a unit that intentionally has no real files."""
        return DatItem(
            item_type=ItemType.FILE,
            name=BLANK_NAME,
            machine=machine,
            size=-1,
            provenance=provenance or Provenance(),
        )

    @property
    def machine_name(self) -> str:
        return self.machine.name

    @property
    def is_nodump(self) -> bool:
        return self.status == ItemStatus.NODUMP

    @property
    def is_blank(self) -> bool:
        return (
            self.item_type == ItemType.FILE
            and self.size == -1
            and self.name == BLANK_NAME
            and self.hashes.is_empty()
        )

    @property
    def primary_digest(self) -> Optional[bytes]:
        """CRC for files. Disks carry no CRC, so every disk shares one bucket."""
        if self.item_type == ItemType.FILE:
            return self.hashes.crc
        return None

    @property
    def coarse_key(self) -> Tuple[int, str]:
        """(size, primary digest hex); a comparison hint, not an identity."""
        digest = self.primary_digest
        return self.size, digest.hex() if digest is not None else ""

    def __repr__(self):
        return (
            f"<DatItem {self.item_type.value} {self.machine.name}/{self.name} "
            f"size={self.size} sys={self.provenance.system_id} src={self.provenance.source_id}>"
        )


@dataclass
class ReconcileStats:
    """
    Statistics collected during a reconciliation pass.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self.dupe_counts: Dict[DupeType, int] = {dupe: 0 for dupe in DupeType}
        self.items_written: int = 0
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            items_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "items": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["items"] += items_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            try:
                listener(stage_name, self.stage_stats[stage_name])
            except Exception as e:
                logger.error(f"Error in stats event handler: {e}")

    def count_dupes(self, items: List['DatItem']) -> None:
        for item in items:
            self.dupe_counts[item.dupe_type] += 1
        self.items_written += len(items)

    def print_summary(self) -> str:
        lines = [
            "Reconciliation Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / ITEMS / TIME"
        ]

        for stage, data in self.stage_stats.items():
            lines.append(f"{stage.title()}: {data['groups']} / {data['items']} / {data['time']:.3f}s")

        lines.append(f"\nItems written: {self.items_written}")
        for dupe, count in self.dupe_counts.items():
            if count:
                lines.append(f"{dupe.display_name}: {count}")

        return "\n".join(lines)


