"""
Shared fixtures for reconciliation core tests.
Builds small catalogs of items with controlled digests and provenance.
"""
import random
import sys
from pathlib import Path
from typing import Callable, List, Optional

import pytest

# Add src/ to sys.path so 'datkeeper' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from datkeeper.core.models import (  # noqa: E402
    DatItem, Hashes, ItemStatus, ItemType, Machine, Provenance)

CRC = "deadbeef"
MD5 = "a" * 32
SHA1 = "1" * 39 + "a"


def make_file(
        name: str = "file.bin",
        unit: str = "game1",
        size: int = 100,
        crc: Optional[str] = CRC,
        md5: Optional[str] = None,
        sha1: Optional[str] = None,
        sys_id: int = 0,
        src_id: int = 0,
        status: ItemStatus = ItemStatus.NONE,
) -> DatItem:
    return DatItem(
        item_type=ItemType.FILE,
        name=name,
        machine=Machine(unit),
        size=size,
        hashes=Hashes.from_hex(crc=crc, md5=md5, sha1=sha1),
        status=status,
        provenance=Provenance(system_id=sys_id, system=f"sys{sys_id}", source_id=src_id, source=f"src{src_id}"),
    )


def make_disk(
        name: str = "disk",
        unit: str = "game1",
        md5: Optional[str] = None,
        sha1: Optional[str] = None,
        sys_id: int = 0,
        src_id: int = 0,
        status: ItemStatus = ItemStatus.NONE,
) -> DatItem:
    return DatItem(
        item_type=ItemType.DISK,
        name=name,
        machine=Machine(unit),
        hashes=Hashes.from_hex(md5=md5, sha1=sha1),
        status=status,
        provenance=Provenance(system_id=sys_id, source_id=src_id),
    )


@pytest.fixture
def file_factory() -> Callable[..., DatItem]:
    return make_file


@pytest.fixture
def disk_factory() -> Callable[..., DatItem]:
    return make_disk


@pytest.fixture
def mixed_catalog() -> List[DatItem]:
    """
    Items from two systems:
    - one file known to both systems with complementary digests
    - one internal duplicate under another name
    - one unique file, one nodump file, two identical nodump disks
    - one disk known to both systems, only one of which has its SHA-1
    - a blank sentinel for a unit without files
    """
    return [
        make_file("file.bin", "game1", crc=CRC, sha1=SHA1, sys_id=1),
        make_file("file.bin", "game1", crc=CRC, md5=MD5, sys_id=2),
        make_file("copy.bin", "game2", crc=CRC, sha1=SHA1, sys_id=1),
        make_file("other.bin", "game2", size=200, crc="cafebabe", sys_id=1),
        make_file("missing.bin", "game3", crc=None, status=ItemStatus.NODUMP, sys_id=2),
        make_disk("hdd", "game3", status=ItemStatus.NODUMP, sys_id=1),
        make_disk("hdd", "game3", status=ItemStatus.NODUMP, sys_id=2),
        make_disk("cd", "game3", md5=MD5, sys_id=1),
        make_disk("cd", "game3", md5=MD5, sha1=SHA1, sys_id=2),
        DatItem.blank(Machine("empty"), Provenance(system_id=1)),
    ]


@pytest.fixture
def shuffled() -> Callable[[List[DatItem], int], List[DatItem]]:
    """Returns a seeded shuffle of a list (input left untouched)."""
    def _shuffle(items: List[DatItem], seed: int) -> List[DatItem]:
        copy = list(items)
        random.Random(seed).shuffle(copy)
        return copy
    return _shuffle
