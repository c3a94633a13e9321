"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/params.py
DTO for reconciliation parameters with built-in validation.
Interface-agnostic: hosts build it from their own settings.
"""
from dataclasses import dataclass, field

from datkeeper.core.filter import ItemFilter
from datkeeper.core.models import BucketBy, UnitOrder


@dataclass
class ReconcileParams:
    """Parameters for a reconciliation pass with validation."""
    merge: bool = True
    renaming_enabled: bool = False
    bucket_by: BucketBy = BucketBy.COARSE
    unit_order: UnitOrder = UnitOrder.ORDINAL
    item_filter: ItemFilter = field(default_factory=ItemFilter)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not isinstance(self.bucket_by, BucketBy):
            raise ValueError(f"Unsupported bucket key: {self.bucket_by!r}")
        if not isinstance(self.unit_order, UnitOrder):
            raise ValueError(f"Unsupported unit order: {self.unit_order!r}")
        if not isinstance(self.item_filter, ItemFilter):
            raise ValueError("item_filter must be an ItemFilter")

    @staticmethod
    def from_human_readable(
            merge: bool = True,
            renaming_enabled: bool = False,
            bucket_by: str = "coarse",
            unit_order: str = "ordinal",
            **filter_args: str
    ) -> 'ReconcileParams':
        """
        Factory method to create params from human-readable inputs,
        e.g. bucket_by="crc", unit_order="natural", size_at_least="1K".
        Remaining keyword arguments go to ItemFilter.from_human_readable.
        """
        try:
            bucket = BucketBy(bucket_by.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown bucket key: '{bucket_by}'")
        try:
            order = UnitOrder(unit_order.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown unit order: '{unit_order}'")

        return ReconcileParams(
            merge=merge,
            renaming_enabled=renaming_enabled,
            bucket_by=bucket,
            unit_order=order,
            item_filter=ItemFilter.from_human_readable(**filter_args),
        )
