"""
Domain: Botaguas (door-seal / weatherstrip parts) held in inventory.

Rules implemented here:
- A part is identified by brand, model, year range, door count and type.
- `mold_number` is the business key. Uniqueness is checked on create only.
- The year range is inclusive: [year_start, year_end], or [year_start, +inf)
  when year_end is absent. year_end >= year_start is not enforced.
- Brand/model are upper-cased when a record is created, never on update.

This module contains only pure domain entities/value objects: no I/O, no database, no frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union

from .errors import ValidationFailed


class BotaguaType(str, Enum):
    SURFACE_MOUNT = "Parche"
    FLUSH_MOUNT = "Empotrar"

    @classmethod
    def from_label(cls, value: Any) -> "BotaguaType":
        """Match a stored label, ignoring case and surrounding whitespace."""

        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f"Unknown botagua type: {value!r}")


@dataclass(frozen=True, slots=True)
class NewBotagua:
    """
    A part as entered by an operator, before the store assigns an id.
    """

    brand: str
    model: str
    year_start: int
    doors: int
    type: BotaguaType
    quantity: int
    mold_number: str
    year_end: Optional[int] = None
    description: str = ""

    def normalized(self) -> "NewBotagua":
        """Return the record as it is inserted: upper-cased brand/model, empty year_end as None."""

        return replace(
            self,
            brand=self.brand.upper(),
            model=self.model.upper(),
            year_end=coerce_year_end(self.year_end),
        )

    def with_id(self, botagua_id: int) -> "Botagua":
        return Botagua(
            id=botagua_id,
            brand=self.brand,
            model=self.model,
            year_start=self.year_start,
            year_end=self.year_end,
            doors=self.doors,
            type=self.type,
            quantity=self.quantity,
            description=self.description,
            mold_number=self.mold_number,
        )


@dataclass(frozen=True, slots=True)
class Botagua:
    """
    A stored part. `id` is assigned by the store and never changes.
    """

    id: int
    brand: str
    model: str
    year_start: int
    doors: int
    type: BotaguaType
    quantity: int
    mold_number: str
    year_end: Optional[int] = None
    description: str = ""

    def fits_year(self, year: int) -> bool:
        """True iff `year` falls inside the inclusive year range."""

        if self.year_start > year:
            return False
        return self.year_end is None or self.year_end >= year


AnyBotagua = Union[NewBotagua, Botagua]


def coerce_year_end(value: Any) -> Optional[int]:
    """Empty year_end values (None, 0, "") mean "no upper bound"."""

    if value is None or value == "" or value == 0:
        return None
    return int(value)


def validate_required(record: AnyBotagua) -> None:
    """
    Check the fields an operator must fill in before a record is sent to the store.

    Description is the only optional text field. Raises ValidationFailed naming
    the first offending field.
    """

    for name in ("brand", "model", "mold_number"):
        value = getattr(record, name)
        if not value or not str(value).strip():
            raise ValidationFailed(f"{name} is required")
    if not record.type:
        raise ValidationFailed("type is required")
    if record.doors is None or record.doors <= 0:
        raise ValidationFailed("doors must be a positive integer")
    if record.quantity is None or record.quantity < 0:
        raise ValidationFailed("quantity must be >= 0")


def year_range_label(record: AnyBotagua) -> str:
    """Display form of the year range, e.g. "2010 - 2015" or "2018 - " when open-ended."""

    end = "" if record.year_end is None else str(record.year_end)
    return f"{record.year_start} - {end}"


__all__ = [
    "BotaguaType",
    "NewBotagua",
    "Botagua",
    "coerce_year_end",
    "validate_required",
    "year_range_label",
]
