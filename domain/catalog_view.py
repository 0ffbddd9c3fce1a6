"""
Domain: derived views over a snapshot of the botaguas catalogue.

Filter option sets, the all-optional brand/model/year filter, and offset
pagination. All functions are pure and never mutate their input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set

from .botagua import Botagua

# Page size used by the inventory listing.
ITEMS_PER_PAGE: int = 25


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Values offered by the brand/model/year selectors."""

    brands: List[str] = field(default_factory=list)
    models: List[str] = field(default_factory=list)
    years: List[int] = field(default_factory=list)


def _distinct(values: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


def extract_filter_options(records: Sequence[Botagua]) -> FilterOptions:
    """
    Distinct brands and models in first-seen order, and every year that appears
    as a year_start or non-null year_end, newest first.
    """

    years: Set[int] = set()
    for record in records:
        years.add(record.year_start)
        if record.year_end is not None:
            years.add(record.year_end)

    return FilterOptions(
        brands=_distinct(r.brand for r in records),
        models=_distinct(r.model for r in records),
        years=sorted(years, reverse=True),
    )


def filter_records(
    records: Sequence[Botagua],
    brand: Optional[str] = None,
    model: Optional[str] = None,
    year: Optional[int] = None,
) -> List[Botagua]:
    """
    Keep the records matching every given criterion.

    Empty or None criteria match everything. Brand/model compare exactly;
    a year matches when year_start <= year <= year_end (open-ended if year_end is None).
    """

    filtered = list(records)
    if brand:
        filtered = [r for r in filtered if r.brand == brand]
    if model:
        filtered = [r for r in filtered if r.model == model]
    if year is not None and year != "":
        filtered = [r for r in filtered if r.fits_year(int(year))]
    return filtered


def total_pages(count: int, page_size: int = ITEMS_PER_PAGE) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(count / page_size)


def paginate(
    records: Sequence[Botagua],
    page_size: int = ITEMS_PER_PAGE,
    page_number: int = 1,
) -> List[Botagua]:
    """
    Return page `page_number` (1-based) of `records`.

    Pages past the end are empty; the page number is not clamped.
    """

    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    if page_number < 1:
        raise ValueError("page_number must be >= 1")

    start = (page_number - 1) * page_size
    return list(records[start:start + page_size])


__all__ = [
    "ITEMS_PER_PAGE",
    "FilterOptions",
    "extract_filter_options",
    "filter_records",
    "total_pages",
    "paginate",
]
