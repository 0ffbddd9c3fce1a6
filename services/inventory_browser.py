"""
Inventory browser: the caller-side view of the catalogue.

Holds one snapshot of the botaguas table plus the operator's current filter
selection and page cursor. The repository never touches this state; callers
install a fresh snapshot after a create/update and call `remove` after a
successful delete instead of re-fetching.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from domain.botagua import Botagua
from domain.catalog_view import (
    ITEMS_PER_PAGE,
    FilterOptions,
    extract_filter_options,
    filter_records,
    paginate,
    total_pages,
)


class InventoryBrowser:
    """
    Snapshot + filters + pagination for one operator.

    Example:
        browser = InventoryBrowser(list_botaguas(ctx))
        browser.apply_filters(brand="FORD", year=2012)
        rows = browser.page_items
    """

    def __init__(self, records: Sequence[Botagua] = (), page_size: int = ITEMS_PER_PAGE) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.page_size = page_size
        self.brand: Optional[str] = None
        self.model: Optional[str] = None
        self.year: Optional[int] = None
        self.current_page = 1
        self._records: List[Botagua] = []
        self._filtered: List[Botagua] = []
        self.options = FilterOptions()
        self.replace(records)

    @property
    def records(self) -> List[Botagua]:
        return list(self._records)

    @property
    def filtered(self) -> List[Botagua]:
        return list(self._filtered)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self._filtered), self.page_size)

    @property
    def page_items(self) -> List[Botagua]:
        return paginate(self._filtered, self.page_size, self.current_page)

    def replace(self, records: Sequence[Botagua]) -> None:
        """Install a freshly fetched snapshot, keeping the current filter selection."""

        self._records = list(records)
        self.options = extract_filter_options(self._records)
        self._filtered = filter_records(self._records, self.brand, self.model, self.year)
        self.current_page = 1

    def apply_filters(
        self,
        brand: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[int] = None,
    ) -> List[Botagua]:
        """Filter the snapshot and go back to the first page."""

        self.brand = brand or None
        self.model = model or None
        self.year = year if year not in (None, "") else None
        self._filtered = filter_records(self._records, self.brand, self.model, self.year)
        self.current_page = 1
        return self.filtered

    def clear_filters(self) -> None:
        self.apply_filters()

    def next_page(self) -> int:
        if self.current_page < self.total_pages:
            self.current_page += 1
        return self.current_page

    def previous_page(self) -> int:
        if self.current_page > 1:
            self.current_page -= 1
        return self.current_page

    def go_to(self, page_number: int) -> List[Botagua]:
        """Move the cursor to `page_number`; a page past the end is empty."""

        if page_number < 1:
            raise ValueError("page_number must be >= 1")
        self.current_page = page_number
        return self.page_items

    def remove(self, botagua_id: int) -> None:
        """Drop a deleted record from the snapshot and the filtered view."""

        self._records = [r for r in self._records if r.id != botagua_id]
        self._filtered = [r for r in self._filtered if r.id != botagua_id]
        self.options = extract_filter_options(self._records)


__all__ = ["InventoryBrowser"]
