"""
Tests for `services/csv_export_service.py`.

Covers column order, year range rendering and CSV injection sanitization.
"""

from __future__ import annotations

import csv
import logging
from io import StringIO

from domain.botagua import Botagua, BotaguaType
from services.csv_export_service import (
    CSV_COLUMNS,
    botagua_to_csv_row,
    generate_inventory_csv,
    sanitize_csv_field,
)


def _record(**overrides) -> Botagua:
    fields = dict(
        id=1,
        brand="FORD",
        model="FOCUS",
        year_start=2010,
        year_end=2015,
        doors=4,
        type=BotaguaType.SURFACE_MOUNT,
        quantity=7,
        mold_number="M-7",
        description="Rear doors",
    )
    fields.update(overrides)
    return Botagua(**fields)


def test_row_follows_column_order() -> None:
    row = botagua_to_csv_row(_record())

    assert dict(zip(CSV_COLUMNS, row)) == {
        "Quantity": "7",
        "Mold": "M-7",
        "Brand": "FORD",
        "Model": "FOCUS",
        "Years": "2010 - 2015",
        "Doors": "4",
        "Type": "Parche",
        "Description": "Rear doors",
    }


def test_open_ended_range_in_csv() -> None:
    row = botagua_to_csv_row(_record(year_start=2018, year_end=None))
    assert row[CSV_COLUMNS.index("Years")] == "2018 - "


def test_generate_inventory_csv_has_header_and_rows() -> None:
    content = generate_inventory_csv([_record(id=1), _record(id=2, mold_number="M-8")])

    rows = list(csv.reader(StringIO(content)))
    assert rows[0] == CSV_COLUMNS
    assert [r[1] for r in rows[1:]] == ["M-7", "M-8"]


def test_generate_inventory_csv_empty() -> None:
    rows = list(csv.reader(StringIO(generate_inventory_csv([]))))
    assert rows == [CSV_COLUMNS]


def test_sanitize_strips_formula_characters_and_logs(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="services.csv_export_service"):
        assert sanitize_csv_field("=HYPERLINK(\"x\")", "description") == "HYPERLINK(\"x\")"

    assert any("description" in r.getMessage() for r in caplog.records)


def test_sanitize_leaves_plain_text_alone(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="services.csv_export_service"):
        assert sanitize_csv_field("Rear left", "description") == "Rear left"
        assert sanitize_csv_field(None) == ""

    assert caplog.records == []


def test_description_injection_is_sanitized_in_row() -> None:
    row = botagua_to_csv_row(_record(description="@SUM(1+1)"))
    assert row[CSV_COLUMNS.index("Description")] == "SUM(1+1)"
