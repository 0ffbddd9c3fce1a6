"""
CSV export service for the botaguas inventory.

Generates a CSV of inventory records with the same columns, in the same order,
as the inventory table operators browse.

Security:
- CSV Injection Prevention: Sanitizes all free-text fields to prevent formula execution
- Security Logging: Logs when dangerous characters are stripped
"""

from __future__ import annotations

import csv
import logging
from io import StringIO
from typing import List, Sequence

from domain.botagua import Botagua, year_range_label

logger = logging.getLogger(__name__)

CSV_COLUMNS: List[str] = [
    "Quantity",
    "Mold",
    "Brand",
    "Model",
    "Years",
    "Doors",
    "Type",
    "Description",
]


def sanitize_csv_field(value: str | None, field_name: str = "unknown") -> str:
    """
    Sanitize field to prevent CSV injection attacks with security logging.

    Strips leading characters that can trigger formula execution in Excel/Sheets:
    =, +, -, @, tab, carriage return

    Example:
        sanitize_csv_field("=HYPERLINK(...)", "description")
        # Returns "HYPERLINK(...)" and logs a warning about the stripped "="

        sanitize_csv_field("Rear left door", "description")
        # Returns "Rear left door" (unchanged, no logging)
    """
    if value is None or value == "":
        return ""

    text = str(value).strip()
    original_text = text
    dangerous_chars = {'=', '+', '-', '@', '\t', '\r'}

    stripped_chars = []
    while text and text[0] in dangerous_chars:
        stripped_chars.append(text[0])
        text = text[1:]

    if stripped_chars:
        logger.warning(
            f"CSV injection character(s) stripped from field '{field_name}'",
            extra={
                "field_name": field_name,
                "stripped_characters": "".join(stripped_chars),
                "original_value": original_text[:100],
                "sanitized_value": text[:100],
                "modification_type": "csv_injection_prevention"
            }
        )

    return text


def botagua_to_csv_row(record: Botagua) -> List[str]:
    """Convert a Botagua to a CSV row in CSV_COLUMNS order."""

    return [
        str(record.quantity),
        sanitize_csv_field(record.mold_number, "mold_number"),
        sanitize_csv_field(record.brand, "brand"),
        sanitize_csv_field(record.model, "model"),
        year_range_label(record),
        str(record.doors),
        record.type.value,
        sanitize_csv_field(record.description, "description"),
    ]


def generate_inventory_csv(records: Sequence[Botagua]) -> str:
    """
    Generate CSV content (header + one row per record) for `records`.

    Example:
        csv_content = generate_inventory_csv(list_botaguas(ctx))
        return Response(content=csv_content, media_type="text/csv")
    """
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)
    for record in records:
        writer.writerow(botagua_to_csv_row(record))
    return output.getvalue()


__all__ = [
    "CSV_COLUMNS",
    "botagua_to_csv_row",
    "generate_inventory_csv",
    "sanitize_csv_field",
]
