"""
Botaguas repository (persistence).

This module provides the persistence operations for the Botagua domain entity
against the Supabase `botaguas` table. Every function takes the caller's
OperatorContext explicitly; nothing here reads a global session.

Persistence rules enforced here:
- mold_number must be unused when a record is created (checked before insert,
  and a store-level unique violation is reported the same way)
- brand/model are upper-cased and an empty year_end is stored as NULL on create
- updates write every field as given, with no uniqueness re-check
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx
from postgrest.exceptions import APIError

from domain.botagua import Botagua, BotaguaType, NewBotagua, coerce_year_end
from domain.errors import DuplicateKey, StoreUnavailable
from repositories.auth_repository import OperatorContext

logger = logging.getLogger(__name__)

# Supabase table name for inventory records.
# Keep this aligned with your database schema.
_BOTAGUAS_TABLE: str = "botaguas"

# PostgreSQL unique_violation
_UNIQUE_VIOLATION: str = "23505"


def _execute(
    query: Any,
    *,
    failure: str,
    extra: Mapping[str, Any],
    mold_number: Optional[str] = None,
) -> Any:
    """
    Run a PostgREST query, turning any store failure into a domain error.

    When `mold_number` is given, a unique violation is reported as DuplicateKey.
    """

    try:
        response = query.execute()
    except APIError as e:
        if mold_number is not None and str(getattr(e, "code", "")) == _UNIQUE_VIOLATION:
            raise DuplicateKey(mold_number) from None
        logger.error(failure, extra={**extra, "store_error": str(e)})
        raise StoreUnavailable(f"{failure}: {e}") from e
    except httpx.HTTPError as e:
        logger.error(failure, extra={**extra, "store_error": str(e)})
        raise StoreUnavailable(f"{failure}: {e}") from e

    error = getattr(response, "error", None)
    if error:
        if mold_number is not None and str(getattr(error, "code", "")) == _UNIQUE_VIOLATION:
            raise DuplicateKey(mold_number)
        logger.error(failure, extra={**extra, "store_error": str(error)})
        raise StoreUnavailable(f"{failure}: {error}")
    return response


def _row_to_botagua(row: Mapping[str, Any]) -> Botagua:
    """Convert a Supabase row into a Botagua."""

    return Botagua(
        id=int(row["id"]),
        brand=str(row["brand"]),
        model=str(row["model"]),
        year_start=int(row["year_start"]),
        year_end=coerce_year_end(row.get("year_end")),
        doors=int(row["doors"]),
        type=BotaguaType.from_label(row["type"]),
        quantity=int(row["quantity"]),
        description=row.get("description") or "",
        mold_number=str(row["mold_number"]),
    )


def _to_payload(record: NewBotagua | Botagua) -> Dict[str, Any]:
    """Column values for insert/update; `id` is never written."""

    return {
        "brand": record.brand,
        "model": record.model,
        "year_start": record.year_start,
        "year_end": coerce_year_end(record.year_end),
        "doors": record.doors,
        "type": record.type.value,
        "quantity": record.quantity,
        "description": record.description,
        "mold_number": record.mold_number,
    }


def list_botaguas(ctx: OperatorContext) -> List[Botagua]:
    """
    Fetch the whole botaguas table in insertion order.

    Rows that cannot be read as a Botagua (unknown type label, missing or
    non-numeric columns) are logged and left out.

    Returns:
    - List[Botagua] (possibly empty)
    """

    response = _execute(
        ctx.client.table(_BOTAGUAS_TABLE).select("*").order("id"),
        failure="Failed to fetch inventory",
        extra={"operator_id": ctx.operator_id},
    )
    rows = getattr(response, "data", None) or []

    records: List[Botagua] = []
    for row in rows:
        try:
            records.append(_row_to_botagua(row))
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                "Skipping unreadable inventory row",
                extra={
                    "operator_id": ctx.operator_id,
                    "botagua_id": row.get("id"),
                    "row_error": str(e),
                },
            )
    return records


def create_botagua(ctx: OperatorContext, record: NewBotagua) -> None:
    """
    Insert a new part.

    Enforces:
    - Uniqueness of mold_number (existence check before insert)

    Raises:
    - DuplicateKey: mold_number already used; nothing is inserted
    - StoreUnavailable: the check or the insert failed
    """

    extra = {"operator_id": ctx.operator_id, "mold_number": record.mold_number}

    existing = _execute(
        ctx.client.table(_BOTAGUAS_TABLE)
        .select("mold_number")
        .eq("mold_number", record.mold_number)
        .limit(1),
        failure="Failed to check mold number uniqueness",
        extra=extra,
    )
    if getattr(existing, "data", None):
        logger.info("Rejected duplicate mold number", extra=extra)
        raise DuplicateKey(record.mold_number)

    payload = _to_payload(record.normalized())
    _execute(
        ctx.client.table(_BOTAGUAS_TABLE).insert(payload),
        failure="Failed to create inventory record",
        extra=extra,
        mold_number=record.mold_number,
    )
    logger.info("Created inventory record", extra=extra)


def update_botagua(ctx: OperatorContext, record: Botagua) -> Optional[Botagua]:
    """
    Overwrite every field of the row with `record.id`.

    Brand/model are written as given and mold_number is not re-checked for
    uniqueness; any store error, including a unique violation, is StoreUnavailable.

    Returns:
    - The row as stored after the write, or None when no row has `record.id`
    """

    extra = {"operator_id": ctx.operator_id, "botagua_id": record.id}
    response = _execute(
        ctx.client.table(_BOTAGUAS_TABLE).update(_to_payload(record)).eq("id", record.id),
        failure="Failed to update inventory record",
        extra=extra,
    )
    rows = getattr(response, "data", None) or []
    if not rows:
        logger.info("No inventory record to update", extra=extra)
        return None

    logger.info("Updated inventory record", extra=extra)
    return _row_to_botagua(rows[0])


def delete_botagua(ctx: OperatorContext, botagua_id: int) -> None:
    """
    Delete the row with `botagua_id`. Deleting a missing id is not an error.
    """

    extra = {"operator_id": ctx.operator_id, "botagua_id": botagua_id}
    _execute(
        ctx.client.table(_BOTAGUAS_TABLE).delete().eq("id", botagua_id),
        failure="Failed to delete inventory record",
        extra=extra,
    )
    logger.info("Deleted inventory record", extra=extra)


__all__ = [
    "list_botaguas",
    "create_botagua",
    "update_botagua",
    "delete_botagua",
]
