"""
Botaguas API Endpoints.

Endpoints for browsing, adding, editing, deleting and exporting inventory records.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from api.dependencies import require_operator
from api.models import (
    BotaguaListResponse,
    BotaguaRequest,
    BotaguaResponse,
    ErrorResponse,
    FilterOptionsResponse,
)
from domain.botagua import validate_required
from domain.catalog_view import ITEMS_PER_PAGE, extract_filter_options, filter_records
from domain.errors import DuplicateKey, StoreUnavailable, ValidationFailed
from repositories.auth_repository import OperatorContext
from repositories.botagua_repository import (
    create_botagua,
    delete_botagua,
    list_botaguas,
    update_botagua,
)
from services.csv_export_service import generate_inventory_csv
from services.inventory_browser import InventoryBrowser

router = APIRouter()


def _store_unavailable(e: StoreUnavailable) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Inventory store unavailable: {str(e)}")


@router.get(
    "/botaguas",
    response_model=BotaguaListResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Browse Inventory",
    description="List inventory records with optional brand, model and year filters, 25 per page by default."
)
def get_inventory(
    brand: Optional[str] = Query(None, description="Exact brand (e.g., 'FORD')"),
    model: Optional[str] = Query(None, description="Exact model (e.g., 'FOCUS')"),
    year: Optional[int] = Query(None, description="Vehicle year that must fall within the part's year range"),
    page: int = Query(1, ge=1, description="1-based page number; pages past the end are empty"),
    page_size: int = Query(ITEMS_PER_PAGE, ge=1, le=500, description="Records per page"),
    operator: OperatorContext = Depends(require_operator),
):
    """
    Browse the inventory.

    The filter option sets in `filters` are always computed over the whole
    table, so selectors keep offering every brand/model/year.

    **Example usage:**
    - First page of everything: `GET /api/v1/botaguas`
    - Parts that fit a 2012 Ford: `GET /api/v1/botaguas?brand=FORD&year=2012`
    - Third page: `GET /api/v1/botaguas?page=3`
    """
    try:
        records = list_botaguas(operator)
    except StoreUnavailable as e:
        raise _store_unavailable(e)

    browser = InventoryBrowser(records, page_size=page_size)
    browser.apply_filters(brand=brand, model=model, year=year)
    items = browser.go_to(page)

    filters_applied = {}
    if brand:
        filters_applied["brand"] = brand
    if model:
        filters_applied["model"] = model
    if year is not None:
        filters_applied["year"] = year

    return BotaguaListResponse(
        items=[BotaguaResponse.from_botagua(item) for item in items],
        page=browser.current_page,
        page_size=browser.page_size,
        total_pages=browser.total_pages,
        total_count=len(browser.filtered),
        filters=FilterOptionsResponse(
            brands=browser.options.brands,
            models=browser.options.models,
            years=browser.options.years,
        ),
        filters_applied=filters_applied,
    )


@router.get(
    "/botaguas/filters",
    response_model=FilterOptionsResponse,
    summary="Filter Options",
    description="Distinct brands and models (first-seen order) and years (newest first)."
)
def get_filter_options(operator: OperatorContext = Depends(require_operator)):
    try:
        options = extract_filter_options(list_botaguas(operator))
    except StoreUnavailable as e:
        raise _store_unavailable(e)

    return FilterOptionsResponse(brands=options.brands, models=options.models, years=options.years)


@router.get(
    "/botaguas/export",
    summary="Export Inventory CSV",
    description="Download the (optionally filtered) inventory as CSV.",
    response_class=Response
)
def export_inventory_csv(
    brand: Optional[str] = Query(None),
    model: Optional[str] = Query(None),
    year: Optional[int] = Query(None),
    operator: OperatorContext = Depends(require_operator),
):
    """
    Download the inventory as a CSV file.

    **Security:**
    - CSV injection prevention (dangerous leading characters stripped and logged)
    """
    try:
        records = filter_records(list_botaguas(operator), brand=brand, model=model, year=year)
    except StoreUnavailable as e:
        raise _store_unavailable(e)

    return Response(
        content=generate_inventory_csv(records),
        media_type="text/csv",
        headers={
            "Content-Disposition": "attachment; filename=botaguas_inventory.csv"
        }
    )


@router.post(
    "/botaguas",
    status_code=201,
    responses={
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Add Inventory Record",
    description="Add a part. The mold number must not already exist; brand and model are stored upper-cased."
)
def add_inventory_item(request: BotaguaRequest, operator: OperatorContext = Depends(require_operator)):
    """
    Add a new part to the inventory.

    **Example request:**
    ```json
    {
      "brand": "ford",
      "model": "focus",
      "year_start": 2010,
      "year_end": null,
      "doors": 4,
      "type": "Parche",
      "quantity": 12,
      "description": "",
      "mold_number": "M-0142"
    }
    ```
    """
    record = request.to_new_botagua()
    try:
        validate_required(record)
    except ValidationFailed as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        create_botagua(operator, record)
    except DuplicateKey as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreUnavailable as e:
        raise _store_unavailable(e)

    return {"message": "Inventory record created", "mold_number": record.mold_number}


@router.put(
    "/botaguas/{botagua_id}",
    response_model=BotaguaResponse,
    responses={
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Edit Inventory Record",
    description="Overwrite every field of an existing part and return it as stored. Mold number uniqueness is not re-checked."
)
def edit_inventory_item(
    botagua_id: int,
    request: BotaguaRequest,
    operator: OperatorContext = Depends(require_operator),
):
    record = request.to_new_botagua().with_id(botagua_id)
    try:
        validate_required(record)
    except ValidationFailed as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        stored = update_botagua(operator, record)
    except StoreUnavailable as e:
        raise _store_unavailable(e)

    if stored is None:
        raise HTTPException(status_code=404, detail=f"Inventory record {botagua_id} not found")

    return BotaguaResponse.from_botagua(stored)


@router.delete(
    "/botaguas/{botagua_id}",
    status_code=204,
    response_class=Response,
    responses={503: {"model": ErrorResponse}},
    summary="Delete Inventory Record",
    description="Delete a part. Deleting an id that no longer exists succeeds."
)
def remove_inventory_item(botagua_id: int, operator: OperatorContext = Depends(require_operator)):
    try:
        delete_botagua(operator, botagua_id)
    except StoreUnavailable as e:
        raise _store_unavailable(e)

    return Response(status_code=204)
