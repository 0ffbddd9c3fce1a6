"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.botagua import Botagua, BotaguaType, NewBotagua, coerce_year_end, year_range_label


# ============================================================================
# Auth Models
# ============================================================================

class LoginRequest(BaseModel):
    """Operator credentials."""
    email: str = Field(..., description="Operator email")
    password: str = Field(..., description="Operator password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "operator@example.com",
                "password": "********"
            }
        }


class LoginResponse(BaseModel):
    """Tokens for a signed-in operator."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user_id: str
    email: Optional[str] = None


class OperatorResponse(BaseModel):
    """The operator behind the current access token."""
    user_id: str
    email: Optional[str] = None


# ============================================================================
# Botagua Models
# ============================================================================

class BotaguaRequest(BaseModel):
    """Fields an operator submits when adding or editing a part."""
    brand: str
    model: str
    year_start: int
    year_end: Optional[int] = Field(None, description="Last applicable year; empty means open-ended")
    doors: int = 4
    type: BotaguaType
    quantity: int = 0
    description: Optional[str] = ""
    mold_number: str

    @field_validator("year_end", mode="before")
    @classmethod
    def empty_year_end_is_open_ended(cls, value):
        return coerce_year_end(value)

    def to_new_botagua(self) -> NewBotagua:
        return NewBotagua(
            brand=self.brand,
            model=self.model,
            year_start=self.year_start,
            year_end=self.year_end,
            doors=self.doors,
            type=self.type,
            quantity=self.quantity,
            description=self.description or "",
            mold_number=self.mold_number,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "brand": "ford",
                "model": "focus",
                "year_start": 2010,
                "year_end": 2015,
                "doors": 4,
                "type": "Parche",
                "quantity": 12,
                "description": "Rear doors",
                "mold_number": "M-0142"
            }
        }


class BotaguaResponse(BaseModel):
    """Single inventory record in API response."""
    id: int
    brand: str
    model: str
    year_start: int
    year_end: Optional[int] = None
    years: str  # "2010 - 2015", "2018 - "
    doors: int
    type: str  # "Parche" or "Empotrar"
    quantity: int
    description: str
    mold_number: str

    @classmethod
    def from_botagua(cls, record: Botagua) -> "BotaguaResponse":
        return cls(
            id=record.id,
            brand=record.brand,
            model=record.model,
            year_start=record.year_start,
            year_end=record.year_end,
            years=year_range_label(record),
            doors=record.doors,
            type=record.type.value,
            quantity=record.quantity,
            description=record.description,
            mold_number=record.mold_number,
        )


class FilterOptionsResponse(BaseModel):
    """Values available to the brand/model/year selectors."""
    brands: List[str]
    models: List[str]
    years: List[int]


class BotaguaListResponse(BaseModel):
    """Response for a filtered, paginated inventory listing."""
    items: List[BotaguaResponse]
    page: int
    page_size: int
    total_pages: int
    total_count: int
    filters: FilterOptionsResponse
    filters_applied: dict

    class Config:
        json_schema_extra = {
            "example": {
                "items": [],
                "page": 1,
                "page_size": 25,
                "total_pages": 3,
                "total_count": 61,
                "filters": {
                    "brands": ["FORD", "CHEVROLET"],
                    "models": ["FOCUS", "AVEO"],
                    "years": [2018, 2015, 2010]
                },
                "filters_applied": {
                    "brand": "FORD"
                }
            }
        }


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Duplicate mold number",
                "detail": "Mold number M-0142 already exists. Please enter a different mold number.",
                "status_code": 409
            }
        }
