"""Product Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProductCreate.sku: 1-64 chars, stripped, uppercased
    - ProductCreate.name: 1-200 chars, stripped, non-empty
    - price_cents >= 0
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProductCreate(BaseModel):
    """Product creation payload."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sku: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    price_cents: int = Field(0, ge=0)

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("sku cannot be empty or whitespace")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProductResponse(BaseModel):
    """Public-facing product data."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: int
    sku: str
    name: str
    price_cents: int
    created_at: datetime
