"""Item API schemas."""

from decimal import Decimal
from typing import Any

from pydantic import Field

from erp.schemas.common import CamelModel, EntityResponse


class ItemCreate(CamelModel):
    supplier_code: str = Field(..., min_length=1)
    barcode: str | None = None
    description: str = Field(..., min_length=1)
    category: str | None = None
    unit_of_measure: str | None = None
    cost_price: Decimal | None = Field(default=None, ge=0)
    retail_markup: Decimal = Field(default=Decimal("70"), ge=0)
    wholesale_markup: Decimal = Field(default=Decimal("40"), ge=0)
    supplier_id: str | None = None
    variants: dict[str, Any] | None = None


class ItemUpdate(CamelModel):
    supplier_code: str | None = Field(default=None, min_length=1)
    barcode: str | None = None
    description: str | None = Field(default=None, min_length=1)
    category: str | None = None
    unit_of_measure: str | None = None
    cost_price: Decimal | None = Field(default=None, ge=0)
    retail_markup: Decimal | None = Field(default=None, ge=0)
    wholesale_markup: Decimal | None = Field(default=None, ge=0)
    supplier_id: str | None = None
    variants: dict[str, Any] | None = None


class ItemResponse(EntityResponse):
    supplier_code: str
    barcode: str | None = None
    description: str
    category: str | None = None
    unit_of_measure: str | None = None
    cost_price: Decimal | None = None
    retail_markup: Decimal
    wholesale_markup: Decimal
    supplier_id: str | None = None
    variants: dict[str, Any] | None = None
