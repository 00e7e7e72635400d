"""Quotation API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from erp.schemas.common import CamelModel, EntityResponse
from erp.shared.enums import CustomerType, QuotationStatus


class QuotationCreate(CamelModel):
    """quoteNumber is generated; customerType defaults to the customer's type."""

    customer_id: str = Field(..., min_length=1)
    customer_type: CustomerType | None = None
    enquiry_id: str | None = None
    status: QuotationStatus = QuotationStatus.DRAFT
    quote_date: datetime | None = None
    valid_until: datetime | None = None
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)
    terms: str | None = None
    notes: str | None = None


class QuotationUpdate(CamelModel):
    customer_type: CustomerType | None = None
    status: QuotationStatus | None = None
    quote_date: datetime | None = None
    valid_until: datetime | None = None
    discount_percentage: Decimal | None = Field(default=None, ge=0, le=100)
    tax_amount: Decimal | None = Field(default=None, ge=0)
    terms: str | None = None
    notes: str | None = None


class QuotationResponse(EntityResponse):
    quote_number: str
    revision: int
    parent_quotation_id: str | None = None
    revision_reason: str | None = None
    is_superseded: bool = False
    superseded_at: datetime | None = None
    superseded_by: str | None = None
    enquiry_id: str | None = None
    customer_id: str
    customer_type: str
    status: str
    quote_date: datetime | None = None
    valid_until: datetime | None = None
    subtotal: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    terms: str | None = None
    notes: str | None = None
    created_by: str | None = None


class QuotationItemCreate(CamelModel):
    """Either unitPrice, or costPrice (+ optional markup percent), is required."""

    item_id: str | None = None
    description: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    cost_price: Decimal | None = Field(default=None, ge=0)
    markup: Decimal | None = Field(default=None, ge=0)
    unit_price: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None


class QuotationItemUpdate(CamelModel):
    """A new costPrice or markup without unitPrice re-derives the unit price."""

    item_id: str | None = None
    description: str | None = Field(default=None, min_length=1)
    quantity: int | None = Field(default=None, ge=1)
    cost_price: Decimal | None = Field(default=None, ge=0)
    markup: Decimal | None = Field(default=None, ge=0)
    unit_price: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None


class QuotationItemResponse(EntityResponse):
    quotation_id: str
    item_id: str | None = None
    description: str
    quantity: int
    cost_price: Decimal | None = None
    markup: Decimal | None = None
    unit_price: Decimal
    line_total: Decimal
    notes: str | None = None


class QuotationRevisionCreate(CamelModel):
    """Request body for POST /quotations/{id}/revisions."""

    revision_reason: str = Field(..., min_length=1)
    changes: QuotationUpdate | None = None
