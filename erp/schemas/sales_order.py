"""Sales order API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from erp.schemas.common import CamelModel, EntityResponse
from erp.shared.enums import SalesOrderStatus


class SalesOrderCreate(CamelModel):
    customer_id: str = Field(..., min_length=1)
    quotation_id: str | None = None
    order_date: datetime | None = None
    status: SalesOrderStatus = SalesOrderStatus.DRAFT
    customer_po_number: str | None = None
    subtotal: Decimal | None = Field(default=None, ge=0)
    tax_amount: Decimal | None = Field(default=None, ge=0)
    total_amount: Decimal | None = Field(default=None, ge=0)
    payment_terms: str | None = None
    delivery_instructions: str | None = None


class SalesOrderUpdate(CamelModel):
    order_date: datetime | None = None
    status: SalesOrderStatus | None = None
    customer_po_number: str | None = None
    subtotal: Decimal | None = Field(default=None, ge=0)
    tax_amount: Decimal | None = Field(default=None, ge=0)
    total_amount: Decimal | None = Field(default=None, ge=0)
    payment_terms: str | None = None
    delivery_instructions: str | None = None


class SalesOrderResponse(EntityResponse):
    order_number: str
    quotation_id: str | None = None
    customer_id: str
    order_date: datetime | None = None
    status: str
    customer_po_number: str | None = None
    subtotal: Decimal | None = None
    tax_amount: Decimal | None = None
    total_amount: Decimal | None = None
    payment_terms: str | None = None
    delivery_instructions: str | None = None
    created_by: str | None = None


class SalesOrderItemResponse(EntityResponse):
    sales_order_id: str
    item_id: str | None = None
    line_number: int | None = None
    description: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal
