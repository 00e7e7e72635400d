"""Invoice API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from erp.schemas.common import CamelModel, EntityResponse
from erp.shared.enums import InvoiceStatus, InvoiceType


class InvoiceCreate(CamelModel):
    """invoiceNumber is generated; totalAmount and outstandingAmount are derived."""

    sales_order_id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    delivery_id: str | None = None
    invoice_type: InvoiceType = InvoiceType.FINAL
    status: InvoiceStatus = InvoiceStatus.DRAFT
    invoice_date: datetime | None = None
    due_date: datetime | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=10)
    subtotal: Decimal = Field(default=Decimal("0"), ge=0)
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0)
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)
    payment_terms: str | None = None
    notes: str | None = None


class InvoiceUpdate(CamelModel):
    invoice_type: InvoiceType | None = None
    status: InvoiceStatus | None = None
    invoice_date: datetime | None = None
    due_date: datetime | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=10)
    subtotal: Decimal | None = Field(default=None, ge=0)
    discount_amount: Decimal | None = Field(default=None, ge=0)
    tax_amount: Decimal | None = Field(default=None, ge=0)
    payment_terms: str | None = None
    payment_method: str | None = None
    payment_reference: str | None = None
    notes: str | None = None


class InvoiceResponse(EntityResponse):
    invoice_number: str
    invoice_type: str
    sales_order_id: str
    delivery_id: str | None = None
    customer_id: str
    invoice_date: datetime | None = None
    due_date: datetime | None = None
    status: str
    currency: str
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    payment_terms: str | None = None
    payment_method: str | None = None
    payment_reference: str | None = None
    last_payment_date: datetime | None = None
    auto_generated: bool = False
    notes: str | None = None
    created_by: str | None = None


class InvoiceItemResponse(EntityResponse):
    invoice_id: str
    sales_order_item_id: str | None = None
    item_id: str | None = None
    line_number: int | None = None
    description: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class InvoiceGenerate(CamelModel):
    """Optional body for POST /invoices/from-delivery/{deliveryId}."""

    invoice_type: InvoiceType = InvoiceType.FINAL


class InvoicePayment(CamelModel):
    amount: Decimal = Field(..., gt=0)
    payment_method: str | None = None
    payment_reference: str | None = None


class InvoiceCancel(CamelModel):
    reason: str | None = None
