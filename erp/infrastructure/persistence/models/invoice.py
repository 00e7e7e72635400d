"""Invoice and InvoiceItem ORM models."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erp.core.constants import DEFAULT_CURRENCY
from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import EntityModel
from erp.shared.enums import InvoiceStatus, InvoiceType

_ZERO = Decimal("0")


class Invoice(EntityModel, Base):
    """Invoice model. Table: invoices.

    total_amount = subtotal - discount_amount + tax_amount;
    outstanding_amount = max(0, total_amount - paid_amount).
    """

    __tablename__ = "invoices"

    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    invoice_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=InvoiceType.FINAL.value
    )
    sales_order_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    delivery_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    customer_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    invoice_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=InvoiceStatus.DRAFT.value
    )
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_CURRENCY)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=_ZERO)
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=_ZERO
    )
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=_ZERO)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=_ZERO
    )
    paid_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=_ZERO)
    outstanding_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=_ZERO
    )
    payment_terms: Mapped[str | None] = mapped_column(String(100), nullable=True)
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    payment_reference: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_payment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    auto_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)


class InvoiceItem(EntityModel, Base):
    """Invoice line copied from a sales order line. Table: invoice_items."""

    __tablename__ = "invoice_items"

    invoice_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    sales_order_item_id: Mapped[str | None] = mapped_column(String, nullable=True)
    item_id: Mapped[str | None] = mapped_column(String, nullable=True)
    line_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
