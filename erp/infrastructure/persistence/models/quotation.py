"""Quotation and QuotationItem ORM models."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import EntityModel
from erp.shared.enums import QuotationStatus

_ZERO = Decimal("0")


class Quotation(EntityModel, Base):
    """Quotation model. Table: quotations.

    Revisions are new rows pointing at parent_quotation_id; the parent is
    marked is_superseded.
    """

    __tablename__ = "quotations"

    quote_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    revision: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    parent_quotation_id: Mapped[str | None] = mapped_column(
        String, nullable=True, index=True
    )
    revision_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_superseded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    superseded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    superseded_by: Mapped[str | None] = mapped_column(String, nullable=True)
    enquiry_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    customer_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    customer_type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=QuotationStatus.DRAFT.value
    )
    quote_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    valid_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=_ZERO)
    discount_percentage: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=_ZERO
    )
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=_ZERO
    )
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=_ZERO)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=_ZERO
    )
    terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)


class QuotationItem(EntityModel, Base):
    """Quotation line. Table: quotation_items. line_total = quantity * unit_price."""

    __tablename__ = "quotation_items"

    quotation_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    item_id: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    cost_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 4), nullable=True)
    markup: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    line_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
