"""Enquiry and EnquiryItem ORM models (customer requests for quotation)."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import EntityModel, JsonType
from erp.shared.enums import EnquiryStatus


class Enquiry(EntityModel, Base):
    """Enquiry model. Table: enquiries. enquiry_number is generated (ENQ-<year>-<NNN>)."""

    __tablename__ = "enquiries"

    enquiry_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    customer_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    enquiry_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=EnquiryStatus.NEW.value
    )
    source: Mapped[str] = mapped_column(String, nullable=False)
    target_delivery_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    attachments: Mapped[list[Any] | None] = mapped_column(JsonType, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)


class EnquiryItem(EntityModel, Base):
    """Enquiry line. Table: enquiry_items."""

    __tablename__ = "enquiry_items"

    enquiry_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    item_id: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
