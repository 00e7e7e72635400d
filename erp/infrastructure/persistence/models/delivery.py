"""Delivery ORM model (delivery note against a sales order)."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import EntityModel
from erp.shared.enums import DeliveryStatus, DeliveryType


class Delivery(EntityModel, Base):
    """Delivery model. Table: deliveries."""

    __tablename__ = "deliveries"

    delivery_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    sales_order_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    delivery_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=DeliveryStatus.PENDING.value
    )
    delivery_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DeliveryType.FULL.value
    )
    delivery_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivery_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    tracking_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    carrier_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    delivery_confirmed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    delivery_confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    actual_delivery_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
