"""ReceiptReturn ORM model (goods returned to a supplier against a receipt)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import EntityModel
from erp.shared.enums import ReceiptReturnStatus


class ReceiptReturn(EntityModel, Base):
    """Receipt return model. Table: receipt_returns."""

    __tablename__ = "receipt_returns"

    return_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    supplier_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    goods_receipt_id: Mapped[str | None] = mapped_column(String, nullable=True)
    return_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    return_reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=ReceiptReturnStatus.PENDING.value
    )
    total_return_value: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    debit_note_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    debit_note_generated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
