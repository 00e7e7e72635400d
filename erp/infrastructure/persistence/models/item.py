"""Item ORM model (catalogue entry sourced from a supplier)."""

from decimal import Decimal
from typing import Any

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import EntityModel, JsonType


class Item(EntityModel, Base):
    """Item model. Table: items. Barcode unique when present."""

    __tablename__ = "items"

    supplier_code: Mapped[str] = mapped_column(String, nullable=False)
    barcode: Mapped[str | None] = mapped_column(String, nullable=True, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String, nullable=True)
    unit_of_measure: Mapped[str | None] = mapped_column(String, nullable=True)
    cost_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 3), nullable=True)
    retail_markup: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("70")
    )
    wholesale_markup: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("40")
    )
    # Weak reference to suppliers.id; not enforced by the storage layer.
    supplier_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    variants: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)
