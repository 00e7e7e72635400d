"""Customer ORM model."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import EntityModel
from erp.shared.enums import CustomerClassification, CustomerType


class Customer(EntityModel, Base):
    """Customer model. Table: customers."""

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    customer_type: Mapped[str] = mapped_column(
        String, nullable=False, default=CustomerType.RETAIL.value
    )
    classification: Mapped[str] = mapped_column(
        String, nullable=False, default=CustomerClassification.INDIVIDUAL.value
    )
    tax_id: Mapped[str | None] = mapped_column(String, nullable=True)
    credit_limit: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    payment_terms: Mapped[int | None] = mapped_column(nullable=True)
