"""Customer API schemas."""

from decimal import Decimal

from pydantic import EmailStr, Field

from erp.schemas.common import CamelModel, EntityResponse
from erp.shared.enums import CustomerClassification, CustomerType


class CustomerCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    customer_type: CustomerType = CustomerType.RETAIL
    classification: CustomerClassification = CustomerClassification.INDIVIDUAL
    tax_id: str | None = None
    credit_limit: Decimal | None = Field(default=None, ge=0)
    payment_terms: int | None = Field(default=None, ge=0)


class CustomerUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    customer_type: CustomerType | None = None
    classification: CustomerClassification | None = None
    tax_id: str | None = None
    credit_limit: Decimal | None = Field(default=None, ge=0)
    payment_terms: int | None = Field(default=None, ge=0)


class CustomerResponse(EntityResponse):
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    customer_type: str
    classification: str
    tax_id: str | None = None
    credit_limit: Decimal | None = None
    payment_terms: int | None = None

