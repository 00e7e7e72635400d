"""Supplier API schemas."""

from pydantic import EmailStr, Field

from erp.schemas.common import CamelModel, EntityResponse


class SupplierCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    contact_person: str | None = None
    payment_terms: int | None = Field(default=None, ge=0)


class SupplierUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    contact_person: str | None = None
    payment_terms: int | None = Field(default=None, ge=0)


class SupplierResponse(EntityResponse):
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    contact_person: str | None = None
    payment_terms: int | None = None
