"""Enquiry API schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import Field

from erp.schemas.common import CamelModel, EntityResponse
from erp.shared.enums import EnquirySource, EnquiryStatus


class EnquiryCreate(CamelModel):
    """enquiryNumber is generated on create."""

    customer_id: str = Field(..., min_length=1)
    source: EnquirySource
    status: EnquiryStatus = EnquiryStatus.NEW
    enquiry_date: datetime | None = None
    target_delivery_date: datetime | None = None
    notes: str | None = None
    attachments: list[Any] | None = None


class EnquiryUpdate(CamelModel):
    customer_id: str | None = Field(default=None, min_length=1)
    source: EnquirySource | None = None
    status: EnquiryStatus | None = None
    enquiry_date: datetime | None = None
    target_delivery_date: datetime | None = None
    notes: str | None = None
    attachments: list[Any] | None = None


class EnquiryResponse(EntityResponse):
    enquiry_number: str
    customer_id: str
    enquiry_date: datetime | None = None
    status: str
    source: str
    target_delivery_date: datetime | None = None
    notes: str | None = None
    attachments: list[Any] | None = None
    created_by: str | None = None


class EnquiryItemCreate(CamelModel):
    item_id: str | None = None
    description: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None


class EnquiryItemUpdate(CamelModel):
    item_id: str | None = None
    description: str | None = Field(default=None, min_length=1)
    quantity: int | None = Field(default=None, ge=1)
    unit_price: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None


class EnquiryItemResponse(EntityResponse):
    enquiry_id: str
    item_id: str | None = None
    description: str
    quantity: int
    unit_price: Decimal | None = None
    notes: str | None = None
