"""Receipt return API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from erp.schemas.common import CamelModel, EntityResponse
from erp.shared.enums import ReceiptReturnStatus


class ReceiptReturnCreate(CamelModel):
    supplier_id: str | None = None
    goods_receipt_id: str | None = None
    return_date: datetime | None = None
    return_reason: str = Field(..., min_length=1)
    status: ReceiptReturnStatus = ReceiptReturnStatus.PENDING
    total_return_value: Decimal | None = Field(default=None, ge=0)
    debit_note_number: str | None = None
    debit_note_generated: bool = False
    notes: str | None = None


class ReceiptReturnUpdate(CamelModel):
    return_date: datetime | None = None
    return_reason: str | None = Field(default=None, min_length=1)
    status: ReceiptReturnStatus | None = None
    total_return_value: Decimal | None = Field(default=None, ge=0)
    debit_note_number: str | None = None
    debit_note_generated: bool | None = None
    notes: str | None = None


class ReceiptReturnResponse(EntityResponse):
    return_number: str
    supplier_id: str | None = None
    goods_receipt_id: str | None = None
    return_date: datetime | None = None
    return_reason: str
    status: str
    total_return_value: Decimal | None = None
    debit_note_number: str | None = None
    debit_note_generated: bool = False
    notes: str | None = None
    created_by: str | None = None
