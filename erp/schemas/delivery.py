"""Delivery API schemas."""

from datetime import datetime

from pydantic import Field

from erp.schemas.common import CamelModel, EntityResponse
from erp.shared.enums import DeliveryStatus, DeliveryType


class DeliveryCreate(CamelModel):
    sales_order_id: str | None = None
    delivery_date: datetime | None = None
    status: DeliveryStatus = DeliveryStatus.PENDING
    delivery_type: DeliveryType = DeliveryType.FULL
    delivery_address: str | None = None
    delivery_notes: str | None = None
    tracking_number: str | None = None
    carrier_name: str | None = None


class DeliveryUpdate(CamelModel):
    delivery_date: datetime | None = None
    status: DeliveryStatus | None = None
    delivery_type: DeliveryType | None = None
    delivery_address: str | None = None
    delivery_notes: str | None = None
    tracking_number: str | None = None
    carrier_name: str | None = None


class DeliveryConfirm(CamelModel):
    """Request body for POST /deliveries/{id}/confirm."""

    confirmed_by: str = Field(..., min_length=1, description="Name of the person who received the goods")


class DeliveryResponse(EntityResponse):
    delivery_number: str
    sales_order_id: str | None = None
    delivery_date: datetime | None = None
    status: str
    delivery_type: str
    delivery_address: str | None = None
    delivery_notes: str | None = None
    tracking_number: str | None = None
    carrier_name: str | None = None
    delivery_confirmed_by: str | None = None
    delivery_confirmed_at: datetime | None = None
    actual_delivery_date: datetime | None = None
    created_by: str | None = None
