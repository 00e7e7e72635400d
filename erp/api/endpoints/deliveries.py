"""Delivery API: CRUD and delivery confirmation."""

from fastapi import APIRouter, Query

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.delivery import (
    DeliveryConfirm,
    DeliveryCreate,
    DeliveryResponse,
    DeliveryUpdate,
)
from erp.shared.enums import DeliveryStatus

router = APIRouter()

ENTITY_TYPE = "delivery"


@router.get("", response_model=list[DeliveryResponse])
async def list_deliveries(
    storage: StorageDep,
    page: PaginationDep,
    status: DeliveryStatus | None = Query(None),
    sales_order_id: str | None = Query(None, alias="salesOrderId"),
):
    return await storage.deliveries.list(
        page.limit,
        page.offset,
        status=status.value if status else None,
        sales_order_id=sales_order_id,
    )


@router.get("/{delivery_id}", response_model=DeliveryResponse)
async def get_delivery(delivery_id: str, storage: StorageDep):
    delivery = await storage.deliveries.get_by_id(delivery_id)
    if delivery is None:
        raise ResourceNotFoundException(ENTITY_TYPE, delivery_id)
    return delivery


@router.post("", response_model=DeliveryResponse)
async def create_delivery(body: DeliveryCreate, storage: StorageDep, actor_id: ActorDep):
    return await storage.deliveries.create(body.to_storage(), actor_id)


@router.put("/{delivery_id}", response_model=DeliveryResponse)
async def update_delivery(
    delivery_id: str, body: DeliveryUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.deliveries.update(delivery_id, body.to_storage(), actor_id)


@router.delete("/{delivery_id}", response_model=SuccessResponse)
async def delete_delivery(delivery_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.deliveries.soft_delete(delivery_id, actor_id)
    return SuccessResponse()


@router.post("/{delivery_id}/confirm", response_model=DeliveryResponse)
async def confirm_delivery(
    delivery_id: str, body: DeliveryConfirm, storage: StorageDep, actor_id: ActorDep
):
    """Mark the delivery Complete and record who received it."""
    return await storage.deliveries.confirm(delivery_id, body.confirmed_by, actor_id)


@router.get("/{delivery_id}/history", response_model=list[AuditLogEntryResponse])
async def get_delivery_history(delivery_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, delivery_id)
