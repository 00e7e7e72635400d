"""Sales order API: CRUD, lines and conversion from a quotation."""

from fastapi import APIRouter, Query

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.sales_order import (
    SalesOrderCreate,
    SalesOrderItemResponse,
    SalesOrderResponse,
    SalesOrderUpdate,
)
from erp.shared.enums import SalesOrderStatus

router = APIRouter()

ENTITY_TYPE = "sales_order"


@router.get("", response_model=list[SalesOrderResponse])
async def list_sales_orders(
    storage: StorageDep,
    page: PaginationDep,
    status: SalesOrderStatus | None = Query(None),
    customer_id: str | None = Query(None, alias="customerId"),
):
    return await storage.sales_orders.list(
        page.limit,
        page.offset,
        status=status.value if status else None,
        customer_id=customer_id,
    )


@router.post("/from-quotation/{quotation_id}", response_model=SalesOrderResponse)
async def create_sales_order_from_quotation(
    quotation_id: str, storage: StorageDep, actor_id: ActorDep
):
    """Create a Draft order from a quotation; the quotation becomes Accepted."""
    return await storage.sales_orders.create_from_quotation(quotation_id, actor_id)


@router.get("/{sales_order_id}", response_model=SalesOrderResponse)
async def get_sales_order(sales_order_id: str, storage: StorageDep):
    order = await storage.sales_orders.get_by_id(sales_order_id)
    if order is None:
        raise ResourceNotFoundException(ENTITY_TYPE, sales_order_id)
    return order


@router.post("", response_model=SalesOrderResponse)
async def create_sales_order(body: SalesOrderCreate, storage: StorageDep, actor_id: ActorDep):
    return await storage.sales_orders.create(body.to_storage(), actor_id)


@router.put("/{sales_order_id}", response_model=SalesOrderResponse)
async def update_sales_order(
    sales_order_id: str, body: SalesOrderUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.sales_orders.update(sales_order_id, body.to_storage(), actor_id)


@router.delete("/{sales_order_id}", response_model=SuccessResponse)
async def delete_sales_order(sales_order_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.sales_orders.soft_delete(sales_order_id, actor_id)
    return SuccessResponse()


@router.get("/{sales_order_id}/items", response_model=list[SalesOrderItemResponse])
async def list_sales_order_items(sales_order_id: str, storage: StorageDep):
    return await storage.sales_orders.list_items(sales_order_id)


@router.get("/{sales_order_id}/history", response_model=list[AuditLogEntryResponse])
async def get_sales_order_history(sales_order_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, sales_order_id)
