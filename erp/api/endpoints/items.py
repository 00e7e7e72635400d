"""Item API, including barcode lookup."""

from fastapi import APIRouter, Query

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.item import ItemCreate, ItemResponse, ItemUpdate

router = APIRouter()

ENTITY_TYPE = "item"


@router.get("", response_model=list[ItemResponse])
async def list_items(
    storage: StorageDep,
    page: PaginationDep,
    category: str | None = Query(None),
    supplier_id: str | None = Query(None, alias="supplierId"),
):
    return await storage.items.list(
        page.limit, page.offset, category=category, supplier_id=supplier_id
    )


@router.get("/barcode/{barcode}", response_model=ItemResponse)
async def get_item_by_barcode(barcode: str, storage: StorageDep):
    item = await storage.items.get_by_barcode(barcode)
    if item is None:
        raise ResourceNotFoundException(ENTITY_TYPE, barcode)
    return item


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: str, storage: StorageDep):
    item = await storage.items.get_by_id(item_id)
    if item is None:
        raise ResourceNotFoundException(ENTITY_TYPE, item_id)
    return item


@router.post("", response_model=ItemResponse)
async def create_item(body: ItemCreate, storage: StorageDep, actor_id: ActorDep):
    """Create an item. A duplicate barcode fails at the database (500)."""
    return await storage.items.create(body.to_storage(), actor_id)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(item_id: str, body: ItemUpdate, storage: StorageDep, actor_id: ActorDep):
    return await storage.items.update(item_id, body.to_storage(), actor_id)


@router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_item(item_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.items.soft_delete(item_id, actor_id)
    return SuccessResponse()


@router.get("/{item_id}/history", response_model=list[AuditLogEntryResponse])
async def get_item_history(item_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, item_id)
