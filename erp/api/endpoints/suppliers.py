"""Supplier API."""

from fastapi import APIRouter

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.supplier import SupplierCreate, SupplierResponse, SupplierUpdate

router = APIRouter()

ENTITY_TYPE = "supplier"


@router.get("", response_model=list[SupplierResponse])
async def list_suppliers(storage: StorageDep, page: PaginationDep):
    return await storage.suppliers.list(page.limit, page.offset)


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(supplier_id: str, storage: StorageDep):
    supplier = await storage.suppliers.get_by_id(supplier_id)
    if supplier is None:
        raise ResourceNotFoundException(ENTITY_TYPE, supplier_id)
    return supplier


@router.post("", response_model=SupplierResponse)
async def create_supplier(body: SupplierCreate, storage: StorageDep, actor_id: ActorDep):
    return await storage.suppliers.create(body.to_storage(), actor_id)


@router.put("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: str, body: SupplierUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.suppliers.update(supplier_id, body.to_storage(), actor_id)


@router.delete("/{supplier_id}", response_model=SuccessResponse)
async def delete_supplier(supplier_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.suppliers.soft_delete(supplier_id, actor_id)
    return SuccessResponse()


@router.get("/{supplier_id}/history", response_model=list[AuditLogEntryResponse])
async def get_supplier_history(supplier_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, supplier_id)
