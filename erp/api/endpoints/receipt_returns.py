"""Receipt return API (supplier returns)."""

from fastapi import APIRouter, Query

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.receipt_return import (
    ReceiptReturnCreate,
    ReceiptReturnResponse,
    ReceiptReturnUpdate,
)
from erp.shared.enums import ReceiptReturnStatus

router = APIRouter()

ENTITY_TYPE = "receipt_return"


@router.get("", response_model=list[ReceiptReturnResponse])
async def list_receipt_returns(
    storage: StorageDep,
    page: PaginationDep,
    status: ReceiptReturnStatus | None = Query(None),
    supplier_id: str | None = Query(None, alias="supplierId"),
):
    return await storage.receipt_returns.list(
        page.limit,
        page.offset,
        status=status.value if status else None,
        supplier_id=supplier_id,
    )


@router.get("/{return_id}", response_model=ReceiptReturnResponse)
async def get_receipt_return(return_id: str, storage: StorageDep):
    receipt_return = await storage.receipt_returns.get_by_id(return_id)
    if receipt_return is None:
        raise ResourceNotFoundException(ENTITY_TYPE, return_id)
    return receipt_return


@router.post("", response_model=ReceiptReturnResponse)
async def create_receipt_return(
    body: ReceiptReturnCreate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.receipt_returns.create(body.to_storage(), actor_id)


@router.put("/{return_id}", response_model=ReceiptReturnResponse)
async def update_receipt_return(
    return_id: str, body: ReceiptReturnUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.receipt_returns.update(return_id, body.to_storage(), actor_id)


@router.delete("/{return_id}", response_model=SuccessResponse)
async def delete_receipt_return(return_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.receipt_returns.soft_delete(return_id, actor_id)
    return SuccessResponse()


@router.get("/{return_id}/history", response_model=list[AuditLogEntryResponse])
async def get_receipt_return_history(return_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, return_id)
