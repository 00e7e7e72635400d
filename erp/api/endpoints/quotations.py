"""Quotation API: CRUD, pricing lines, generation from an enquiry and revisions."""

from fastapi import APIRouter, Query

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.quotation import (
    QuotationCreate,
    QuotationItemCreate,
    QuotationItemResponse,
    QuotationItemUpdate,
    QuotationResponse,
    QuotationRevisionCreate,
    QuotationUpdate,
)
from erp.shared.enums import QuotationStatus

router = APIRouter()
# Mounted at /quotation-items: line-level update and delete.
item_router = APIRouter()

ENTITY_TYPE = "quotation"


@router.get("", response_model=list[QuotationResponse])
async def list_quotations(
    storage: StorageDep,
    page: PaginationDep,
    status: QuotationStatus | None = Query(None),
    customer_id: str | None = Query(None, alias="customerId"),
    enquiry_id: str | None = Query(None, alias="enquiryId"),
):
    return await storage.quotations.list(
        page.limit,
        page.offset,
        status=status.value if status else None,
        customer_id=customer_id,
        enquiry_id=enquiry_id,
    )


@router.post("/from-enquiry/{enquiry_id}", response_model=QuotationResponse)
async def generate_quotation_from_enquiry(
    enquiry_id: str, storage: StorageDep, actor_id: ActorDep
):
    """Create a Draft quotation from an enquiry's lines; the enquiry becomes Quoted."""
    return await storage.quotations.generate_from_enquiry(enquiry_id, actor_id)


@router.get("/{quotation_id}", response_model=QuotationResponse)
async def get_quotation(quotation_id: str, storage: StorageDep):
    quotation = await storage.quotations.get_by_id(quotation_id)
    if quotation is None:
        raise ResourceNotFoundException(ENTITY_TYPE, quotation_id)
    return quotation


@router.post("", response_model=QuotationResponse)
async def create_quotation(body: QuotationCreate, storage: StorageDep, actor_id: ActorDep):
    return await storage.quotations.create(body.to_storage(), actor_id)


@router.put("/{quotation_id}", response_model=QuotationResponse)
async def update_quotation(
    quotation_id: str, body: QuotationUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.quotations.update(quotation_id, body.to_storage(), actor_id)


@router.delete("/{quotation_id}", response_model=SuccessResponse)
async def delete_quotation(quotation_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.quotations.soft_delete(quotation_id, actor_id)
    return SuccessResponse()


@router.get("/{quotation_id}/items", response_model=list[QuotationItemResponse])
async def list_quotation_items(quotation_id: str, storage: StorageDep):
    return await storage.quotations.list_items(quotation_id)


@router.post("/{quotation_id}/items", response_model=QuotationItemResponse)
async def add_quotation_item(
    quotation_id: str, body: QuotationItemCreate, storage: StorageDep, actor_id: ActorDep
):
    """Add a line; quotation subtotal and total are recalculated."""
    return await storage.quotations.add_item(quotation_id, body.to_storage(), actor_id)


@router.get("/{quotation_id}/revisions", response_model=list[QuotationResponse])
async def list_quotation_revisions(quotation_id: str, storage: StorageDep):
    return await storage.quotations.get_revisions(quotation_id)


@router.post("/{quotation_id}/revisions", response_model=QuotationResponse)
async def create_quotation_revision(
    quotation_id: str,
    body: QuotationRevisionCreate,
    storage: StorageDep,
    actor_id: ActorDep,
):
    """Create the next revision; the original is marked superseded."""
    changes = body.changes.to_storage() if body.changes else {}
    return await storage.quotations.create_revision(
        quotation_id, body.revision_reason, changes, actor_id
    )


@router.get("/{quotation_id}/history", response_model=list[AuditLogEntryResponse])
async def get_quotation_history(quotation_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, quotation_id)


@item_router.put("/{item_id}", response_model=QuotationItemResponse)
async def update_quotation_item(
    item_id: str, body: QuotationItemUpdate, storage: StorageDep, actor_id: ActorDep
):
    """Update a line; it is re-priced and the quotation totals are recalculated."""
    return await storage.quotations.update_item(item_id, body.to_storage(), actor_id)


@item_router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_quotation_item(item_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.quotations.delete_item(item_id, actor_id)
    return SuccessResponse()
