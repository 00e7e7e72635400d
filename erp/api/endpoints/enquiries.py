"""Enquiry API: CRUD, line items and audit history."""

from datetime import datetime

from fastapi import APIRouter, Query

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.enquiry import (
    EnquiryCreate,
    EnquiryItemCreate,
    EnquiryItemResponse,
    EnquiryItemUpdate,
    EnquiryResponse,
    EnquiryUpdate,
)
from erp.shared.enums import EnquirySource, EnquiryStatus

router = APIRouter()
# Mounted at /enquiry-items: line-level update and delete.
item_router = APIRouter()

ENTITY_TYPE = "enquiry"


@router.get("", response_model=list[EnquiryResponse])
async def list_enquiries(
    storage: StorageDep,
    page: PaginationDep,
    status: EnquiryStatus | None = Query(None),
    source: EnquirySource | None = Query(None),
    customer_id: str | None = Query(None, alias="customerId"),
    search: str | None = Query(None, description="Matches enquiry number or notes"),
    date_from: datetime | None = Query(None, alias="dateFrom"),
    date_to: datetime | None = Query(None, alias="dateTo"),
):
    return await storage.enquiries.list(
        page.limit,
        page.offset,
        status=status.value if status else None,
        source=source.value if source else None,
        customer_id=customer_id,
        search=search,
        date_from=date_from,
        date_to=date_to,
    )


@router.get("/{enquiry_id}", response_model=EnquiryResponse)
async def get_enquiry(enquiry_id: str, storage: StorageDep):
    enquiry = await storage.enquiries.get_by_id(enquiry_id)
    if enquiry is None:
        raise ResourceNotFoundException(ENTITY_TYPE, enquiry_id)
    return enquiry


@router.post("", response_model=EnquiryResponse)
async def create_enquiry(body: EnquiryCreate, storage: StorageDep, actor_id: ActorDep):
    """Create an enquiry; enquiryNumber is assigned as ENQ-<year>-<NNN>."""
    return await storage.enquiries.create(body.to_storage(), actor_id)


@router.put("/{enquiry_id}", response_model=EnquiryResponse)
async def update_enquiry(
    enquiry_id: str, body: EnquiryUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.enquiries.update(enquiry_id, body.to_storage(), actor_id)


@router.delete("/{enquiry_id}", response_model=SuccessResponse)
async def delete_enquiry(enquiry_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.enquiries.soft_delete(enquiry_id, actor_id)
    return SuccessResponse()


@router.get("/{enquiry_id}/items", response_model=list[EnquiryItemResponse])
async def list_enquiry_items(enquiry_id: str, storage: StorageDep):
    return await storage.enquiries.list_items(enquiry_id)


@router.post("/{enquiry_id}/items", response_model=EnquiryItemResponse)
async def add_enquiry_item(
    enquiry_id: str, body: EnquiryItemCreate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.enquiries.add_item(enquiry_id, body.to_storage(), actor_id)


@router.get("/{enquiry_id}/history", response_model=list[AuditLogEntryResponse])
async def get_enquiry_history(enquiry_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, enquiry_id)


@item_router.put("/{item_id}", response_model=EnquiryItemResponse)
async def update_enquiry_item(
    item_id: str, body: EnquiryItemUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.enquiries.update_item(item_id, body.to_storage(), actor_id)


@item_router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_enquiry_item(item_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.enquiries.delete_item(item_id, actor_id)
    return SuccessResponse()
