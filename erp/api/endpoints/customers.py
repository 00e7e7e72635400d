"""Customer API: CRUD over the customer storage module, plus audit history."""

from fastapi import APIRouter, Query, Response

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from erp.shared.enums import CustomerClassification, CustomerType

router = APIRouter()

ENTITY_TYPE = "customer"


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    storage: StorageDep,
    page: PaginationDep,
    response: Response,
    customer_type: CustomerType | None = Query(None, alias="customerType"),
    classification: CustomerClassification | None = Query(None),
):
    """List active customers, newest first. X-Total-Count carries the active total."""
    customers = await storage.customers.list(
        page.limit,
        page.offset,
        customer_type=customer_type.value if customer_type else None,
        classification=classification.value if classification else None,
    )
    response.headers["X-Total-Count"] = str(await storage.customers.count_active())
    return customers


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str, storage: StorageDep):
    customer = await storage.customers.get_by_id(customer_id)
    if customer is None:
        raise ResourceNotFoundException(ENTITY_TYPE, customer_id)
    return customer


@router.post("", response_model=CustomerResponse)
async def create_customer(body: CustomerCreate, storage: StorageDep, actor_id: ActorDep):
    return await storage.customers.create(body.to_storage(), actor_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str, body: CustomerUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.customers.update(customer_id, body.to_storage(), actor_id)


@router.delete("/{customer_id}", response_model=SuccessResponse)
async def delete_customer(customer_id: str, storage: StorageDep, actor_id: ActorDep):
    """Soft delete (isActive=false); the row and its history remain."""
    await storage.customers.soft_delete(customer_id, actor_id)
    return SuccessResponse()


@router.get("/{customer_id}/history", response_model=list[AuditLogEntryResponse])
async def get_customer_history(customer_id: str, storage: StorageDep):
    """Audit trail for one customer, oldest first."""
    return await storage.get_audit_history(ENTITY_TYPE, customer_id)
