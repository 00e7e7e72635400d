"""Invoice API: CRUD, generation from deliveries and sales orders, send, payment and cancel."""

from datetime import datetime

from fastapi import APIRouter, Body, Query

from erp.api.dependencies import ActorDep, PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.invoice import (
    InvoiceCancel,
    InvoiceCreate,
    InvoiceGenerate,
    InvoiceItemResponse,
    InvoicePayment,
    InvoiceResponse,
    InvoiceUpdate,
)
from erp.shared.enums import InvoiceStatus, InvoiceType

router = APIRouter()

ENTITY_TYPE = "invoice"


@router.get("", response_model=list[InvoiceResponse])
async def list_invoices(
    storage: StorageDep,
    page: PaginationDep,
    status: InvoiceStatus | None = Query(None),
    invoice_type: InvoiceType | None = Query(None, alias="invoiceType"),
    customer_id: str | None = Query(None, alias="customerId"),
    sales_order_id: str | None = Query(None, alias="salesOrderId"),
    search: str | None = Query(None, description="Matches invoice number or notes"),
    date_from: datetime | None = Query(None, alias="dateFrom"),
    date_to: datetime | None = Query(None, alias="dateTo"),
):
    return await storage.invoices.list(
        page.limit,
        page.offset,
        status=status.value if status else None,
        invoice_type=invoice_type.value if invoice_type else None,
        customer_id=customer_id,
        sales_order_id=sales_order_id,
        search=search,
        date_from=date_from,
        date_to=date_to,
    )


@router.get("/by-number/{invoice_number}", response_model=InvoiceResponse)
async def get_invoice_by_number(invoice_number: str, storage: StorageDep):
    invoice = await storage.invoices.get_by_number(invoice_number)
    if invoice is None:
        raise ResourceNotFoundException(ENTITY_TYPE, invoice_number)
    return invoice


@router.post("/from-delivery/{delivery_id}", response_model=InvoiceResponse)
async def generate_invoice_from_delivery(
    delivery_id: str,
    storage: StorageDep,
    actor_id: ActorDep,
    body: InvoiceGenerate | None = Body(None),
):
    """Create a Draft invoice from the delivery's sales order lines."""
    invoice_type = body.invoice_type if body else InvoiceType.FINAL
    return await storage.invoices.generate_from_delivery(delivery_id, invoice_type, actor_id)


@router.post("/proforma/{sales_order_id}", response_model=InvoiceResponse)
async def generate_proforma_invoice(
    sales_order_id: str, storage: StorageDep, actor_id: ActorDep
):
    return await storage.invoices.generate_proforma(sales_order_id, actor_id)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(invoice_id: str, storage: StorageDep):
    invoice = await storage.invoices.get_by_id(invoice_id)
    if invoice is None:
        raise ResourceNotFoundException(ENTITY_TYPE, invoice_id)
    return invoice


@router.post("", response_model=InvoiceResponse)
async def create_invoice(body: InvoiceCreate, storage: StorageDep, actor_id: ActorDep):
    return await storage.invoices.create(body.to_storage(), actor_id)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: str, body: InvoiceUpdate, storage: StorageDep, actor_id: ActorDep
):
    return await storage.invoices.update(invoice_id, body.to_storage(), actor_id)


@router.delete("/{invoice_id}", response_model=SuccessResponse)
async def delete_invoice(invoice_id: str, storage: StorageDep, actor_id: ActorDep):
    await storage.invoices.soft_delete(invoice_id, actor_id)
    return SuccessResponse()


@router.get("/{invoice_id}/items", response_model=list[InvoiceItemResponse])
async def list_invoice_items(invoice_id: str, storage: StorageDep):
    return await storage.invoices.list_items(invoice_id)


@router.post("/{invoice_id}/send", response_model=InvoiceResponse)
async def send_invoice(invoice_id: str, storage: StorageDep, actor_id: ActorDep):
    return await storage.invoices.send(invoice_id, actor_id)


@router.post("/{invoice_id}/mark-paid", response_model=InvoiceResponse)
async def mark_invoice_paid(
    invoice_id: str, body: InvoicePayment, storage: StorageDep, actor_id: ActorDep
):
    """Record a payment; the invoice is Paid once nothing is outstanding."""
    return await storage.invoices.mark_paid(
        invoice_id, body.amount, body.payment_method, body.payment_reference, actor_id
    )


@router.post("/{invoice_id}/cancel", response_model=InvoiceResponse)
async def cancel_invoice(
    invoice_id: str, body: InvoiceCancel, storage: StorageDep, actor_id: ActorDep
):
    return await storage.invoices.cancel(invoice_id, body.reason, actor_id)


@router.get("/{invoice_id}/history", response_model=list[AuditLogEntryResponse])
async def get_invoice_history(invoice_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, invoice_id)
