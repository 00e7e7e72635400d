"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from erp.api.dependencies.
"""

from fastapi import APIRouter

from erp.api.endpoints import (
    audit_logs,
    auth,
    customers,
    deliveries,
    enquiries,
    health,
    invoices,
    items,
    quotations,
    receipt_returns,
    sales_orders,
    suppliers,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
api_router.include_router(items.router, prefix="/items", tags=["items"])
api_router.include_router(enquiries.router, prefix="/enquiries", tags=["enquiries"])
api_router.include_router(
    enquiries.item_router, prefix="/enquiry-items", tags=["enquiries"]
)
api_router.include_router(quotations.router, prefix="/quotations", tags=["quotations"])
api_router.include_router(
    quotations.item_router, prefix="/quotation-items", tags=["quotations"]
)
api_router.include_router(
    sales_orders.router, prefix="/sales-orders", tags=["sales-orders"]
)
api_router.include_router(deliveries.router, prefix="/deliveries", tags=["deliveries"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(
    receipt_returns.router, prefix="/receipt-returns", tags=["receipt-returns"]
)
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
