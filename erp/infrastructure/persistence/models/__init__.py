"""Persistence models: ORM entities and mixins."""

from erp.infrastructure.persistence.models.audit_log import AuditLog
from erp.infrastructure.persistence.models.customer import Customer
from erp.infrastructure.persistence.models.delivery import Delivery
from erp.infrastructure.persistence.models.enquiry import Enquiry, EnquiryItem
from erp.infrastructure.persistence.models.invoice import Invoice, InvoiceItem
from erp.infrastructure.persistence.models.item import Item
from erp.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    EntityModel,
    TimestampMixin,
    UuidMixin,
)
from erp.infrastructure.persistence.models.quotation import Quotation, QuotationItem
from erp.infrastructure.persistence.models.receipt_return import ReceiptReturn
from erp.infrastructure.persistence.models.sales_order import SalesOrder, SalesOrderItem
from erp.infrastructure.persistence.models.supplier import Supplier
from erp.infrastructure.persistence.models.user import User

__all__ = [
    "ActiveFlagMixin",
    "AuditLog",
    "Customer",
    "Delivery",
    "EntityModel",
    "Enquiry",
    "EnquiryItem",
    "Invoice",
    "InvoiceItem",
    "Item",
    "Quotation",
    "QuotationItem",
    "ReceiptReturn",
    "SalesOrder",
    "SalesOrderItem",
    "Supplier",
    "TimestampMixin",
    "User",
    "UuidMixin",
]
