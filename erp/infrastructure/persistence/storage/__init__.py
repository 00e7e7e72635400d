"""Storage layer: per-entity storage modules and the ModularStorage façade."""

from erp.infrastructure.persistence.storage.audit_storage import AuditStorage
from erp.infrastructure.persistence.storage.base import BaseStorage, EntityStorage
from erp.infrastructure.persistence.storage.customer_storage import CustomerStorage
from erp.infrastructure.persistence.storage.delivery_storage import DeliveryStorage
from erp.infrastructure.persistence.storage.enquiry_storage import EnquiryStorage
from erp.infrastructure.persistence.storage.invoice_storage import InvoiceStorage
from erp.infrastructure.persistence.storage.item_storage import ItemStorage
from erp.infrastructure.persistence.storage.modular_storage import ModularStorage
from erp.infrastructure.persistence.storage.quotation_storage import QuotationStorage
from erp.infrastructure.persistence.storage.receipt_return_storage import (
    ReceiptReturnStorage,
)
from erp.infrastructure.persistence.storage.sales_order_storage import SalesOrderStorage
from erp.infrastructure.persistence.storage.supplier_storage import SupplierStorage
from erp.infrastructure.persistence.storage.user_storage import UserStorage

__all__ = [
    "AuditStorage",
    "BaseStorage",
    "CustomerStorage",
    "DeliveryStorage",
    "EnquiryStorage",
    "EntityStorage",
    "InvoiceStorage",
    "ItemStorage",
    "ModularStorage",
    "QuotationStorage",
    "ReceiptReturnStorage",
    "SalesOrderStorage",
    "SupplierStorage",
    "UserStorage",
]
