"""Modular storage façade: one instance of every storage module behind one object.

create_app() builds exactly one ModularStorage per process and stores it on
app.state; route handlers receive that instance through the get_storage
dependency. Modules share the same session factory and hold no state of
their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from erp.infrastructure.persistence.models.audit_log import AuditLog
from erp.infrastructure.persistence.storage.audit_storage import AuditStorage
from erp.infrastructure.persistence.storage.base import (
    BaseStorage,
    EntityStorage,
    SessionFactory,
)
from erp.infrastructure.persistence.storage.customer_storage import CustomerStorage
from erp.infrastructure.persistence.storage.delivery_storage import DeliveryStorage
from erp.infrastructure.persistence.storage.enquiry_storage import EnquiryStorage
from erp.infrastructure.persistence.storage.invoice_storage import InvoiceStorage
from erp.infrastructure.persistence.storage.item_storage import ItemStorage
from erp.infrastructure.persistence.storage.quotation_storage import QuotationStorage
from erp.infrastructure.persistence.storage.receipt_return_storage import (
    ReceiptReturnStorage,
)
from erp.infrastructure.persistence.storage.sales_order_storage import SalesOrderStorage
from erp.infrastructure.persistence.storage.supplier_storage import SupplierStorage
from erp.infrastructure.persistence.storage.user_storage import UserStorage
from erp.shared.enums import AuditAction


class ModularStorage:
    """Single coordination point over all entity storage modules."""

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        self._base = BaseStorage(session_factory)
        self.users = UserStorage(session_factory)
        self.customers = CustomerStorage(session_factory)
        self.suppliers = SupplierStorage(session_factory)
        self.items = ItemStorage(session_factory)
        self.enquiries = EnquiryStorage(session_factory)
        self.quotations = QuotationStorage(session_factory, enquiries=self.enquiries)
        self.sales_orders = SalesOrderStorage(session_factory, quotations=self.quotations)
        self.deliveries = DeliveryStorage(session_factory)
        self.invoices = InvoiceStorage(session_factory)
        self.receipt_returns = ReceiptReturnStorage(session_factory)
        self.audit = AuditStorage(session_factory)

    @property
    def modules(self) -> dict[str, EntityStorage[Any]]:
        """Entity storage modules keyed by audit entity type."""
        entity_modules: list[EntityStorage[Any]] = [
            self.users,
            self.customers,
            self.suppliers,
            self.items,
            self.enquiries,
            self.enquiries.items,
            self.quotations,
            self.quotations.items,
            self.sales_orders,
            self.sales_orders.items,
            self.deliveries,
            self.invoices,
            self.invoices.items,
            self.receipt_returns,
        ]
        return {module.entity_type: module for module in entity_modules}

    def for_entity(self, entity_type: str) -> EntityStorage[Any]:
        """Return the module that owns entity_type; KeyError if unknown."""
        try:
            return self.modules[entity_type]
        except KeyError:
            raise KeyError(f"No storage module for entity type {entity_type!r}") from None

    async def log_audit_event(
        self,
        entity_type: str,
        entity_id: str,
        action: AuditAction | str,
        actor_id: str | None = None,
        old_data: Mapping[str, Any] | None = None,
        new_data: Mapping[str, Any] | None = None,
    ) -> None:
        """Append a standalone audit entry (its own transaction)."""
        await self._base.log_audit_event(
            entity_type, entity_id, action, actor_id, old_data, new_data
        )

    async def get_audit_history(self, entity_type: str, entity_id: str) -> list[AuditLog]:
        """Audit trail of one entity, oldest first."""
        return await self.audit.get_by_entity(entity_type, entity_id)
