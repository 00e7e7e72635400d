"""Supplier storage."""

from erp.infrastructure.persistence.models.supplier import Supplier
from erp.infrastructure.persistence.storage.base import EntityStorage


class SupplierStorage(EntityStorage[Supplier]):
    entity_type = "supplier"
    model = Supplier
