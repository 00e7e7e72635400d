"""Customer storage."""

from __future__ import annotations

from sqlalchemy import func, select

from erp.infrastructure.persistence.models.customer import Customer
from erp.infrastructure.persistence.storage.base import EntityStorage


class CustomerStorage(EntityStorage[Customer]):
    """Customers. Filters: customer_type, classification."""

    entity_type = "customer"
    model = Customer

    async def count_active(self) -> int:
        """Number of active customers (pagination totals)."""
        stmt = select(func.count()).select_from(Customer).where(Customer.is_active.is_(True))
        async with self._session() as session:
            total = await session.scalar(stmt)
            return int(total or 0)
