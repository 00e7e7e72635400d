"""Item storage. Barcode uniqueness is a schema constraint; duplicates surface as IntegrityError."""

from __future__ import annotations

from sqlalchemy import select

from erp.infrastructure.persistence.models.item import Item
from erp.infrastructure.persistence.storage.base import EntityStorage


class ItemStorage(EntityStorage[Item]):
    """Items. Filters: category, supplier_id."""

    entity_type = "item"
    model = Item

    async def get_by_barcode(self, barcode: str) -> Item | None:
        """Return the item with this barcode (active or not), or None."""
        async with self._session() as session:
            result = await session.execute(select(Item).where(Item.barcode == barcode))
            return result.scalar_one_or_none()
