"""Enquiry storage (customer requests) and its line items."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import ColumnElement, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import ENQUIRY_NUMBER_PREFIX
from erp.infrastructure.persistence.models.enquiry import Enquiry, EnquiryItem
from erp.infrastructure.persistence.storage.base import EntityStorage, SessionFactory
from erp.shared.enums import EnquiryStatus
from erp.shared.utils.datetime import ensure_utc, utc_now


class EnquiryItemStorage(EntityStorage[EnquiryItem]):
    entity_type = "enquiry_item"
    model = EnquiryItem


class EnquiryStorage(EntityStorage[Enquiry]):
    """Enquiries. Filters: status, source, customer_id, search, date_from, date_to."""

    entity_type = "enquiry"
    model = Enquiry
    number_field = "enquiry_number"
    number_prefix = ENQUIRY_NUMBER_PREFIX

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        super().__init__(session_factory)
        self.items = EnquiryItemStorage(session_factory)

    def _filter_conditions(self, filters: Mapping[str, Any]) -> list[ColumnElement[bool]]:
        remaining = dict(filters)
        search = remaining.pop("search", None)
        date_from = remaining.pop("date_from", None)
        date_to = remaining.pop("date_to", None)
        conditions = super()._filter_conditions(remaining)
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(Enquiry.enquiry_number.ilike(pattern), Enquiry.notes.ilike(pattern))
            )
        if date_from is not None:
            conditions.append(Enquiry.enquiry_date >= ensure_utc(date_from))
        if date_to is not None:
            conditions.append(Enquiry.enquiry_date <= ensure_utc(date_to))
        return conditions

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        values.setdefault("status", EnquiryStatus.NEW.value)
        if values.get("enquiry_date") is None:
            values["enquiry_date"] = utc_now()
        return values

    async def list_items(self, enquiry_id: str) -> list[EnquiryItem]:
        """Active lines of an enquiry in entry order."""
        stmt = (
            select(EnquiryItem)
            .where(EnquiryItem.enquiry_id == enquiry_id, EnquiryItem.is_active.is_(True))
            .order_by(EnquiryItem.created_at.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def add_item(
        self, enquiry_id: str, data: Mapping[str, Any], actor_id: str | None = None
    ) -> EnquiryItem:
        """Append a line to an existing enquiry (audited as enquiry_item)."""
        async with self._transaction() as session:
            await self._get_for_update(session, enquiry_id)
            return await self.items._insert(
                session, {**data, "enquiry_id": enquiry_id}, actor_id
            )

    async def update_item(
        self, item_id: str, data: Mapping[str, Any], actor_id: str | None = None
    ) -> EnquiryItem:
        return await self.items.update(item_id, data, actor_id)

    async def delete_item(self, item_id: str, actor_id: str | None = None) -> None:
        await self.items.soft_delete(item_id, actor_id)
