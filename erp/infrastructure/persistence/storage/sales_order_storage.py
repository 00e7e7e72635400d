"""Sales order storage and conversion from accepted quotations."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import SALES_ORDER_NUMBER_PREFIX
from erp.domain.exceptions import ValidationException
from erp.infrastructure.persistence.models.quotation import QuotationItem
from erp.infrastructure.persistence.models.sales_order import SalesOrder, SalesOrderItem
from erp.infrastructure.persistence.storage.base import EntityStorage, SessionFactory
from erp.infrastructure.persistence.storage.quotation_storage import QuotationStorage
from erp.shared.enums import QuotationStatus, SalesOrderStatus
from erp.shared.utils.datetime import utc_now


class SalesOrderItemStorage(EntityStorage[SalesOrderItem]):
    entity_type = "sales_order_item"
    model = SalesOrderItem


class SalesOrderStorage(EntityStorage[SalesOrder]):
    """Sales orders. Filters: status, customer_id, quotation_id."""

    entity_type = "sales_order"
    model = SalesOrder
    number_field = "order_number"
    number_prefix = SALES_ORDER_NUMBER_PREFIX

    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        quotations: QuotationStorage | None = None,
    ) -> None:
        super().__init__(session_factory)
        self.items = SalesOrderItemStorage(session_factory)
        self.quotations = quotations or QuotationStorage(session_factory)

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        values.setdefault("status", SalesOrderStatus.DRAFT.value)
        if values.get("order_date") is None:
            values["order_date"] = utc_now()
        return values

    async def list_items(self, sales_order_id: str) -> list[SalesOrderItem]:
        stmt = (
            select(SalesOrderItem)
            .where(
                SalesOrderItem.sales_order_id == sales_order_id,
                SalesOrderItem.is_active.is_(True),
            )
            .order_by(SalesOrderItem.line_number.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def create_from_quotation(
        self, quotation_id: str, actor_id: str | None = None
    ) -> SalesOrder:
        """Create a Draft order from a quotation, copying its lines; the quotation becomes Accepted."""
        async with self._transaction() as session:
            quotation = await self.quotations._get_for_update(session, quotation_id)
            if quotation.is_superseded or not quotation.is_active:
                raise ValidationException(
                    f"quotation {quotation_id} is not open for ordering",
                    field="quotation_id",
                )
            result = await session.execute(
                select(QuotationItem)
                .where(
                    QuotationItem.quotation_id == quotation_id,
                    QuotationItem.is_active.is_(True),
                )
                .order_by(QuotationItem.created_at.asc())
            )
            lines = list(result.scalars().all())
            order = await self._insert(
                session,
                {
                    "quotation_id": quotation.id,
                    "customer_id": quotation.customer_id,
                    "status": SalesOrderStatus.DRAFT.value,
                    "subtotal": quotation.subtotal,
                    "tax_amount": quotation.tax_amount,
                    "total_amount": quotation.total_amount,
                },
                actor_id,
            )
            for line_number, line in enumerate(lines, start=1):
                await self.items._insert(
                    session,
                    {
                        "sales_order_id": order.id,
                        "item_id": line.item_id,
                        "line_number": line_number,
                        "description": line.description,
                        "quantity": line.quantity,
                        "unit_price": line.unit_price,
                        "total_price": line.line_total,
                    },
                    actor_id,
                )
            await self.quotations._update_locked(
                session, quotation_id, {"status": QuotationStatus.ACCEPTED.value}, actor_id
            )
            return order
