"""Delivery storage (delivery notes)."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import DELIVERY_NUMBER_PREFIX
from erp.infrastructure.persistence.models.delivery import Delivery
from erp.infrastructure.persistence.storage.base import EntityStorage
from erp.shared.enums import DeliveryStatus
from erp.shared.utils.datetime import utc_now


class DeliveryStorage(EntityStorage[Delivery]):
    """Deliveries. Filters: status, sales_order_id."""

    entity_type = "delivery"
    model = Delivery
    number_field = "delivery_number"
    number_prefix = DELIVERY_NUMBER_PREFIX

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        values.setdefault("status", DeliveryStatus.PENDING.value)
        return values

    async def confirm(
        self, delivery_id: str, confirmed_by: str, actor_id: str | None = None
    ) -> Delivery:
        """Mark delivered: status Complete, confirmation and actual delivery dates set."""
        now = utc_now()
        return await self.update(
            delivery_id,
            {
                "status": DeliveryStatus.COMPLETE.value,
                "delivery_confirmed_by": confirmed_by,
                "delivery_confirmed_at": now,
                "actual_delivery_date": now,
            },
            actor_id,
        )
