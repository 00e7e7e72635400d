"""Receipt return storage (goods sent back to suppliers)."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import RECEIPT_RETURN_NUMBER_PREFIX
from erp.infrastructure.persistence.models.receipt_return import ReceiptReturn
from erp.infrastructure.persistence.storage.base import EntityStorage
from erp.shared.enums import ReceiptReturnStatus
from erp.shared.utils.datetime import utc_now


class ReceiptReturnStorage(EntityStorage[ReceiptReturn]):
    """Receipt returns. Filters: status, supplier_id."""

    entity_type = "receipt_return"
    model = ReceiptReturn
    number_field = "return_number"
    number_prefix = RECEIPT_RETURN_NUMBER_PREFIX

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        values.setdefault("status", ReceiptReturnStatus.PENDING.value)
        if values.get("return_date") is None:
            values["return_date"] = utc_now()
        return values
