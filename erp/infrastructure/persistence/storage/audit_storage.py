"""Audit log storage: read path over the append-only audit table.

Writes happen only through BaseStorage.log_audit_event. No update or delete
is exposed here.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ColumnElement, func, select

from erp.infrastructure.persistence.models.audit_log import AuditLog
from erp.shared.utils.datetime import ensure_utc
from erp.infrastructure.persistence.storage.base import BaseStorage


def _conditions(
    entity_type: str | None,
    entity_id: str | None,
    action: str | None,
    actor_id: str | None,
    from_timestamp: datetime | None,
    to_timestamp: datetime | None,
) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if entity_type is not None:
        conditions.append(AuditLog.entity_type == entity_type)
    if entity_id is not None:
        conditions.append(AuditLog.entity_id == entity_id)
    if action is not None:
        conditions.append(AuditLog.action == action)
    if actor_id is not None:
        conditions.append(AuditLog.actor_id == actor_id)
    if from_timestamp is not None:
        conditions.append(AuditLog.timestamp >= ensure_utc(from_timestamp))
    if to_timestamp is not None:
        conditions.append(AuditLog.timestamp <= ensure_utc(to_timestamp))
    return conditions


class AuditStorage(BaseStorage):
    """Append-only audit log storage. Reads only; writes via log_audit_event."""

    entity_type = "audit_log"

    async def get_by_id(self, entry_id: str) -> AuditLog | None:
        async with self._session() as session:
            return await session.get(AuditLog, entry_id)

    async def get_by_entity(self, entity_type: str, entity_id: str) -> list[AuditLog]:
        """Full history of one entity, oldest first (for reconstruction)."""
        stmt = (
            select(AuditLog)
            .where(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
            .order_by(AuditLog.timestamp.asc(), AuditLog.id.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def list(
        self,
        limit: int = 50,
        offset: int = 0,
        *,
        entity_type: str | None = None,
        entity_id: str | None = None,
        action: str | None = None,
        actor_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> list[AuditLog]:
        """List audit entries with optional filters (newest first)."""
        conditions = _conditions(
            entity_type, entity_id, action, actor_id, from_timestamp, to_timestamp
        )
        stmt = (
            select(AuditLog)
            .where(*conditions)
            .order_by(AuditLog.timestamp.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def count(
        self,
        *,
        entity_type: str | None = None,
        entity_id: str | None = None,
        action: str | None = None,
        actor_id: str | None = None,
        from_timestamp: datetime | None = None,
        to_timestamp: datetime | None = None,
    ) -> int:
        """Count audit entries matching the same filters as list()."""
        conditions = _conditions(
            entity_type, entity_id, action, actor_id, from_timestamp, to_timestamp
        )
        stmt = select(func.count()).select_from(AuditLog).where(*conditions)
        async with self._session() as session:
            total = await session.scalar(stmt)
            return int(total or 0)
