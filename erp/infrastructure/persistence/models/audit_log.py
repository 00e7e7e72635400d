"""Audit log ORM model. Append-only record of entity mutations."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, String, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from erp.infrastructure.persistence.database import Base
from erp.infrastructure.persistence.models.mixins import JsonType
from erp.shared.utils.datetime import utc_now
from erp.shared.utils.generators import generate_cuid


class AuditLog(Base):
    """Audit log entry. Who changed which entity, from what to what, when. No update/delete."""

    __tablename__ = "audit_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    entity_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    entity_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String, nullable=False)
    actor_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    old_data: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)
    new_data: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False, index=True
    )


@event.listens_for(AuditLog, "before_update")
def _prevent_audit_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    """Audit log entries are append-only; updates are forbidden."""
    raise ValueError("Audit log entries are immutable and cannot be updated.")


@event.listens_for(AuditLog, "before_delete")
def _prevent_audit_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AuditLog
) -> None:
    """Audit log entries cannot be deleted."""
    raise ValueError("Audit log entries cannot be deleted.")
