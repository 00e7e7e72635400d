"""Request/response schemas for the audit log API."""

from datetime import datetime
from typing import Any

from erp.schemas.common import CamelModel


class AuditLogEntryResponse(CamelModel):
    """Single audit log entry (read)."""

    id: str
    entity_type: str
    entity_id: str
    action: str
    actor_id: str
    old_data: dict[str, Any] | None = None
    new_data: dict[str, Any] | None = None
    timestamp: datetime


class AuditLogListResponse(CamelModel):
    """Paginated list of audit log entries."""

    items: list[AuditLogEntryResponse]
    offset: int
    limit: int
    total: int
