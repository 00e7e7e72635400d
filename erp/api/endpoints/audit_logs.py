"""Audit log API: read-only access to the append-only mutation log."""

from datetime import datetime

from fastapi import APIRouter, Query

from erp.api.dependencies import PaginationDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse
from erp.shared.enums import AuditAction

router = APIRouter()


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    storage: StorageDep,
    page: PaginationDep,
    entity_type: str | None = Query(None, alias="entityType"),
    entity_id: str | None = Query(None, alias="entityId"),
    action: AuditAction | None = Query(None),
    actor_id: str | None = Query(None, alias="actorId"),
    from_timestamp: datetime | None = Query(None, alias="fromTimestamp"),
    to_timestamp: datetime | None = Query(None, alias="toTimestamp"),
):
    """List audit entries, newest first (paginated, optional filters)."""
    filters = {
        "entity_type": entity_type,
        "entity_id": entity_id,
        "action": action.value if action else None,
        "actor_id": actor_id,
        "from_timestamp": from_timestamp,
        "to_timestamp": to_timestamp,
    }
    items = await storage.audit.list(page.limit, page.offset, **filters)
    total = await storage.audit.count(**filters)
    return AuditLogListResponse(
        items=[AuditLogEntryResponse.model_validate(e) for e in items],
        offset=page.offset,
        limit=page.limit,
        total=total,
    )


@router.get(
    "/entity/{entity_type}/{entity_id}", response_model=list[AuditLogEntryResponse]
)
async def get_entity_audit_logs(entity_type: str, entity_id: str, storage: StorageDep):
    """Full history of one entity, oldest first."""
    return await storage.audit.get_by_entity(entity_type, entity_id)


@router.get("/{entry_id}", response_model=AuditLogEntryResponse)
async def get_audit_log(entry_id: str, storage: StorageDep):
    entry = await storage.audit.get_by_id(entry_id)
    if entry is None:
        raise ResourceNotFoundException("audit_log", entry_id)
    return entry
