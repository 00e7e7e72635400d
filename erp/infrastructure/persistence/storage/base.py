"""Base storage: unit-of-work sessions, audit emission and the generic entity contract.

BaseStorage gives every storage module log_audit_event; EntityStorage adds
list/get_by_id/create/update/soft_delete over one ORM model. Each public
mutation runs in ONE session + transaction: the entity write and its audit
row commit or roll back together. Update and soft delete lock the target row
(SELECT ... FOR UPDATE) before taking the "old" snapshot.

Subclasses set entity_type (audit tag) and model, and may override
_filter_conditions, _number_conditions, _prepare_create, _before_update and
_serialize_for_audit.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import SYSTEM_USER_ID
from erp.domain.exceptions import ResourceNotFoundException, ValidationException
from erp.infrastructure.persistence.database import Base, get_sessionmaker
from erp.infrastructure.persistence.models.audit_log import AuditLog
from erp.shared.enums import AuditAction
from erp.shared.logging import get_logger
from erp.shared.utils.datetime import utc_now
from erp.shared.utils.generators import (
    format_document_number,
    generate_cuid,
    generate_uuid,
)

_logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

# async_sessionmaker or any zero-arg callable returning an async session context.
SessionFactory = Callable[[], Any]

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "hashed_password",
        "secret",
        "api_key",
        "token",
        "access_token",
        "refresh_token",
    }
)

# Columns callers may never write through update().
_PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def to_json_safe(value: Any) -> Any:
    """Convert a column value to a JSON-serializable value."""
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_json_safe(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [to_json_safe(v) for v in value]
    return value


def row_to_dict(obj: Base) -> dict[str, Any]:
    """Snapshot every mapped column of obj as a JSON-safe dict (snake_case keys)."""
    mapper = sa_inspect(obj).mapper
    return {
        attr.key: to_json_safe(getattr(obj, attr.key))
        for attr in mapper.column_attrs
    }


def sanitize_snapshot(data: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Return a JSON-safe copy of data with sensitive keys redacted."""
    if data is None:
        return None
    out: dict[str, Any] = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_KEYS:
            out[key] = "[REDACTED]"
        else:
            out[key] = to_json_safe(value)
    return out


class BaseStorage:
    """Shared capability: session factory access and audit emission."""

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        self._session_factory = session_factory

    @property
    def session_factory(self) -> SessionFactory:
        """Injected factory, or the process-wide sessionmaker on first use."""
        if self._session_factory is None:
            self._session_factory = get_sessionmaker()
        return self._session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Read-only session (no explicit transaction)."""
        async with self.session_factory() as session:
            yield session

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """Session with a transaction: commit on success, rollback on exception."""
        async with self.session_factory() as session:
            async with session.begin():
                yield session

    async def log_audit_event(
        self,
        entity_type: str,
        entity_id: str,
        action: AuditAction | str,
        actor_id: str | None = None,
        old_data: Mapping[str, Any] | None = None,
        new_data: Mapping[str, Any] | None = None,
        *,
        session: AsyncSession | None = None,
    ) -> None:
        """Append one audit row.

        With session, the row joins that unit of work; otherwise a transaction
        of its own is opened. Errors propagate to the caller.
        """
        if session is None:
            async with self._transaction() as own_session:
                await self._append_audit(
                    own_session, entity_type, entity_id, action, actor_id, old_data, new_data
                )
            return
        await self._append_audit(
            session, entity_type, entity_id, action, actor_id, old_data, new_data
        )

    async def _append_audit(
        self,
        session: AsyncSession,
        entity_type: str,
        entity_id: str,
        action: AuditAction | str,
        actor_id: str | None,
        old_data: Mapping[str, Any] | None,
        new_data: Mapping[str, Any] | None,
    ) -> AuditLog:
        action_value = action.value if isinstance(action, AuditAction) else str(action)
        entry = AuditLog(
            id=generate_cuid(),
            entity_type=entity_type,
            entity_id=entity_id,
            action=action_value,
            actor_id=actor_id or SYSTEM_USER_ID,
            old_data=sanitize_snapshot(old_data),
            new_data=sanitize_snapshot(new_data),
            timestamp=utc_now(),
        )
        session.add(entry)
        await session.flush()
        _logger.debug(
            "Audit %s %s:%s by %s", action_value, entity_type, entity_id, entry.actor_id
        )
        return entry


class EntityStorage(BaseStorage, Generic[ModelType]):
    """Uniform CRUD contract over one soft-deletable model, with audit on mutation.

    list() returns active rows newest first; get_by_id() returns soft-deleted
    rows too and None when absent; update()/soft_delete() raise
    ResourceNotFoundException when the row does not exist.
    """

    entity_type: str = ""
    model: type[ModelType]
    # Generated document number column and prefix (e.g. "enquiry_number", "ENQ").
    number_field: str | None = None
    number_prefix: str | None = None

    def _get_entity_type(self) -> str:
        return self.entity_type

    def _serialize_for_audit(self, obj: ModelType) -> dict[str, Any]:
        """Return dict representation for audit payload."""
        return row_to_dict(obj)

    def _column_keys(self) -> set[str]:
        return {attr.key for attr in sa_inspect(self.model).column_attrs}

    def _filter_conditions(self, filters: Mapping[str, Any]) -> list[ColumnElement[bool]]:
        """Equality filter per non-None keyword; unknown keys are rejected."""
        model: Any = self.model
        columns = self._column_keys()
        conditions: list[ColumnElement[bool]] = []
        for key, value in filters.items():
            if value is None:
                continue
            if key not in columns:
                raise ValidationException(f"Unknown filter: {key}", field=key)
            conditions.append(getattr(model, key) == value)
        return conditions

    async def list(
        self, limit: int = 50, offset: int = 0, **filters: Any
    ) -> list[ModelType]:
        """Return active rows matching filters, newest created_at first."""
        model: Any = self.model
        stmt = (
            select(self.model)
            .where(model.is_active.is_(True), *self._filter_conditions(filters))
            .order_by(model.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key (active or not), or None."""
        async with self._session() as session:
            return await session.get(self.model, entity_id)

    async def create(
        self, data: Mapping[str, Any], actor_id: str | None = None
    ) -> ModelType:
        """Insert a row and append its create audit entry in one transaction."""
        async with self._transaction() as session:
            return await self._insert(session, data, actor_id)

    async def update(
        self, entity_id: str, data: Mapping[str, Any], actor_id: str | None = None
    ) -> ModelType:
        """Lock, snapshot, apply partial data and audit in one transaction."""
        async with self._transaction() as session:
            return await self._update_locked(session, entity_id, data, actor_id)

    async def soft_delete(self, entity_id: str, actor_id: str | None = None) -> None:
        """Set is_active=False (never physically delete) and audit the delete."""
        async with self._transaction() as session:
            obj = await self._get_for_update(session, entity_id)
            await self._apply_soft_delete(session, obj, actor_id)

    async def _get_for_update(self, session: AsyncSession, entity_id: str) -> ModelType:
        obj = await session.get(self.model, entity_id, with_for_update=True)
        if obj is None:
            raise ResourceNotFoundException(self._get_entity_type(), entity_id)
        return obj

    def _number_conditions(self, column: Any, year: int) -> list[ColumnElement[bool]]:
        """Rows counted when numbering: this prefix and year."""
        return [column.like(f"{self.number_prefix}-{year}-%")]

    async def _next_number(self, session: AsyncSession) -> str:
        """Next <PREFIX>-<year>-<NNN> for this year (count of existing + 1)."""
        model: Any = self.model
        year = utc_now().year
        column = getattr(model, self.number_field or "")
        count = await session.scalar(
            select(func.count())
            .select_from(self.model)
            .where(*self._number_conditions(column, year))
        )
        return format_document_number(self.number_prefix or "", year, (count or 0) + 1)

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        """Hook: adjust insert values (defaults, derived fields). Returns values."""
        return values

    async def _before_update(
        self,
        session: AsyncSession,
        obj: ModelType,
        changes: dict[str, Any],
        actor_id: str | None,
    ) -> None:
        """Hook: validate, veto or extend an update before it is applied."""

    def _validate_values(self, values: Mapping[str, Any]) -> None:
        """Reject unknown columns and explicit None for NOT NULL columns."""
        columns = {
            attr.key: attr.columns[0] for attr in sa_inspect(self.model).column_attrs
        }
        unknown = set(values) - set(columns)
        if unknown:
            raise ValidationException(
                f"Unknown field(s) for {self._get_entity_type()}: {', '.join(sorted(unknown))}"
            )
        for key, value in values.items():
            if value is None and not columns[key].nullable:
                raise ValidationException(f"{key} cannot be null", field=key)

    async def _insert(
        self, session: AsyncSession, data: Mapping[str, Any], actor_id: str | None
    ) -> ModelType:
        """Insert + create audit inside an existing unit of work."""
        values = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
        values = await self._prepare_create(session, values, actor_id)
        self._validate_values(values)
        if "created_by" in self._column_keys() and not values.get("created_by"):
            values["created_by"] = actor_id
        if self.number_field and not values.get(self.number_field):
            values[self.number_field] = await self._next_number(session)
        now = utc_now()
        values.update(id=generate_uuid(), is_active=True, created_at=now, updated_at=now)
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        await self.log_audit_event(
            self._get_entity_type(),
            values["id"],
            AuditAction.CREATE,
            actor_id,
            None,
            self._serialize_for_audit(obj),
            session=session,
        )
        return obj

    async def _update_locked(
        self,
        session: AsyncSession,
        entity_id: str,
        data: Mapping[str, Any],
        actor_id: str | None,
    ) -> ModelType:
        """Locked read-modify-write + update audit inside an existing unit of work."""
        obj = await self._get_for_update(session, entity_id)
        return await self._apply_update(session, obj, data, actor_id)

    async def _apply_update(
        self,
        session: AsyncSession,
        obj: ModelType,
        data: Mapping[str, Any],
        actor_id: str | None,
    ) -> ModelType:
        """Apply partial data to a row already locked by this unit of work."""
        old = self._serialize_for_audit(obj)
        changes = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
        # Hook may rewrite changes in place (e.g. password -> password_hash).
        await self._before_update(session, obj, changes, actor_id)
        self._validate_values(changes)
        for key, value in changes.items():
            setattr(obj, key, value)
        model: Any = obj
        model.updated_at = utc_now()
        await session.flush()
        await self.log_audit_event(
            self._get_entity_type(),
            model.id,
            AuditAction.UPDATE,
            actor_id,
            old,
            self._serialize_for_audit(obj),
            session=session,
        )
        return obj

    async def _apply_soft_delete(
        self, session: AsyncSession, obj: ModelType, actor_id: str | None
    ) -> None:
        """Deactivate a row already locked by this unit of work and audit it."""
        old = self._serialize_for_audit(obj)
        model: Any = obj
        model.is_active = False
        model.updated_at = utc_now()
        await session.flush()
        await self.log_audit_event(
            self._get_entity_type(),
            model.id,
            AuditAction.DELETE,
            actor_id,
            old,
            self._serialize_for_audit(obj),
            session=session,
        )
