"""User storage with password and administrator-only edit rules.

Mutations are audited like every other module; password_hash never appears
in audit snapshots. Administrator checks run against authorized_by, the
authenticated session identity, never against the attribution actor_id.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import ADMIN_ROLE
from erp.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ValidationException,
)
from erp.infrastructure.persistence.models.user import User
from erp.infrastructure.persistence.storage.base import EntityStorage, row_to_dict
from erp.infrastructure.security.password import hash_password, verify_password

DEFAULT_ROLE = "user"

# Fields only an administrator may change on an existing user.
_ADMIN_ONLY_FIELDS = ("role", "is_active")

# Lazy dummy hash for constant-time comparison when the user is not found.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(hash_password, "not-a-real-password")
    return _dummy_hash_cache


class UserStorage(EntityStorage[User]):
    """Users: create_user, get_by_username, authenticate; role/active edits are admin-only."""

    entity_type = "user"
    model = User

    def _serialize_for_audit(self, obj: User) -> dict[str, Any]:
        """Audit payload: never include password_hash."""
        data = row_to_dict(obj)
        data.pop("password_hash", None)
        return data

    async def _require_admin(
        self, session: AsyncSession, authorized_by: str | None, action: str
    ) -> None:
        """Raise unless authorized_by is an active administrator (401 without a session)."""
        if not authorized_by:
            raise AuthenticationException(f"Authentication required to {action}")
        actor = await session.get(User, authorized_by)
        if actor is None or not actor.is_active or actor.role != ADMIN_ROLE:
            raise AuthorizationException(resource=self.entity_type, action=action)

    async def _admin_exists(self, session: AsyncSession) -> bool:
        total = await session.scalar(
            select(func.count())
            .select_from(User)
            .where(User.role == ADMIN_ROLE, User.is_active.is_(True))
        )
        return bool(total)

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        if "password_hash" in values:
            raise ValidationException("password_hash cannot be set directly", field="password")
        password = values.pop("password", None)
        if not password:
            raise ValidationException("password is required", field="password")
        values["role"] = values.get("role") or DEFAULT_ROLE
        values["password_hash"] = await asyncio.to_thread(hash_password, password)
        return values

    async def _before_update(
        self,
        session: AsyncSession,
        obj: User,
        changes: dict[str, Any],
        actor_id: str | None,
    ) -> None:
        if "password_hash" in changes:
            raise ValidationException("password_hash cannot be set directly", field="password")
        if "username" in changes:
            if changes["username"] != obj.username:
                raise ValidationException("username cannot be changed", field="username")
            del changes["username"]
        password = changes.pop("password", None)
        if password:
            changes["password_hash"] = await asyncio.to_thread(hash_password, password)

    async def create(
        self,
        data: Mapping[str, Any],
        actor_id: str | None = None,
        *,
        authorized_by: str | None = None,
    ) -> User:
        """Insert a user; a non-default role needs an administrator once one exists."""
        async with self._transaction() as session:
            role = data.get("role") or DEFAULT_ROLE
            # The first administrator can be provisioned without one.
            if role != DEFAULT_ROLE and await self._admin_exists(session):
                await self._require_admin(session, authorized_by, "assign role")
            return await self._insert(session, data, actor_id)

    async def update(
        self,
        entity_id: str,
        data: Mapping[str, Any],
        actor_id: str | None = None,
        *,
        authorized_by: str | None = None,
    ) -> User:
        """Partial update; changing role or is_active needs an administrator."""
        async with self._transaction() as session:
            user = await self._get_for_update(session, entity_id)
            for field in _ADMIN_ONLY_FIELDS:
                if field in data and data[field] != getattr(user, field):
                    await self._require_admin(session, authorized_by, f"update {field}")
            return await self._apply_update(session, user, data, actor_id)

    async def soft_delete(
        self,
        entity_id: str,
        actor_id: str | None = None,
        *,
        authorized_by: str | None = None,
    ) -> None:
        """Deactivate a user (administrator only)."""
        async with self._transaction() as session:
            await self._require_admin(session, authorized_by, "deactivate")
            user = await self._get_for_update(session, entity_id)
            await self._apply_soft_delete(session, user, actor_id)

    async def create_user(
        self,
        data: Mapping[str, Any],
        password: str,
        actor_id: str | None = None,
        *,
        authorized_by: str | None = None,
    ) -> User:
        """Create a user with a bcrypt-hashed password (hashing runs in a worker thread)."""
        return await self.create(
            {**data, "password": password}, actor_id, authorized_by=authorized_by
        )

    async def get_by_username(self, username: str) -> User | None:
        async with self._session() as session:
            result = await session.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()

    async def authenticate(self, username: str, password: str) -> User | None:
        """Return the active user for username/password, or None."""
        user = await self.get_by_username(username)
        if user is None:
            await asyncio.to_thread(verify_password, password, await _get_dummy_hash())
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            return None
        return user
