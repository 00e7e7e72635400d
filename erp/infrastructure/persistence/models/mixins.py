"""SQLAlchemy mixins for common model patterns.

Provides: UuidMixin, TimestampMixin, ActiveFlagMixin and the combined
EntityModel used by every audited business table. Timestamps are set in
Python (not server defaults) so the row snapshot taken for the audit log is
complete without a refresh round-trip.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from erp.shared.utils.datetime import utc_now
from erp.shared.utils.generators import generate_uuid

# JSONB on Postgres, plain JSON elsewhere.
JsonType = JSON().with_variant(JSONB(), "postgresql")


class UuidMixin:
    """Mixin for models using UUID v4 text as primary key."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_uuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (timezone-aware, set in Python)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), default=utc_now, nullable=False, index=True
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)


class ActiveFlagMixin:
    """Mixin for soft delete. False means logically deleted; rows are never removed."""

    @declared_attr
    def is_active(cls) -> Mapped[bool]:
        return mapped_column(
            Boolean, nullable=False, default=True, server_default=text("true")
        )


class EntityModel(UuidMixin, TimestampMixin, ActiveFlagMixin):
    """Combined mixin: UUID id + timestamps + is_active. Common for ERP tables."""

    __abstract__ = True
