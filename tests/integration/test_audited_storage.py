"""Storage against a real Postgres: audit invariants and soft delete.

Requires TEST_DATABASE_URL; skipped otherwise.
"""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from erp.core.constants import SYSTEM_USER_ID
from erp.domain.exceptions import ResourceNotFoundException
from erp.infrastructure.persistence.models.audit_log import AuditLog
from erp.infrastructure.persistence.storage.modular_storage import ModularStorage

pytestmark = pytest.mark.requires_db

ACTOR_ID = "3f2b8c1e-7d4a-4e9b-9a6f-1c2d3e4f5a6b"


async def test_create_customer_writes_one_create_audit(db_storage: ModularStorage) -> None:
    customer = await db_storage.customers.create(
        {"name": "Acme", "email": "a@acme.com"}, ACTOR_ID
    )

    assert customer.id
    assert customer.is_active is True
    history = await db_storage.get_audit_history("customer", customer.id)
    assert len(history) == 1
    (entry,) = history
    assert entry.action == "create"
    assert entry.actor_id == ACTOR_ID
    assert entry.old_data is None
    assert entry.new_data["name"] == "Acme"


async def test_update_supplier_phone_audits_old_and_new(db_storage: ModularStorage) -> None:
    supplier = await db_storage.suppliers.create({"name": "Gulf Supplies", "phone": "+973 0000 0000"})
    before = supplier.updated_at

    updated = await db_storage.suppliers.update(
        supplier.id, {"phone": "+973 1111 2222"}, ACTOR_ID
    )

    assert updated.phone == "+973 1111 2222"
    assert updated.updated_at > before
    history = await db_storage.get_audit_history("supplier", supplier.id)
    assert [e.action for e in history] == ["create", "update"]
    update_entry = history[1]
    assert update_entry.old_data["phone"] == "+973 0000 0000"
    assert update_entry.new_data["phone"] == "+973 1111 2222"
    assert history[0].actor_id == SYSTEM_USER_ID


async def test_deleted_item_leaves_list_but_stays_readable(db_storage: ModularStorage) -> None:
    item = await db_storage.items.create(
        {"supplier_code": "SC-1", "description": "Bolt", "cost_price": Decimal("1.25")}
    )

    await db_storage.items.soft_delete(item.id, ACTOR_ID)

    assert item.id not in {i.id for i in await db_storage.items.list()}
    fetched = await db_storage.items.get_by_id(item.id)
    assert fetched is not None
    assert fetched.is_active is False
    history = await db_storage.get_audit_history("item", item.id)
    assert history[-1].action == "delete"


async def test_get_by_id_unknown_returns_none(db_storage: ModularStorage) -> None:
    assert await db_storage.customers.get_by_id("00000000-0000-4000-8000-000000000000") is None


async def test_update_unknown_id_raises_and_writes_no_audit(db_storage: ModularStorage) -> None:
    with pytest.raises(ResourceNotFoundException):
        await db_storage.customers.update("no-such-id", {"name": "x"}, ACTOR_ID)
    assert await db_storage.audit.count(entity_id="no-such-id") == 0


async def test_failed_write_rolls_back_audit(db_storage: ModularStorage) -> None:
    await db_storage.items.create({"supplier_code": "A", "description": "a", "barcode": "123"})
    with pytest.raises(IntegrityError):
        await db_storage.items.create({"supplier_code": "B", "description": "b", "barcode": "123"})
    assert await db_storage.audit.count(entity_type="item", action="create") == 1


async def test_concurrent_updates_each_see_previous_state(db_storage: ModularStorage) -> None:
    customer = await db_storage.customers.create({"name": "Race"})

    await asyncio.gather(
        db_storage.customers.update(customer.id, {"phone": "1"}, ACTOR_ID),
        db_storage.customers.update(customer.id, {"phone": "2"}, ACTOR_ID),
    )

    updates = [
        e for e in await db_storage.get_audit_history("customer", customer.id)
        if e.action == "update"
    ]
    assert len(updates) == 2
    # Row locking serializes the writers: the second saw the first's result.
    assert updates[1].old_data["phone"] == updates[0].new_data["phone"]


async def test_audit_rows_are_append_only(db_sessionmaker, db_storage: ModularStorage) -> None:
    customer = await db_storage.customers.create({"name": "Immutable"})
    async with db_sessionmaker() as session:
        entry = (
            await session.execute(select(AuditLog).where(AuditLog.entity_id == customer.id))
        ).scalar_one()
        entry.action = "tampered"
        with pytest.raises(ValueError):
            await session.flush()
        await session.rollback()


async def test_user_password_never_reaches_audit(db_storage: ModularStorage) -> None:
    user = await db_storage.users.create_user(
        {"username": "auditor", "email": "auditor@example.com"}, "a-long-password"
    )
    (entry,) = await db_storage.get_audit_history("user", user.id)
    assert "password_hash" not in entry.new_data
    assert await db_storage.users.authenticate("auditor", "a-long-password") is not None
    assert await db_storage.users.authenticate("auditor", "wrong-password") is None
