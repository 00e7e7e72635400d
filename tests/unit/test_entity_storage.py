"""EntityStorage contract with a mocked session: audit emission and unit of work."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy.dialects import postgresql

from erp.core.constants import SYSTEM_USER_ID
from erp.domain.exceptions import ResourceNotFoundException, ValidationException
from erp.infrastructure.persistence.models.customer import Customer
from erp.infrastructure.persistence.models.enquiry import Enquiry
from erp.infrastructure.persistence.models.supplier import Supplier
from erp.infrastructure.persistence.storage.base import (
    BaseStorage,
    row_to_dict,
    sanitize_snapshot,
)
from erp.infrastructure.persistence.storage.customer_storage import CustomerStorage
from erp.infrastructure.persistence.storage.enquiry_storage import EnquiryStorage
from erp.infrastructure.persistence.storage.supplier_storage import SupplierStorage

ACTOR_ID = "3f2b8c1e-7d4a-4e9b-9a6f-1c2d3e4f5a6b"
CREATED = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def _supplier(**overrides) -> Supplier:
    values = {
        "id": "s-1",
        "name": "Acme Tools",
        "phone": "555-0100",
        "is_active": True,
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    values.update(overrides)
    return Supplier(**values)


async def test_create_adds_row_and_create_audit_in_one_transaction(
    session, session_factory, added, audit_entries
) -> None:
    storage = SupplierStorage(session_factory)

    supplier = await storage.create({"name": "Acme Tools", "phone": "555-0100"}, ACTOR_ID)

    assert session_factory.call_count == 1
    session.begin.assert_called_once()
    assert added(Supplier) == [supplier]
    assert supplier.is_active is True
    assert supplier.created_at == supplier.updated_at
    (entry,) = audit_entries()
    assert entry.entity_type == "supplier"
    assert entry.entity_id == supplier.id
    assert entry.action == "create"
    assert entry.actor_id == ACTOR_ID
    assert entry.old_data is None
    assert entry.new_data["name"] == "Acme Tools"
    assert entry.new_data["is_active"] is True


async def test_create_ignores_client_supplied_id_and_timestamps(
    session_factory,
) -> None:
    storage = SupplierStorage(session_factory)
    supplied = datetime(2000, 1, 1, tzinfo=UTC)

    supplier = await storage.create(
        {"id": "chosen-id", "name": "Acme", "created_at": supplied}, ACTOR_ID
    )

    assert supplier.id != "chosen-id"
    assert supplier.created_at != supplied


async def test_create_without_actor_is_attributed_to_system(
    session_factory, audit_entries
) -> None:
    await SupplierStorage(session_factory).create({"name": "Acme"})
    (entry,) = audit_entries()
    assert entry.actor_id == SYSTEM_USER_ID


async def test_create_rejects_unknown_fields(session_factory, added) -> None:
    with pytest.raises(ValidationException):
        await SupplierStorage(session_factory).create({"name": "Acme", "colour": "red"})
    assert added() == []


async def test_update_audits_old_and_new_snapshots(
    session, session_factory, audit_entries
) -> None:
    session.get.return_value = _supplier()
    storage = SupplierStorage(session_factory)

    updated = await storage.update("s-1", {"phone": "555-0199"}, ACTOR_ID)

    session.get.assert_awaited_once_with(Supplier, "s-1", with_for_update=True)
    assert updated.phone == "555-0199"
    assert updated.updated_at > CREATED
    (entry,) = audit_entries()
    assert entry.action == "update"
    assert entry.old_data["phone"] == "555-0100"
    assert entry.new_data["phone"] == "555-0199"
    assert entry.old_data["name"] == entry.new_data["name"] == "Acme Tools"


async def test_update_never_changes_id_or_created_at(session, session_factory) -> None:
    session.get.return_value = _supplier()

    updated = await SupplierStorage(session_factory).update(
        "s-1", {"id": "other", "created_at": datetime(2001, 1, 1, tzinfo=UTC)}, ACTOR_ID
    )

    assert updated.id == "s-1"
    assert updated.created_at == CREATED


async def test_update_missing_row_raises_and_writes_nothing(
    session, session_factory, added
) -> None:
    session.get.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await SupplierStorage(session_factory).update("missing", {"phone": "1"}, ACTOR_ID)
    assert added() == []


async def test_update_rejects_unknown_fields(session, session_factory, added) -> None:
    session.get.return_value = _supplier()
    with pytest.raises(ValidationException):
        await SupplierStorage(session_factory).update("s-1", {"colour": "red"}, ACTOR_ID)
    assert added() == []


async def test_soft_delete_flags_inactive_and_audits_delete(
    session, session_factory, audit_entries
) -> None:
    supplier = _supplier()
    session.get.return_value = supplier

    result = await SupplierStorage(session_factory).soft_delete("s-1", ACTOR_ID)

    assert result is None
    assert supplier.is_active is False
    (entry,) = audit_entries()
    assert entry.action == "delete"
    assert entry.old_data["is_active"] is True
    assert entry.new_data["is_active"] is False
    session.delete.assert_not_called()


async def test_soft_delete_missing_row_raises(session, session_factory) -> None:
    session.get.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await SupplierStorage(session_factory).soft_delete("missing", ACTOR_ID)


async def test_get_by_id_returns_none_when_absent(session, session_factory) -> None:
    session.get.return_value = None
    assert await SupplierStorage(session_factory).get_by_id("missing") is None


async def test_list_rejects_unknown_filter(session_factory) -> None:
    with pytest.raises(ValidationException):
        await CustomerStorage(session_factory).list(colour="red")


async def test_document_number_is_next_in_year(session, session_factory) -> None:
    session.scalar.return_value = 4
    storage = EnquiryStorage(session_factory)

    enquiry = await storage.create(
        {"customer_id": "c-1", "source": "Email"}, ACTOR_ID
    )

    year = datetime.now(UTC).year
    assert isinstance(enquiry, Enquiry)
    assert enquiry.enquiry_number == f"ENQ-{year}-005"
    assert enquiry.status == "New"
    assert enquiry.enquiry_date is not None
    assert enquiry.created_by == ACTOR_ID


async def test_log_audit_event_opens_own_transaction(
    session, session_factory, audit_entries
) -> None:
    await BaseStorage(session_factory).log_audit_event(
        "customer", "c-1", "update", ACTOR_ID, {"name": "a"}, {"name": "b"}
    )
    session.begin.assert_called_once()
    (entry,) = audit_entries()
    assert (entry.entity_type, entry.entity_id, entry.action) == ("customer", "c-1", "update")
    assert entry.id


async def test_log_audit_event_propagates_write_errors(session, session_factory) -> None:
    session.flush.side_effect = RuntimeError("db down")
    with pytest.raises(RuntimeError):
        await BaseStorage(session_factory).log_audit_event("customer", "c-1", "create")


def test_sanitize_snapshot_redacts_secrets_and_serializes_values() -> None:
    snapshot = sanitize_snapshot(
        {
            "password": "hunter2",
            "Access_Token": "abc",
            "price": Decimal("1.50"),
            "when": CREATED,
            "nested": {"at": CREATED},
        }
    )
    assert snapshot["password"] == "[REDACTED]"
    assert snapshot["Access_Token"] == "[REDACTED]"
    assert snapshot["price"] == "1.50"
    assert snapshot["when"] == CREATED.isoformat()
    assert snapshot["nested"] == {"at": CREATED.isoformat()}
    assert sanitize_snapshot(None) is None


def test_row_to_dict_uses_snake_case_column_keys() -> None:
    customer = Customer(id="c-1", name="Acme", customer_type="Retail", credit_limit=Decimal("10"))
    data = row_to_dict(customer)
    assert data["customer_type"] == "Retail"
    assert data["credit_limit"] == "10"
    assert "customerType" not in data


async def test_update_rejects_null_for_required_column(
    session, session_factory, audit_entries
) -> None:
    supplier = _supplier()
    session.get.return_value = supplier

    with pytest.raises(ValidationException) as exc_info:
        await SupplierStorage(session_factory).update("s-1", {"name": None}, ACTOR_ID)

    assert exc_info.value.details == {"field": "name"}
    assert supplier.name == "Acme Tools"
    session.flush.assert_not_awaited()
    assert audit_entries() == []


async def test_update_accepts_null_for_optional_column(session, session_factory) -> None:
    session.get.return_value = _supplier()
    updated = await SupplierStorage(session_factory).update("s-1", {"phone": None}, ACTOR_ID)
    assert updated.phone is None


async def test_create_rejects_null_for_required_column(session_factory, added) -> None:
    with pytest.raises(ValidationException):
        await CustomerStorage(session_factory).create(
            {"name": "Acme", "customer_type": None}, ACTOR_ID
        )
    assert added() == []


async def test_list_selects_active_rows_newest_first(session, session_factory) -> None:
    rows = [Customer(id="c-2", name="Newer"), Customer(id="c-1", name="Older")]
    session.execute.return_value.scalars.return_value.all.return_value = rows

    result = await CustomerStorage(session_factory).list(10, 20, customer_type="Retail")

    assert result == rows
    compiled = session.execute.await_args.args[0].compile(dialect=postgresql.dialect())
    sql = " ".join(str(compiled).split())
    assert "customers.is_active IS true" in sql
    assert "ORDER BY customers.created_at DESC" in sql
    assert "customers.customer_type = " in sql
    assert {"Retail", 10, 20} <= set(compiled.params.values())


async def test_list_skips_none_filters(session, session_factory) -> None:
    await CustomerStorage(session_factory).list(customer_type=None)
    sql = str(session.execute.await_args.args[0].compile(dialect=postgresql.dialect()))
    assert "customer_type =" not in sql
