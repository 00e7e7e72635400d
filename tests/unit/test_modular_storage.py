"""ModularStorage façade wiring."""

import pytest

from erp.infrastructure.persistence.storage.modular_storage import ModularStorage

ACTOR_ID = "3f2b8c1e-7d4a-4e9b-9a6f-1c2d3e4f5a6b"


def test_modules_keyed_by_entity_type(session_factory) -> None:
    storage = ModularStorage(session_factory)
    assert set(storage.modules) == {
        "user",
        "customer",
        "supplier",
        "item",
        "enquiry",
        "enquiry_item",
        "quotation",
        "quotation_item",
        "sales_order",
        "sales_order_item",
        "delivery",
        "invoice",
        "invoice_item",
        "receipt_return",
    }
    assert storage.for_entity("customer") is storage.customers


def test_for_entity_unknown_raises_key_error(session_factory) -> None:
    with pytest.raises(KeyError):
        ModularStorage(session_factory).for_entity("payment")


def test_workflow_modules_share_instances(session_factory) -> None:
    storage = ModularStorage(session_factory)
    assert storage.quotations.enquiries is storage.enquiries
    assert storage.sales_orders.quotations is storage.quotations


def test_modules_share_the_injected_factory(session_factory) -> None:
    storage = ModularStorage(session_factory)
    assert storage.customers.session_factory is session_factory
    assert storage.quotations.items.session_factory is session_factory
    assert storage.audit.session_factory is session_factory


async def test_log_audit_event_delegates(session_factory, audit_entries) -> None:
    await ModularStorage(session_factory).log_audit_event(
        "customer", "c-1", "create", ACTOR_ID, None, {"name": "Acme"}
    )
    (entry,) = audit_entries()
    assert entry.new_data == {"name": "Acme"}
    assert entry.actor_id == ACTOR_ID
