"""Customer endpoints against a mocked storage façade (no DB)."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from erp.core.constants import SYSTEM_USER_ID
from erp.domain.exceptions import ResourceNotFoundException, ValidationException
from erp.infrastructure.persistence.models.customer import Customer
from erp.main import create_app

ACTOR_ID = "3f2b8c1e-7d4a-4e9b-9a6f-1c2d3e4f5a6b"
NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def _customer(**overrides) -> dict:
    values = {
        "id": "c-1",
        "name": "Acme Corp",
        "email": "ops@acme.example",
        "phone": None,
        "address": None,
        "customer_type": "Wholesale",
        "classification": "Corporate",
        "tax_id": None,
        "credit_limit": Decimal("5000.00"),
        "payment_terms": 30,
        "is_active": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return values


async def test_create_customer_passes_snake_case_fields_and_actor(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.customers.create.return_value = _customer()

    response = await client.post(
        "/api/customers",
        json={"name": "Acme Corp", "customerType": "Wholesale", "creditLimit": "5000.00"},
        headers={"X-User-Id": ACTOR_ID},
    )

    assert response.status_code == 200
    data, actor = storage.customers.create.await_args.args
    assert data == {
        "name": "Acme Corp",
        "customer_type": "Wholesale",
        "credit_limit": Decimal("5000.00"),
    }
    assert actor == ACTOR_ID


async def test_customer_response_uses_camel_case(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.customers.get_by_id.return_value = _customer()

    response = await client.get("/api/customers/c-1")

    assert response.status_code == 200
    body = response.json()
    assert body["customerType"] == "Wholesale"
    assert body["isActive"] is True
    assert body["creditLimit"] == "5000.00"
    assert "createdAt" in body and "customer_type" not in body


async def test_get_missing_customer_returns_404(client: AsyncClient, storage: AsyncMock) -> None:
    storage.customers.get_by_id.return_value = None
    response = await client.get("/api/customers/missing")
    assert response.status_code == 404
    assert response.json()["message"] == "customer not found: missing"


async def test_create_customer_missing_name_returns_400(
    client: AsyncClient, storage: AsyncMock
) -> None:
    response = await client.post("/api/customers", json={"email": "a@b.example"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"]
    storage.customers.create.assert_not_awaited()


async def test_create_customer_invalid_type_returns_400(client: AsyncClient) -> None:
    response = await client.post(
        "/api/customers", json={"name": "Acme", "customerType": "Reseller"}
    )
    assert response.status_code == 400


async def test_update_customer_sends_only_supplied_fields(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.customers.update.return_value = _customer(phone="555-0199")

    response = await client.put("/api/customers/c-1", json={"phone": "555-0199"})

    assert response.status_code == 200
    assert response.json()["phone"] == "555-0199"
    storage.customers.update.assert_awaited_once_with(
        "c-1", {"phone": "555-0199"}, SYSTEM_USER_ID
    )


async def test_update_missing_customer_returns_404(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.customers.update.side_effect = ResourceNotFoundException("customer", "nope")
    response = await client.put("/api/customers/nope", json={"phone": "1"})
    assert response.status_code == 404


async def test_storage_validation_error_returns_400(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.customers.update.side_effect = ValidationException("Unknown field(s)")
    response = await client.put("/api/customers/c-1", json={"phone": "1"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_delete_customer_returns_success(client: AsyncClient, storage: AsyncMock) -> None:
    response = await client.delete("/api/customers/c-1", headers={"X-User-Id": ACTOR_ID})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    storage.customers.soft_delete.assert_awaited_once_with("c-1", ACTOR_ID)


async def test_list_customers_sets_total_header_and_filters(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.customers.list.return_value = [_customer(), _customer(id="c-2")]
    storage.customers.count_active.return_value = 7

    response = await client.get("/api/customers?customerType=Wholesale&limit=2&offset=4")

    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == ["c-1", "c-2"]
    assert response.headers["X-Total-Count"] == "7"
    storage.customers.list.assert_awaited_once_with(
        2, 4, customer_type="Wholesale", classification=None
    )


async def test_list_uses_default_page_size(client: AsyncClient, storage: AsyncMock) -> None:
    storage.customers.list.return_value = []
    storage.customers.count_active.return_value = 0
    await client.get("/api/customers")
    limit, offset = storage.customers.list.await_args.args
    assert (limit, offset) == (50, 0)


async def test_customer_history(client: AsyncClient, storage: AsyncMock) -> None:
    storage.get_audit_history.return_value = [
        {
            "id": "a-1",
            "entity_type": "customer",
            "entity_id": "c-1",
            "action": "create",
            "actor_id": ACTOR_ID,
            "old_data": None,
            "new_data": {"name": "Acme Corp"},
            "timestamp": NOW,
        }
    ]

    response = await client.get("/api/customers/c-1/history")

    assert response.status_code == 200
    (entry,) = response.json()
    assert entry["entityType"] == "customer"
    assert entry["newData"] == {"name": "Acme Corp"}
    assert entry["oldData"] is None
    storage.get_audit_history.assert_awaited_once_with("customer", "c-1")


async def test_unexpected_storage_failure_returns_generic_500(storage: AsyncMock) -> None:
    storage.customers.get_by_id.side_effect = RuntimeError("connection refused")
    transport = ASGITransport(app=create_app(storage=storage), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/customers/c-1")
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


@pytest.mark.parametrize(
    "body,field",
    [({"name": None}, "name"), ({"customerType": None}, "customer_type")],
)
async def test_null_for_required_column_returns_400(
    session_client: AsyncClient,
    session: MagicMock,
    audit_entries,
    body: dict,
    field: str,
) -> None:
    customer = Customer(**_customer())
    session.get.return_value = customer

    response = await session_client.put("/api/customers/c-1", json=body)

    assert response.status_code == 400
    assert response.json()["details"] == {"field": field}
    assert customer.name == "Acme Corp"
    assert customer.customer_type == "Wholesale"
    session.flush.assert_not_awaited()
    assert audit_entries() == []


async def test_null_for_optional_column_is_stored(
    session_client: AsyncClient, session: MagicMock
) -> None:
    customer = Customer(**_customer(phone="555-0100"))
    session.get.return_value = customer

    response = await session_client.put("/api/customers/c-1", json={"phone": None})

    assert response.status_code == 200
    assert response.json()["phone"] is None
    assert customer.phone is None
