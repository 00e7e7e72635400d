"""Enquiry, quotation, sales order, delivery, invoice and item endpoints."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient

from erp.core.constants import SYSTEM_USER_ID
from erp.domain.exceptions import ResourceNotFoundException, ValidationException
from erp.infrastructure.persistence.models.quotation import Quotation

NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


def _base(entity_id: str) -> dict:
    return {"id": entity_id, "is_active": True, "created_at": NOW, "updated_at": NOW}


def _enquiry(**overrides) -> dict:
    values = {
        **_base("e-1"),
        "enquiry_number": "ENQ-2025-001",
        "customer_id": "c-1",
        "enquiry_date": NOW,
        "status": "New",
        "source": "Email",
    }
    values.update(overrides)
    return values


def _quotation(**overrides) -> dict:
    values = {
        **_base("q-1"),
        "quote_number": "QT-2025-001",
        "revision": 1,
        "customer_id": "c-1",
        "customer_type": "Retail",
        "status": "Draft",
        "subtotal": Decimal("51.00"),
        "discount_percentage": Decimal("0"),
        "discount_amount": Decimal("0.00"),
        "tax_amount": Decimal("0.00"),
        "total_amount": Decimal("51.00"),
    }
    values.update(overrides)
    return values


async def test_create_enquiry(client: AsyncClient, storage: AsyncMock) -> None:
    storage.enquiries.create.return_value = _enquiry()

    response = await client.post(
        "/api/enquiries", json={"customerId": "c-1", "source": "Email"}
    )

    assert response.status_code == 200
    assert response.json()["enquiryNumber"] == "ENQ-2025-001"
    storage.enquiries.create.assert_awaited_once_with(
        {"customer_id": "c-1", "source": "Email"}, SYSTEM_USER_ID
    )


async def test_create_enquiry_invalid_source_returns_400(client: AsyncClient) -> None:
    response = await client.post(
        "/api/enquiries", json={"customerId": "c-1", "source": "Carrier pigeon"}
    )
    assert response.status_code == 400


async def test_list_enquiries_passes_search_filters(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.enquiries.list.return_value = []

    response = await client.get("/api/enquiries?status=New&search=ENQ-2025")

    assert response.status_code == 200
    kwargs = storage.enquiries.list.await_args.kwargs
    assert kwargs["status"] == "New"
    assert kwargs["search"] == "ENQ-2025"
    assert kwargs["date_from"] is None


async def test_add_enquiry_item(client: AsyncClient, storage: AsyncMock) -> None:
    storage.enquiries.add_item.return_value = {
        **_base("ei-1"),
        "enquiry_id": "e-1",
        "description": "Steel bolts",
        "quantity": 3,
        "unit_price": Decimal("10.00"),
    }

    response = await client.post(
        "/api/enquiries/e-1/items",
        json={"description": "Steel bolts", "quantity": 3, "unitPrice": "10.00"},
    )

    assert response.status_code == 200
    assert response.json()["enquiryId"] == "e-1"


async def test_generate_quotation_from_enquiry(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.quotations.generate_from_enquiry.return_value = _quotation(enquiry_id="e-1")

    response = await client.post("/api/quotations/from-enquiry/e-1")

    assert response.status_code == 200
    assert response.json()["enquiryId"] == "e-1"
    storage.quotations.generate_from_enquiry.assert_awaited_once_with("e-1", SYSTEM_USER_ID)


async def test_generate_quotation_from_missing_enquiry_returns_404(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.quotations.generate_from_enquiry.side_effect = ResourceNotFoundException(
        "enquiry", "nope"
    )
    response = await client.post("/api/quotations/from-enquiry/nope")
    assert response.status_code == 404


async def test_add_quotation_item_requires_positive_quantity(client: AsyncClient) -> None:
    response = await client.post(
        "/api/quotations/q-1/items",
        json={"description": "Bolts", "quantity": 0, "unitPrice": "1"},
    )
    assert response.status_code == 400


async def test_create_revision_converts_change_keys(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.quotations.create_revision.return_value = _quotation(
        id="q-2",
        quote_number="QT-2025-001-R2",
        revision=2,
        parent_quotation_id="q-1",
        revision_reason="Customer asked for discount",
    )

    response = await client.post(
        "/api/quotations/q-1/revisions",
        json={
            "revisionReason": "Customer asked for discount",
            "changes": {"discountPercentage": "5"},
        },
    )

    assert response.status_code == 200
    assert response.json()["quoteNumber"] == "QT-2025-001-R2"
    storage.quotations.create_revision.assert_awaited_once_with(
        "q-1", "Customer asked for discount", {"discount_percentage": Decimal("5")}, SYSTEM_USER_ID
    )


async def test_revising_superseded_quotation_returns_400(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.quotations.create_revision.side_effect = ValidationException(
        "quotation q-1 is already superseded"
    )
    response = await client.post(
        "/api/quotations/q-1/revisions", json={"revisionReason": "again"}
    )
    assert response.status_code == 400


async def test_list_revisions(client: AsyncClient, storage: AsyncMock) -> None:
    storage.quotations.get_revisions.return_value = [_quotation(id="q-2", revision=2)]
    response = await client.get("/api/quotations/q-1/revisions")
    assert [q["revision"] for q in response.json()] == [2]


async def test_sales_order_from_quotation(client: AsyncClient, storage: AsyncMock) -> None:
    storage.sales_orders.create_from_quotation.return_value = {
        **_base("so-1"),
        "order_number": "SO-2025-001",
        "quotation_id": "q-1",
        "customer_id": "c-1",
        "status": "Draft",
        "subtotal": Decimal("51.00"),
        "tax_amount": Decimal("0.00"),
        "total_amount": Decimal("51.00"),
    }

    response = await client.post("/api/sales-orders/from-quotation/q-1")

    assert response.status_code == 200
    body = response.json()
    assert body["orderNumber"] == "SO-2025-001"
    assert body["quotationId"] == "q-1"


async def test_confirm_delivery(client: AsyncClient, storage: AsyncMock) -> None:
    storage.deliveries.confirm.return_value = {
        **_base("d-1"),
        "delivery_number": "DN-2025-001",
        "status": "Complete",
        "delivery_type": "Full",
        "delivery_confirmed_by": "J. Smith",
        "delivery_confirmed_at": NOW,
        "actual_delivery_date": NOW,
    }

    response = await client.post("/api/deliveries/d-1/confirm", json={"confirmedBy": "J. Smith"})

    assert response.status_code == 200
    assert response.json()["status"] == "Complete"
    storage.deliveries.confirm.assert_awaited_once_with("d-1", "J. Smith", SYSTEM_USER_ID)


async def test_item_by_barcode_not_found(client: AsyncClient, storage: AsyncMock) -> None:
    storage.items.get_by_barcode.return_value = None
    response = await client.get("/api/items/barcode/0000")
    assert response.status_code == 404


async def test_delete_item(client: AsyncClient, storage: AsyncMock) -> None:
    response = await client.delete("/api/items/i-1")
    assert response.json() == {"success": True}
    storage.items.soft_delete.assert_awaited_once_with("i-1", SYSTEM_USER_ID)


def _invoice(**overrides) -> dict:
    values = {
        **_base("inv-1"),
        "invoice_number": "INV-2025-001",
        "invoice_type": "Final",
        "sales_order_id": "so-1",
        "delivery_id": "d-1",
        "customer_id": "c-1",
        "status": "Draft",
        "currency": "BHD",
        "subtotal": Decimal("56.00"),
        "discount_amount": Decimal("0.00"),
        "tax_amount": Decimal("5.00"),
        "total_amount": Decimal("61.00"),
        "paid_amount": Decimal("0.00"),
        "outstanding_amount": Decimal("61.00"),
        "auto_generated": True,
    }
    values.update(overrides)
    return values


async def test_quotation_discount_and_tax_update_recomputes_total(
    session_client: AsyncClient, session: MagicMock
) -> None:
    session.get.return_value = Quotation(
        **{
            **_quotation(subtotal=Decimal("100.00"), total_amount=Decimal("100.00")),
            "is_superseded": False,
        }
    )

    response = await session_client.put(
        "/api/quotations/q-1", json={"discountPercentage": "50", "taxAmount": "10"}
    )

    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["discountAmount"]) == Decimal("50.00")
    assert Decimal(body["totalAmount"]) == Decimal("60.00")


async def test_update_quotation_item(client: AsyncClient, storage: AsyncMock) -> None:
    storage.quotations.update_item.return_value = {
        **_base("qi-1"),
        "quotation_id": "q-1",
        "description": "Steel bolts",
        "quantity": 5,
        "unit_price": Decimal("17.0000"),
        "line_total": Decimal("85.00"),
    }

    response = await client.put("/api/quotation-items/qi-1", json={"quantity": 5})

    assert response.status_code == 200
    assert response.json()["lineTotal"] == "85.00"
    storage.quotations.update_item.assert_awaited_once_with(
        "qi-1", {"quantity": 5}, SYSTEM_USER_ID
    )


async def test_update_quotation_item_rejects_zero_quantity(client: AsyncClient) -> None:
    response = await client.put("/api/quotation-items/qi-1", json={"quantity": 0})
    assert response.status_code == 400


async def test_delete_quotation_item(client: AsyncClient, storage: AsyncMock) -> None:
    response = await client.delete("/api/quotation-items/qi-1")
    assert response.json() == {"success": True}
    storage.quotations.delete_item.assert_awaited_once_with("qi-1", SYSTEM_USER_ID)


async def test_update_and_delete_enquiry_item(client: AsyncClient, storage: AsyncMock) -> None:
    storage.enquiries.update_item.return_value = {
        **_base("ei-1"),
        "enquiry_id": "e-1",
        "description": "Steel bolts",
        "quantity": 4,
    }

    response = await client.put("/api/enquiry-items/ei-1", json={"quantity": 4})
    assert response.status_code == 200
    storage.enquiries.update_item.assert_awaited_once_with(
        "ei-1", {"quantity": 4}, SYSTEM_USER_ID
    )

    response = await client.delete("/api/enquiry-items/ei-1")
    assert response.json() == {"success": True}
    storage.enquiries.delete_item.assert_awaited_once_with("ei-1", SYSTEM_USER_ID)


async def test_invoice_from_delivery_defaults_to_final(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.invoices.generate_from_delivery.return_value = _invoice()

    response = await client.post("/api/invoices/from-delivery/d-1")

    assert response.status_code == 200
    body = response.json()
    assert body["invoiceNumber"] == "INV-2025-001"
    assert body["outstandingAmount"] == "61.00"
    storage.invoices.generate_from_delivery.assert_awaited_once_with(
        "d-1", "Final", SYSTEM_USER_ID
    )


async def test_invoice_from_delivery_with_type(
    client: AsyncClient, storage: AsyncMock
) -> None:
    storage.invoices.generate_from_delivery.return_value = _invoice(
        invoice_type="Credit Note"
    )

    response = await client.post(
        "/api/invoices/from-delivery/d-1", json={"invoiceType": "Credit Note"}
    )

    assert response.status_code == 200
    assert storage.invoices.generate_from_delivery.await_args.args[1] == "Credit Note"


async def test_proforma_invoice(client: AsyncClient, storage: AsyncMock) -> None:
    storage.invoices.generate_proforma.return_value = _invoice(
        invoice_type="Proforma", delivery_id=None
    )
    response = await client.post("/api/invoices/proforma/so-1")
    assert response.json()["invoiceType"] == "Proforma"
    storage.invoices.generate_proforma.assert_awaited_once_with("so-1", SYSTEM_USER_ID)


async def test_list_invoices_passes_filters(client: AsyncClient, storage: AsyncMock) -> None:
    storage.invoices.list.return_value = []

    response = await client.get("/api/invoices?status=Sent&invoiceType=Final&customerId=c-1")

    assert response.status_code == 200
    kwargs = storage.invoices.list.await_args.kwargs
    assert kwargs["status"] == "Sent"
    assert kwargs["invoice_type"] == "Final"
    assert kwargs["customer_id"] == "c-1"


async def test_mark_invoice_paid(client: AsyncClient, storage: AsyncMock) -> None:
    storage.invoices.mark_paid.return_value = _invoice(
        status="Paid",
        paid_amount=Decimal("61.00"),
        outstanding_amount=Decimal("0.00"),
    )

    response = await client.post(
        "/api/invoices/inv-1/mark-paid",
        json={"amount": "61.00", "paymentMethod": "Cash"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "Paid"
    storage.invoices.mark_paid.assert_awaited_once_with(
        "inv-1", Decimal("61.00"), "Cash", None, SYSTEM_USER_ID
    )


async def test_mark_invoice_paid_requires_positive_amount(client: AsyncClient) -> None:
    response = await client.post("/api/invoices/inv-1/mark-paid", json={"amount": "0"})
    assert response.status_code == 400


async def test_cancel_paid_invoice_returns_400(client: AsyncClient, storage: AsyncMock) -> None:
    storage.invoices.cancel.side_effect = ValidationException(
        "invoice inv-1 is paid and cannot be cancelled", field="status"
    )
    response = await client.post("/api/invoices/inv-1/cancel", json={"reason": "late"})
    assert response.status_code == 400


async def test_invoice_by_number_not_found(client: AsyncClient, storage: AsyncMock) -> None:
    storage.invoices.get_by_number.return_value = None
    response = await client.get("/api/invoices/by-number/INV-2025-999")
    assert response.status_code == 404
