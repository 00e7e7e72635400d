"""Invoice storage: generation from deliveries and sales orders, sending, payment and cancellation.

Generated invoices copy the sales order's active lines. Every workflow step
locks the invoice, writes it and appends its audit row in one transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import ColumnElement, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import DEFAULT_CURRENCY, INVOICE_NUMBER_PREFIX
from erp.domain.exceptions import ResourceNotFoundException, ValidationException
from erp.infrastructure.persistence.models.delivery import Delivery
from erp.infrastructure.persistence.models.invoice import Invoice, InvoiceItem
from erp.infrastructure.persistence.models.sales_order import SalesOrder, SalesOrderItem
from erp.infrastructure.persistence.storage.base import EntityStorage, SessionFactory
from erp.shared.enums import InvoiceStatus, InvoiceType
from erp.shared.logging import get_logger
from erp.shared.utils.datetime import ensure_utc, utc_now
from erp.shared.utils.money import to_decimal, to_money

_logger = get_logger(__name__)

# Invoice inputs that change total_amount and outstanding_amount.
_AMOUNT_INPUTS = frozenset({"subtotal", "discount_amount", "tax_amount", "paid_amount"})


def invoice_amounts(
    subtotal: Any, discount_amount: Any, tax_amount: Any, paid_amount: Any
) -> dict[str, Decimal]:
    """Derived invoice amounts; outstanding never goes below zero."""
    total = to_money(
        to_decimal(subtotal) - to_decimal(discount_amount) + to_decimal(tax_amount)
    )
    paid = to_money(paid_amount)
    return {
        "total_amount": total,
        "paid_amount": paid,
        "outstanding_amount": max(to_money(total - paid), to_money(0)),
    }


class InvoiceItemStorage(EntityStorage[InvoiceItem]):
    entity_type = "invoice_item"
    model = InvoiceItem


class InvoiceStorage(EntityStorage[Invoice]):
    """Invoices. Filters: status, invoice_type, customer_id, sales_order_id,
    delivery_id, search, date_from, date_to."""

    entity_type = "invoice"
    model = Invoice
    number_field = "invoice_number"
    number_prefix = INVOICE_NUMBER_PREFIX

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        super().__init__(session_factory)
        self.items = InvoiceItemStorage(session_factory)

    def _filter_conditions(self, filters: Mapping[str, Any]) -> list[ColumnElement[bool]]:
        remaining = dict(filters)
        search = remaining.pop("search", None)
        date_from = remaining.pop("date_from", None)
        date_to = remaining.pop("date_to", None)
        conditions = super()._filter_conditions(remaining)
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(Invoice.invoice_number.ilike(pattern), Invoice.notes.ilike(pattern))
            )
        if date_from is not None:
            conditions.append(Invoice.invoice_date >= ensure_utc(date_from))
        if date_to is not None:
            conditions.append(Invoice.invoice_date <= ensure_utc(date_to))
        return conditions

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        values.setdefault("status", InvoiceStatus.DRAFT.value)
        values.setdefault("invoice_type", InvoiceType.FINAL.value)
        values.setdefault("currency", DEFAULT_CURRENCY)
        if values.get("invoice_date") is None:
            values["invoice_date"] = utc_now()
        for key in ("subtotal", "discount_amount", "tax_amount"):
            values[key] = to_money(values.get(key))
        values.update(
            invoice_amounts(
                values["subtotal"],
                values["discount_amount"],
                values["tax_amount"],
                values.get("paid_amount"),
            )
        )
        return values

    async def _before_update(
        self,
        session: AsyncSession,
        obj: Invoice,
        changes: dict[str, Any],
        actor_id: str | None,
    ) -> None:
        if not _AMOUNT_INPUTS & changes.keys():
            return
        inputs = {key: changes.get(key, getattr(obj, key)) for key in _AMOUNT_INPUTS}
        if any(value is None for value in inputs.values()):
            return  # rejected as a null NOT NULL column
        changes.update(
            invoice_amounts(
                inputs["subtotal"],
                inputs["discount_amount"],
                inputs["tax_amount"],
                inputs["paid_amount"],
            )
        )

    async def get_by_number(self, invoice_number: str) -> Invoice | None:
        async with self._session() as session:
            result = await session.execute(
                select(Invoice).where(Invoice.invoice_number == invoice_number)
            )
            return result.scalars().first()

    async def list_items(self, invoice_id: str) -> list[InvoiceItem]:
        stmt = (
            select(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id, InvoiceItem.is_active.is_(True))
            .order_by(InvoiceItem.line_number.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def _generate(
        self,
        session: AsyncSession,
        order: SalesOrder,
        invoice_type: str,
        delivery_id: str | None,
        actor_id: str | None,
    ) -> Invoice:
        """Insert a Draft invoice for order, copying its active lines."""
        result = await session.execute(
            select(SalesOrderItem)
            .where(
                SalesOrderItem.sales_order_id == order.id,
                SalesOrderItem.is_active.is_(True),
            )
            .order_by(SalesOrderItem.line_number.asc())
        )
        lines = list(result.scalars().all())
        subtotal = to_money(sum((to_decimal(line.total_price) for line in lines), Decimal(0)))
        invoice = await self._insert(
            session,
            {
                "invoice_type": invoice_type,
                "sales_order_id": order.id,
                "delivery_id": delivery_id,
                "customer_id": order.customer_id,
                "status": InvoiceStatus.DRAFT.value,
                "subtotal": subtotal,
                "tax_amount": to_money(order.tax_amount),
                "payment_terms": order.payment_terms,
                "auto_generated": True,
            },
            actor_id,
        )
        for line_number, line in enumerate(lines, start=1):
            await self.items._insert(
                session,
                {
                    "invoice_id": invoice.id,
                    "sales_order_item_id": line.id,
                    "item_id": line.item_id,
                    "line_number": line_number,
                    "description": line.description,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price,
                    "total_price": line.total_price,
                },
                actor_id,
            )
        _logger.info(
            "%s invoice %s generated for sales order %s (%d lines)",
            invoice_type,
            invoice.invoice_number,
            order.order_number,
            len(lines),
        )
        return invoice

    async def generate_from_delivery(
        self,
        delivery_id: str,
        invoice_type: InvoiceType | str = InvoiceType.FINAL,
        actor_id: str | None = None,
    ) -> Invoice:
        """Create a Draft invoice for a delivery's sales order."""
        invoice_type = InvoiceType(invoice_type).value
        async with self._transaction() as session:
            delivery = await session.get(Delivery, delivery_id)
            if delivery is None:
                raise ResourceNotFoundException("delivery", delivery_id)
            if not delivery.sales_order_id:
                raise ValidationException(
                    f"delivery {delivery_id} has no sales order", field="delivery_id"
                )
            order = await session.get(SalesOrder, delivery.sales_order_id)
            if order is None:
                raise ResourceNotFoundException("sales_order", delivery.sales_order_id)
            return await self._generate(session, order, invoice_type, delivery.id, actor_id)

    async def generate_proforma(
        self, sales_order_id: str, actor_id: str | None = None
    ) -> Invoice:
        """Create a Draft proforma invoice straight from a sales order."""
        async with self._transaction() as session:
            order = await session.get(SalesOrder, sales_order_id)
            if order is None:
                raise ResourceNotFoundException("sales_order", sales_order_id)
            return await self._generate(
                session, order, InvoiceType.PROFORMA.value, None, actor_id
            )

    async def _get_open(self, session: AsyncSession, invoice_id: str) -> Invoice:
        invoice = await self._get_for_update(session, invoice_id)
        if invoice.status == InvoiceStatus.CANCELLED.value:
            raise ValidationException(f"invoice {invoice_id} is cancelled", field="status")
        return invoice

    async def send(self, invoice_id: str, actor_id: str | None = None) -> Invoice:
        async with self._transaction() as session:
            invoice = await self._get_open(session, invoice_id)
            return await self._apply_update(
                session, invoice, {"status": InvoiceStatus.SENT.value}, actor_id
            )

    async def mark_paid(
        self,
        invoice_id: str,
        amount: Any,
        payment_method: str | None = None,
        payment_reference: str | None = None,
        actor_id: str | None = None,
    ) -> Invoice:
        """Record a payment; the invoice becomes Paid once nothing is outstanding."""
        amount = to_money(amount)
        if amount <= 0:
            raise ValidationException("payment amount must be positive", field="amount")
        async with self._transaction() as session:
            invoice = await self._get_open(session, invoice_id)
            changes: dict[str, Any] = {
                "paid_amount": to_money(invoice.paid_amount) + amount,
                "last_payment_date": utc_now(),
            }
            if payment_method is not None:
                changes["payment_method"] = payment_method
            if payment_reference is not None:
                changes["payment_reference"] = payment_reference
            outstanding = invoice_amounts(
                invoice.subtotal,
                invoice.discount_amount,
                invoice.tax_amount,
                changes["paid_amount"],
            )["outstanding_amount"]
            if outstanding == 0:
                changes["status"] = InvoiceStatus.PAID.value
            return await self._apply_update(session, invoice, changes, actor_id)

    async def cancel(
        self, invoice_id: str, reason: str | None = None, actor_id: str | None = None
    ) -> Invoice:
        async with self._transaction() as session:
            invoice = await self._get_for_update(session, invoice_id)
            if invoice.status == InvoiceStatus.PAID.value:
                raise ValidationException(
                    f"invoice {invoice_id} is paid and cannot be cancelled", field="status"
                )
            changes: dict[str, Any] = {"status": InvoiceStatus.CANCELLED.value}
            if reason:
                changes["notes"] = reason
            return await self._apply_update(session, invoice, changes, actor_id)
