"""Quotation storage: pricing lines, totals, generation from enquiries and revisions.

Workflow operations run in one unit of work across modules: every row they
touch (quotation, lines, source enquiry) is written and audited inside the
same transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from erp.core.constants import (
    QUOTATION_NUMBER_PREFIX,
    QUOTATION_VALIDITY_DAYS,
    RETAIL_MARKUP_PERCENT,
    WHOLESALE_MARKUP_PERCENT,
)
from erp.domain.exceptions import ValidationException
from erp.infrastructure.persistence.models.customer import Customer
from erp.infrastructure.persistence.models.enquiry import EnquiryItem
from erp.infrastructure.persistence.models.quotation import Quotation, QuotationItem
from erp.infrastructure.persistence.storage.base import EntityStorage, SessionFactory
from erp.infrastructure.persistence.storage.enquiry_storage import EnquiryStorage
from erp.shared.enums import CustomerType, EnquiryStatus, QuotationStatus
from erp.shared.logging import get_logger
from erp.shared.utils.datetime import utc_now
from erp.shared.utils.money import apply_markup, to_decimal, to_money

_logger = get_logger(__name__)

# Columns not carried from a quotation to its revision.
_NOT_REVISED = frozenset(
    {
        "id",
        "quote_number",
        "revision",
        "parent_quotation_id",
        "revision_reason",
        "is_superseded",
        "superseded_at",
        "superseded_by",
        "status",
        "created_by",
        "created_at",
        "updated_at",
        "is_active",
    }
)
_REVISION_SEPARATOR = "-R"

# Quotation inputs that change discount_amount and total_amount.
_TOTALS_INPUTS = frozenset({"discount_percentage", "tax_amount"})

# Line inputs that change unit_price and line_total.
_PRICING_INPUTS = ("quantity", "cost_price", "markup", "unit_price")


def markup_for_customer_type(customer_type: str | None) -> Decimal:
    """Default markup percent: retail 70, everything else (wholesale) 40."""
    if customer_type == CustomerType.RETAIL.value:
        return Decimal(RETAIL_MARKUP_PERCENT)
    return Decimal(WHOLESALE_MARKUP_PERCENT)


def price_line(values: dict[str, Any]) -> dict[str, Any]:
    """Fill unit_price (cost + markup when absent) and line_total = quantity * unit_price."""
    quantity = int(values.get("quantity") or 0)
    if quantity < 1:
        raise ValidationException("quantity must be at least 1", field="quantity")
    if values.get("unit_price") is None:
        if values.get("cost_price") is None:
            raise ValidationException(
                "unit_price or cost_price is required", field="unit_price"
            )
        values["unit_price"] = apply_markup(values["cost_price"], values.get("markup") or 0)
    values["line_total"] = to_money(to_decimal(values["unit_price"]) * quantity)
    return values


def compute_totals(
    subtotal: Decimal, discount_percentage: Any, tax_amount: Any
) -> dict[str, Decimal]:
    """Quotation totals: discount is a percentage of subtotal; tax is an absolute amount."""
    subtotal = to_money(subtotal)
    discount_amount = to_money(subtotal * to_decimal(discount_percentage) / 100)
    total = to_money(subtotal - discount_amount + to_decimal(tax_amount))
    return {
        "subtotal": subtotal,
        "discount_amount": discount_amount,
        "total_amount": total,
    }


class QuotationItemStorage(EntityStorage[QuotationItem]):
    entity_type = "quotation_item"
    model = QuotationItem


class QuotationStorage(EntityStorage[Quotation]):
    """Quotations. Filters: status, customer_id, enquiry_id."""

    entity_type = "quotation"
    model = Quotation
    number_field = "quote_number"
    number_prefix = QUOTATION_NUMBER_PREFIX

    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        enquiries: EnquiryStorage | None = None,
    ) -> None:
        super().__init__(session_factory)
        self.items = QuotationItemStorage(session_factory)
        self.enquiries = enquiries or EnquiryStorage(session_factory)

    async def _prepare_create(
        self, session: AsyncSession, values: dict[str, Any], actor_id: str | None
    ) -> dict[str, Any]:
        values.setdefault("status", QuotationStatus.DRAFT.value)
        if values.get("quote_date") is None:
            values["quote_date"] = utc_now()
        if not values.get("customer_type") and values.get("customer_id"):
            customer = await session.get(Customer, values["customer_id"])
            values["customer_type"] = (
                customer.customer_type if customer else CustomerType.RETAIL.value
            )
        values.update(
            compute_totals(
                to_decimal(values.get("subtotal")),
                values.get("discount_percentage"),
                values.get("tax_amount"),
            )
        )
        return values

    async def _before_update(
        self,
        session: AsyncSession,
        obj: Quotation,
        changes: dict[str, Any],
        actor_id: str | None,
    ) -> None:
        if not _TOTALS_INPUTS & changes.keys():
            return
        discount = changes.get("discount_percentage", obj.discount_percentage)
        tax = changes.get("tax_amount", obj.tax_amount)
        if discount is None or tax is None:
            return  # rejected as a null NOT NULL column
        changes.update(compute_totals(to_decimal(obj.subtotal), discount, tax))

    def _number_conditions(self, column: Any, year: int) -> list[ColumnElement[bool]]:
        # Revisions reuse their parent's number and are not counted.
        return [
            *super()._number_conditions(column, year),
            column.not_like(f"%{_REVISION_SEPARATOR}%"),
        ]

    async def _active_lines(
        self, session: AsyncSession, quotation_id: str
    ) -> list[QuotationItem]:
        result = await session.execute(
            select(QuotationItem)
            .where(
                QuotationItem.quotation_id == quotation_id,
                QuotationItem.is_active.is_(True),
            )
            .order_by(QuotationItem.created_at.asc())
        )
        return list(result.scalars().all())

    async def _recalculate(
        self, session: AsyncSession, quotation: Quotation, actor_id: str | None
    ) -> Quotation:
        """Recompute subtotal/discount/total from active lines and persist (audited update)."""
        subtotal = await session.scalar(
            select(func.coalesce(func.sum(QuotationItem.line_total), 0)).where(
                QuotationItem.quotation_id == quotation.id,
                QuotationItem.is_active.is_(True),
            )
        )
        totals = compute_totals(
            to_decimal(subtotal), quotation.discount_percentage, quotation.tax_amount
        )
        return await self._apply_update(session, quotation, totals, actor_id)

    async def list_items(self, quotation_id: str) -> list[QuotationItem]:
        async with self._session() as session:
            return await self._active_lines(session, quotation_id)

    async def add_item(
        self, quotation_id: str, data: Mapping[str, Any], actor_id: str | None = None
    ) -> QuotationItem:
        """Add a priced line and refresh the quotation totals in one transaction."""
        async with self._transaction() as session:
            quotation = await self._get_for_update(session, quotation_id)
            values = price_line({**data, "quotation_id": quotation_id})
            line = await self.items._insert(session, values, actor_id)
            await self._recalculate(session, quotation, actor_id)
            return line

    async def update_item(
        self, item_id: str, data: Mapping[str, Any], actor_id: str | None = None
    ) -> QuotationItem:
        """Update a line, re-price it and refresh the quotation totals in one transaction.

        A new cost_price or markup without an explicit unit_price re-derives
        the unit price from cost.
        """
        async with self._transaction() as session:
            line = await self.items._get_for_update(session, item_id)
            quotation = await self._get_for_update(session, line.quotation_id)
            changes = dict(data)
            pricing = {key: getattr(line, key) for key in _PRICING_INPUTS}
            pricing.update({k: v for k, v in changes.items() if k in pricing})
            if "unit_price" not in changes and {"cost_price", "markup"} & changes.keys():
                pricing["unit_price"] = None
            priced = price_line(pricing)
            changes.update(unit_price=priced["unit_price"], line_total=priced["line_total"])
            line = await self.items._apply_update(session, line, changes, actor_id)
            await self._recalculate(session, quotation, actor_id)
            return line

    async def delete_item(self, item_id: str, actor_id: str | None = None) -> None:
        """Soft-delete a line and refresh the quotation totals in one transaction."""
        async with self._transaction() as session:
            line = await self.items._get_for_update(session, item_id)
            quotation = await self._get_for_update(session, line.quotation_id)
            await self.items._apply_soft_delete(session, line, actor_id)
            await self._recalculate(session, quotation, actor_id)

    async def generate_from_enquiry(
        self, enquiry_id: str, actor_id: str | None = None
    ) -> Quotation:
        """Create a Draft quotation from an enquiry, copying its lines with markup.

        Markup depends on the customer type (retail 70%, wholesale 40%). The
        enquiry is marked Quoted.
        """
        async with self._transaction() as session:
            enquiry = await self.enquiries._get_for_update(session, enquiry_id)
            customer = await session.get(Customer, enquiry.customer_id)
            customer_type = customer.customer_type if customer else CustomerType.RETAIL.value
            markup = markup_for_customer_type(customer_type)
            result = await session.execute(
                select(EnquiryItem)
                .where(
                    EnquiryItem.enquiry_id == enquiry_id,
                    EnquiryItem.is_active.is_(True),
                )
                .order_by(EnquiryItem.created_at.asc())
            )
            enquiry_lines = list(result.scalars().all())
            now = utc_now()
            quotation = await self._insert(
                session,
                {
                    "customer_id": enquiry.customer_id,
                    "customer_type": customer_type,
                    "enquiry_id": enquiry.id,
                    "status": QuotationStatus.DRAFT.value,
                    "quote_date": now,
                    "valid_until": now + timedelta(days=QUOTATION_VALIDITY_DAYS),
                    "notes": f"Generated from enquiry {enquiry.enquiry_number}",
                },
                actor_id,
            )
            for line in enquiry_lines:
                await self.items._insert(
                    session,
                    price_line(
                        {
                            "quotation_id": quotation.id,
                            "item_id": line.item_id,
                            "description": line.description,
                            "quantity": line.quantity,
                            "cost_price": to_decimal(line.unit_price),
                            "markup": markup,
                            "notes": line.notes,
                        }
                    ),
                    actor_id,
                )
            if enquiry_lines:
                quotation = await self._recalculate(session, quotation, actor_id)
            await self.enquiries._update_locked(
                session, enquiry_id, {"status": EnquiryStatus.QUOTED.value}, actor_id
            )
            _logger.info(
                "Quotation %s generated from enquiry %s (%d lines)",
                quotation.quote_number,
                enquiry.enquiry_number,
                len(enquiry_lines),
            )
            return quotation

    async def create_revision(
        self,
        quotation_id: str,
        reason: str,
        changes: Mapping[str, Any] | None = None,
        actor_id: str | None = None,
    ) -> Quotation:
        """Create revision N+1 of a quotation and mark the original superseded.

        The revision copies the original's header and active lines, starts in
        Draft, and is numbered <original number>-R<revision>.
        """
        async with self._transaction() as session:
            original = await self._get_for_update(session, quotation_id)
            if original.is_superseded:
                raise ValidationException(
                    f"quotation {quotation_id} is already superseded", field="quotation_id"
                )
            values = {
                key: getattr(original, key)
                for key in self._column_keys() - _NOT_REVISED
            }
            revision_number = (original.revision or 1) + 1
            base_number = original.quote_number.split(_REVISION_SEPARATOR)[0]
            values.update(
                quote_number=f"{base_number}{_REVISION_SEPARATOR}{revision_number}",
                revision=revision_number,
                parent_quotation_id=original.id,
                revision_reason=reason,
                status=QuotationStatus.DRAFT.value,
            )
            values.update(changes or {})
            revision = await self._insert(session, values, actor_id)
            for line in await self._active_lines(session, original.id):
                await self.items._insert(
                    session,
                    {
                        "quotation_id": revision.id,
                        "item_id": line.item_id,
                        "description": line.description,
                        "quantity": line.quantity,
                        "cost_price": line.cost_price,
                        "markup": line.markup,
                        "unit_price": line.unit_price,
                        "line_total": line.line_total,
                        "notes": line.notes,
                    },
                    actor_id,
                )
            await self._update_locked(
                session,
                original.id,
                {
                    "is_superseded": True,
                    "superseded_at": utc_now(),
                    "superseded_by": actor_id,
                },
                actor_id,
            )
            return revision

    async def get_revisions(self, quotation_id: str) -> list[Quotation]:
        """Direct revisions of a quotation, lowest revision first."""
        stmt = (
            select(Quotation)
            .where(Quotation.parent_quotation_id == quotation_id)
            .order_by(Quotation.revision.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())
