"""
Transaction Store - checkout records and the kitchen status machine

WHY: One object owns the authoritative list of transactions for the process
lifetime. Lookups accept either the primary id or the receipt number (the
cashier and kitchen screens use them interchangeably), backed by a secondary
index instead of a double scan.

Kitchen status: preparing <-> completed. Set to preparing at checkout,
reversible, never unset. Voiding removes the record outright.
"""

from __future__ import annotations

import itertools
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any, Callable

from ..models import KITCHEN_PREPARING, KITCHEN_STATUSES, LineItem, Transaction
from ..validation import (
    NotFoundError,
    ValidationError,
    coerce_int,
    coerce_money_cents,
    coerce_str,
    FieldSpec,
)
from .concurrency import LockedStore, synchronized

RECEIPT_PREFIX = "REC-"

_NAME_SPEC = FieldSpec("str", max_length=200)


class ReceiptNumberGenerator:
    """Monotonic receipt numbers: REC-00000001, REC-00000002, ..."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next(self) -> str:
        return f"{RECEIPT_PREFIX}{next(self._counter):08d}"


def parse_line_items(raw_items: Any) -> tuple[LineItem, ...]:
    """Validate cart items into LineItem snapshots; raises ValidationError."""
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("items must be a non-empty list")

    items = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise ValidationError(f"items[{index}] must be an object")
        for key in ("id", "name", "price", "quantity"):
            if raw.get(key) is None:
                raise ValidationError(f"items[{index}].{key} is required")

        items.append(LineItem(
            product_id=coerce_int(f"items[{index}].id", raw["id"], minimum=1),
            name=coerce_str(f"items[{index}].name", raw["name"], _NAME_SPEC),
            unit_price_cents=coerce_money_cents(f"items[{index}].price", raw["price"]),
            quantity=coerce_int(f"items[{index}].quantity", raw["quantity"], minimum=1),
        ))
    return tuple(items)


class TransactionStore(LockedStore):
    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        receipts: ReceiptNumberGenerator | None = None,
    ) -> None:
        super().__init__()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._receipts = receipts or ReceiptNumberGenerator()
        # Oldest first; listings reverse it
        self._by_id: dict[str, Transaction] = {}
        self._id_by_receipt: dict[str, str] = {}

    def _resolve(self, id_or_receipt: str) -> Transaction:
        tx = self._by_id.get(id_or_receipt)
        if tx is None:
            primary = self._id_by_receipt.get(id_or_receipt)
            if primary is not None:
                tx = self._by_id.get(primary)
        if tx is None:
            raise NotFoundError("Transaction not found")
        return tx

    @synchronized
    def create(self, customer_name: Any, items: Any, total: Any, user_id: int | None = None) -> Transaction:
        """
        Record a checkout.

        total must equal sum(price * quantity) to the cent; the cart sends
        both, and a mismatch means the client and server disagree on prices.
        """
        if not isinstance(customer_name, str) or not customer_name.strip():
            raise ValidationError("customerName is required")
        customer_name = coerce_str("customerName", customer_name, _NAME_SPEC)

        line_items = parse_line_items(items)

        if total is None:
            raise ValidationError("total is required")
        total_cents = coerce_money_cents("total", total)

        expected_cents = sum(item.line_total_cents for item in line_items)
        if total_cents != expected_cents:
            raise ValidationError(
                f"total {total_cents / 100:.2f} does not match line items {expected_cents / 100:.2f}"
            )

        tx = Transaction(
            id=uuid.uuid4().hex,
            receipt_number=self._receipts.next(),
            customer_name=customer_name,
            items=line_items,
            total_cents=total_cents,
            created_at=self._clock(),
            user_id=user_id,
            kitchen_status=KITCHEN_PREPARING,
        )
        self._by_id[tx.id] = tx
        self._id_by_receipt[tx.receipt_number] = tx.id
        return replace(tx)

    @synchronized
    def find(self, id_or_receipt: str) -> Transaction:
        return replace(self._resolve(id_or_receipt))

    @synchronized
    def update_kitchen_status(self, id_or_receipt: str, status: Any) -> Transaction:
        """Unknown status values are ignored; the transaction is still returned."""
        tx = self._resolve(id_or_receipt)
        if status in KITCHEN_STATUSES:
            tx.kitchen_status = status
        return replace(tx)

    @synchronized
    def void(self, id_or_receipt: str) -> Transaction:
        """Remove a transaction entirely. No soft-delete is kept."""
        tx = self._resolve(id_or_receipt)
        del self._by_id[tx.id]
        self._id_by_receipt.pop(tx.receipt_number, None)
        return tx

    @synchronized
    def list_all(self) -> list[Transaction]:
        """Most-recent-first snapshot."""
        return [replace(tx) for tx in reversed(self._by_id.values())]

    @synchronized
    def list_by_date_range(self, start: date | None, end: date | None) -> list[Transaction]:
        """Inclusive filter on the transaction's calendar date; open ends allowed."""
        if start is not None and end is not None and start > end:
            raise ValidationError("startDate must be on or before endDate")
        return [
            replace(tx)
            for tx in reversed(self._by_id.values())
            if (start is None or tx.business_date >= start)
            and (end is None or tx.business_date <= end)
        ]

    @synchronized
    def list_by_status(self, status: str) -> list[Transaction]:
        if status not in KITCHEN_STATUSES:
            raise ValidationError(f"kitchenStatus must be one of: {', '.join(KITCHEN_STATUSES)}")
        return [replace(tx) for tx in reversed(self._by_id.values()) if tx.kitchen_status == status]

    @synchronized
    def count(self) -> int:
        return len(self._by_id)
