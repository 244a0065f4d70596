from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from .time_utils import format_receipt_date, format_receipt_time, to_epoch_millis, to_utc_z
from .validation import cents_to_amount


KITCHEN_PREPARING = "preparing"
KITCHEN_COMPLETED = "completed"
KITCHEN_STATUSES = (KITCHEN_PREPARING, KITCHEN_COMPLETED)

MOVEMENT_IN = "in"
MOVEMENT_OUT = "out"

ROLE_ADMIN = "admin"
ROLE_CASHIER = "cashier"
ROLE_KITCHEN = "kitchen"
ROLES = (ROLE_ADMIN, ROLE_CASHIER, ROLE_KITCHEN)


@dataclass
class Product:
    """Catalogue entry. Stock is a plain counter; price is held in cents."""
    id: int
    name: str
    sku: str
    stock: int
    price_cents: int
    category: str
    image: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "stock": self.stock,
            "price": cents_to_amount(self.price_cents),
            "category": self.category,
            "image": self.image,
        }


@dataclass(frozen=True)
class LineItem:
    """
    Product-and-quantity snapshot embedded in a transaction.

    WHY: decoupled from the live Product so later price or name edits do not
    rewrite sales history.
    """
    product_id: int
    name: str
    unit_price_cents: int
    quantity: int

    @property
    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity

    def to_dict(self) -> dict:
        return {
            "id": self.product_id,
            "name": self.name,
            "price": cents_to_amount(self.unit_price_cents),
            "quantity": self.quantity,
        }


@dataclass
class Transaction:
    """
    Checkout record. Immutable after creation except kitchen_status.

    created_at is an aware datetime in the store timezone; its calendar date
    is what date-range filters and report windows compare against.
    """
    id: str
    receipt_number: str
    customer_name: str
    items: tuple[LineItem, ...]
    total_cents: int
    created_at: datetime
    user_id: int | None = None
    kitchen_status: str | None = None

    @property
    def business_date(self) -> date:
        return self.created_at.date()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "receiptNumber": self.receipt_number,
            "customerName": self.customer_name,
            "items": [item.to_dict() for item in self.items],
            "total": cents_to_amount(self.total_cents),
            "timestamp": to_epoch_millis(self.created_at),
            "time": format_receipt_time(self.created_at),
            "date": format_receipt_date(self.created_at),
            "userId": self.user_id,
            "kitchenStatus": self.kitchen_status,
        }


@dataclass(frozen=True)
class ProductMovement:
    """Append-only stock movement record."""
    id: int
    product_id: int
    product_name: str
    type: str
    quantity: int
    reason: str
    occurred_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "productName": self.product_name,
            "product": self.product_name,
            "type": self.type,
            "quantity": self.quantity,
            "reason": self.reason,
            "date": format_receipt_date(self.occurred_at),
            "time": format_receipt_time(self.occurred_at),
            "timestamp": to_utc_z(self.occurred_at),
        }


@dataclass(frozen=True)
class User:
    id: int
    username: str
    role: str
    password_hash: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
        }
