# backend/mypos/services/products_service.py
"""
Product Store

Owns the catalogue for the process lifetime.
- ids are assigned as max(existing) + 1, starting at 1
- sku defaults to PRD-{n:03d} where n is the catalogue size after insert
- updates apply only the fields present in the request; 0 is a real value
- every stock change is written to the movement ledger
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from ..models import MOVEMENT_IN, Product
from ..validation import FieldSpec, NotFoundError, ValidationPolicy, validate_payload
from .concurrency import LockedStore, synchronized
from .ledger_service import MovementLedger

PRODUCT_POLICY = ValidationPolicy(
    fields={
        "name": FieldSpec("str", max_length=200),
        "sku": FieldSpec("str", nullable=True, max_length=64),
        "price": FieldSpec("money"),
        "stock": FieldSpec("int", minimum=0),
        "category": FieldSpec("str", max_length=100),
        "image": FieldSpec("str", nullable=True, allow_blank=True, max_length=2000),
        "reason": FieldSpec("str", nullable=True, max_length=200),
    },
    required_on_create=frozenset({"name", "price", "stock", "category"}),
    ignored_fields=frozenset({"id"}),
)

# Demo catalogue loaded when SEED_DEMO_DATA is on
DEMO_CATALOG = (
    {"name": "Product A", "sku": "PRD-001", "stock": 45, "price": "22.75", "category": "Electronics"},
    {"name": "Product B", "sku": "PRD-002", "stock": 32, "price": "25.00", "category": "Electronics"},
    {"name": "Product C", "sku": "PRD-003", "stock": 18, "price": "22.50", "category": "Clothing"},
    {"name": "Product D", "sku": "PRD-004", "stock": 67, "price": "45.00", "category": "Home"},
    {"name": "Product E", "sku": "PRD-005", "stock": 12, "price": "15.25", "category": "Clothing"},
    {"name": "Product F", "sku": "PRD-006", "stock": 89, "price": "30.00", "category": "Electronics"},
    {"name": "Product G", "sku": "PRD-007", "stock": 24, "price": "25.00", "category": "Home"},
    {"name": "Product H", "sku": "PRD-008", "stock": 56, "price": "40.00", "category": "Electronics"},
)


@dataclass(frozen=True)
class ProductPatch:
    """
    Partial update request. None means "absent": only set fields apply.

    reason is not a product field; it labels the ledger movement written when
    stock changes.
    """
    name: str | None = None
    sku: str | None = None
    price_cents: int | None = None
    stock: int | None = None
    category: str | None = None
    image: str | None = None
    reason: str | None = None

    @classmethod
    def from_payload(cls, payload) -> ProductPatch:
        cleaned = validate_payload(payload=payload, policy=PRODUCT_POLICY, partial=True)
        return cls(
            name=cleaned.get("name"),
            sku=cleaned.get("sku"),
            price_cents=cleaned.get("price"),
            stock=cleaned.get("stock"),
            category=cleaned.get("category"),
            image=cleaned.get("image"),
            reason=cleaned.get("reason"),
        )


class ProductStore(LockedStore):
    def __init__(self, ledger: MovementLedger) -> None:
        super().__init__()
        self._ledger = ledger
        # dict keeps insertion order, which is the listing order
        self._products: dict[int, Product] = {}

    def _require(self, product_id: int) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    @synchronized
    def create(self, payload: dict) -> Product:
        """Create a product from a raw payload; raises ValidationError."""
        cleaned = validate_payload(payload=payload, policy=PRODUCT_POLICY, partial=False)

        product_id = max(self._products, default=0) + 1
        sku = cleaned.get("sku") or f"PRD-{len(self._products) + 1:03d}"

        product = Product(
            id=product_id,
            name=cleaned["name"],
            sku=sku,
            stock=cleaned["stock"],
            price_cents=cleaned["price"],
            category=cleaned["category"],
            image=cleaned.get("image") or "",
        )
        self._products[product_id] = product

        if product.stock > 0:
            self._ledger.append(
                product=product,
                type=MOVEMENT_IN,
                quantity=product.stock,
                reason=cleaned.get("reason") or "Initial stock",
            )
        return replace(product)

    @synchronized
    def load_catalog(self, records) -> int:
        """Bulk-load seed records without writing ledger movements."""
        loaded = 0
        for record in records:
            cleaned = validate_payload(payload=dict(record), policy=PRODUCT_POLICY, partial=False)
            product_id = max(self._products, default=0) + 1
            self._products[product_id] = Product(
                id=product_id,
                name=cleaned["name"],
                sku=cleaned.get("sku") or f"PRD-{len(self._products) + 1:03d}",
                stock=cleaned["stock"],
                price_cents=cleaned["price"],
                category=cleaned["category"],
                image=cleaned.get("image") or "",
            )
            loaded += 1
        return loaded

    @synchronized
    def get(self, product_id: int) -> Product:
        return replace(self._require(product_id))

    @synchronized
    def update(self, product_id: int, patch: ProductPatch) -> Product:
        product = self._require(product_id)
        before_stock = product.stock

        if patch.name is not None:
            product.name = patch.name
        if patch.sku is not None:
            product.sku = patch.sku
        if patch.price_cents is not None:
            product.price_cents = patch.price_cents
        if patch.stock is not None:
            product.stock = patch.stock
        if patch.category is not None:
            product.category = patch.category
        if patch.image is not None:
            product.image = patch.image

        self._ledger.record_stock_change(
            product=product,
            before=before_stock,
            after=product.stock,
            reason=patch.reason or "Stock adjustment",
        )
        return replace(product)

    @synchronized
    def delete(self, product_id: int) -> Product:
        self._require(product_id)
        return self._products.pop(product_id)

    @synchronized
    def list_all(self) -> list[Product]:
        return [replace(p) for p in self._products.values()]

    @synchronized
    def count(self) -> int:
        return len(self._products)
