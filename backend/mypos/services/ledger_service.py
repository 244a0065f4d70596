# Overview: Append-only product movement ledger.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from ..models import MOVEMENT_IN, MOVEMENT_OUT, Product, ProductMovement
from ..validation import ValidationError
from .concurrency import LockedStore, synchronized

class MovementLedger(LockedStore):
    """
    Movement ledger invariants

    - Append-only: no updates, no deletes.
    - quantity is always > 0; direction lives in type ("in" / "out").
    - occurred_at is business time taken from the ledger clock.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._movements: list[ProductMovement] = []
        self._next_id = 1

    @synchronized
    def append(self, *, product: Product, type: str, quantity: int, reason: str) -> ProductMovement:
        if type not in (MOVEMENT_IN, MOVEMENT_OUT):
            raise ValidationError("movement type must be 'in' or 'out'")
        if quantity <= 0:
            raise ValidationError("movement quantity must be > 0")

        movement = ProductMovement(
            id=self._next_id,
            product_id=product.id,
            product_name=product.name,
            type=type,
            quantity=quantity,
            reason=reason,
            occurred_at=self._clock(),
        )
        self._next_id += 1
        self._movements.append(movement)
        return movement

    @synchronized
    def record_stock_change(self, *, product: Product, before: int, after: int, reason: str) -> ProductMovement | None:
        """Append an in/out movement for a stock delta; no-op when unchanged."""
        delta = after - before
        if delta == 0:
            return None
        return self.append(
            product=product,
            type=MOVEMENT_IN if delta > 0 else MOVEMENT_OUT,
            quantity=abs(delta),
            reason=reason,
        )

    @synchronized
    def list_all(self) -> list[ProductMovement]:
        """Most-recent-first snapshot."""
        return list(reversed(self._movements))

    @synchronized
    def count(self) -> int:
        return len(self._movements)
