# Overview: Flask extension that builds and owns the in-memory stores.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable

from flask import Flask, current_app

from .services.auth_service import UserDirectory
from .services.ledger_service import MovementLedger
from .services.products_service import DEMO_CATALOG, ProductStore
from .services.sales_service import TransactionStore
from .services.session_service import SessionStore
from .time_utils import resolve_timezone, store_now

EXTENSION_KEY = "mypos"


@dataclass
class PosStores:
    """Everything one application instance keeps in memory."""
    products: ProductStore
    transactions: TransactionStore
    movements: MovementLedger
    sessions: SessionStore
    users: UserDirectory
    clock: Callable[[], datetime]

    def today(self) -> date:
        return self.clock().date()


class PosState:
    """
    Stores are created once per app in init_app and reached through
    app.extensions, so two apps (e.g. two tests) never share state.
    """

    def __init__(self, app: Flask | None = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask, clock: Callable[[], datetime] | None = None) -> PosStores:
        tz = resolve_timezone(app.config.get("STORE_TIMEZONE"))
        if clock is None:
            clock = lambda: store_now(tz)  # noqa: E731

        movements = MovementLedger(clock)
        stores = PosStores(
            products=ProductStore(movements),
            transactions=TransactionStore(clock),
            movements=movements,
            sessions=SessionStore(
                timedelta(minutes=app.config.get("SESSION_IDLE_MINUTES", 120)),
                clock,
            ),
            users=UserDirectory.from_config(
                app.config.get("POS_USERS"),
                rounds=app.config.get("BCRYPT_ROUNDS", 12),
            ),
            clock=clock,
        )

        if app.config.get("SEED_DEMO_DATA"):
            stores.products.load_catalog(DEMO_CATALOG)

        app.extensions[EXTENSION_KEY] = stores
        return stores


def get_stores() -> PosStores:
    """Stores of the active application."""
    return current_app.extensions[EXTENSION_KEY]


pos_state = PosState()
