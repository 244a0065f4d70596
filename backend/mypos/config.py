# backend/mypos/config.py
from __future__ import annotations
import os


def _env_bool(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Calendar dates (receipt date, report windows) are taken in this zone
    STORE_TIMEZONE = os.environ.get("STORE_TIMEZONE", "UTC")

    # Reporting knobs
    LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "20"))
    TOP_PRODUCTS_LIMIT = int(os.environ.get("TOP_PRODUCTS_LIMIT", "5"))
    FAST_MOVING_LIMIT = int(os.environ.get("FAST_MOVING_LIMIT", "5"))
    RECENT_TRANSACTIONS_LIMIT = int(os.environ.get("RECENT_TRANSACTIONS_LIMIT", "5"))
    # "id" groups sales by product id, "name" by line item name
    REPORT_GROUP_BY = os.environ.get("REPORT_GROUP_BY", "id")

    # Load the demo catalogue on startup
    SEED_DEMO_DATA = _env_bool("SEED_DEMO_DATA", True)

    # Sessions
    SESSION_IDLE_MINUTES = int(os.environ.get("SESSION_IDLE_MINUTES", "120"))
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    # JSON list of {id, username, role, password_hash}; empty means built-in accounts
    POS_USERS = os.environ.get("POS_USERS", "")

    CORS_ALLOWED_ORIGINS = tuple(
        origin.strip()
        for origin in os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        ).split(",")
        if origin.strip()
    )

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
