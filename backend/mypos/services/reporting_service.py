# Overview: Reporting aggregator; pure functions over store snapshots.

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Iterable, Sequence

from ..models import MOVEMENT_IN, MOVEMENT_OUT, Product, ProductMovement, Transaction
from ..validation import ValidationError, cents_to_amount

PERIODS = ("day", "week", "month", "year")
GROUP_BY_KEYS = ("id", "name")
UNKNOWN_CATEGORY = "Unknown"


class ReportError(ValidationError):
    """Raised when report parameters are invalid."""


@dataclass(frozen=True)
class Window:
    """Inclusive calendar-date range."""
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def _clamped(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))


def period_window(period: str, today: date) -> Window:
    """
    day   -> the calendar day
    week  -> the 7 days before today, plus today
    month -> calendar month to date
    year  -> calendar year to date
    """
    if period == "day":
        return Window(today, today)
    if period == "week":
        return Window(today - timedelta(days=7), today)
    if period == "month":
        return Window(today.replace(day=1), today)
    if period == "year":
        return Window(date(today.year, 1, 1), today)
    raise ReportError(f"period must be one of: {', '.join(PERIODS)}")


def previous_window(period: str, today: date) -> Window:
    """The equivalent span immediately before period_window(period, today)."""
    if period == "day":
        yesterday = today - timedelta(days=1)
        return Window(yesterday, yesterday)
    if period == "week":
        return Window(today - timedelta(days=15), today - timedelta(days=8))
    if period == "month":
        prev_month_start = (today.replace(day=1) - timedelta(days=1)).replace(day=1)
        return Window(
            prev_month_start,
            _clamped(prev_month_start.year, prev_month_start.month, today.day),
        )
    if period == "year":
        return Window(
            date(today.year - 1, 1, 1),
            _clamped(today.year - 1, today.month, today.day),
        )
    raise ReportError(f"period must be one of: {', '.join(PERIODS)}")


def _window_totals(transactions: Iterable[Transaction], window: Window) -> tuple[int, int]:
    total_cents = 0
    count = 0
    for tx in transactions:
        if window.contains(tx.business_date):
            total_cents += tx.total_cents
            count += 1
    return total_cents, count


def percent_change(current_cents: int, previous_cents: int) -> float:
    """
    Growth vs the previous window, rounded to 2 places.

    0 -> 0 is 0%; anything -> from 0 is 100%.
    """
    if previous_cents == 0:
        return 0.0 if current_cents == 0 else 100.0
    change = Decimal(current_cents - previous_cents) * 100 / Decimal(previous_cents)
    return float(change.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _share_pct(part_cents: int, total_cents: int) -> float:
    # Rounded down so the listed shares never add up past 100
    if total_cents <= 0:
        return 0.0
    share = Decimal(part_cents) * 100 / Decimal(total_cents)
    return float(share.quantize(Decimal("0.01"), rounding=ROUND_DOWN))


def movement_totals(movements: Iterable[ProductMovement]) -> dict:
    qty_in = 0
    qty_out = 0
    for m in movements:
        if m.type == MOVEMENT_IN:
            qty_in += m.quantity
        elif m.type == MOVEMENT_OUT:
            qty_out += m.quantity
    return {"in": qty_in, "out": qty_out, "net": qty_in - qty_out}


def dashboard_stats(
    transactions: Sequence[Transaction],
    movements: Sequence[ProductMovement],
    today: date,
) -> dict:
    """Sales totals per window with change vs the prior equivalent window."""
    stats = {}
    for label, period in (("today", "day"), ("week", "week"), ("month", "month"), ("year", "year")):
        current_cents, current_count = _window_totals(transactions, period_window(period, today))
        previous_cents, _ = _window_totals(transactions, previous_window(period, today))
        stats[label] = {
            "amount": cents_to_amount(current_cents),
            "transactions": current_count,
            "change": percent_change(current_cents, previous_cents),
        }
    stats["productMovements"] = movement_totals(movements)
    return stats


def recent_transactions(transactions: Sequence[Transaction], limit: int) -> list[Transaction]:
    ordered = sorted(transactions, key=lambda tx: tx.created_at, reverse=True)
    return ordered[:max(limit, 0)]


def sales_report(
    transactions: Sequence[Transaction],
    period: str,
    today: date,
    *,
    group_by: str = "id",
    limit: int = 5,
) -> dict:
    """
    Totals and top products for one period window.

    Line items are grouped by product id by default (the name shown is the
    first one seen for that id); group_by="name" merges same-named products.
    Ties on sales keep first-seen order.
    """
    if group_by not in GROUP_BY_KEYS:
        raise ReportError(f"groupBy must be one of: {', '.join(GROUP_BY_KEYS)}")

    window = period_window(period, today)
    in_window = [tx for tx in transactions if window.contains(tx.business_date)]

    total_cents = sum(tx.total_cents for tx in in_window)

    groups: dict[object, dict] = {}
    for tx in in_window:
        for item in tx.items:
            key = item.product_id if group_by == "id" else item.name
            row = groups.setdefault(key, {"name": item.name, "sales_cents": 0, "quantity": 0})
            row["sales_cents"] += item.line_total_cents
            row["quantity"] += item.quantity

    ranked = sorted(groups.values(), key=lambda row: row["sales_cents"], reverse=True)

    return {
        "period": period,
        "startDate": window.start.isoformat(),
        "endDate": window.end.isoformat(),
        "totalSales": cents_to_amount(total_cents),
        "totalTransactions": len(in_window),
        "topProducts": [
            {
                "name": row["name"],
                "sales": cents_to_amount(row["sales_cents"]),
                "quantity": row["quantity"],
                "percentage": _share_pct(row["sales_cents"], total_cents),
            }
            for row in ranked[:max(limit, 0)]
        ],
    }


def inventory_alerts(
    products: Sequence[Product],
    transactions: Sequence[Transaction],
    *,
    threshold: int = 20,
    limit: int = 5,
    group_by: str = "id",
) -> dict:
    """
    Low stock (0 < stock < threshold), out of stock (stock == 0) and the
    fast-moving top N by quantity sold across all transactions.
    """
    if group_by not in GROUP_BY_KEYS:
        raise ReportError(f"groupBy must be one of: {', '.join(GROUP_BY_KEYS)}")

    def _alert(p: Product) -> dict:
        return {
            "id": p.id,
            "name": p.name,
            "currentStock": p.stock,
            "minThreshold": threshold,
            "category": p.category,
        }

    low_stock = [_alert(p) for p in products if 0 < p.stock < threshold]
    out_of_stock = [_alert(p) for p in products if p.stock <= 0]

    category_by_name: dict[str, str] = {}
    for p in products:
        category_by_name.setdefault(p.name, p.category)

    counts: dict[object, dict] = {}
    for tx in transactions:
        for item in tx.items:
            key = item.product_id if group_by == "id" else item.name
            row = counts.setdefault(key, {"name": item.name, "count": 0})
            row["count"] += item.quantity

    ranked = sorted(counts.values(), key=lambda row: row["count"], reverse=True)
    fast_moving = [
        {
            "name": row["name"],
            "salesCount": row["count"],
            "category": category_by_name.get(row["name"], UNKNOWN_CATEGORY),
        }
        for row in ranked[:max(limit, 0)]
    ]

    return {
        "lowStock": low_stock,
        "outOfStock": out_of_stock,
        "fastMoving": fast_moving,
    }
