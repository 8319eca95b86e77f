"""Read helpers over order snapshots.

A snapshot is either an ORM ``Order`` row or a plain dict with the same
field names (e.g. a decoded JSON payload).
"""
from collections.abc import Mapping
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal, InvalidOperation
import math

from ironshop.models.core import OrderStatus


def field(order, name: str, default=None):
    if isinstance(order, Mapping):
        return order.get(name, default)
    return getattr(order, name, default)


def status_of(order) -> OrderStatus | None:
    raw = field(order, "status")
    if isinstance(raw, OrderStatus):
        return raw
    try:
        return OrderStatus(str(raw).upper())
    except ValueError:
        return None


def amount_or_zero(raw) -> Decimal:
    """``total_price``-style value as Decimal; null, NaN and junk count as 0."""
    if raw is None or isinstance(raw, bool):
        return Decimal(0)
    if isinstance(raw, float) and not math.isfinite(raw):
        return Decimal(0)
    try:
        d = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return d if d.is_finite() else Decimal(0)


def parse_instant(raw) -> datetime | date | None:
    if raw is None:
        return None
    if isinstance(raw, (datetime, date)):
        return raw
    try:
        text = str(raw).strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def local_date(raw, tz: tzinfo) -> date | None:
    """Calendar day of ``raw`` in ``tz``; naive datetimes are taken as UTC."""
    value = parse_instant(raw)
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(tz).date()
    return value


def order_day(order, tz: tzinfo) -> date | None:
    """The day an order counts towards: pickup date, else creation day."""
    day = local_date(field(order, "pickup_date"), tz)
    if day is None:
        day = local_date(field(order, "created_at"), tz)
    return day
