from collections import Counter
from dataclasses import dataclass, field as dc_field
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from zoneinfo import ZoneInfo

from ironshop.config import settings
from ironshop.models.core import OrderStatus
from ironshop.services.snapshot import amount_or_zero, field, order_day, status_of


@dataclass(frozen=True)
class RevenueWindow:
    today: int
    month: int
    lifetime: int


@dataclass
class CustomerAggregate:
    society_name: str
    block: str
    flat_number: str
    total_lifetime_revenue: int = 0
    order_count: int = 0

    @property
    def key(self) -> str:
        return customer_key(self.society_name, self.block, self.flat_number)


@dataclass
class RangeSummary:
    date_from: date
    date_to: date
    total_orders: int = 0
    total_revenue: int = 0
    status_counts: dict[str, int] = dc_field(default_factory=dict)
    revenue_by_worker: dict[str, int] = dc_field(default_factory=dict)


def _zone(tz: tzinfo | str | None) -> tzinfo:
    if tz is None:
        return ZoneInfo(settings.TZ)
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def _whole(total: Decimal) -> int:
    return int(total.to_integral_value())


def customer_key(society_name, block, flat_number) -> str:
    return "||".join((society_name or "", block or "", flat_number or ""))


def compute_revenue_windows(orders, reference_instant: datetime | None = None, tz=None) -> RevenueWindow:
    """Today / this month / lifetime revenue as seen from ``reference_instant``.

    today    READY + DELIVERED orders dated on the local calendar day
    month    DELIVERED orders dated in the local calendar month
    lifetime all DELIVERED orders

    Orders without a usable date are left out of all three windows.
    """
    zone = _zone(tz)
    now = reference_instant or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.astimezone(zone).date()
    first_of_month = today.replace(day=1)
    first_of_next = (first_of_month + timedelta(days=32)).replace(day=1)

    t = m = life = Decimal(0)
    for o in orders:
        day = order_day(o, zone)
        if day is None:
            continue
        status = status_of(o)
        amount = amount_or_zero(field(o, "total_price"))
        if day == today and status in (OrderStatus.READY, OrderStatus.DELIVERED):
            t += amount
        if status == OrderStatus.DELIVERED:
            life += amount
            if first_of_month <= day < first_of_next:
                m += amount
    return RevenueWindow(today=_whole(t), month=_whole(m), lifetime=_whole(life))


def top_customers_by_lifetime_revenue(orders, limit: int = 3) -> list[CustomerAggregate]:
    """Delivered-revenue leaderboard keyed by address (society, block, flat)."""
    groups: dict[str, CustomerAggregate] = {}
    for o in orders:
        if status_of(o) != OrderStatus.DELIVERED:
            continue
        society = field(o, "society_name") or ""
        block = field(o, "block") or ""
        flat = field(o, "flat_number") or ""
        if not (society or block or flat):
            continue
        key = customer_key(society, block, flat)
        agg = groups.get(key)
        if agg is None:
            agg = groups[key] = CustomerAggregate(society, block, flat)
        agg.total_lifetime_revenue += _whole(amount_or_zero(field(o, "total_price")))
        agg.order_count += 1

    # sorted() is stable: ties keep first-seen order
    ranked = sorted(groups.values(), key=lambda a: a.total_lifetime_revenue, reverse=True)
    return ranked[:max(limit, 0)]


def week_range(day: date) -> tuple[date, date]:
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def month_range(day: date) -> tuple[date, date]:
    first = day.replace(day=1)
    last = (first + timedelta(days=32)).replace(day=1) - timedelta(days=1)
    return first, last


def summarize_range(orders, date_from: date, date_to: date, tz=None) -> RangeSummary:
    """Dashboard card for an inclusive pickup-date range.

    Cancelled orders are counted per status but not in ``total_orders``;
    revenue only comes from delivered orders.
    """
    zone = _zone(tz)
    summary = RangeSummary(date_from=date_from, date_to=date_to)
    counts: Counter[str] = Counter({s.value: 0 for s in OrderStatus})
    revenue = Decimal(0)
    by_worker: dict[str, Decimal] = {}
    for o in orders:
        day = order_day(o, zone)
        if day is None or not (date_from <= day <= date_to):
            continue
        status = status_of(o)
        if status is None:
            continue
        counts[status.value] += 1
        if status != OrderStatus.CANCELLED:
            summary.total_orders += 1
        if status == OrderStatus.DELIVERED:
            amount = amount_or_zero(field(o, "total_price"))
            revenue += amount
            worker = field(o, "worker_name")
            if worker:
                by_worker[worker] = by_worker.get(worker, Decimal(0)) + amount
    summary.total_revenue = _whole(revenue)
    summary.status_counts = dict(counts)
    summary.revenue_by_worker = {w: _whole(v) for w, v in by_worker.items()}
    return summary
