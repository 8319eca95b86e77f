from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import date, datetime, timezone
from typing import Literal
from zoneinfo import ZoneInfo

from ironshop.db import get_db
from ironshop.config import settings
from ironshop.models.core import Order, OrderStatus
from ironshop.schemas.reports import CustomerAggregateOut, RangeSummaryOut, RevenueWindowOut
from ironshop.services.revenue import (
    compute_revenue_windows, month_range, summarize_range,
    top_customers_by_lifetime_revenue, week_range,
)

router = APIRouter(prefix="/reports", tags=["reports"])


def _today() -> date:
    return datetime.now(timezone.utc).astimezone(ZoneInfo(settings.TZ)).date()


@router.get("/revenue", response_model=RevenueWindowOut)
def revenue(at: datetime | None = None, db: Session = Depends(get_db)):
    """Today / month / lifetime rollup; ``at`` overrides the reference instant."""
    orders = (db.query(Order)
                .filter(Order.status.in_([OrderStatus.READY, OrderStatus.DELIVERED]))
                .all())
    return compute_revenue_windows(orders, at or datetime.now(timezone.utc))


@router.get("/top-customers", response_model=list[CustomerAggregateOut])
def top_customers(limit: int | None = None, db: Session = Depends(get_db)):
    limit = settings.TOP_CUSTOMERS_LIMIT if limit is None else limit
    if limit < 1:
        raise HTTPException(400, detail="limit must be positive")
    delivered = db.query(Order).filter(Order.status == OrderStatus.DELIVERED).order_by(Order.created_at.asc()).all()
    return top_customers_by_lifetime_revenue(delivered, limit)


@router.get("/summary", response_model=RangeSummaryOut)
def summary(date_from: date, date_to: date, db: Session = Depends(get_db)):
    if date_to < date_from:
        raise HTTPException(400, detail="date_to is before date_from")
    return _summary(db, date_from, date_to)


@router.get("/summary/{period}", response_model=RangeSummaryOut)
def period_summary(period: Literal["week", "month"], day: date | None = None, db: Session = Depends(get_db)):
    """Monday-Sunday week or calendar month containing ``day`` (default today)."""
    day = day or _today()
    date_from, date_to = week_range(day) if period == "week" else month_range(day)
    return _summary(db, date_from, date_to)


def _summary(db: Session, date_from: date, date_to: date):
    orders = (db.query(Order)
                .filter(Order.pickup_date >= date_from, Order.pickup_date <= date_to)
                .all())
    return summarize_range(orders, date_from, date_to)
