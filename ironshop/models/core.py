from sqlalchemy import (
    String, Boolean, Enum, Text, Date, Integer, JSON
)
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum as PyEnum
from datetime import date
from ironshop.db import Base
from ironshop.models.common import IdMixin, TSMMixin

# ── Enums ───────────────────────────────────────────────────────────────────
class OrderStatus(PyEnum):
    NEW = "NEW"
    PICKED = "PICKED"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

class PickupSlot(PyEnum):
    MORNING = "Morning"
    EVENING = "Evening"

# ── Orders ──────────────────────────────────────────────────────────────────
class Order(Base, IdMixin, TSMMixin):
    __tablename__ = "orders"
    customer_name: Mapped[str] = mapped_column(String(160))
    phone: Mapped[str] = mapped_column(String(20), index=True)
    society_name: Mapped[str] = mapped_column(String(160))
    block: Mapped[str | None] = mapped_column(String(20))        # usually a letter A-G
    flat_number: Mapped[str] = mapped_column(String(40))
    pickup_date: Mapped[date | None] = mapped_column(Date, index=True)
    pickup_slot: Mapped[str | None] = mapped_column(String(20))   # "Morning" | "Evening"
    status: Mapped[OrderStatus] = mapped_column(Enum(OrderStatus), default=OrderStatus.NEW)
    self_drop: Mapped[bool] = mapped_column(Boolean, default=False)
    express_delivery: Mapped[bool] = mapped_column(Boolean, default=False)
    notes: Mapped[str | None] = mapped_column(Text)
    worker_name: Mapped[str | None] = mapped_column(String(80))

    # money in whole rupees
    items_json: Mapped[dict | None] = mapped_column(JSON)          # {catalog_key: qty}
    items_estimated_total: Mapped[int | None] = mapped_column(Integer)
    delivery_charge: Mapped[int | None] = mapped_column(Integer)
    express_charge: Mapped[int | None] = mapped_column(Integer)
    estimated_total: Mapped[int | None] = mapped_column(Integer)
    base_amount: Mapped[int | None] = mapped_column(Integer)       # manual, pre-discount
    total_price: Mapped[int | None] = mapped_column(Integer)       # null until billed

# ── Customers & societies ───────────────────────────────────────────────────
class Customer(Base, IdMixin, TSMMixin):
    __tablename__ = "customer"
    customer_name: Mapped[str] = mapped_column(String(160))
    phone: Mapped[str] = mapped_column(String(20), unique=True)
    society_name: Mapped[str | None] = mapped_column(String(160))
    block: Mapped[str | None] = mapped_column(String(20))
    flat_number: Mapped[str | None] = mapped_column(String(40))

class Society(Base, IdMixin, TSMMixin):
    __tablename__ = "society"
    name: Mapped[str] = mapped_column(String(160), unique=True)
