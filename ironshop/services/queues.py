from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from enum import Enum

from ironshop.config import settings
from ironshop.models.core import OrderStatus
from ironshop.services.snapshot import field, parse_instant, status_of

UNKNOWN_BLOCK_RANK = 999

# forward moves only; CANCELLED is an escape hatch from NEW
TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.NEW: frozenset({OrderStatus.PICKED, OrderStatus.CANCELLED}),
    OrderStatus.PICKED: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

BILLING_EDITABLE = frozenset({OrderStatus.NEW, OrderStatus.PICKED, OrderStatus.READY})


class QueueMode(str, Enum):
    INTAKE = "intake"
    READY = "ready"
    DELIVERED = "delivered"


class InvalidTransition(ValueError):
    def __init__(self, current: OrderStatus | None, target: OrderStatus):
        self.current = current
        self.target = target
        name = current.value if current else "UNKNOWN"
        super().__init__(f"cannot move order from {name} to {target.value}")


def can_transition(current: OrderStatus | None, target: OrderStatus) -> bool:
    return current is not None and target in TRANSITIONS.get(current, frozenset())


def advance_status(order, target: OrderStatus) -> OrderStatus:
    """Move an ORM order to ``target`` or raise InvalidTransition."""
    current = status_of(order)
    if not can_transition(current, target):
        raise InvalidTransition(current, target)
    order.status = target
    return target


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _created_ts(order) -> datetime:
    value = parse_instant(field(order, "created_at"))
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if value is None:
        # undated rows sort first; they predate any timestamped row
        return _EPOCH
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def block_rank(order, block_ranks: Mapping[str, int]) -> int:
    raw = str(field(order, "block") or "").strip().upper()
    if not raw:
        return UNKNOWN_BLOCK_RANK
    return block_ranks.get(raw[0], UNKNOWN_BLOCK_RANK)


def _intake_key(order):
    return (not bool(field(order, "express_delivery")), _created_ts(order))


def _ready_queue(eligible, distinguished_society: str, block_ranks: Mapping[str, int]) -> list:
    # FIFO overall; distinguished-society orders are regrouped by block
    # within the slots they already hold
    fifo = sorted(eligible, key=_created_ts)
    slots = [i for i, o in enumerate(fifo) if field(o, "society_name") == distinguished_society]
    grouped = sorted((fifo[i] for i in slots), key=lambda o: (block_rank(o, block_ranks), _created_ts(o)))
    for i, o in zip(slots, grouped):
        fifo[i] = o
    return fifo


def order_queue(
    orders,
    mode: QueueMode | str,
    distinguished_society: str | None = None,
    block_ranks: Mapping[str, int] | None = None,
) -> list:
    """Filter and order orders for one of the shop's work queues.

    intake     NEW and PICKED orders, express first, then oldest first
    ready      READY orders oldest first; the distinguished society's
               orders are regrouped by block rank (A..G, unknown last)
               within the positions they hold
    delivered  DELIVERED orders, newest first

    All orderings are stable.
    """
    mode = QueueMode(mode)
    if mode is QueueMode.INTAKE:
        eligible = [o for o in orders if status_of(o) in (OrderStatus.NEW, OrderStatus.PICKED)]
        return sorted(eligible, key=_intake_key)

    if mode is QueueMode.READY:
        society = settings.DISTINGUISHED_SOCIETY if distinguished_society is None else distinguished_society
        ranks = {k.upper(): v for k, v in (settings.BLOCK_RANKS if block_ranks is None else block_ranks).items()}
        eligible = [o for o in orders if status_of(o) == OrderStatus.READY]
        return _ready_queue(eligible, society, ranks)

    eligible = [o for o in orders if status_of(o) == OrderStatus.DELIVERED]
    return sorted(eligible, key=_created_ts, reverse=True)
