import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ironshop.db import get_db
from ironshop.config import settings
from ironshop.deps import get_catalog, load_order
from ironshop.models.core import Order, OrderStatus, Society
from ironshop.schemas.common import CustomerOut
from ironshop.schemas.orders import (
    AdminOrderIn, AdminOrderPatch, BillingIn, BillingOut, BulkStatusIn, OrderOut,
)
from ironshop.services.billing import estimate_booking, resolve_total
from ironshop.services.catalog import Catalog, merge_item_edits, normalize_quantities
from ironshop.services.customers import match_by_flat, upsert_customer
from ironshop.services.queues import (
    BILLING_EDITABLE, InvalidTransition, QueueMode, advance_status, can_transition, order_queue,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/dev-bootstrap")
def dev_bootstrap(db: Session = Depends(get_db)):
    if settings.APP_ENV != "dev":
        raise HTTPException(403, detail="Not allowed")

    s = db.query(Society).filter(Society.name == settings.DISTINGUISHED_SOCIETY).first()
    if not s:
        s = Society(name=settings.DISTINGUISHED_SOCIETY)
        db.add(s); db.flush()

    db.commit()
    return {"society_id": s.id, "society_name": s.name}


@router.get("/orders", response_model=list[OrderOut])
def list_orders(day: str = Query("ALL", alias="date"), db: Session = Depends(get_db)):
    """All orders, or those for one pickup date (YYYY-MM-DD), oldest first."""
    q = db.query(Order)
    if day != "ALL":
        try:
            pickup = _parse_day(day)
        except ValueError:
            raise HTTPException(400, detail="date must be ALL or YYYY-MM-DD")
        q = q.filter(Order.pickup_date == pickup)
    return q.order_by(Order.created_at.asc()).all()


def _parse_day(raw: str) -> date:
    return date.fromisoformat(raw.strip())


@router.post("/orders", response_model=OrderOut, status_code=201)
def create_order(body: AdminOrderIn, db: Session = Depends(get_db), catalog: Catalog = Depends(get_catalog)):
    """Staff-created order; walk-ins (self_drop) start at PICKED."""
    for name in ("customer_name", "phone", "society_name", "flat_number"):
        if not str(getattr(body, name) or "").strip():
            raise HTTPException(400, detail="Missing required fields for order creation")

    status = OrderStatus(body.status) if body.status else (
        OrderStatus.PICKED if body.self_drop else OrderStatus.NEW)
    items = normalize_quantities(body.items_json) or None

    upsert_customer(db, customer_name=body.customer_name, phone=body.phone,
                    society_name=body.society_name, flat_number=body.flat_number, block=body.block)
    o = Order(
        **body.model_dump(exclude={"items_json", "base_amount", "status"}),
        items_json=items,
        base_amount=body.base_amount if body.base_amount and body.base_amount > 0 else None,
        status=status,
        **estimate_booking(items, catalog),
    )
    db.add(o)
    db.commit()
    db.refresh(o)
    logger.info("admin order %s created (%s, self_drop=%s)", o.id, status.value, o.self_drop)
    return o


@router.patch("/orders", response_model=list[OrderOut])
def bulk_status(body: BulkStatusIn, db: Session = Depends(get_db)):
    """Move many orders at once; all or nothing."""
    target = OrderStatus(body.status)
    rows = db.query(Order).filter(Order.id.in_(body.ids)).all()
    found = {o.id for o in rows}
    missing = [i for i in body.ids if i not in found]
    if missing:
        raise HTTPException(404, detail=f"orders not found: {', '.join(missing)}")

    blocked = [o.id for o in rows if not can_transition(o.status, target)]
    if blocked:
        logger.warning("bulk move to %s refused for %d orders", target.value, len(blocked))
        raise HTTPException(409, detail=f"cannot move to {target.value}: {', '.join(blocked)}")

    for o in rows:
        advance_status(o, target)
    db.commit()
    logger.info("bulk moved %d orders to %s", len(rows), target.value)
    return rows


@router.patch("/orders/{order_id}", response_model=OrderOut)
def update_order(body: AdminOrderPatch, o: Order = Depends(load_order), db: Session = Depends(get_db)):
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(400, detail="No valid fields to update")

    if "worker_name" in updates:
        if body.worker_name is not None and body.worker_name not in settings.WORKERS:
            raise HTTPException(400, detail=f"unknown worker: {body.worker_name}")
        o.worker_name = body.worker_name

    if body.status is not None and body.status != o.status:
        before = o.status
        try:
            advance_status(o, OrderStatus(body.status))
        except InvalidTransition as e:
            logger.warning("order %s: %s", o.id, e)
            raise HTTPException(409, detail=str(e))
        logger.info("order %s moved %s -> %s", o.id, before.value, o.status.value)

    db.commit()
    db.refresh(o)
    return o


@router.post("/orders/{order_id}/billing", response_model=BillingOut)
def bill_order(body: BillingIn, o: Order = Depends(load_order), db: Session = Depends(get_db),
               catalog: Catalog = Depends(get_catalog)):
    """Resolve and persist base amount, items and total for one order.

    ``items_json`` carries the staff's item edits; they are overlaid on the
    stored quantities. Set ``items_changed`` when the call reacts to an item
    edit so an emptied item list leaves the order unbilled.
    """
    if o.status not in BILLING_EDITABLE:
        raise HTTPException(409, detail=f"order is {o.status.value}; billing is closed")

    discount = settings.DEFAULT_DISCOUNT_PERCENT if body.discount_percent is None else body.discount_percent
    if discount not in settings.DISCOUNT_OPTIONS:
        raise HTTPException(400, detail=f"discount must be one of {settings.DISCOUNT_OPTIONS}")

    items = merge_item_edits(o.items_json, body.items_json) if body.items_json is not None else None
    resolved = resolve_total(
        o, catalog,
        override_base_amount=body.base_amount,
        override_discount_percent=discount,
        override_item_quantities=items,
        ignore_manual_base=body.items_changed,
    )

    o.items_json = resolved.item_quantities
    o.base_amount = resolved.base_amount
    o.total_price = resolved.final_total
    db.commit()
    db.refresh(o)
    logger.info("order %s billed: base=%s discount=%s%% total=%s",
                o.id, resolved.base_amount, discount, resolved.final_total)
    return BillingOut(
        order=OrderOut.model_validate(o),
        base_amount=resolved.base_amount,
        final_total=resolved.final_total,
        discount_percent=discount,
        billable=resolved.billable,
    )


@router.get("/customers", response_model=list[CustomerOut])
def find_customers(society: str = "", flat: str = "", db: Session = Depends(get_db)):
    """Saved customers in a society whose flat matches after normalisation."""
    return match_by_flat(db, society, flat)


@router.get("/queues/{mode}", response_model=list[OrderOut])
def queue(mode: QueueMode, db: Session = Depends(get_db)):
    return order_queue(db.query(Order).order_by(Order.created_at.asc()).all(), mode)
