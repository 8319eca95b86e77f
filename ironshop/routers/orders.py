import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ironshop.db import get_db
from ironshop.deps import get_catalog, load_order
from ironshop.schemas.orders import OrderIn, OrderOut, OrderUpdateIn
from ironshop.models.core import Order, OrderStatus
from ironshop.services.billing import estimate_booking
from ironshop.services.catalog import Catalog, normalize_quantities
from ironshop.services.customers import upsert_customer
from ironshop.services.queues import advance_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def _require_text(body, *names: str):
    missing = [n for n in names if not str(getattr(body, n) or "").strip()]
    if missing:
        raise HTTPException(400, detail=f"Missing required fields: {', '.join(missing)}")


@router.post("/", response_model=OrderOut)
def book_order(body: OrderIn, db: Session = Depends(get_db), catalog: Catalog = Depends(get_catalog)):
    """Customer booking. Items are optional; when given they produce the estimate."""
    _require_text(body, "customer_name", "phone", "society_name", "flat_number")

    items = normalize_quantities(body.items_json) or None
    o = Order(
        **body.model_dump(exclude={"items_json", "base_amount"}),
        items_json=items,
        base_amount=body.base_amount if body.base_amount and body.base_amount > 0 else None,
        status=OrderStatus.NEW,
        total_price=None,
        **estimate_booking(items, catalog),
    )
    db.add(o)
    upsert_customer(db, customer_name=body.customer_name, phone=body.phone,
                    society_name=body.society_name, flat_number=body.flat_number, block=body.block)
    db.commit()
    db.refresh(o)
    logger.info("order %s booked for %s / %s", o.id, o.society_name, o.flat_number)
    return o


@router.get("/mine", response_model=list[OrderOut])
def my_orders(phone: str, db: Session = Depends(get_db)):
    phone = phone.strip()
    if not phone:
        raise HTTPException(400, detail="Missing phone query param")
    return (db.query(Order)
              .filter(Order.phone == phone)
              .order_by(Order.created_at.desc())
              .limit(10)
              .all())


@router.patch("/{order_id}", response_model=OrderOut)
def modify_order(body: OrderUpdateIn, o: Order = Depends(load_order), db: Session = Depends(get_db),
                 catalog: Catalog = Depends(get_catalog)):
    """Customer edits and cancellation; only allowed before pickup."""
    if o.status != OrderStatus.NEW:
        raise HTTPException(409, detail="Order cannot be modified (already picked or delivered).")

    if body.action == "cancel":
        advance_status(o, OrderStatus.CANCELLED)
        db.commit()
        db.refresh(o)
        logger.info("order %s cancelled by customer", o.id)
        return o

    updates = body.model_dump(exclude_unset=True, exclude={"action"})
    if not updates:
        raise HTTPException(400, detail="Nothing to update.")

    if "pickup_date" in updates and body.pickup_date:
        o.pickup_date = body.pickup_date
    if "pickup_slot" in updates and body.pickup_slot:
        o.pickup_slot = body.pickup_slot
    if "notes" in updates:
        o.notes = body.notes
    if "items_json" in updates:
        # whole-mapping replace
        o.items_json = normalize_quantities(body.items_json) or None
        for k, v in estimate_booking(o.items_json, catalog).items():
            setattr(o, k, v)
    if "base_amount" in updates:
        o.base_amount = body.base_amount if body.base_amount and body.base_amount > 0 else None

    db.commit()
    db.refresh(o)
    logger.info("order %s modified: %s", o.id, ", ".join(sorted(updates)))
    return o
