import logging
import re
from sqlalchemy.orm import Session
from ironshop.models.core import Customer

logger = logging.getLogger(__name__)

def normalize_flat(value: str) -> str:
    # "T16", "t 16", "T:16" -> "t16"
    return re.sub(r"[^a-z0-9]", "", (value or "").lower())

def upsert_customer(db: Session, *, customer_name: str, phone: str, society_name: str | None,
                    flat_number: str | None, block: str | None) -> Customer:
    """Saved profile keyed by phone; the latest booking's address wins."""
    phone = phone.strip()
    c = db.query(Customer).filter(Customer.phone == phone).first()
    if not c:
        c = Customer(phone=phone, customer_name=customer_name)
        db.add(c)
        logger.info("new customer profile for %s", phone)
    c.customer_name = customer_name
    c.society_name = society_name
    c.flat_number = flat_number
    c.block = block
    return c

def match_by_flat(db: Session, society: str, flat: str, limit: int = 100) -> list[Customer]:
    if not society.strip() or not flat.strip():
        return []
    wanted = normalize_flat(flat)
    rows = (db.query(Customer)
              .filter(Customer.society_name == society.strip())
              .limit(limit)
              .all())
    return [c for c in rows if c.flat_number and normalize_flat(c.flat_number) == wanted]
