from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session
from ironshop.db import get_db
from ironshop.models.core import Order
from ironshop.services.catalog import Catalog, DEFAULT_CATALOG

def get_catalog() -> Catalog:
    return DEFAULT_CATALOG

def load_order(order_id: str, db: Session = Depends(get_db)) -> Order:
    o = db.get(Order, order_id)
    if not o:
        raise HTTPException(404, detail="order not found")
    return o
