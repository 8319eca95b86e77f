from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ironshop.db import get_db
from ironshop.models.core import Customer
from ironshop.schemas.common import CustomerOut

router = APIRouter(prefix="/customers", tags=["customers"])

@router.get("/", response_model=CustomerOut | None)
def get_customer(phone: str = "", db: Session = Depends(get_db)):
    """Saved profile for the booking form; null when the phone is new."""
    phone = phone.strip()
    if not phone:
        raise HTTPException(400, detail="Missing phone query param")
    return db.query(Customer).filter(Customer.phone == phone).first()
