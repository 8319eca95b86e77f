import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from ironshop.db import get_db
from ironshop.models.core import Society
from ironshop.schemas.common import SocietyIn, SocietyOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/societies", tags=["societies"])

@router.get("/", response_model=list[SocietyOut])
def list_societies(db: Session = Depends(get_db)):
    return db.query(Society).order_by(Society.name.asc()).all()

@router.post("/", response_model=SocietyOut, status_code=201)
def create_society(body: SocietyIn, db: Session = Depends(get_db)):
    name = body.name.strip()
    if not name:
        raise HTTPException(400, detail="Society name is required")
    try:
        s = Society(name=name)
        db.add(s)
        db.commit()
        db.refresh(s)
    except IntegrityError:
        db.rollback()
        raise HTTPException(409, detail="A society with this name already exists")
    logger.info("society %r added", name)
    return s
