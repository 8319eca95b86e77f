from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    customer_name: str
    phone: str
    society_name: Optional[str] = None
    block: Optional[str] = None
    flat_number: Optional[str] = None

class SocietyIn(BaseModel):
    name: str

class SocietyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    created_at: datetime
