from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import date, datetime
from ironshop.models.core import OrderStatus

PickupSlotLiteral = Literal["Morning", "Evening"]

class OrderIn(BaseModel):
    customer_name: str
    phone: str
    society_name: str
    flat_number: str
    block: Optional[str] = None
    pickup_date: date
    pickup_slot: PickupSlotLiteral
    express_delivery: bool = False
    self_drop: bool = False
    notes: Optional[str] = None
    items_json: Optional[dict[str, int]] = None
    base_amount: Optional[int] = None

class AdminOrderIn(OrderIn):
    status: Optional[Literal["NEW", "PICKED"]] = None  # defaults from self_drop

class OrderUpdateIn(BaseModel):
    action: Optional[Literal["cancel"]] = None
    pickup_date: Optional[date] = None
    pickup_slot: Optional[PickupSlotLiteral] = None
    notes: Optional[str] = None
    items_json: Optional[dict[str, int]] = None
    base_amount: Optional[int] = None

class AdminOrderPatch(BaseModel):
    status: Optional[OrderStatus] = None
    worker_name: Optional[str] = None

class BulkStatusIn(BaseModel):
    ids: list[str] = Field(min_length=1)
    status: OrderStatus

class BillingIn(BaseModel):
    base_amount: Optional[str | int] = None        # raw text from the staff input box
    discount_percent: Optional[int] = None
    items_json: Optional[dict[str, int | str]] = None
    items_changed: bool = False

class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    created_at: datetime
    customer_name: str
    phone: str
    society_name: str
    block: Optional[str] = None
    flat_number: str
    pickup_date: Optional[date] = None
    pickup_slot: Optional[str] = None
    status: OrderStatus
    express_delivery: bool
    self_drop: bool
    notes: Optional[str] = None
    worker_name: Optional[str] = None
    items_json: Optional[dict[str, int]] = None
    items_estimated_total: Optional[int] = None
    delivery_charge: Optional[int] = None
    express_charge: Optional[int] = None
    estimated_total: Optional[int] = None
    base_amount: Optional[int] = None
    total_price: Optional[int] = None

class BillingOut(BaseModel):
    order: OrderOut
    base_amount: Optional[int] = None
    final_total: Optional[int] = None
    discount_percent: int
    billable: bool
