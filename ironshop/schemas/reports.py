from pydantic import BaseModel, ConfigDict
from datetime import date

class RevenueWindowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    today: int
    month: int
    lifetime: int

class CustomerAggregateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    society_name: str
    block: str
    flat_number: str
    total_lifetime_revenue: int
    order_count: int

class RangeSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    date_from: date
    date_to: date
    total_orders: int
    total_revenue: int
    status_counts: dict[str, int]
    revenue_by_worker: dict[str, int]
