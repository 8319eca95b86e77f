# Importing the module registers tables with Base for create_all()
from .core import (  # noqa: F401
    # Enums
    OrderStatus, PickupSlot,

    # Orders
    Order,

    # Customers & societies
    Customer, Society,
)

__all__ = [
    "OrderStatus", "PickupSlot",
    "Order",
    "Customer", "Society",
]
