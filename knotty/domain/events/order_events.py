"""Order domain events"""

from dataclasses import dataclass

from ..enums import OrderStatus
from ..value_objects.entity_ids import OrderId, UserId
from ..value_objects.money import Money


@dataclass(frozen=True)
class OrderPlaced:
    order_id: OrderId
    user_id: UserId
    total: Money
    item_count: int


@dataclass(frozen=True)
class OrderStatusChanged:
    order_id: OrderId
    old_status: OrderStatus
    new_status: OrderStatus
