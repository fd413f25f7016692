"""Order entity with business logic"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ..value_objects.money import Money
from ..value_objects.entity_ids import OrderId, ProductId, UserId
from ..enums import OrderStatus
from ..exceptions import ValidationError
from ..events.order_events import OrderPlaced, OrderStatusChanged


# Forward-only lifecycle; delivered and cancelled are terminal
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


@dataclass(frozen=True)
class OrderItem:
    product_id: ProductId
    quantity: int
    unit_price: Money

    def __post_init__(self):
        if self.quantity is None or self.quantity < 1:
            raise ValidationError("Quantity must be at least 1")

    @property
    def subtotal(self) -> Money:
        return self.unit_price.times(self.quantity)


@dataclass
class Order:
    id: OrderId
    user_id: UserId
    items: List[OrderItem]
    total: Money
    shipping_address: str
    status: OrderStatus = OrderStatus.PENDING

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events
    _events: List = field(default_factory=list, init=False, repr=False, compare=False)

    @classmethod
    def place(cls, user_id: UserId, items: List[OrderItem], shipping_address: str) -> 'Order':
        """Business logic: build a pending order whose total is fixed at placement"""
        if not items:
            raise ValidationError("Order must contain at least one product")
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")

        total = Money.zero(items[0].unit_price.currency)
        for item in items:
            total = total + item.subtotal

        order = cls(
            id=OrderId.generate(),
            user_id=user_id,
            items=list(items),
            total=total,
            shipping_address=shipping_address.strip(),
        )
        order._events.append(OrderPlaced(
            order_id=order.id,
            user_id=user_id,
            total=total,
            item_count=sum(i.quantity for i in items),
        ))
        return order

    def change_status(self, new_status: OrderStatus) -> None:
        """Business logic: move the order forward"""
        new_status = OrderStatus(new_status)
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise ValidationError(f"Cannot change order status from {self.status.value} to {new_status.value}")

        old_status = self.status
        self.status = new_status
        self.updated_at = datetime.utcnow()

        self._events.append(OrderStatusChanged(
            order_id=self.id,
            old_status=old_status,
            new_status=new_status
        ))

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
