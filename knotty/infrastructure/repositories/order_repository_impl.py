"""Order repository implementation using SQLAlchemy ORM"""

from typing import Optional, List

from sqlalchemy.orm import Session

from ...domain.entities.order import Order, OrderItem
from ...domain.repositories.order_repository import IOrderRepository
from ...domain.value_objects.entity_ids import OrderId, ProductId, UserId
from ...domain.value_objects.money import Money
from ...domain.enums import OrderStatus
from ..orm.order_model import OrderModel, OrderItemModel


class OrderRepositoryImpl(IOrderRepository):
    """Repository implementation for Order aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, order_id: OrderId) -> Optional[Order]:
        """Get order by ID"""
        model = self.session.get(OrderModel, order_id.value)
        return self._map_to_entity(model) if model else None

    async def get_by_user_id(self, user_id: UserId, limit: Optional[int] = None) -> List[Order]:
        """Get orders by user ID, newest first"""
        query = (
            self.session.query(OrderModel)
            .filter(OrderModel.user_id == user_id.value)
            .order_by(OrderModel.created_at.desc())
        )
        if limit:
            query = query.limit(limit)
        return [self._map_to_entity(model) for model in query.all()]

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[Order]:
        """Get all orders with pagination"""
        models = (
            self.session.query(OrderModel)
            .order_by(OrderModel.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def add(self, order: Order) -> Order:
        """Add a new order together with its line items"""
        model = OrderModel(
            id=order.id.value,
            user_id=order.user_id.value,
            total=order.total.to_cents(),
            currency=order.total.currency,
            shipping_address=order.shipping_address,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemModel(
                    product_id=item.product_id.value,
                    quantity=item.quantity,
                    unit_price=item.unit_price.to_cents(),
                )
                for item in order.items
            ],
        )
        self.session.add(model)
        self.session.flush()
        return order

    async def update(self, order: Order) -> Order:
        """Update order status; items and total are fixed at placement"""
        existing = self.session.get(OrderModel, order.id.value)
        if existing:
            existing.status = order.status
            existing.shipping_address = order.shipping_address
            existing.updated_at = order.updated_at
            self.session.flush()
        return order

    async def has_delivered_order_with_product(self, user_id: UserId, product_id: ProductId) -> bool:
        """True when the user received at least one order containing the product"""
        match = (
            self.session.query(OrderModel.id)
            .join(OrderItemModel, OrderItemModel.order_id == OrderModel.id)
            .filter(
                OrderModel.user_id == user_id.value,
                OrderModel.status == OrderStatus.DELIVERED,
                OrderItemModel.product_id == product_id.value,
            )
            .first()
        )
        return match is not None

    def _map_to_entity(self, model: OrderModel) -> Order:
        """Map ORM model to domain entity"""
        return Order(
            id=OrderId(model.id),
            user_id=UserId(model.user_id),
            items=[
                OrderItem(
                    product_id=ProductId(item.product_id),
                    quantity=item.quantity,
                    unit_price=Money.from_cents(item.unit_price, model.currency),
                )
                for item in model.items
            ],
            total=Money.from_cents(model.total, model.currency),
            shipping_address=model.shipping_address,
            status=OrderStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
