"""Order ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Uuid, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import OrderStatus


class OrderModel(Base):
    __tablename__ = 'orders'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    user_id = Column(Uuid, ForeignKey('users.id'), nullable=False, index=True)

    total = Column(Integer, nullable=False)  # Amount in cents
    currency = Column(String, default='USD', nullable=False)
    shipping_address = Column(String, nullable=False)
    status = Column(
        SQLEnum(OrderStatus, name='orderstatus', values_callable=lambda statuses: [s.value for s in statuses]),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship('UserModel', back_populates='orders')
    items = relationship(
        'OrderItemModel',
        back_populates='order',
        cascade='all, delete-orphan',
        order_by='OrderItemModel.id',
    )


class OrderItemModel(Base):
    __tablename__ = 'order_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Uuid, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False, index=True)
    product_id = Column(Uuid, ForeignKey('products.id'), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)  # Price in cents captured at placement

    order = relationship('OrderModel', back_populates='items')

    __table_args__ = (
        CheckConstraint('quantity >= 1', name='ck_order_items_quantity_positive'),
    )
