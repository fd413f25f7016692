"""Product ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Uuid, CheckConstraint
from sqlalchemy.sql import func

from ...db.models import Base


class ProductModel(Base):
    __tablename__ = 'products'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)  # Amount in cents
    currency = Column(String, default='USD', nullable=False)
    color = Column(String, nullable=False, index=True)
    size = Column(String, nullable=False, index=True)
    shape = Column(String, nullable=False, index=True)
    images = Column(JSON, nullable=False, default=list)
    stock = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint('stock >= 0', name='ck_products_stock_non_negative'),
    )
