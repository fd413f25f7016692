"""Review ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, Text, DateTime, Boolean, ForeignKey, JSON, Uuid, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base


class ReviewModel(Base):
    __tablename__ = 'reviews'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    product_id = Column(Uuid, ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    photos = Column(JSON, nullable=False, default=list)
    is_verified_buyer = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship('UserModel', back_populates='reviews')

    __table_args__ = (
        UniqueConstraint('user_id', 'product_id', name='uq_reviews_user_product'),
        CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
    )
