"""User ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Index, Table, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import UserRole


user_wishlist = Table(
    'user_wishlist',
    Base.metadata,
    Column('user_id', Uuid, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    Column('product_id', Uuid, ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
)


class UserModel(Base):
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String(50), nullable=False)
    age = Column(Integer, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(
        SQLEnum(UserRole, name='userrole', values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.CUSTOMER,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)

    # MFA fields
    mfa_enabled = Column(Boolean, default=False, nullable=False, index=True)
    mfa_secret = Column(String, nullable=True)
    mfa_code = Column(String(6), nullable=True)
    mfa_code_expires = Column(DateTime, nullable=True)
    mfa_setup_code = Column(String(6), nullable=True)
    mfa_setup_code_expires = Column(DateTime, nullable=True)

    # Password reset
    verification_code = Column(String(6), nullable=True)
    verification_code_expires = Column(DateTime, nullable=True)

    # Profile
    profile_image = Column(String, default='', nullable=False)
    phone_number = Column(String, default='', nullable=False)
    newsletter = Column(Boolean, default=True, nullable=False)
    email_notifications = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    shipping_addresses = relationship(
        'ShippingAddressModel',
        back_populates='user',
        cascade='all, delete-orphan',
        order_by='ShippingAddressModel.id',
    )
    wishlist = relationship('ProductModel', secondary=user_wishlist)
    orders = relationship('OrderModel', back_populates='user')
    reviews = relationship('ReviewModel', back_populates='user', cascade='all, delete-orphan')

    __table_args__ = (
        Index('ix_users_mfa_code_lookup', 'mfa_code', 'mfa_code_expires'),
    )


class ShippingAddressModel(Base):
    __tablename__ = 'shipping_addresses'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    address = Column(String, nullable=False)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    country = Column(String, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)

    user = relationship('UserModel', back_populates='shipping_addresses')
