"""User repository implementation"""

from datetime import datetime
from typing import Optional, List

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.repositories.user_repository import IUserRepository
from ...domain.entities.user import User
from ...domain.exceptions import ConflictError
from ...domain.value_objects.email import Email
from ...domain.value_objects.entity_ids import ProductId, UserId
from ...domain.value_objects.shipping_address import ShippingAddress
from ...domain.value_objects.verification_code import VerificationCode
from ...domain.enums import UserRole
from ..orm.user_model import UserModel, ShippingAddressModel
from ..orm.product_model import ProductModel


class UserRepositoryImpl(IUserRepository):
    """Repository implementation for User aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        """Get user by ID"""
        model = self.session.get(UserModel, user_id.value)
        return self._map_to_entity(model) if model else None

    async def get_by_email(self, email: Email) -> Optional[User]:
        """Get user by email"""
        model = self.session.query(UserModel).filter(UserModel.email == str(email)).first()
        return self._map_to_entity(model) if model else None

    async def exists_by_email(self, email: Email) -> bool:
        """Check if user exists by email"""
        return self.session.query(UserModel.id).filter(UserModel.email == str(email)).first() is not None

    async def add(self, user: User) -> User:
        """Add a new user"""
        model = UserModel(id=user.id.value, created_at=user.created_at)
        self._update_model_from_entity(model, user)
        self.session.add(model)
        try:
            self.session.flush()
        except IntegrityError as e:
            raise ConflictError("User already exists") from e
        return user

    async def update(self, user: User) -> User:
        """Update an existing user"""
        existing = self.session.get(UserModel, user.id.value)
        if existing:
            self._update_model_from_entity(existing, user)
            self.session.flush()
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete user"""
        model = self.session.get(UserModel, user_id.value)
        if not model:
            return False
        self.session.delete(model)
        try:
            self.session.flush()
        except IntegrityError as e:
            raise ConflictError("User has orders and cannot be deleted; deactivate the account instead") from e
        return True

    async def count(self) -> int:
        """Count total users"""
        return self.session.query(UserModel).count()

    async def get_paginated(self, page: int, limit: int) -> List[User]:
        """Get paginated users"""
        offset = (page - 1) * limit
        models = (
            self.session.query(UserModel)
            .order_by(UserModel.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def consume_mfa_code(self, user_id: UserId, code: str, now: datetime) -> bool:
        result = self.session.execute(
            update(UserModel)
            .where(
                UserModel.id == user_id.value,
                UserModel.mfa_code == code,
                UserModel.mfa_code_expires >= now,
            )
            .values(mfa_code=None, mfa_code_expires=None)
        )
        return result.rowcount == 1

    async def consume_mfa_setup_code(self, user_id: UserId, code: str, now: datetime) -> bool:
        result = self.session.execute(
            update(UserModel)
            .where(
                UserModel.id == user_id.value,
                UserModel.mfa_setup_code == code,
                UserModel.mfa_setup_code_expires >= now,
            )
            .values(mfa_enabled=True, mfa_setup_code=None, mfa_setup_code_expires=None)
        )
        return result.rowcount == 1

    async def consume_reset_code(self, user_id: UserId, code: str, now: datetime, hashed_password: str) -> bool:
        result = self.session.execute(
            update(UserModel)
            .where(
                UserModel.id == user_id.value,
                UserModel.verification_code == code,
                UserModel.verification_code_expires >= now,
            )
            .values(
                hashed_password=hashed_password,
                verification_code=None,
                verification_code_expires=None,
            )
        )
        return result.rowcount == 1

    def _update_model_from_entity(self, model: UserModel, user: User) -> None:
        """Update ORM model from domain entity"""
        model.email = str(user.email)
        model.name = user.name
        model.age = user.age
        model.hashed_password = user.hashed_password
        model.role = user.role
        model.is_active = user.is_active
        model.mfa_enabled = user.mfa_enabled
        model.mfa_secret = user.mfa_secret
        model.mfa_code, model.mfa_code_expires = self._split_code(user.mfa_code)
        model.mfa_setup_code, model.mfa_setup_code_expires = self._split_code(user.mfa_setup_code)
        model.verification_code, model.verification_code_expires = self._split_code(user.verification_code)
        model.profile_image = user.profile_image
        model.phone_number = user.phone_number
        model.newsletter = user.newsletter
        model.email_notifications = user.email_notifications
        model.updated_at = user.updated_at

        self._sync_shipping_addresses(model, list(user.shipping_addresses))

        product_ids = [p.value for p in user.wishlist]
        if product_ids:
            products = self.session.query(ProductModel).filter(ProductModel.id.in_(product_ids)).all()
            by_id = {p.id: p for p in products}
            model.wishlist = [by_id[pid] for pid in product_ids if pid in by_id]
        else:
            model.wishlist = []

    @staticmethod
    def _sync_shipping_addresses(model: UserModel, addresses: List[ShippingAddress]) -> None:
        """Match address rows to the entity by position, so unchanged rows are left alone"""
        rows = model.shipping_addresses
        for row, address in zip(rows, addresses):
            row.address = address.address
            row.city = address.city
            row.state = address.state
            row.zip_code = address.zip_code
            row.country = address.country
            row.is_default = address.is_default
        for address in addresses[len(rows):]:
            rows.append(ShippingAddressModel(
                address=address.address,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
                is_default=address.is_default,
            ))
        del rows[len(addresses):]

    @staticmethod
    def _split_code(code: Optional[VerificationCode]):
        if code is None:
            return None, None
        return code.code, code.expires_at

    @staticmethod
    def _join_code(code: Optional[str], expires_at: Optional[datetime]) -> Optional[VerificationCode]:
        if not code or not expires_at:
            return None
        return VerificationCode(code=code, expires_at=expires_at)

    def _map_to_entity(self, model: UserModel) -> User:
        """Map ORM model to domain entity"""
        return User(
            id=UserId(model.id),
            email=Email(model.email),
            name=model.name,
            age=model.age,
            hashed_password=model.hashed_password,
            role=UserRole(model.role),
            is_active=model.is_active,
            mfa_enabled=model.mfa_enabled,
            mfa_secret=model.mfa_secret,
            mfa_code=self._join_code(model.mfa_code, model.mfa_code_expires),
            mfa_setup_code=self._join_code(model.mfa_setup_code, model.mfa_setup_code_expires),
            verification_code=self._join_code(model.verification_code, model.verification_code_expires),
            profile_image=model.profile_image or '',
            phone_number=model.phone_number or '',
            newsletter=model.newsletter,
            email_notifications=model.email_notifications,
            shipping_addresses=[
                ShippingAddress(
                    address=a.address,
                    city=a.city,
                    state=a.state,
                    zip_code=a.zip_code,
                    country=a.country,
                    is_default=a.is_default,
                )
                for a in model.shipping_addresses
            ],
            wishlist=[ProductId(p.id) for p in model.wishlist],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
