"""User entity with business logic"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from ..value_objects.email import Email
from ..value_objects.entity_ids import ProductId, UserId
from ..value_objects.shipping_address import ShippingAddress
from ..value_objects.verification_code import DEFAULT_CODE_TTL, VerificationCode
from ..enums import UserRole
from ..exceptions import ForbiddenError, InvalidCodeError, ValidationError
from ..events.user_events import (
    UserDeactivated,
    UserMfaEnabled,
    UserPasswordChanged,
    UserRegistered,
    UserRoleChanged,
)

MIN_AGE = 18
MAX_AGE = 100
MIN_PASSWORD_LENGTH = 6


@dataclass
class User:
    id: UserId
    email: Email
    name: str
    age: int
    hashed_password: str = ""
    role: UserRole = UserRole.CUSTOMER
    is_active: bool = True

    # MFA
    mfa_enabled: bool = False
    mfa_secret: Optional[str] = None
    mfa_code: Optional[VerificationCode] = None
    mfa_setup_code: Optional[VerificationCode] = None

    # Password reset
    verification_code: Optional[VerificationCode] = None

    # Profile / commerce
    profile_image: str = ""
    phone_number: str = ""
    newsletter: bool = True
    email_notifications: bool = True
    shipping_addresses: List[ShippingAddress] = field(default_factory=list)
    wishlist: List[ProductId] = field(default_factory=list)

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events
    _events: List = field(default_factory=list, init=False, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        email: Email,
        name: str,
        age: int,
        password: str,
        hash_password: Callable[[str], str],
        role: UserRole = UserRole.CUSTOMER,
    ) -> 'User':
        """Factory method to create a new user with proper defaults"""
        cls.validate_name(name)
        cls.validate_age(age)
        user = cls(
            id=UserId.generate(),
            email=email,
            name=name.strip(),
            age=age,
            role=UserRole(role),
        )
        user.set_password(password, hash_password)
        user._events.append(UserRegistered(user_id=user.id, email=user.email, role=user.role))
        return user

    @staticmethod
    def validate_age(age: int) -> None:
        if age is None or age < MIN_AGE or age > MAX_AGE:
            raise ValidationError(f"Age must be between {MIN_AGE} and {MAX_AGE}")

    @staticmethod
    def validate_name(name: str) -> None:
        if not name or not 2 <= len(name.strip()) <= 50:
            raise ValidationError("Name must be between 2 and 50 characters long")

    # Credentials

    def set_password(self, password: str, hash_password: Callable[[str], str]) -> None:
        """Always hashes. Only flows that intend to change the password call this."""
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        had_password = bool(self.hashed_password)
        self.hashed_password = hash_password(password)
        self.updated_at = datetime.utcnow()

        if had_password:
            self._events.append(UserPasswordChanged(user_id=self.id, changed_at=self.updated_at))

    def ensure_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError("Account is inactive")

    # Login challenge

    def start_login_challenge(self, code: str, ttl: timedelta = DEFAULT_CODE_TTL, now: Optional[datetime] = None) -> VerificationCode:
        """Replaces any pending login code"""
        self.mfa_code = VerificationCode.issue(code, ttl, now)
        return self.mfa_code

    def validate_mfa_code(self, code: str, now: Optional[datetime] = None) -> bool:
        """False for a never-requested, expired or wrong code"""
        if self.mfa_code is None:
            return False
        return self.mfa_code.matches(code, now)

    def clear_login_challenge(self) -> None:
        self.mfa_code = None

    # MFA enrollment

    def start_mfa_setup(self, secret: str, code: str, ttl: timedelta = DEFAULT_CODE_TTL, now: Optional[datetime] = None) -> VerificationCode:
        self.mfa_secret = secret
        self.mfa_enabled = False
        self.mfa_setup_code = VerificationCode.issue(code, ttl, now)
        self.updated_at = datetime.utcnow()
        return self.mfa_setup_code

    def check_mfa_setup_code(self, code: str, now: Optional[datetime] = None) -> None:
        pending = self.mfa_setup_code
        if pending is None:
            raise InvalidCodeError("MFA setup not initiated or expired")
        if pending.is_expired(now):
            raise InvalidCodeError("MFA setup code expired")
        if not pending.equals(code):
            raise InvalidCodeError("Invalid setup code")

    def mark_mfa_enabled(self) -> None:
        self.mfa_enabled = True
        self.mfa_setup_code = None
        self.updated_at = datetime.utcnow()
        self._events.append(UserMfaEnabled(user_id=self.id, enabled_at=self.updated_at))

    # Password reset

    def start_password_reset(self, code: str, ttl: timedelta = DEFAULT_CODE_TTL, now: Optional[datetime] = None) -> VerificationCode:
        self.verification_code = VerificationCode.issue(code, ttl, now)
        return self.verification_code

    def check_reset_code(self, code: str, now: Optional[datetime] = None) -> None:
        pending = self.verification_code
        if pending is None:
            raise InvalidCodeError("No verification code found. Please request a new one.")
        if not pending.equals(code):
            raise InvalidCodeError("Invalid verification code")
        if pending.is_expired(now):
            raise InvalidCodeError("Verification code has expired. Please request a new one.")

    def complete_password_reset(self, new_password: str, hash_password: Callable[[str], str]) -> None:
        self.set_password(new_password, hash_password)
        self.verification_code = None

    # Administration

    def change_role(self, role: UserRole) -> None:
        role = UserRole(role)
        if role == self.role:
            return
        old_role = self.role
        self.role = role
        self.updated_at = datetime.utcnow()
        self._events.append(UserRoleChanged(user_id=self.id, old_role=old_role, new_role=role))

    def set_active(self, is_active: bool) -> None:
        if self.is_active and not is_active:
            self._events.append(UserDeactivated(user_id=self.id))
        self.is_active = is_active
        self.updated_at = datetime.utcnow()

    def update_profile(
        self,
        name: Optional[str] = None,
        age: Optional[int] = None,
        phone_number: Optional[str] = None,
        profile_image: Optional[str] = None,
        newsletter: Optional[bool] = None,
        email_notifications: Optional[bool] = None,
    ) -> None:
        if name is not None:
            self.validate_name(name)
            self.name = name.strip()
        if age is not None:
            self.validate_age(age)
            self.age = age
        if phone_number is not None:
            self.phone_number = phone_number
        if profile_image is not None:
            self.profile_image = profile_image
        if newsletter is not None:
            self.newsletter = newsletter
        if email_notifications is not None:
            self.email_notifications = email_notifications
        self.updated_at = datetime.utcnow()

    # Commerce

    def add_shipping_address(self, address: ShippingAddress) -> None:
        """A new default address demotes the previous default"""
        if address.is_default:
            self.shipping_addresses = [a.as_default(False) for a in self.shipping_addresses]
        self.shipping_addresses.append(address)
        self.updated_at = datetime.utcnow()

    @property
    def default_shipping_address(self) -> Optional[ShippingAddress]:
        return next((a for a in self.shipping_addresses if a.is_default), None)

    def add_to_wishlist(self, product_id: ProductId) -> bool:
        if product_id in self.wishlist:
            return False
        self.wishlist.append(product_id)
        self.updated_at = datetime.utcnow()
        return True

    def remove_from_wishlist(self, product_id: ProductId) -> None:
        self.wishlist = [p for p in self.wishlist if p != product_id]
        self.updated_at = datetime.utcnow()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
