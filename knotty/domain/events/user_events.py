"""User domain events"""

from dataclasses import dataclass
from datetime import datetime

from ..enums import UserRole
from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId


@dataclass(frozen=True)
class UserRegistered:
    user_id: UserId
    email: Email
    role: UserRole


@dataclass(frozen=True)
class UserMfaEnabled:
    user_id: UserId
    enabled_at: datetime


@dataclass(frozen=True)
class UserPasswordChanged:
    user_id: UserId
    changed_at: datetime


@dataclass(frozen=True)
class UserRoleChanged:
    user_id: UserId
    old_role: UserRole
    new_role: UserRole


@dataclass(frozen=True)
class UserDeactivated:
    user_id: UserId
