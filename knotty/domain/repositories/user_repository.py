"""User repository interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List

from ..entities.user import User
from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId


class IUserRepository(ABC):

    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: Email) -> Optional[User]:
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        pass

    @abstractmethod
    async def exists_by_email(self, email: Email) -> bool:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def get_paginated(self, page: int, limit: int) -> List[User]:
        pass

    # Compare-and-clear operations. Each succeeds for exactly one caller:
    # the row only changes while the stored code still matches and is unexpired.

    @abstractmethod
    async def consume_mfa_code(self, user_id: UserId, code: str, now: datetime) -> bool:
        """Clear the login code if it matches; True when this call consumed it"""
        pass

    @abstractmethod
    async def consume_mfa_setup_code(self, user_id: UserId, code: str, now: datetime) -> bool:
        """Clear the setup code and enable MFA if it matches"""
        pass

    @abstractmethod
    async def consume_reset_code(self, user_id: UserId, code: str, now: datetime, hashed_password: str) -> bool:
        """Clear the reset code and store the new password hash if it matches"""
        pass
