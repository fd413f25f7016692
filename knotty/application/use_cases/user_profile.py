"""Self-service profile use cases"""

import logging

from ...domain.entities.user import User
from ...domain.exceptions import NotFoundError
from ...domain.value_objects.entity_ids import UserId
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.order_dtos import OrderResponseDTO
from ...application.dtos.user_dtos import (
    CustomerProfileResponse,
    UpdateProfileDto,
    UserDto,
    UserUpdateResponse,
)
from ...core.logger import log_domain_events
from ...core.security import get_password_hash

RECENT_ORDERS_LIMIT = 10


def apply_profile_update(user: User, request: UpdateProfileDto) -> None:
    """Shared by self-service and admin updates. Rehashes only when a password is given."""
    user.update_profile(
        name=request.name,
        age=request.age,
        phone_number=request.phone_number,
        profile_image=request.profile_image,
        newsletter=request.newsletter,
        email_notifications=request.email_notifications,
    )
    if request.password:
        user.set_password(request.password, get_password_hash)


class GetUserProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId) -> UserDto:
        """Get user profile"""
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")
            return UserDto.from_entity(user)


class UpdateUserProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: UserId, request: UpdateProfileDto) -> UserUpdateResponse:
        """Update user profile"""
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            apply_profile_update(user, request)

            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        log_domain_events(self.logger, user.get_events())
        return UserUpdateResponse(user=UserDto.from_entity(user))


class GetCustomerProfileUseCase:
    """Profile together with the most recent orders"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId) -> CustomerProfileResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            orders = await self.unit_of_work.orders.get_by_user_id(user_id, limit=RECENT_ORDERS_LIMIT)
            return CustomerProfileResponse(
                user=UserDto.from_entity(user),
                recent_orders=[OrderResponseDTO.from_entity(o) for o in orders],
            )
