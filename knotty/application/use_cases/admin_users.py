"""Admin user management use cases"""

import logging
import math

from ...domain.exceptions import NotFoundError
from ...domain.enums import UserRole
from ...domain.value_objects.entity_ids import UserId
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import AdminUpdateUserDto, UserDto, UserListResponse, UserUpdateResponse
from ...core.logger import log_domain_events
from .user_profile import apply_profile_update


class ListUsersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, page: int = 1, limit: int = 20) -> UserListResponse:
        async with self.unit_of_work:
            total = await self.unit_of_work.users.count()
            users = await self.unit_of_work.users.get_paginated(page, limit)
            return UserListResponse(
                users=[UserDto.from_entity(u) for u in users],
                total=total,
                page=page,
                limit=limit,
                pages=math.ceil(total / limit) if total else 0,
            )


class GetUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId) -> UserDto:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")
            return UserDto.from_entity(user)


class AdminUpdateUserUseCase:
    """Profile fields plus role and active flag"""

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: UserId, request: AdminUpdateUserDto) -> UserUpdateResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            apply_profile_update(user, request)
            if request.role is not None:
                user.change_role(request.role)
            if request.is_active is not None:
                user.set_active(request.is_active)

            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        log_domain_events(self.logger, user.get_events())
        return UserUpdateResponse(message="User updated successfully", user=UserDto.from_entity(user))


class ChangeUserRoleUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: UserId, role: UserRole) -> UserUpdateResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            user.change_role(role)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        log_domain_events(self.logger, user.get_events())
        return UserUpdateResponse(message="User role updated successfully", user=UserDto.from_entity(user))


class DeleteUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: UserId) -> None:
        async with self.unit_of_work:
            if not await self.unit_of_work.users.delete(user_id):
                raise NotFoundError("User not found")
            await self.unit_of_work.commit()

        self.logger.info("User %s deleted", user_id)
