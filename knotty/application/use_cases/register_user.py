"""Register user use case"""

import logging

from ...domain.entities.user import User
from ...domain.enums import UserRole
from ...domain.exceptions import ConflictError, ValidationError
from ...domain.value_objects.email import Email
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import RegisterUserDto, RegisterUserResponse
from ...core.logger import log_domain_events
from ...core.security import get_password_hash


class RegisterUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, request: RegisterUserDto) -> RegisterUserResponse:
        try:
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        async with self.unit_of_work:
            # Check if user exists
            if await self.unit_of_work.users.exists_by_email(email):
                raise ConflictError("User already exists")

            user = User.create(
                email=email,
                name=request.name,
                age=request.age,
                password=request.password,
                hash_password=get_password_hash,
                role=request.role or UserRole.CUSTOMER,
            )

            await self.unit_of_work.users.add(user)
            await self.unit_of_work.commit()

        log_domain_events(self.logger, user.get_events())
        return RegisterUserResponse(user_id=user.id.value)
