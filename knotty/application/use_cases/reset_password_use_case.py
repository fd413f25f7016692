"""Reset password use case"""

import logging
from datetime import datetime

from ..dtos.user_dtos import ResetPasswordDto, ResetPasswordResponse
from ...core.logger import log_domain_events
from ...core.security import get_password_hash
from ...domain.exceptions import InvalidCodeError, NotFoundError, ValidationError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email


class ResetPasswordUseCase:
    """Use case for completing a password reset with an emailed code"""

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, request: ResetPasswordDto) -> ResetPasswordResponse:
        try:
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        now = datetime.utcnow()
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                raise NotFoundError("User not found")

            user.check_reset_code(request.verification_code, now)
            code = user.verification_code.code
            user.complete_password_reset(request.new_password, get_password_hash)

            # New hash and code removal land in one conditional update
            consumed = await self.unit_of_work.users.consume_reset_code(
                user.id, code, now, user.hashed_password
            )
            if not consumed:
                raise InvalidCodeError("Verification code has expired. Please request a new one.")
            await self.unit_of_work.commit()

        log_domain_events(self.logger, user.get_events())
        return ResetPasswordResponse(email=str(user.email))
