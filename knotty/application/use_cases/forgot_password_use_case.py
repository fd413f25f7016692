"""Forgot password use case"""

import logging
from datetime import datetime, timedelta

from ..dtos.user_dtos import ForgotPasswordDto, ForgotPasswordResponse
from ...core.config import settings
from ...core.security import generate_verification_code
from ...domain.enums import CodePurpose
from ...domain.exceptions import EmailDeliveryError, NotFoundError, ValidationError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...infrastructure.external_services.email_service import EmailService


class ForgotPasswordUseCase:
    """Use case for handling forgot password requests"""

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService, logger=None):
        self.unit_of_work = unit_of_work
        self.email_service = email_service
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, request: ForgotPasswordDto) -> ForgotPasswordResponse:
        """Issue a reset code, replacing any pending one, and email it"""
        try:
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                raise NotFoundError("User not found")

            code = generate_verification_code()
            user.start_password_reset(
                code,
                ttl=timedelta(minutes=settings.VERIFICATION_CODE_EXPIRE_MINUTES),
                now=datetime.utcnow(),
            )
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        sent = await self.email_service.send_verification_code(str(user.email), code, CodePurpose.PASSWORD_RESET)
        if not sent:
            self.logger.error("Failed to deliver password reset code to user %s", user.id)
            raise EmailDeliveryError("Failed to send verification code")

        self.logger.info("Password reset code issued for user %s", user.id)
        return ForgotPasswordResponse(email=str(user.email))
