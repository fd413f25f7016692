"""Login user use case"""

import logging
from datetime import datetime, timedelta

from ...domain.value_objects.email import Email
from ...domain.enums import CodePurpose
from ...domain.exceptions import EmailDeliveryError, NotFoundError, UnauthorizedError, ValidationError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import LoginUserDto, LoginResponse, UserSummaryDto
from ...core.config import settings
from ...core.security import (
    create_session_token,
    create_temp_token,
    generate_verification_code,
    verify_password,
)
from ...infrastructure.external_services.email_service import EmailService


class LoginUserUseCase:
    """Password check, then either a session or an emailed MFA challenge"""

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService, logger=None):
        self.unit_of_work = unit_of_work
        self.email_service = email_service
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, request: LoginUserDto) -> LoginResponse:
        try:
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                raise NotFoundError("Email not found")

            user.ensure_active()

            if not verify_password(request.password, user.hashed_password):
                self.logger.info("Login rejected for user %s: incorrect password", user.id)
                raise UnauthorizedError("Incorrect password")

            if not user.mfa_enabled:
                token = create_session_token(str(user.id), user.role, mfa_verified=False)
                self.logger.info("User %s logged in", user.id)
                return LoginResponse(
                    message="Login successful",
                    token=token,
                    user=UserSummaryDto.from_entity(user),
                )

            code = generate_verification_code()
            user.start_login_challenge(
                code,
                ttl=timedelta(minutes=settings.VERIFICATION_CODE_EXPIRE_MINUTES),
                now=datetime.utcnow(),
            )
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        sent = await self.email_service.send_verification_code(str(user.email), code, CodePurpose.LOGIN)
        if not sent:
            self.logger.error("Failed to deliver login code to user %s", user.id)
            raise EmailDeliveryError("Failed to send MFA code")

        self.logger.info("MFA challenge issued for user %s", user.id)
        return LoginResponse(
            message="MFA code sent to your email",
            mfa_required=True,
            temp_token=create_temp_token(str(user.id), str(user.email)),
        )
