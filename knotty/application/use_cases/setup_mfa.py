"""MFA enrollment use cases"""

import logging
from datetime import datetime, timedelta

from ...domain.enums import CodePurpose
from ...domain.exceptions import EmailDeliveryError, InvalidCodeError, NotFoundError
from ...domain.value_objects.entity_ids import UserId
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import SetupMfaResponse, UserSummaryDto, VerifyMfaSetupResponse
from ...core.config import settings
from ...core.logger import log_domain_events
from ...core.security import generate_mfa_secret, generate_verification_code
from ...infrastructure.external_services.email_service import EmailService


class SetupMfaUseCase:
    """Email a setup code; nothing is stored unless the email is accepted"""

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService, logger=None):
        self.unit_of_work = unit_of_work
        self.email_service = email_service
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: UserId) -> SetupMfaResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            secret = generate_mfa_secret()
            code = generate_verification_code()

            sent = await self.email_service.send_verification_code(str(user.email), code, CodePurpose.MFA_SETUP)
            if not sent:
                self.logger.error("Failed to deliver MFA setup code to user %s", user.id)
                raise EmailDeliveryError("Failed to send verification email")

            user.start_mfa_setup(
                secret,
                code,
                ttl=timedelta(minutes=settings.VERIFICATION_CODE_EXPIRE_MINUTES),
                now=datetime.utcnow(),
            )
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        self.logger.info("MFA setup initiated for user %s", user.id)
        return SetupMfaResponse()


class VerifyMfaSetupUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: UserId, setup_code: str) -> VerifyMfaSetupResponse:
        now = datetime.utcnow()
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            user.check_mfa_setup_code(setup_code, now)

            if not await self.unit_of_work.users.consume_mfa_setup_code(user.id, user.mfa_setup_code.code, now):
                raise InvalidCodeError("MFA setup not initiated or expired")
            user.mark_mfa_enabled()
            await self.unit_of_work.commit()

        log_domain_events(self.logger, user.get_events())
        return VerifyMfaSetupResponse(user=UserSummaryDto.from_entity(user))
