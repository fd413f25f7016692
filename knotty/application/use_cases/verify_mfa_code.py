"""Second login step: exchange a temp token and emailed code for a session"""

import logging
from datetime import datetime
from typing import Optional

from ...domain.exceptions import InvalidCodeError, NotFoundError, UnauthorizedError, ValidationError
from ...domain.value_objects.entity_ids import UserId
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import LoginResponse, UserSummaryDto
from ...core.security import ExpiredTokenError, TokenError, create_session_token, decode_temp_token


class VerifyMfaCodeUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, temp_token: Optional[str], mfa_code: Optional[str]) -> LoginResponse:
        if not temp_token or not mfa_code:
            raise ValidationError("MFA code and temporary token are required")

        try:
            claims = decode_temp_token(temp_token)
        except ExpiredTokenError as e:
            raise UnauthorizedError("Token expired") from e
        except TokenError as e:
            raise UnauthorizedError("Invalid temporary token") from e

        try:
            user_id = UserId.from_str(claims.user_id)
        except ValueError as e:
            raise UnauthorizedError("Invalid temporary token") from e

        now = datetime.utcnow()
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")
            user.ensure_active()

            if not user.mfa_enabled:
                raise ValidationError("MFA is not enabled for this user")

            if not user.validate_mfa_code(mfa_code, now):
                self.logger.info("MFA code rejected for user %s", user.id)
                raise InvalidCodeError("MFA code not requested or expired")

            # A concurrent request may have consumed the same code first
            if not await self.unit_of_work.users.consume_mfa_code(user.id, user.mfa_code.code, now):
                raise InvalidCodeError("MFA code not requested or expired")
            user.clear_login_challenge()
            await self.unit_of_work.commit()

        self.logger.info("MFA verified for user %s", user.id)
        return LoginResponse(
            message="MFA verified successfully",
            token=create_session_token(str(user.id), user.role, mfa_verified=True),
            user=UserSummaryDto.from_entity(user),
        )
