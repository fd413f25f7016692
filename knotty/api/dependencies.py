"""API dependencies: persistence, services and route guards"""

from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.logger import get_logger
from ..core.security import SessionClaims, TokenError, decode_session_token
from ..db.database import get_db
from ..domain.enums import UserRole
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..domain.value_objects.entity_ids import UserId
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from ..infrastructure.external_services.email_service import EmailService


class TokenSource(ABC):
    """Where a route expects its session token to come from"""

    @abstractmethod
    async def extract(self, request: Request) -> Optional[str]:
        pass


class BearerTokenSource(TokenSource):

    def __init__(self):
        self.scheme = HTTPBearer(auto_error=False)

    async def extract(self, request: Request) -> Optional[str]:
        credentials = await self.scheme(request)
        return credentials.credentials if credentials else None


class CookieTokenSource(TokenSource):

    def __init__(self, cookie_name: str = settings.SESSION_COOKIE_NAME):
        self.cookie_name = cookie_name

    async def extract(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.cookie_name) or None


class SessionAuthenticator:
    """Verifies a session token from one source and attaches the principal.

    No token is a 401; a token that fails verification, including a temporary
    MFA token or an unknown role, is a 403.
    """

    def __init__(self, source: TokenSource):
        self.source = source

    async def __call__(self, request: Request) -> SessionClaims:
        token = await self.source.extract(request)
        if not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Access denied. No token provided."
            )

        try:
            principal = decode_session_token(token)
        except TokenError as e:
            get_request_logger(request).info("Rejected session token: %s", e)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid token"
            )

        request.state.principal = principal
        return principal


bearer_authenticator = SessionAuthenticator(BearerTokenSource())
cookie_authenticator = SessionAuthenticator(CookieTokenSource())


def require_roles(*roles: UserRole, authenticator: SessionAuthenticator = bearer_authenticator):
    """Dependency factory gating a route to the given roles"""
    allowed = frozenset(UserRole(role) for role in roles)

    async def check_role(principal: SessionClaims = Depends(authenticator)) -> SessionClaims:
        if principal.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Insufficient permissions."
            )
        return principal

    return check_role


get_current_principal = require_roles(UserRole.ADMIN, UserRole.CUSTOMER)
get_current_admin = require_roles(UserRole.ADMIN)
get_current_customer = require_roles(UserRole.CUSTOMER)
get_cookie_principal = require_roles(UserRole.ADMIN, UserRole.CUSTOMER, authenticator=cookie_authenticator)


def principal_user_id(principal: SessionClaims) -> UserId:
    try:
        return UserId.from_str(principal.user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token"
        )


def get_unit_of_work(db: Session = Depends(get_db)) -> IUnitOfWork:
    """Get unit of work"""
    return UnitOfWorkImpl(db)


def get_email_service() -> EmailService:
    """Get email service"""
    return EmailService()


def get_request_logger(request: Request):
    """Logger tagged with the id the request-id middleware assigned"""
    return get_logger("knotty.api", getattr(request.state, "request_id", None))
