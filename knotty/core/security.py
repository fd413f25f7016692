"""Security utilities"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from .config import settings
from ..domain.enums import UserRole
import secrets


# Password context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class TokenError(Exception):
    """Base class for token verification failures"""


class InvalidTokenError(TokenError):
    """Signature mismatch or malformed token"""


class ExpiredTokenError(TokenError):
    """Token is past its expiry"""


class TokenClaimsError(TokenError):
    """Token verified but does not carry the claims this use requires"""


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    role: UserRole
    mfa_verified: bool


@dataclass(frozen=True)
class TempTokenClaims:
    user_id: str
    email: Optional[str]


def get_password_hash(password: str) -> str:
    """Hash password"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_verification_code() -> str:
    """Six uppercase hex characters, used for login, MFA setup and reset codes."""
    return secrets.token_hex(3).upper()


def generate_mfa_secret() -> str:
    return secrets.token_hex(20)


def _encode(claims: Dict[str, Any], expires_delta: timedelta) -> str:
    to_encode = dict(claims)
    to_encode["exp"] = datetime.utcnow() + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _decode(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as e:
        raise ExpiredTokenError("Token expired") from e
    except JWTError as e:
        raise InvalidTokenError("Invalid token") from e


def create_session_token(user_id: str, role: UserRole, mfa_verified: bool = False) -> str:
    """Create the token that authorizes role-gated operations"""
    return _encode(
        {"userId": str(user_id), "role": UserRole(role).value, "mfaVerified": mfa_verified},
        timedelta(minutes=settings.SESSION_TOKEN_EXPIRE_MINUTES),
    )


def create_temp_token(user_id: str, email: str) -> str:
    """Create the short-lived token that only allows submitting an MFA code"""
    return _encode(
        {"tempAuth": True, "userId": str(user_id), "mfaRequired": True, "email": email},
        timedelta(minutes=settings.TEMP_TOKEN_EXPIRE_MINUTES),
    )


def decode_session_token(token: str) -> SessionClaims:
    """Verify a session token.

    Both token kinds share the signing secret, so a valid signature is not
    enough: a temporary token must never pass here.
    """
    payload = _decode(token)

    if payload.get("tempAuth"):
        raise TokenClaimsError("Temporary token cannot be used for this operation")

    user_id = payload.get("userId")
    role = payload.get("role")
    if not user_id or role is None or "mfaVerified" not in payload:
        raise TokenClaimsError("Token is missing required claims")

    try:
        role = UserRole(role)
    except ValueError as e:
        raise TokenClaimsError("Invalid user role") from e

    return SessionClaims(user_id=str(user_id), role=role, mfa_verified=bool(payload["mfaVerified"]))


def decode_temp_token(token: str) -> TempTokenClaims:
    """Verify a temporary (MFA pending) token"""
    payload = _decode(token)

    if payload.get("tempAuth") is not True or payload.get("mfaRequired") is not True:
        raise TokenClaimsError("Invalid temporary token")

    user_id = payload.get("userId")
    if not user_id:
        raise TokenClaimsError("Invalid temporary token")

    return TempTokenClaims(user_id=str(user_id), email=payload.get("email"))
