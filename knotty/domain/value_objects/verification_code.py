"""One-time verification code value object"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
import hmac

DEFAULT_CODE_TTL = timedelta(minutes=10)


@dataclass(frozen=True)
class VerificationCode:
    code: str
    expires_at: datetime

    @classmethod
    def issue(cls, code: str, ttl: timedelta = DEFAULT_CODE_TTL, now: Optional[datetime] = None) -> "VerificationCode":
        now = now or datetime.utcnow()
        return cls(code=code, expires_at=now + ttl)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) > self.expires_at

    def equals(self, candidate: Optional[str]) -> bool:
        if not candidate:
            return False
        return hmac.compare_digest(self.code.encode(), candidate.strip().encode())

    def matches(self, candidate: Optional[str], now: Optional[datetime] = None) -> bool:
        """Correct and still valid"""
        return not self.is_expired(now) and self.equals(candidate)
