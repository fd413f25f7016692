"""Email value object"""

from dataclasses import dataclass
import re

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self):
        # Stored lower-cased so uniqueness is case-insensitive
        normalized = (self.value or "").strip().lower()
        if not _EMAIL_RE.match(normalized):
            raise ValueError("Please enter a valid email")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
