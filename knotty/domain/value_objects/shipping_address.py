"""Shipping address value object"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ShippingAddress:
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    is_default: bool = False

    def __post_init__(self):
        if not self.address or not self.address.strip():
            raise ValueError("Address is required")

    def as_default(self, is_default: bool = True) -> "ShippingAddress":
        return replace(self, is_default=is_default)
