"""User DTOs for API layer"""

from pydantic import EmailStr, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from .base import CamelModel
from .order_dtos import OrderResponseDTO
from ...domain.enums import UserRole


class RegisterUserDto(CamelModel):
    """DTO for user registration"""
    name: str
    email: EmailStr
    password: str
    age: int
    role: Optional[UserRole] = None


class RegisterUserResponse(CamelModel):
    message: str = "User registered successfully"
    user_id: UUID


class LoginUserDto(CamelModel):
    """DTO for user login"""
    email: EmailStr
    password: str


class VerifyMfaCodeDto(CamelModel):
    """Temp token may also arrive in the Authorization header"""
    mfa_code: Optional[str] = None
    temp_token: Optional[str] = None


class VerifyMfaSetupDto(CamelModel):
    setup_code: str


class ForgotPasswordDto(CamelModel):
    """DTO for forgot password request"""
    email: EmailStr


class ResetPasswordDto(CamelModel):
    email: EmailStr
    verification_code: str
    new_password: str


class UserSummaryDto(CamelModel):
    """Identity fields returned by the auth endpoints"""
    id: UUID
    name: str
    email: str
    role: UserRole
    mfa_enabled: bool

    @classmethod
    def from_entity(cls, user):
        return cls(
            id=user.id.value,
            name=user.name,
            email=str(user.email),
            role=user.role,
            mfa_enabled=user.mfa_enabled,
        )


class LoginResponse(CamelModel):
    """Either a session token or an MFA challenge, never both"""
    message: str
    mfa_required: bool = False
    temp_token: Optional[str] = None
    token: Optional[str] = None
    user: Optional[UserSummaryDto] = None


class SetupMfaResponse(CamelModel):
    message: str = "MFA setup initiated. Please check your email for the setup code."
    requires_verification: bool = True


class VerifyMfaSetupResponse(CamelModel):
    message: str = "MFA setup completed successfully"
    mfa_enabled: bool = True
    user: UserSummaryDto


class ForgotPasswordResponse(CamelModel):
    """DTO for forgot password response"""
    message: str = "Verification code sent to your email"
    email: str


class ResetPasswordResponse(CamelModel):
    message: str = "Password updated successfully"
    email: str


class SessionDto(CamelModel):
    """Claims of the cookie session"""
    user_id: str
    role: UserRole
    mfa_verified: bool


class ShippingAddressDto(CamelModel):
    address: str = Field(..., min_length=1)
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    is_default: bool = False

    @classmethod
    def from_value(cls, address):
        return cls(
            address=address.address,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
            is_default=address.is_default,
        )


class ShippingAddressesResponse(CamelModel):
    message: str = "Shipping address added successfully"
    shipping_addresses: List[ShippingAddressDto]


class UserDto(CamelModel):
    """DTO for user response"""
    id: UUID
    name: str
    email: str
    age: int
    role: UserRole
    is_active: bool
    mfa_enabled: bool
    profile_image: str = ""
    phone_number: str = ""
    newsletter: bool = True
    email_notifications: bool = True
    shipping_addresses: List[ShippingAddressDto] = []
    wishlist: List[UUID] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user):
        """Convert domain entity to DTO"""
        return cls(
            id=user.id.value,
            name=user.name,
            email=str(user.email),
            age=user.age,
            role=user.role,
            is_active=user.is_active,
            mfa_enabled=user.mfa_enabled,
            profile_image=user.profile_image,
            phone_number=user.phone_number,
            newsletter=user.newsletter,
            email_notifications=user.email_notifications,
            shipping_addresses=[ShippingAddressDto.from_value(a) for a in user.shipping_addresses],
            wishlist=[p.value for p in user.wishlist],
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserUpdateResponse(CamelModel):
    message: str = "Profile updated successfully"
    user: UserDto


class UpdateProfileDto(CamelModel):
    """Self-service profile update; omitted fields are unchanged"""
    name: Optional[str] = None
    age: Optional[int] = None
    phone_number: Optional[str] = None
    profile_image: Optional[str] = None
    newsletter: Optional[bool] = None
    email_notifications: Optional[bool] = None
    password: Optional[str] = None


class AdminUpdateUserDto(UpdateProfileDto):
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UpdateRoleDto(CamelModel):
    role: UserRole


class UserListResponse(CamelModel):
    users: List[UserDto]
    total: int
    page: int
    limit: int
    pages: int


class CustomerProfileResponse(CamelModel):
    user: UserDto
    recent_orders: List[OrderResponseDTO]


class WishlistItemDto(CamelModel):
    product_id: UUID


class WishlistResponse(CamelModel):
    message: str
    wishlist: List[UUID]
