"""User routes: authentication, profile, customer account and administration"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from typing import List

from ...api.dependencies import (
    BearerTokenSource,
    get_cookie_principal,
    get_current_admin,
    get_current_customer,
    get_current_principal,
    get_email_service,
    get_request_logger,
    get_unit_of_work,
    principal_user_id,
)
from ...application.dtos.base import MessageResponse
from ...application.dtos.order_dtos import OrderResponseDTO
from ...application.dtos.product_dtos import ProductResponseDTO
from ...application.dtos.user_dtos import (
    AdminUpdateUserDto,
    CustomerProfileResponse,
    ForgotPasswordDto,
    ForgotPasswordResponse,
    LoginResponse,
    LoginUserDto,
    RegisterUserDto,
    RegisterUserResponse,
    ResetPasswordDto,
    ResetPasswordResponse,
    SessionDto,
    SetupMfaResponse,
    ShippingAddressDto,
    ShippingAddressesResponse,
    UpdateProfileDto,
    UpdateRoleDto,
    UserDto,
    UserListResponse,
    UserUpdateResponse,
    VerifyMfaCodeDto,
    VerifyMfaSetupDto,
    VerifyMfaSetupResponse,
    WishlistItemDto,
    WishlistResponse,
)
from ...application.use_cases.admin_users import (
    AdminUpdateUserUseCase,
    ChangeUserRoleUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
)
from ...application.use_cases.customer_account import (
    AddShippingAddressUseCase,
    AddToWishlistUseCase,
    GetWishlistUseCase,
    RemoveFromWishlistUseCase,
)
from ...application.use_cases.forgot_password_use_case import ForgotPasswordUseCase
from ...application.use_cases.login_user import LoginUserUseCase
from ...application.use_cases.manage_orders import ListUserOrdersUseCase
from ...application.use_cases.register_user import RegisterUserUseCase
from ...application.use_cases.reset_password_use_case import ResetPasswordUseCase
from ...application.use_cases.setup_mfa import SetupMfaUseCase, VerifyMfaSetupUseCase
from ...application.use_cases.user_profile import (
    GetCustomerProfileUseCase,
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from ...application.use_cases.verify_mfa_code import VerifyMfaCodeUseCase
from ...core.config import settings
from ...core.security import SessionClaims
from ...domain.value_objects.entity_ids import ProductId, UserId

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=True,
        samesite="none",
        max_age=settings.SESSION_TOKEN_EXPIRE_MINUTES * 60,
    )


# Authentication

@router.post("/register", response_model=RegisterUserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterUserDto,
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    """Register a new account. The caller logs in separately."""
    use_case = RegisterUserUseCase(unit_of_work, logger)
    return await use_case.execute(request)


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    request: LoginUserDto,
    response: Response,
    unit_of_work = Depends(get_unit_of_work),
    email_service = Depends(get_email_service),
    logger = Depends(get_request_logger)
):
    """Password login; answers with a session or an MFA challenge"""
    use_case = LoginUserUseCase(unit_of_work, email_service, logger)
    result = await use_case.execute(request)
    if result.token:
        _set_session_cookie(response, result.token)
    return result


@router.post("/mfa/verify", response_model=LoginResponse, response_model_exclude_none=True)
async def verify_mfa(
    request: VerifyMfaCodeDto,
    http_request: Request,
    response: Response,
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    """Exchange the temporary token and emailed code for a session"""
    temp_token = request.temp_token or await BearerTokenSource().extract(http_request)
    use_case = VerifyMfaCodeUseCase(unit_of_work, logger)
    result = await use_case.execute(temp_token, request.mfa_code)
    _set_session_cookie(response, result.token)
    return result


@router.post("/setup-mfa", response_model=SetupMfaResponse)
async def setup_mfa(
    principal: SessionClaims = Depends(get_current_principal),
    unit_of_work = Depends(get_unit_of_work),
    email_service = Depends(get_email_service),
    logger = Depends(get_request_logger)
):
    use_case = SetupMfaUseCase(unit_of_work, email_service, logger)
    return await use_case.execute(principal_user_id(principal))


@router.post("/verify-mfa-setup", response_model=VerifyMfaSetupResponse)
async def verify_mfa_setup(
    request: VerifyMfaSetupDto,
    principal: SessionClaims = Depends(get_current_principal),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    use_case = VerifyMfaSetupUseCase(unit_of_work, logger)
    return await use_case.execute(principal_user_id(principal), request.setup_code)


@router.post("/forget-password", response_model=ForgotPasswordResponse)
async def forgot_password(
    request: ForgotPasswordDto,
    unit_of_work = Depends(get_unit_of_work),
    email_service = Depends(get_email_service),
    logger = Depends(get_request_logger)
):
    """Email a password reset code"""
    use_case = ForgotPasswordUseCase(unit_of_work, email_service, logger)
    return await use_case.execute(request)


@router.post("/verify-reset-password", response_model=ResetPasswordResponse)
async def reset_password(
    request: ResetPasswordDto,
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    """Set a new password using the emailed reset code"""
    use_case = ResetPasswordUseCase(unit_of_work, logger)
    return await use_case.execute(request)


# Browser session (cookie)

@router.get("/session", response_model=SessionDto)
async def get_session(principal: SessionClaims = Depends(get_cookie_principal)):
    return SessionDto(user_id=principal.user_id, role=principal.role, mfa_verified=principal.mfa_verified)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    principal: SessionClaims = Depends(get_cookie_principal)
):
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=True,
        samesite="none",
    )
    return MessageResponse(message="Logged out successfully")


# Profile

@router.get("/profile", response_model=UserDto)
async def get_profile(
    principal: SessionClaims = Depends(get_current_principal),
    unit_of_work = Depends(get_unit_of_work)
):
    """Get current user profile"""
    return await GetUserProfileUseCase(unit_of_work).execute(principal_user_id(principal))


@router.put("/profile", response_model=UserUpdateResponse)
async def update_profile(
    request: UpdateProfileDto,
    principal: SessionClaims = Depends(get_current_principal),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    use_case = UpdateUserProfileUseCase(unit_of_work, logger)
    return await use_case.execute(principal_user_id(principal), request)


@router.get("/profile/customer", response_model=CustomerProfileResponse)
async def get_customer_profile(
    principal: SessionClaims = Depends(get_current_customer),
    unit_of_work = Depends(get_unit_of_work)
):
    """Profile with the ten most recent orders"""
    return await GetCustomerProfileUseCase(unit_of_work).execute(principal_user_id(principal))


@router.get("/orders", response_model=List[OrderResponseDTO])
async def get_my_orders(
    principal: SessionClaims = Depends(get_current_principal),
    unit_of_work = Depends(get_unit_of_work)
):
    return await ListUserOrdersUseCase(unit_of_work).execute(principal_user_id(principal))


# Customer account

@router.get("/wishlist", response_model=List[ProductResponseDTO])
async def get_wishlist(
    principal: SessionClaims = Depends(get_current_customer),
    unit_of_work = Depends(get_unit_of_work)
):
    return await GetWishlistUseCase(unit_of_work).execute(principal_user_id(principal))


@router.post("/wishlist", response_model=WishlistResponse)
async def add_to_wishlist(
    request: WishlistItemDto,
    principal: SessionClaims = Depends(get_current_customer),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    use_case = AddToWishlistUseCase(unit_of_work, logger)
    return await use_case.execute(principal_user_id(principal), ProductId(request.product_id))


@router.delete("/wishlist/{product_id}", response_model=WishlistResponse)
async def remove_from_wishlist(
    product_id: UUID,
    principal: SessionClaims = Depends(get_current_customer),
    unit_of_work = Depends(get_unit_of_work)
):
    use_case = RemoveFromWishlistUseCase(unit_of_work)
    return await use_case.execute(principal_user_id(principal), ProductId(product_id))


@router.post("/shipping-address", response_model=ShippingAddressesResponse)
async def add_shipping_address(
    request: ShippingAddressDto,
    principal: SessionClaims = Depends(get_current_customer),
    unit_of_work = Depends(get_unit_of_work)
):
    use_case = AddShippingAddressUseCase(unit_of_work)
    return await use_case.execute(principal_user_id(principal), request)


# Administration

@router.get("", response_model=UserListResponse)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work)
):
    """List users with pagination"""
    return await ListUsersUseCase(unit_of_work).execute(page=page, limit=limit)


@router.get("/{user_id}", response_model=UserDto)
async def get_user(
    user_id: UUID,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work)
):
    return await GetUserUseCase(unit_of_work).execute(UserId(user_id))


@router.put("/{user_id}", response_model=UserUpdateResponse)
async def update_user(
    user_id: UUID,
    request: AdminUpdateUserDto,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    use_case = AdminUpdateUserUseCase(unit_of_work, logger)
    return await use_case.execute(UserId(user_id), request)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    await DeleteUserUseCase(unit_of_work, logger).execute(UserId(user_id))
    return MessageResponse(message="User deleted successfully")


@router.put("/{user_id}/role", response_model=UserUpdateResponse)
async def update_user_role(
    user_id: UUID,
    request: UpdateRoleDto,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    use_case = ChangeUserRoleUseCase(unit_of_work, logger)
    return await use_case.execute(UserId(user_id), request.role)
