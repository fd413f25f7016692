"""
Domain Enums - Business domain enumerations
"""

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class OrderStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class CodePurpose(str, Enum):
    """Independent one-time code slots on a user"""
    LOGIN = "login"
    MFA_SETUP = "mfa_setup"
    PASSWORD_RESET = "password_reset"
