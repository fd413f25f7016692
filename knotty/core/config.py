"""Application configuration"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Knotty"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Handmade goods storefront API"

    # Security
    SECRET_KEY: str = Field(...)
    ALGORITHM: str = "HS256"
    SESSION_TOKEN_EXPIRE_MINUTES: int = Field(default=180)  # 3 hours
    TEMP_TOKEN_EXPIRE_MINUTES: int = Field(default=10)
    VERIFICATION_CODE_EXPIRE_MINUTES: int = Field(default=10)
    BCRYPT_ROUNDS: int = Field(default=10)
    SESSION_COOKIE_NAME: str = Field(default="token")

    # Database
    DATABASE_URL: str = Field(...)

    # Email SMTP Configuration
    SMTP_HOST: Optional[str] = Field(default=None)
    SMTP_PORT: int = Field(default=587)
    SMTP_USERNAME: Optional[str] = Field(default=None)
    SMTP_PASSWORD: Optional[str] = Field(default=None)
    SMTP_USE_TLS: bool = Field(default=True)
    FROM_EMAIL: str = Field(default="noreply@thisisknotty.app")
    FROM_NAME: str = Field(default="Knotty")
    EMAIL_SIMULATE: bool = Field(default=False)

    # CORS
    ALLOWED_HOSTS: list[str] = Field(default=["http://localhost:3000", "http://localhost:3001"])

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Development
    DEBUG: bool = Field(default=False)
    TESTING: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def smtp_configured(self) -> bool:
        return bool(self.SMTP_HOST and self.SMTP_USERNAME and self.SMTP_PASSWORD)


settings = Settings()
