"""Configuration settings for the blog accounts service."""

import os
import secrets
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./blog_accounts.db")

    # Session tokens
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    SESSION_EXPIRE_MINUTES: int = int(os.getenv("SESSION_EXPIRE_MINUTES", "1440"))

    # Session cookie
    COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "true").lower() == "true"
    COOKIE_SAMESITE: str = os.getenv("COOKIE_SAMESITE", "none").lower()

    # Password reset
    RESET_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "60"))
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # CORS
    CORS_ORIGINS: list[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if origin.strip()
    ]

    # Email
    SMTP_HOST: str = os.getenv("SMTP_HOST", "localhost")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
    MAIL_FROM: str = os.getenv("MAIL_FROM", "no-reply@localhost")

    # Media host (S3 compatible)
    MEDIA_BUCKET: str = os.getenv("MEDIA_BUCKET", "blog-media")
    MEDIA_ENDPOINT_URL: str = os.getenv("MEDIA_ENDPOINT_URL", "")
    MEDIA_ACCESS_KEY: str = os.getenv("MEDIA_ACCESS_KEY", "")
    MEDIA_SECRET_KEY: str = os.getenv("MEDIA_SECRET_KEY", "")
    MEDIA_REGION: str = os.getenv("MEDIA_REGION", "us-east-1")
    MEDIA_PUBLIC_URL: str = os.getenv("MEDIA_PUBLIC_URL", "")
    MAX_PHOTO_SIZE_MB: int = int(os.getenv("MAX_PHOTO_SIZE_MB", "5"))

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __init__(self) -> None:
        self._generated_secret = not self.SECRET_KEY
        if self._generated_secret:
            self.SECRET_KEY = secrets.token_urlsafe(32)

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        warnings = []
        if self._generated_secret:
            warnings.append("SECRET_KEY is not set - using auto-generated key (sessions do not survive restarts)")
        if not self.MEDIA_PUBLIC_URL and not self.MEDIA_ENDPOINT_URL:
            warnings.append("MEDIA_PUBLIC_URL is not set - photo URLs will point at the default S3 endpoint")
        if self.COOKIE_SAMESITE == "none" and not self.COOKIE_SECURE:
            warnings.append("COOKIE_SAMESITE=none requires COOKIE_SECURE=true in modern browsers")
        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
