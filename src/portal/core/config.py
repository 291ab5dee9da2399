from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Client Portal API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_client_emails: bool = False  # Keep off in production (GDPR)
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]

    # Database
    database_url: str
    database_migrations_url: str | None = None  # Optional owner role for DDL
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full
    database_statement_cache_size: int = 100

    # Portal tokens
    portal_token_expire_days: int = 7
    portal_token_bytes: int = 32
    portal_token_header: str = "X-Portal-Token"
    portal_cookie_name: str = "portal_session"
    portal_cookie_secure: bool = True
    portal_self_service_enabled: bool = False  # Unauthenticated send-link for any client

    # Admin identity (staff identity provider issues these JWTs)
    admin_jwt_secret_key: str
    admin_jwt_algorithm: str = "HS256"

    @field_validator("admin_jwt_secret_key")
    @classmethod
    def validate_admin_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "ADMIN_JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("ADMIN_JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("portal_token_bytes")
    @classmethod
    def validate_portal_token_bytes(cls, v: int) -> int:
        if v < 16:
            raise ValueError("PORTAL_TOKEN_BYTES must be at least 16")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards since the portal cookie requires credentials."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate APP_URL is from allowed domain list to prevent link spoofing in emails."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        parsed = urlparse(v)
        hostname = parsed.hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    app_url: str = "http://localhost:3000"  # Frontend URL for portal links

    # Payments (Stripe)
    stripe_secret_key: str | None = None
    stripe_currency: str = "usd"
    stripe_timeout_seconds: float = 10.0

    # Rate limiting (slowapi)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"
    send_link_rate_limit: str = "5/minute"


@lru_cache
def get_settings() -> Settings:
    return Settings()
