"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class DatabaseConfig(BaseModel):
    """Relational database configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./lanmic.db",
        alias="DATABASE_URL",
        description="Async SQLAlchemy connection URL (postgres URLs are rewritten to asyncpg)",
    )
    auto_create: bool = Field(
        default=True,
        alias="DATABASE_AUTO_CREATE",
        description="Create missing tables from ORM metadata on startup (development only)",
    )

    model_config = {"populate_by_name": True}


class AuthConfig(BaseModel):
    """Token, OTP and password hashing configuration."""

    jwt_secret: str = Field(
        default="change-me-in-production", alias="JWT_SECRET", description="Secret used to sign access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM", description="Access token signing algorithm")
    access_token_expiry: str = Field(
        default="15m", alias="ACCESS_TOKEN_EXPIRY", description="Access token lifetime (e.g. 15m, 1h)"
    )
    refresh_token_expiry: str = Field(
        default="7d", alias="REFRESH_TOKEN_EXPIRY", description="Refresh token lifetime (e.g. 7d)"
    )
    remember_me_refresh_token_expiry: str = Field(
        default="30d",
        alias="REMEMBER_ME_REFRESH_TOKEN_EXPIRY",
        description="Refresh token lifetime when the user asks to be remembered",
    )
    otp_expiry_minutes: int = Field(
        default=5, alias="OTP_EXPIRY_MINUTES", description="Registration and email change OTP lifetime"
    )
    password_reset_otp_expiry_minutes: int = Field(
        default=10, alias="PASSWORD_RESET_OTP_EXPIRY_MINUTES", description="Password reset OTP lifetime"
    )
    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS", description="bcrypt cost factor")
    token_cleanup_interval_seconds: int = Field(
        default=300,
        alias="TOKEN_CLEANUP_INTERVAL_SECONDS",
        description="Interval between expired refresh token sweeps (0 disables the task)",
    )

    model_config = {"populate_by_name": True}


class SMTPConfig(BaseModel):
    """Outbound email (SMTP) configuration."""

    host: Optional[str] = Field(default=None, alias="SMTP_HOST", description="SMTP server host")
    port: int = Field(default=587, alias="SMTP_PORT", description="SMTP server port")
    user: Optional[str] = Field(default=None, alias="SMTP_USER", description="SMTP username")
    password: Optional[str] = Field(default=None, alias="SMTP_PASS", description="SMTP password")
    secure: bool = Field(default=False, alias="SMTP_SECURE", description="Use implicit TLS (port 465 implies it)")
    from_name: str = Field(default="LANMIC Admin", alias="SMTP_FROM_NAME", description="Display name of the sender")
    from_email: Optional[str] = Field(
        default=None, alias="SMTP_FROM_EMAIL", description="Sender address (defaults to SMTP_USER)"
    )
    contact_recipient: Optional[str] = Field(
        default=None,
        alias="CONTACT_RECIPIENT_EMAIL",
        description="Address receiving contact form notifications (defaults to the sender address)",
    )

    model_config = {"populate_by_name": True}

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.port and self.user and self.password)

    @property
    def sender_address(self) -> Optional[str]:
        return self.from_email or self.user

    @property
    def use_tls(self) -> bool:
        return self.secure or self.port == 465


class UploadConfig(BaseModel):
    """Image upload configuration."""

    directory: str = Field(default="uploads", alias="UPLOAD_DIR", description="Root directory for uploaded files")
    max_size_bytes: int = Field(
        default=5 * 1024 * 1024, alias="UPLOAD_MAX_SIZE_BYTES", description="Maximum accepted upload size"
    )

    model_config = {"populate_by_name": True}


class RelayConfig(BaseModel):
    """Server-sent event relay configuration."""

    queue_size: int = Field(
        default=100, alias="RELAY_QUEUE_SIZE", description="Pending events buffered per subscriber before dropping"
    )
    ping_interval_seconds: int = Field(
        default=15, alias="RELAY_PING_INTERVAL_SECONDS", description="Keep-alive ping interval for SSE streams"
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(
        default=["http://localhost:3000"], alias="CORS_ORIGINS", description="Allowed CORS origins"
    )
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
        description="Allowed HTTP methods",
    )
    allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization", "Cookie", "X-Refresh-Token"],
        alias="CORS_ALLOW_HEADERS",
        description="Allowed HTTP headers",
    )

    model_config = {"populate_by_name": True}


class LogfireConfig(BaseModel):
    """Logfire tracing configuration."""

    enabled: bool = Field(default=False, alias="LOGFIRE_ENABLED", description="Send traces to Logfire")
    token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN", description="Logfire write token")
    service_name: str = Field(default="lanmic-site", alias="LOGFIRE_SERVICE_NAME", description="Service name")
    environment: str = Field(default="development", alias="LOGFIRE_ENVIRONMENT", description="Deployment environment")

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(default="0.0.0.0", alias="LANMIC_SERVER_HOST", description="Host address to bind to")
    server_port: int = Field(default=3002, alias="LANMIC_SERVER_PORT", description="Server port number")
    log_level: str = Field(
        default="INFO",
        alias="LANMIC_LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(default="detailed", alias="LOG_FORMAT", description="simple, detailed or json")
    log_file_dir: str = Field(default="logs", alias="LOG_FILE_DIR", description="Directory for the log file")
    enable_file_logging: bool = Field(default=True, alias="ENABLE_FILE_LOGGING", description="Write logs to a file")
    environment: str = Field(
        default="development", alias="ENVIRONMENT", description="development or production (secure cookies)"
    )

    # =====================================================================
    # Database
    # =====================================================================
    database_url: str = Field(default="sqlite+aiosqlite:///./lanmic.db", alias="DATABASE_URL")
    database_auto_create: bool = Field(default=True, alias="DATABASE_AUTO_CREATE")

    # =====================================================================
    # Auth
    # =====================================================================
    jwt_secret: str = Field(default="change-me-in-production", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expiry: str = Field(default="15m", alias="ACCESS_TOKEN_EXPIRY")
    refresh_token_expiry: str = Field(default="7d", alias="REFRESH_TOKEN_EXPIRY")
    remember_me_refresh_token_expiry: str = Field(default="30d", alias="REMEMBER_ME_REFRESH_TOKEN_EXPIRY")
    otp_expiry_minutes: int = Field(default=5, alias="OTP_EXPIRY_MINUTES")
    password_reset_otp_expiry_minutes: int = Field(default=10, alias="PASSWORD_RESET_OTP_EXPIRY_MINUTES")
    bcrypt_rounds: int = Field(default=12, alias="BCRYPT_ROUNDS")
    token_cleanup_interval_seconds: int = Field(default=300, alias="TOKEN_CLEANUP_INTERVAL_SECONDS")

    # =====================================================================
    # SMTP
    # =====================================================================
    smtp_host: Optional[str] = Field(default=None, alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: Optional[str] = Field(default=None, alias="SMTP_USER")
    smtp_pass: Optional[str] = Field(default=None, alias="SMTP_PASS")
    smtp_secure: bool = Field(default=False, alias="SMTP_SECURE")
    smtp_from_name: str = Field(default="LANMIC Admin", alias="SMTP_FROM_NAME")
    smtp_from_email: Optional[str] = Field(default=None, alias="SMTP_FROM_EMAIL")
    contact_recipient_email: Optional[str] = Field(default=None, alias="CONTACT_RECIPIENT_EMAIL")

    # =====================================================================
    # Uploads, relay, CORS, Logfire
    # =====================================================================
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")
    upload_max_size_bytes: int = Field(default=5 * 1024 * 1024, alias="UPLOAD_MAX_SIZE_BYTES")
    relay_queue_size: int = Field(default=100, alias="RELAY_QUEUE_SIZE")
    relay_ping_interval_seconds: int = Field(default=15, alias="RELAY_PING_INTERVAL_SECONDS")
    cors_origins: list[str] = Field(default=["http://localhost:3000"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"], alias="CORS_ALLOW_METHODS"
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization", "Cookie", "X-Refresh-Token"], alias="CORS_ALLOW_HEADERS"
    )
    logfire_enabled: bool = Field(default=False, alias="LOGFIRE_ENABLED")
    logfire_token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN")
    logfire_service_name: str = Field(default="lanmic-site", alias="LOGFIRE_SERVICE_NAME")
    logfire_environment: str = Field(default="development", alias="LOGFIRE_ENVIRONMENT")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def database(self) -> DatabaseConfig:
        """Get database configuration from environment variables."""
        return DatabaseConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def auth(self) -> AuthConfig:
        """Get token and OTP configuration from environment variables."""
        return AuthConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def smtp(self) -> SMTPConfig:
        """Get SMTP configuration from environment variables."""
        return SMTPConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def upload(self) -> UploadConfig:
        """Get upload configuration from environment variables."""
        return UploadConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def relay(self) -> RelayConfig:
        """Get relay configuration from environment variables."""
        return RelayConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def logfire(self) -> LogfireConfig:
        """Get Logfire configuration from environment variables."""
        return LogfireConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
