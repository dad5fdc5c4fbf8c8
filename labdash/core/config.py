"""Application configuration with validation."""

from enum import Enum
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List

# Development-only defaults. validate_production_config() refuses them.
_DEFAULT_JWT_SECRET = "dev-insecure-key-change-me"
_DEFAULT_BOOTSTRAP_EMAIL = "qubi6018@admin.com"
_DEFAULT_BOOTSTRAP_PASSWORD = "qubi6018!"


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Raised when application configuration is invalid for the environment."""
    pass


class Settings(BaseSettings):
    """
    Application settings with validation.

    Values come from environment variables or a ``.env`` file. Security
    relevant defaults are development conveniences and block startup in
    production.
    """

    # Environment
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production)"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./labdash.db",
        description="Database connection URL"
    )
    # Connection pool tuning (PostgreSQL only; ignored for SQLite).
    db_pool_size: int = Field(default=5, description="Number of persistent database connections")
    db_max_overflow: int = Field(default=10, description="Extra connections allowed during bursts")
    db_pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    db_pool_recycle: int = Field(default=1800, description="Seconds before a connection is recycled")

    # Sessions
    jwt_secret_key: str = Field(
        default=_DEFAULT_JWT_SECRET,
        description="Session token signing secret (override in production)"
    )
    jwt_algorithm: str = Field(default="HS256")
    token_expire_hours: int = Field(default=24, description="Hours until a session token expires")

    # Bootstrap administrator.
    # Checked before the users table so an operator can always get in,
    # even on an empty database. Empty email disables it.
    bootstrap_admin_email: str = Field(
        default=_DEFAULT_BOOTSTRAP_EMAIL,
        description="Email of the configured bootstrap admin (empty = disabled)"
    )
    bootstrap_admin_password: str = Field(
        default=_DEFAULT_BOOTSTRAP_PASSWORD,
        description="Password of the configured bootstrap admin"
    )
    bootstrap_admin_name: str = Field(default="Administrator")

    # Registration code that grants the admin role at sign-up.
    # Empty string = admin self-registration disabled.
    admin_registration_code: str = Field(
        default="",
        description="Shared code required to self-register as admin (empty = disabled)"
    )

    # Rate Limiting
    rate_limit_per_minute: int = Field(
        default=120,
        description="Maximum requests per client per minute (0 = unlimited)"
    )

    # Uploads are read whole into memory and stored as data URIs.
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted upload in bytes"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    def get_cors_origins(self) -> List[str]:
        """
        Get CORS origins as a list.

        Parses comma-separated string and validates no wildcards.
        """
        origins = [origin.strip() for origin in self.cors_allowed_origins.split(',') if origin.strip()]

        # SECURITY: Prevent wildcard CORS
        if "*" in origins:
            raise ValueError(
                "Wildcard CORS (*) not allowed. "
                "Specify explicit origins in CORS_ALLOWED_ORIGINS"
            )

        return origins

    @property
    def bootstrap_admin_enabled(self) -> bool:
        return bool(self.bootstrap_admin_email and self.bootstrap_admin_password)

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper

    @field_validator('bootstrap_admin_email')
    @classmethod
    def normalize_bootstrap_email(cls, v: str) -> str:
        return v.strip().lower()

    def insecure_settings(self) -> List[str]:
        """List the security-relevant settings still at their development defaults."""
        problems: list[str] = []

        if self.jwt_secret_key == _DEFAULT_JWT_SECRET:
            problems.append(
                "JWT_SECRET_KEY is using the default insecure value. "
                "Generate a secure key: openssl rand -hex 32"
            )

        if self.bootstrap_admin_enabled and self.bootstrap_admin_password == _DEFAULT_BOOTSTRAP_PASSWORD:
            problems.append(
                "BOOTSTRAP_ADMIN_PASSWORD is the published default. "
                "Set a strong password or clear BOOTSTRAP_ADMIN_EMAIL."
            )

        origins = self.get_cors_origins()
        localhost_origins = [o for o in origins if "localhost" in o or "127.0.0.1" in o]
        if localhost_origins:
            problems.append(
                f"CORS allows localhost origins: {localhost_origins}. "
                "Remove localhost origins for production."
            )

        return problems

    def validate_production_config(self) -> None:
        """Validate configuration for the production environment.

        Raises:
            ConfigurationError: In production, if any setting is insecure.
                Development only reports; main.py logs the warnings.
        """
        errors = self.insecure_settings()
        if errors and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is insecure:\n  - " + "\n  - ".join(errors)
            )

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
