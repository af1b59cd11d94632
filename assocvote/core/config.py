"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional, Union

from assocvote.core.constants import ACCESS_TOKEN_ALGORITHM


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Database - Support both full URL and individual components
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: Optional[str] = None
    POSTGRES_DB: Optional[str] = None

    # Security (tokens are issued by the identity service, only verified here)
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = ACCESS_TOKEN_ALGORITHM

    # CORS - Can be a list or comma-separated string
    CORS_ORIGINS: Union[list, str] = ["*"]

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    # Application
    APP_TITLE: str = "Association Votes & Surveys"
    APP_DESCRIPTION: str = "Multi-round ballots and surveys for associations"
    APP_VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    # Database Connection Pool Configuration (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    def get_database_url(self) -> str:
        """
        Get database URL from either DATABASE_URL or individual components.
        Priority: DATABASE_URL > individual components > default (dev only)
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if all([self.POSTGRES_USER, self.POSTGRES_PASSWORD,
                self.POSTGRES_HOST, self.POSTGRES_DB]):
            port = self.POSTGRES_PORT or "5432"
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_HOST}:{port}/{self.POSTGRES_DB}"
            )

        # Development fallback only
        if self.ENVIRONMENT in ("development", "testing"):
            return "sqlite:///./assocvote.db"

        raise ValueError(
            "Database configuration missing. Provide either DATABASE_URL or "
            "all of: POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_DB"
        )

    def validate_production_config(self) -> None:
        """Validate that production-critical settings are properly configured."""
        if self.ENVIRONMENT != "production":
            return

        issues = []

        if self.SECRET_KEY == "your-secret-key-change-in-production":
            issues.append("SECRET_KEY must be changed from default value")

        if self.CORS_ORIGINS == ["*"]:
            issues.append("CORS_ORIGINS should be restricted to specific domains")

        if self.get_database_url().startswith("sqlite"):
            issues.append("DATABASE_URL must point to PostgreSQL in production")

        if issues:
            raise ValueError(
                "Production configuration errors:\n" +
                "\n".join(f"  - {issue}" for issue in issues)
            )


settings = Settings()

