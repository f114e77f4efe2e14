"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_DB_PORT = 27017
DEFAULT_FILM_COUNT = 60
DEFAULT_COMMENT_COUNT = 50


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=4000, description="Server port")

    # CORS Settings
    allowed_origins: Union[str, List[str]] = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    # Database Configuration
    db_user: str = Field(default="admin", description="MongoDB user")
    db_password: str = Field(default="", description="MongoDB password")
    db_host: str = Field(default="127.0.0.1", description="MongoDB host")
    db_port: int = Field(default=DEFAULT_DB_PORT, description="MongoDB port")
    db_name: str = Field(default="what-to-watch", description="MongoDB database name")
    mongodb_uri: str = Field(
        default="",
        description="Full MongoDB connection string, overrides the db_* pieces",
    )

    # Authentication
    salt: str = Field(default="", description="Salt for password hashing")
    jwt_secret: str = Field(default="", description="Secret used to sign access tokens")
    jwt_algorithm: str = Field(default="HS256", description="Access token algorithm")
    jwt_expires_minutes: int = Field(
        default=60 * 24 * 2,
        description="Access token lifetime in minutes",
    )

    # Catalog
    default_film_count: int = Field(
        default=DEFAULT_FILM_COUNT,
        description="Default number of films in list responses",
    )
    default_comment_count: int = Field(
        default=DEFAULT_COMMENT_COUNT,
        description="Default number of comments in list responses",
    )
    promo_film_id: Optional[str] = Field(
        default=None,
        description="Film shown on the promo endpoint",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Observability
    logfire_token: str = Field(default="", description="Logfire observability token")

    @field_validator("allowed_origins")
    @classmethod
    def parse_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse comma-separated origins into a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("db_host")
    @classmethod
    def validate_db_host(cls, v: str) -> str:
        """Validate that the database host is provided."""
        if not v.strip():
            raise ValueError("Database host cannot be empty")
        return v

    @field_validator("default_film_count", "default_comment_count")
    @classmethod
    def validate_positive_count(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Default list size must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def mongodb_url(self) -> str:
        """
        Construct the MongoDB connection string.

        An explicit MONGODB_URI wins; otherwise the URL is assembled from the
        db_* settings and authenticates against the admin database.
        """
        if self.mongodb_uri:
            return self.mongodb_uri
        return (
            f"mongodb://{self.db_user}:{self.db_password}@"
            f"{self.db_host}:{self.db_port}/{self.db_name}?authSource=admin"
        )


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set - issued tokens are not secure")
    return settings
