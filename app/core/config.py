"""
Application configuration using Pydantic settings
"""

from functools import lru_cache
from typing import List, Literal, Optional
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "E-commerce API"
    SERVICE_NAME: str = "e-commerce-api"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    API_V1_STR: str = "/v1"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    server_read_timeout: int = 30  # seconds
    server_write_timeout: int = 30  # seconds, 0 disables the request deadline
    workers: int = 1

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_username: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "ecommerce"
    db_ssl_mode: str = "disable"
    database_url_override: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")
    db_echo: bool = False

    # Connection pool settings
    db_pool_size: int = 10
    db_max_overflow: int = 5
    db_pool_pre_ping: bool = True

    # CORS
    cors_origins: List[str] = ["*"]

    # Observability
    SENTRY_DSN: Optional[str] = None
    enable_metrics: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # How PUT /products/{id} decides which fields were supplied
    partial_update_mode: Literal["explicit", "legacy"] = "explicit"

    @property
    def database_url(self) -> str:
        """SQLAlchemy async URL, either given verbatim or built from the DB_* parts"""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{quote_plus(self.db_username)}:{quote_plus(self.db_password)}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
