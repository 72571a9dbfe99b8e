# config.py
"""
Configuration module for the application.
Handles environment-specific settings using Pydantic v2 and pydantic-settings.
"""
from typing import Optional
from enum import Enum
from pydantic import Field, field_validator, BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_enabled: bool = False
    file_path: str = "logs/app.log"

class APISettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    version: str = "1.0.0"
    title: str = "Budget Server API"
    description: str = "Budgets, categories and transactions shared between users"

class DatabaseSettings(BaseModel):
    url: str
    pool_size: int = 20
    max_overflow: int = 30
    pool_recycle: int = 3600
    create_tables: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

class SecuritySettings(BaseModel):
    session_expire_days: int = 14
    session_token_length: int = 255
    password_min_length: int = 8

class Settings(BaseSettings):
    """Main settings class with environment-specific configurations."""
    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # API
    api_title: str = "Budget Server API"
    api_description: str = "Budgets, categories and transactions shared between users"
    api_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = "sqlite+aiosqlite:///./budget.db"
    pool_size: int = 20
    max_overflow: int = 30
    pool_recycle: int = 3600
    create_tables_on_startup: bool = False

    # Security
    session_expire_days: int = 14
    session_token_length: int = 255
    password_min_length: int = 8

    # Logging
    log_level: str = "INFO"
    log_format: str = Field(default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}")
    log_file_enabled: bool = False
    log_file_path: str = "logs/app.log"

    # Listing
    default_page_size: int = 1000

    # Frontend
    frontend_urls_raw: str = Field(
        default="http://localhost:3000",
        alias="FRONTEND_URLS",
        exclude=True,
    )

    # Validators
    @field_validator("debug")
    @classmethod
    def debug_not_in_production(cls, v, info):
        env = info.data.get("environment")
        if v and env == Environment.PRODUCTION:
            raise ValueError("Debug mode should not be enabled in production")
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        if not v.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
            raise ValueError("Invalid database URL format")
        return v

    @field_validator("default_page_size")
    @classmethod
    def validate_page_size(cls, v):
        if v < 1:
            raise ValueError("Default page size must be positive")
        return v

    @property
    def frontend_urls(self) -> list[str]:
        """Comma-separated frontend URLs from .env, parsed into a list."""
        urls = [url.strip() for url in self.frontend_urls_raw.split(",") if url.strip()]
        from urllib.parse import urlparse
        for url in urls:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"Invalid URL in frontend_urls: {url}")
        return urls

    # Sub-settings via properties
    @property
    def api(self) -> APISettings:
        return APISettings(
            host=self.host,
            port=self.port,
            title=self.api_title,
            description=self.api_description,
            version=self.api_version,
        )

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings(
            level=self.log_level,
            format=self.log_format,
            file_enabled=self.log_file_enabled,
            file_path=self.log_file_path,
        )

    @property
    def database(self) -> DatabaseSettings:
        return DatabaseSettings(
            url=self.database_url,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            pool_recycle=self.pool_recycle,
            create_tables=self.create_tables_on_startup,
        )

    @property
    def security(self) -> SecuritySettings:
        return SecuritySettings(
            session_expire_days=self.session_expire_days,
            session_token_length=self.session_token_length,
            password_min_length=self.password_min_length,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        populate_by_name=True,
    )

class DevelopmentSettings(Settings):
    debug: bool = True
    log_level: str = "DEBUG"
    create_tables_on_startup: bool = True

class ProductionSettings(Settings):
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("database_url")
    @classmethod
    def validate_production_database(cls, v):
        if not v.startswith("postgresql+asyncpg://"):
            raise ValueError("PostgreSQL is required in production")
        return v

class TestingSettings(Settings):
    database_url: str = "sqlite+aiosqlite:///:memory:"
    debug: bool = False
    log_level: str = "DEBUG"

def get_settings() -> Settings:
    """Factory to return environment-specific settings."""
    env = Settings().environment
    if env == Environment.PRODUCTION:
        return ProductionSettings()
    elif env == Environment.TESTING:
        return TestingSettings()
    return DevelopmentSettings()

# Global settings instance
settings = get_settings()
