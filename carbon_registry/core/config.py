"""
Application configuration loaded from environment variables.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_file_encoding = "utf-8",
        populate_by_name = True
    )

    # Database
    database_url: str = Field(default="sqlite+aiosqlite:///./carbon_registry.db", alias="DATABASE_URL")

    # Ledger
    admin_address: str = Field(default="0x0000000000000000000000000000000000000001", alias="ADMIN_ADDRESS")
    token_name: str = Field(default="CarbonCredit", alias="TOKEN_NAME")
    token_symbol: str = Field(default="CCR", alias="TOKEN_SYMBOL")

    # Application
    app_name: str = Field(default="Carbon Credit Registry", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=8000, alias="PORT")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
