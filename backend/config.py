"""Application settings loaded from .env file."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite:///./autocrud.db"
    DATABASE_SCHEMA: Optional[str] = None
    DB_ECHO: bool = False

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 5081
    CORS_ORIGINS: str = "http://localhost:3000"

    # Records
    DEFAULT_PAGE_SIZE: int = 30
    CONFIG_TABLE_NAME: str = "table_configurations"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
