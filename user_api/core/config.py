# File: user_api/core/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _env(name: str, default: str):
    return Field(default_factory=lambda: os.getenv(name, default))


class Settings(BaseModel):
    # Environment-backed defaults arrive as strings and are coerced on validation
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    PROJECT_NAME: str = "User Directory API"
    VERSION: str = "0.1.0"

    api_prefix: str = "/api"

    # Server
    host: str = _env("HOST", "0.0.0.0")
    port: int = _env("PORT", "3000")
    environment: str = _env("APP_ENV", "development")

    # CORS
    backend_cors_origins: List[str] = _env("BACKEND_CORS_ORIGINS", "")

    # Database
    database_url: str = _env("DATABASE_URL", "sqlite:///./user_api.db")

    # Logging
    log_level: str = _env("LOG_LEVEL", "INFO")

    # Largest page size a list request may ask for
    max_page_limit: int = _env("MAX_PAGE_LIMIT", "100")

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("max_page_limit")
    @classmethod
    def check_max_page_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_page_limit must be at least 1")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


