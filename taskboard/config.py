"""Configuration module that loads environment variables from ``.env``."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_BASE_ENV_PATH = Path(".env")
if _BASE_ENV_PATH.exists():
    load_dotenv(_BASE_ENV_PATH, override=False)

_LOCAL_ENV_PATH = Path(".env.local")
if "PYTEST_CURRENT_TEST" not in os.environ and _LOCAL_ENV_PATH.exists():
    load_dotenv(_LOCAL_ENV_PATH, override=False)


class Settings(BaseSettings):
    """Application configuration validated at import time."""

    model_config = SettingsConfigDict(env_file=(".env",), extra="ignore")

    env: Literal["dev", "staging", "prod", "test"] = Field(default="dev", alias="ENV")
    jwt_secret: str = Field(..., alias="JWT_SECRET")
    jwt_iss: str = Field(default="taskboard", alias="JWT_ISS")
    jwt_aud: str | None = Field(default=None, alias="JWT_AUD")
    jwt_ttl_seconds: int = Field(default=3600, alias="JWT_TTL_SECONDS", gt=0)

    database_url: str = Field(default="sqlite+pysqlite:///./taskboard.db", alias="DATABASE_URL")
    db_connect_timeout: int | None = Field(default=30, alias="DB_CONNECT_TIMEOUT")

    trace_mode: bool = Field(default=False, alias="TRACE_MODE")
    trace_sampling: float = Field(default=1.0, alias="TRACE_SAMPLING")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=9000, alias="API_PORT", gt=0, lt=65536)

    @field_validator("jwt_aud", mode="before")
    @classmethod
    def _blank_audience(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None


settings = Settings()
