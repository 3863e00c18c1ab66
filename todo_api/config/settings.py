"""
================================================================================
FILE: todo_api/config/settings.py
================================================================================

PURPOSE:
    Application settings loaded from environment variables.
    Uses Pydantic BaseSettings for automatic validation and type hints.
    Single source of truth for all application configuration.

WORKFLOW:
    1. At startup, load from environment variables (.env file or system env)
    2. Validate all settings (type checking, range validation)
    3. Fail fast if settings are invalid
    4. Access throughout app via: settings.store_provider, settings.log_level, etc.

INPUTS:
    - Environment variables (from .env file or system env)
    - Examples:
        STORE_PROVIDER=redis
        REDIS_URL=redis://localhost:6379/0
        LOG_LEVEL=DEBUG
        LOG_FORMAT=json

CONFIGURATION CATEGORIES:
    1. Store selection
       - store_provider: memory | redis
    2. Redis
       - redis_url or redis_host/redis_port/redis_db/redis_password
       - redis_pool_size, redis_timeout, redis_key_prefix
    3. Server
       - server_host, server_port
    4. Logging / environment
       - log_level, log_format, environment, debug

KEY FACTS:
    - Settings loaded once at startup, changes require restart
    - Environment variables override defaults
    - Supports .env file (python-dotenv)

TESTING ENVIRONMENT:
    - Override settings in tests: Settings(STORE_PROVIDER="memory")
"""

from __future__ import annotations

import os

from pathlib import Path
from typing import Any, Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

_CWD_ENV = Path(os.getcwd()) / ".env"
_REPO_ROOT_ENV = Path(__file__).resolve().parents[2] / ".env"
_ENV_PATH = _CWD_ENV if _CWD_ENV.exists() else _REPO_ROOT_ENV

load_dotenv(dotenv_path=_ENV_PATH, override=False)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables + .env.

    All fields have aliases to match .env variable names.
    Supports both Redis URL and HOST/PORT/DB/PASSWORD configurations.
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # ========================================================================
    # STORE
    # ========================================================================

    store_provider: Literal["memory", "redis"] = Field(
        default="memory",
        alias="STORE_PROVIDER",
        description="Todo store backend: memory | redis",
    )

    # ========================================================================
    # REDIS - Support BOTH URL and HOST/PORT patterns
    # ========================================================================

    redis_url: Optional[str] = Field(
        default=None,
        alias="REDIS_URL",
        description="Redis connection URL (e.g., redis://localhost:6379/0)",
    )

    redis_host: str = Field(
        default="localhost",
        alias="REDIS_HOST",
        description="Redis host",
    )

    redis_port: int = Field(
        default=6379,
        ge=1,
        le=65535,
        alias="REDIS_PORT",
        description="Redis port",
    )

    redis_db: int = Field(
        default=0,
        ge=0,
        le=15,
        alias="REDIS_DB",
        description="Redis database number",
    )

    redis_password: Optional[str] = Field(
        default=None,
        alias="REDIS_PASSWORD",
        description="Redis password (optional)",
    )

    redis_pool_size: int = Field(
        default=20,
        ge=1,
        le=500,
        alias="REDIS_POOL_SIZE",
        description="Redis connection pool size",
    )

    redis_timeout: float = Field(
        default=2.0,
        ge=0.1,
        le=30.0,
        alias="REDIS_TIMEOUT",
        description="Redis operation timeout (seconds)",
    )

    redis_key_prefix: str = Field(
        default="todo",
        alias="REDIS_KEY_PREFIX",
        description="Namespace prefix for todo keys",
    )

    @computed_field  # type: ignore[misc]
    @property
    def resolved_redis_url(self) -> str:
        """
        Resolve Redis URL from either explicit URL or HOST/PORT/PASSWORD.

        Priority:
        1. If REDIS_URL provided → use it directly
        2. Else → construct from REDIS_HOST:REDIS_PORT/REDIS_DB
        """
        if self.redis_url:
            return self.redis_url

        password_part = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{password_part}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # ========================================================================
    # SERVER
    # ========================================================================

    server_host: str = Field(
        default="127.0.0.1",
        alias="BACKEND_HOST",
        description="Server host",
    )

    server_port: int = Field(
        default=8080,
        ge=1024,
        le=65535,
        alias="BACKEND_PORT",
        description="Server port",
    )

    # ========================================================================
    # LOGGING / ENVIRONMENT
    # ========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    log_format: Literal["json", "text"] = Field(
        default="text",
        alias="LOG_FORMAT",
        description="Logging format: json or text",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Environment: development, staging, production",
    )

    debug: bool = Field(
        default=False,
        alias="DEBUG",
        description="Debug mode enabled",
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: Any) -> Any:
        """Accept lower-case level names from the environment."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("redis_key_prefix")
    @classmethod
    def _validate_key_prefix(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Redis key prefix must be non-empty string")
        return v.strip()

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert settings to dictionary with secrets redacted.

        Returns:
            Settings dictionary with passwords masked
        """
        d = self.model_dump()

        if d.get("redis_password"):
            d["redis_password"] = "***REDACTED***"
        if self.redis_password and d.get("resolved_redis_url"):
            d["resolved_redis_url"] = d["resolved_redis_url"].replace(
                self.redis_password, "***REDACTED***"
            )
        if self.redis_password and d.get("redis_url"):
            d["redis_url"] = d["redis_url"].replace(
                self.redis_password, "***REDACTED***"
            )

        return d
