"""Configuration for the pro manager core."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://biwenger.as.com/api/v2/"
DEFAULT_DATABASE_URL = "sqlite:///promanager.sqlite"


class ManagerConfig(BaseModel):
    """Runtime configuration for the manager core."""

    # Persistence
    database_url: str = Field(
        default=DEFAULT_DATABASE_URL, description="SQLAlchemy database URL"
    )

    # Remote platform
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Biwenger API root")
    connect_timeout_seconds: int = Field(
        default=10, ge=1, description="Connect timeout for remote calls"
    )

    # Bot identity, plain or ENC:-prefixed
    bot_email: Optional[str] = Field(default=None, description="Bot account email")
    bot_password: Optional[str] = Field(
        default=None, description="Bot account password"
    )
    config_secret: Optional[str] = Field(
        default=None, description="Secret used to decrypt ENC: values"
    )

    log_level: str = Field(default="INFO", description="Logging level name")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer.") from exc


def load_config() -> ManagerConfig:
    """Load configuration from environment variables (and a .env file)."""
    load_dotenv()

    return ManagerConfig(
        database_url=os.getenv("PROMANAGER_DATABASE_URL") or DEFAULT_DATABASE_URL,
        base_url=os.getenv("BIWENGER_BASE_URL") or DEFAULT_BASE_URL,
        connect_timeout_seconds=_int_env("BIWENGER_CONNECT_TIMEOUT", 10),
        bot_email=os.getenv("BOT_EMAIL") or None,
        bot_password=os.getenv("BOT_PASSWORD") or None,
        config_secret=os.getenv("CONFIG_SECRET") or None,
        log_level=os.getenv("PROMANAGER_LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
