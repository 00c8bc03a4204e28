"""
Process configuration for idleclicker.
Uses pydantic-settings for environment variable parsing.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from idleclicker.accrual import (
    MAX_OFFLINE_SECONDS,
    OFFLINE_EFFICIENCY,
    ONLINE_GRACE_SECONDS,
    AccrualPolicy,
)


class Settings(BaseSettings):
    """Settings loaded from IDLECLICKER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="IDLECLICKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    economy_module: str = Field(
        default="idleclicker.defaults",
        description="Python module exposing define_economy()",
    )
    data_file: str = Field(
        default="idleclicker-data.json",
        description="JSON file holding every player's save",
    )
    tick_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Cadence of the background tick driver",
    )
    max_offline_seconds: float = Field(
        default=MAX_OFFLINE_SECONDS,
        ge=0,
        description="Offline accrual cap",
    )
    offline_efficiency: float = Field(
        default=OFFLINE_EFFICIENCY,
        ge=0,
        le=1,
        description="Fraction of the online rate credited while offline",
    )
    online_grace_seconds: float = Field(
        default=ONLINE_GRACE_SECONDS,
        ge=0,
        description="Longest gap still treated as a live tick",
    )
    live_window_seconds: float = Field(
        default=60.0,
        gt=0,
        description="How long the server keeps ticking a player after their last call",
    )
    leaderboard_limit: int = Field(default=10, ge=1)
    log_level: str = Field(default="WARNING")

    def accrual_policy(self) -> AccrualPolicy:
        return AccrualPolicy(
            max_offline_seconds=self.max_offline_seconds,
            offline_efficiency=self.offline_efficiency,
            online_grace_seconds=self.online_grace_seconds,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | int = "WARNING") -> None:
    """Send log records to stderr; stdout stays free for the MCP stdio transport."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
