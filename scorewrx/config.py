"""Configuration helpers for server and game constants."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from scorewrx.games.models import HandicapFormat
from scorewrx.games.rules import GameRules


class _Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    max_strokes: int = Field(default=18, ge=0, le=18, alias="SCOREWRX_MAX_STROKES")
    default_handicap_format: HandicapFormat = Field(
        default="Standard", alias="SCOREWRX_HANDICAP_FORMAT"
    )
    cors_allow_origins: str = Field(
        default="http://localhost,http://127.0.0.1", alias="CORS_ALLOW_ORIGINS"
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached application settings."""

    return _Settings()  # type: ignore[call-arg]


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_game_rules() -> GameRules:
    """Rule values for the engines, with the stroke cap taken from settings."""

    return GameRules(max_strokes=get_settings().max_strokes)


MAX_GROUPS_PER_REQUEST: int = _int_env("SCOREWRX_MAX_GROUPS", 64)


__all__ = [
    "MAX_GROUPS_PER_REQUEST",
    "get_game_rules",
    "get_settings",
    "reset_settings_cache",
]
