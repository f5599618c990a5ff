"""Load .env and settings.yaml, expose all configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from sports_api.services.cache import DEFAULT_CACHE_TTL

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml() -> dict:
    settings_path = PROJECT_ROOT / "settings.yaml"
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse settings.yaml, using defaults")
            return {}
    return {}


class Settings(BaseModel):
    api_key: str = ""
    use_rapid_api: bool = False
    # Overrides the sport's default RapidAPI host when set.
    rapidapi_host: str | None = None
    cache_ttl: int = DEFAULT_CACHE_TTL  # ms
    persist_cache: bool = True
    cache_dir: Path = PROJECT_ROOT / ".cache"
    request_timeout: float = 15.0
    default_sport: str = "football"

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return v.strip()

    @field_validator("cache_ttl")
    @classmethod
    def positive_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl must be positive")
        return v


def load_settings() -> Settings:
    _load_env()
    raw = _load_yaml()
    raw["api_key"] = os.getenv("API_SPORTS_KEY", "")
    return Settings(**raw)
