"""Engine settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FOCUS_ENGINE_", env_file=".env", extra="ignore")

    timezone: str = "UTC"
    heatmap_thresholds: list[float] = [2.0, 4.0, 6.0]
    draft_dir: Path = Path(".focus_drafts")
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> EngineSettings:
    return EngineSettings()
