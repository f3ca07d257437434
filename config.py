"""Configuration for the pattern visualizer, loaded from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class VisualizerSettings(BaseSettings):
    model_config = {"env_prefix": "PATTERN_VIZ_"}

    # seconds between auto-advance ticks at 1x speed
    base_interval: float = Field(default=1.0, gt=0)
    default_speed: float = 1.0

    log_level: str = "INFO"

    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    secret_key: str = ""

    # simulators kept in memory; least recently used sessions are dropped past this
    max_sessions: int = Field(default=256, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> VisualizerSettings:
    return VisualizerSettings()
