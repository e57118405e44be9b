"""
Runtime Settings
================

Environment-driven defaults for the decision engine. Every variable is read
with the ``DECISION_ENGINE_`` prefix, e.g. ``DECISION_ENGINE_RETRY_MAX_RETRIES=5``.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Retry policy defaults (seconds)
    RETRY_MAX_RETRIES: int = 3
    RETRY_BASE_DELAY: float = 0.5
    RETRY_MAX_DELAY: float = 10.0

    # Confidence estimation
    DEFAULT_CONFIDENCE_LEVEL: float = 0.95
    STRICT_CONFIDENCE_LEVELS: bool = False

    # Sampling
    GAMMA_MAX_ITERATIONS: int = 10000

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    class Config:
        env_prefix = "DECISION_ENGINE_"
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
