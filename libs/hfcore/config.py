"""Configuration loading for the harmonic field services.

Reads environment variables (and a local .env file, if present) into a typed
settings object using Pydantic v2.

Env variables:
- HF_LOG_LEVEL (default: INFO)
- HF_ENV (default: development)
- HF_OTEL_ENDPOINT (optional)
- HF_DEFAULT_ROOT (default: C; checked by the pods when a request omits a root)
- HF_DEFAULT_SCALE (default: major; checked the same way)
- HF_BASE_OCTAVE (default: 3)
- HF_HARMONY_PORT (default: 8005)
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    HF_LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    HF_ENV: str = Field(default="development", description="Environment name")
    HF_OTEL_ENDPOINT: Optional[str] = Field(
        default=None, description="OTLP HTTP endpoint (e.g., http://localhost:4318)"
    )

    HF_DEFAULT_ROOT: str = Field(default="C", description="Key root used when a request omits one")
    HF_DEFAULT_SCALE: str = Field(default="major", description="Scale mode used when a request omits one")
    HF_BASE_OCTAVE: int = Field(default=3, ge=0, le=6, description="Root-position octave for voicings")
    HF_HARMONY_PORT: int = Field(default=8005, ge=1, le=65535, description="Harmony pod port")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment and memoize.

    Raises:
        ValueError: if an environment variable holds an invalid value.
    """
    load_dotenv()

    env = {
        "HF_LOG_LEVEL": os.getenv("HF_LOG_LEVEL", "INFO"),
        "HF_ENV": os.getenv("HF_ENV", "development"),
        "HF_OTEL_ENDPOINT": os.getenv("HF_OTEL_ENDPOINT") or None,
        "HF_DEFAULT_ROOT": os.getenv("HF_DEFAULT_ROOT", "C"),
        "HF_DEFAULT_SCALE": os.getenv("HF_DEFAULT_SCALE", "major"),
        "HF_BASE_OCTAVE": os.getenv("HF_BASE_OCTAVE", "3"),
        "HF_HARMONY_PORT": os.getenv("HF_HARMONY_PORT", "8005"),
    }

    try:
        return Settings.model_validate(env)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


__all__ = ["Settings", "get_settings"]
