"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from trackcheck.config import Settings, settings
from trackcheck.engine.cache import ValidationCache
from trackcheck.engine.config import ValidatorConfig
from trackcheck.engine.validator import TrackValidator


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_validator() -> TrackValidator:
    """Process-wide validator; its cache is the only state shared between requests."""
    config = ValidatorConfig(
        canvas_width=settings.canvas_width,
        canvas_height=settings.canvas_height,
        mask_encoding=settings.mask_encoding,
    )
    return TrackValidator(
        config=config,
        cache=ValidationCache(settings.cache_capacity, settings.cache_ttl_seconds),
        policy=settings.concurrency_policy,
        decode_timeout=settings.decode_timeout_seconds,
    )
