"""Service configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from trackcheck.engine.config import ConcurrencyPolicy, MaskEncoding


class Settings(BaseSettings):
    trackcheck_env: str = "development"
    trackcheck_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Report cache
    cache_capacity: int = 128
    cache_ttl_seconds: float = 600.0

    # Sources
    decode_timeout_seconds: float = 10.0
    canvas_width: int = 4000
    canvas_height: int = 2000
    mask_encoding: MaskEncoding = MaskEncoding.COMBINED

    concurrency_policy: ConcurrencyPolicy = ConcurrencyPolicy.SHARE

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
