"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    checks_registered: int = 0


class PresetInfo(BaseModel):
    id: str
    name: str
    overrides: dict[str, float | bool] = Field(default_factory=dict)


class PresetsResponse(BaseModel):
    presets: list[PresetInfo] = Field(default_factory=list)


class ValidationSummary(BaseModel):
    is_valid: bool
    errors: int = 0
    warnings: int = 0
    suggestions: int = 0
    overall_score: float = 0.0
    validation_time_ms: float = 0.0


class ValidateResponse(BaseModel):
    report: dict[str, Any]
    summary: ValidationSummary


class StatsResponse(BaseModel):
    validations: int = 0
    in_flight: int = 0
    policy: str = "share"
    checks: int = 0
    cache: dict[str, Any] = Field(default_factory=dict)
    last_validation_ms: float | None = None


class CacheClearedResponse(BaseModel):
    cleared: int = 0
