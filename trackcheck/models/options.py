"""Validation options supplied by the caller alongside a source."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Literal

from pydantic import BaseModel, Field

PresetName = Literal["racing", "maze", "speed", "custom"]


class AreaSpec(BaseModel):
    """A circular start or token area, in canonical canvas pixels."""

    x: float = Field(..., description="Centre x")
    y: float = Field(..., description="Centre y")
    radius: float | None = Field(
        default=None,
        gt=0,
        description="Radius; defaults to the minimum radius for the area kind",
    )


class ValidationOptions(BaseModel):
    preset: PresetName | None = Field(default=None, description="Named rule bundle")
    start_areas: list[AreaSpec] = Field(
        default_factory=list,
        description="Start areas; auto-detected when empty",
    )
    token_areas: list[AreaSpec] = Field(
        default_factory=list,
        description="Goal/token areas; auto-detected when empty",
    )
    routes: list[Any] = Field(
        default_factory=list,
        description="Reserved; not used by the current checks",
    )
    allow_isolated_sections: bool | None = Field(
        default=None,
        description="Overrides the preset/config isolated-section rule",
    )
    force: bool = Field(default=False, description="Skip the cache read")

    model_config = {"frozen": True}

    def fingerprint(self) -> str:
        """Stable hash of every option that affects the result (force excluded)."""
        payload = self.model_dump(mode="json", exclude={"force"})
        raw = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(raw.encode()).hexdigest()[:12]
