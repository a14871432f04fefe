"""ValidationReport — the aggregate output of one validation run."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np

SEVERITIES = ("critical", "major", "minor")
WARNING = "warning"


@dataclass
class Finding:
    """One error or warning produced by a check."""

    kind: str
    severity: str
    message: str
    details: str = ""
    data: dict[str, Any] | None = None


@dataclass
class Suggestion:
    """A human-actionable remediation hint."""

    kind: str
    priority: str
    message: str
    details: str = ""
    action: str = ""


@dataclass
class ValidationReport:
    """Constructed fresh per validation, cached by content hash, never mutated after return."""

    is_valid: bool = False
    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)
    analysis: dict[str, Any] = field(default_factory=dict)
    visual_data: dict[str, Any] = field(default_factory=dict)
    performance: dict[str, float] = field(
        default_factory=lambda: {"validation_time_ms": 0.0, "complexity": 0.0}
    )
    score: float = 0.0
    timestamp: float = 0.0
    cache_key: str = ""
    stage_failures: dict[str, str] = field(default_factory=dict)

    def errors_of(self, kind: str) -> list[Finding]:
        return [e for e in self.errors if e.kind == kind]

    def warnings_of(self, kind: str) -> list[Finding]:
        return [w for w in self.warnings if w.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation (numpy scalars unwrapped, non-finite floats → None)."""
        return _json_safe(asdict(self))

    def summary(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "suggestions": len(self.suggestions),
            "overall_score": self.score,
            "validation_time_ms": self.performance.get("validation_time_ms", 0.0),
        }


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, np.ndarray):
        return _json_safe(value.tolist())
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value
