"""ValidationContext — the single mutable state object flowing through all checks.

Grid-level intermediates (mask, labels, distance field, network) live on the
context; everything the caller sees is written into ``ctx.report``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from trackcheck.engine.config import ValidatorConfig
from trackcheck.engine.report import WARNING, Finding, Suggestion, ValidationReport
from trackcheck.models.options import AreaSpec
from trackcheck.utils.areas import AreaResult
from trackcheck.utils.distance import WidthStats
from trackcheck.utils.path_network import PathNetwork
from trackcheck.utils.regions import ConnectedRegion


@dataclass
class ValidationContext:
    """Shared state for one validation run."""

    config: ValidatorConfig = field(default_factory=ValidatorConfig)
    # Canonical RGBA pixels: (height, width, 4) uint8
    rgba: NDArray[np.uint8] | None = None
    # Caller hints
    start_hints: list[AreaSpec] = field(default_factory=list)
    token_hints: list[AreaSpec] = field(default_factory=list)
    routes: list[Any] = field(default_factory=list)

    # --- Grid-level intermediates ---
    # Traversable mask: (height, width) bool, read-only
    mask: NDArray[np.bool_] | None = None
    # Region label grid (0 = wall) and the regions it encodes
    labels: NDArray[np.int32] | None = None
    regions: list[ConnectedRegion] = field(default_factory=list)
    # Distance-to-wall field, 0 at walls
    distance: NDArray[np.float64] | None = None
    width_stats: WidthStats | None = None
    start_areas: list[AreaResult] = field(default_factory=list)
    token_areas: list[AreaResult] = field(default_factory=list)
    network: PathNetwork | None = None

    # --- Output ---
    report: ValidationReport = field(default_factory=ValidationReport)

    # --- Pipeline metadata ---
    completed_checks: set[str] = field(default_factory=set)

    @property
    def metrics(self) -> dict[str, Any]:
        return self.report.metrics

    @property
    def analysis(self) -> dict[str, Any]:
        return self.report.analysis

    @property
    def visual_data(self) -> dict[str, Any]:
        return self.report.visual_data

    @property
    def track_pixels(self) -> int:
        return int(self.report.metrics.get("trackPixels", 0))

    @property
    def largest_region(self) -> ConnectedRegion | None:
        if not self.regions:
            return None
        return max(self.regions, key=lambda r: r.size)

    def valid_start_areas(self) -> list[AreaResult]:
        return [a for a in self.start_areas if a.is_valid]

    def valid_token_areas(self) -> list[AreaResult]:
        return [a for a in self.token_areas if a.is_valid]

    def add_error(
        self,
        kind: str,
        severity: str,
        message: str,
        details: str = "",
        data: dict[str, Any] | None = None,
    ) -> Finding:
        finding = Finding(kind=kind, severity=severity, message=message, details=details, data=data)
        self.report.errors.append(finding)
        return finding

    def add_warning(
        self,
        kind: str,
        message: str,
        details: str = "",
        data: dict[str, Any] | None = None,
    ) -> Finding:
        finding = Finding(kind=kind, severity=WARNING, message=message, details=details, data=data)
        self.report.warnings.append(finding)
        return finding

    def add_suggestion(
        self,
        kind: str,
        priority: str,
        message: str,
        details: str = "",
        action: str = "",
    ) -> Suggestion:
        suggestion = Suggestion(kind=kind, priority=priority, message=message, details=details, action=action)
        self.report.suggestions.append(suggestion)
        return suggestion
