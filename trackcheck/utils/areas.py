"""Circular start/token area evaluation and auto-detection.

Start and token areas share one algorithm, parameterised by AreaRules:
start areas need a larger radius and a higher coverage floor; token
candidates additionally keep away from known start areas.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import pdist


@dataclass(frozen=True)
class AreaRules:
    label: str
    min_radius: float
    # Coverage a grid candidate needs to be auto-detected
    detection_coverage: float
    # Coverage an area needs to be valid
    min_coverage: float
    max_detected: int
    # Coverage below this (but above min_coverage) is a per-area warning
    good_coverage: float | None = None
    # When set, capacity in players is estimated and checked
    player_spacing: float | None = None


@dataclass
class AreaResult:
    x: float
    y: float
    radius: float
    coverage: float = 0.0
    pixel_count: int = 0
    is_valid: bool = False
    auto_detected: bool = False
    max_players: int | None = None
    distance_from_center: float | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def disc_pixel_count(mask: NDArray[np.bool_], x: float, y: float, radius: float) -> int:
    """Traversable cells within ``radius`` of (x, y); off-canvas cells count as walls."""
    rows, cols = mask.shape
    x0, x1 = max(0, math.floor(x - radius)), min(cols - 1, math.ceil(x + radius))
    y0, y1 = max(0, math.floor(y - radius)), min(rows - 1, math.ceil(y + radius))
    if x0 > x1 or y0 > y1:
        return 0
    yy, xx = np.ogrid[y0 : y1 + 1, x0 : x1 + 1]
    inside = (xx - x) ** 2 + (yy - y) ** 2 <= radius * radius
    return int(np.count_nonzero(mask[y0 : y1 + 1, x0 : x1 + 1] & inside))


def coverage_ratio(mask: NDArray[np.bool_], x: float, y: float, radius: float) -> float:
    """Traversable cells within the disc divided by π·r²."""
    if radius <= 0:
        return 0.0
    return disc_pixel_count(mask, x, y, radius) / (math.pi * radius * radius)


def track_near(mask: NDArray[np.bool_], x: float, y: float, tolerance: int) -> bool:
    """True if any traversable cell lies within ±tolerance of (x, y) on both axes."""
    rows, cols = mask.shape
    cx, cy = int(round(x)), int(round(y))
    x0, x1 = max(0, cx - tolerance), min(cols - 1, cx + tolerance)
    y0, y1 = max(0, cy - tolerance), min(rows - 1, cy + tolerance)
    if x0 > x1 or y0 > y1:
        return False
    return bool(mask[y0 : y1 + 1, x0 : x1 + 1].any())


def evaluate_area(
    mask: NDArray[np.bool_],
    x: float,
    y: float,
    radius: float | None,
    rules: AreaRules,
    center_tolerance: int,
    auto_detected: bool = False,
) -> AreaResult:
    """Validate one area against its rules."""
    r = float(radius) if radius else float(rules.min_radius)
    result = AreaResult(x=float(x), y=float(y), radius=r, auto_detected=auto_detected)

    if not track_near(mask, x, y, center_tolerance):
        result.errors.append(f"{rules.label} area center is not on track")

    result.pixel_count = disc_pixel_count(mask, x, y, r)
    result.coverage = result.pixel_count / (math.pi * r * r)

    if result.coverage < rules.min_coverage:
        result.errors.append(
            f"Insufficient track coverage: {result.coverage * 100:.1f}% "
            f"(required: {rules.min_coverage * 100:.0f}%)"
        )
    elif rules.good_coverage is not None and result.coverage < rules.good_coverage:
        result.warnings.append(f"Low track coverage: {result.coverage * 100:.1f}%")

    if r < rules.min_radius:
        result.errors.append(
            f"{rules.label} area too small: {r:g}px (minimum: {rules.min_radius:g}px)"
        )

    if rules.player_spacing:
        capacity = result.coverage * math.pi * r * r / (rules.player_spacing ** 2)
        result.max_players = int(math.floor(capacity))
        if result.max_players < 2:
            result.warnings.append(f"{rules.label} area may only accommodate one player")

    result.is_valid = not result.errors
    return result


def detect_areas(
    mask: NDArray[np.bool_],
    rules: AreaRules,
    stride_factor: int,
    probe: int,
    avoid: list[AreaResult] | None = None,
    avoid_distance: float = 0.0,
    rank_by_spread: bool = False,
) -> list[AreaResult]:
    """Sample candidate centres on a grid and keep the best-covered ones.

    Candidates are ranked by coverage, or with ``rank_by_spread`` by distance
    from the canvas centre (favouring areas spread across the circuit).
    """
    rows, cols = mask.shape
    radius = int(rules.min_radius)
    stride = max(1, stride_factor * radius)
    required = math.pi * radius * radius * rules.detection_coverage
    avoid = avoid or []
    center_x, center_y = cols / 2, rows / 2

    found: list[AreaResult] = []
    for y in range(radius, rows - radius, stride):
        for x in range(radius, cols - radius, stride):
            if not track_near(mask, x, y, probe):
                continue
            if any(math.hypot(a.x - x, a.y - y) < avoid_distance for a in avoid):
                continue
            count = disc_pixel_count(mask, x, y, radius)
            if count >= required:
                found.append(
                    AreaResult(
                        x=float(x),
                        y=float(y),
                        radius=float(radius),
                        coverage=count / (math.pi * radius * radius),
                        pixel_count=count,
                        auto_detected=True,
                        distance_from_center=math.hypot(x - center_x, y - center_y),
                    )
                )

    if rank_by_spread:
        found.sort(key=lambda a: a.distance_from_center or 0.0, reverse=True)
    else:
        found.sort(key=lambda a: a.coverage, reverse=True)
    return found[: rules.max_detected]


def spacing_statistics(areas: list[AreaResult]) -> dict[str, float] | None:
    """Pairwise centre distances between areas; None for fewer than two."""
    if len(areas) < 2:
        return None
    centers = np.array([[a.x, a.y] for a in areas], dtype=np.float64)
    distances = pdist(centers)
    return {
        "min_distance": float(distances.min()),
        "max_distance": float(distances.max()),
        "avg_distance": float(distances.mean()),
    }
