"""Validator configuration — thresholds, presets and scoring weight tables."""

from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

logger = logging.getLogger(__name__)


class MaskEncoding(str, enum.Enum):
    """How RGBA pixels map to traversable cells.

    painted:  near-white opaque pixels are track, everything else is wall.
    alpha:    low-opacity pixels are track (collision-map convention).
    combined: either of the above counts as track.
    """

    PAINTED = "painted"
    ALPHA = "alpha"
    COMBINED = "combined"


class ConcurrencyPolicy(str, enum.Enum):
    """What a validate() call does while another one is running.

    share: callers for the same source await the one in-flight result.
    stale: any call made during a running validation gets the last
           completed report back immediately.
    """

    SHARE = "share"
    STALE = "stale"


@dataclass
class ValidatorConfig:
    """Every tunable threshold of the validation checks."""

    # Canonical canvas; every source is resampled to this size
    canvas_width: int = 4000
    canvas_height: int = 2000
    mask_encoding: MaskEncoding = MaskEncoding.COMBINED

    # Track requirements
    min_track_width: float = 128.0  # 4 × 32px player sprite
    max_track_width: float = 800.0
    min_track_coverage: float = 0.05
    max_track_coverage: float = 0.80
    min_path_length: float = 1000.0
    max_path_length: float = 15000.0
    allow_isolated_sections: bool = False

    # Players
    max_players: int = 6
    player_size: int = 32
    player_spacing: float = 48.0
    min_start_area_radius: int = 80
    min_token_area_radius: int = 64

    # Performance budget
    max_complexity_score: float = 1000.0
    max_render_objects: int = 500

    # Connectivity
    isolated_ratio_limit: float = 0.05  # above → major error
    small_region_cells: int = 10

    # Width
    narrow_ratio_critical: float = 0.10  # narrow cells / track cells
    width_variation_limit: float = 0.5  # variance / mean width
    max_visual_points: int = 500
    max_payload_points: int = 10

    # Area detection / validation
    detection_stride_factor: int = 2  # stride = factor × min radius
    detection_probe: int = 10  # ±cells searched for track around a candidate
    center_tolerance: int = 5  # ±cells searched for track around an area centre
    start_detection_coverage: float = 0.7
    token_detection_coverage: float = 0.6
    start_min_coverage: float = 0.6
    start_good_coverage: float = 0.8
    token_min_coverage: float = 0.5
    max_detected_start_areas: int = 8
    max_detected_token_areas: int = 6
    token_avoid_distance: float = 500.0
    min_token_areas: int = 3

    # Path network
    network_stride: int = 50
    network_connect_factor: float = 1.5
    path_sample_pairs: int = 100
    path_diversity_floor: float = 0.1  # variance / mean path length
    random_seed: int = 0

    # Balance factor thresholds
    narrow_avg_width_factor: float = 1.5  # avg < min width × factor
    difficulty_width_variance: float = 0.3  # variance > avg width × factor
    long_path_factor: float = 2.0  # shortest > min path length × factor
    diverse_path_threshold: float = 0.2
    variety_token_areas: int = 2

    def with_preset(self, name: str | None) -> ValidatorConfig:
        """Return a copy with the named preset's overrides applied."""
        if not name:
            return self
        preset = PRESETS.get(name)
        if preset is None:
            logger.warning("Unknown preset %r, using base configuration", name)
            return self
        return replace(self, **preset["overrides"])

    def with_overrides(self, **changes: Any) -> ValidatorConfig:
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown config fields: {sorted(unknown)}")
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["mask_encoding"] = self.mask_encoding.value
        return data


# Named rule bundles. Each overrides the width, coverage and path-length
# thresholds of the base configuration.
PRESETS: dict[str, dict[str, Any]] = {
    "racing": {
        "name": "Racing Track",
        "overrides": {
            "min_track_width": 160.0,
            "max_track_width": 400.0,
            "min_track_coverage": 0.15,
            "max_track_coverage": 0.60,
            "min_path_length": 2000.0,
        },
    },
    "maze": {
        "name": "Maze Track",
        "overrides": {
            "min_track_width": 96.0,
            "max_track_width": 200.0,
            "min_track_coverage": 0.08,
            "max_track_coverage": 0.45,
            "min_path_length": 3000.0,
            "allow_isolated_sections": False,
        },
    },
    "speed": {
        "name": "Speed Track",
        "overrides": {
            "min_track_width": 200.0,
            "max_track_width": 600.0,
            "min_track_coverage": 0.20,
            "max_track_coverage": 0.70,
            "min_path_length": 1500.0,
        },
    },
    "custom": {
        "name": "Custom Track",
        "overrides": {
            "min_track_width": 128.0,
            "max_track_width": 800.0,
            "min_track_coverage": 0.05,
            "max_track_coverage": 0.80,
            "min_path_length": 1000.0,
            "allow_isolated_sections": True,
        },
    },
}

PRESET_NAMES = tuple(PRESETS)

# Complexity score = Σ weight × term
#   cells:          (track + wall cells) / 10 000
#   regions:        connected region count
#   width_spread:   width variance / average width
#   network_edges:  path network edge count
COMPLEXITY_WEIGHTS: dict[str, float] = {
    "cells": 1.0 / 10000,
    "regions": 10.0,
    "width_spread": 100.0,
    "network_edges": 1.0 / 100,
}

# Render objects ≈ complexity / 2
RENDER_OBJECTS_PER_COMPLEXITY = 0.5

VARIETY_WEIGHTS: dict[str, float] = {
    "path_diversity": 0.3,
    "token_areas": 0.3,
    "width_variance": 0.2,
    "single_region": 0.2,
}

BALANCE_WEIGHTS: dict[str, float] = {
    "fairness": 0.4,
    "difficulty": 0.3,
    "variety": 0.3,
}

# Fairness counted in the balance formula when fewer than two start areas exist
UNDEFINED_FAIRNESS = 0.5

# Overall score deductions
SEVERITY_PENALTIES: dict[str, float] = {
    "critical": 30.0,
    "major": 20.0,
    "minor": 10.0,
}
UNKNOWN_SEVERITY_PENALTY = 15.0
WARNING_PENALTY = 5.0
BALANCE_BONUS = 10.0
