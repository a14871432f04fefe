"""V2.01 — Start Areas.

Validate the caller's start areas, or auto-detect candidates when none are
given. Players need at least one valid start area; fewer than half the
player count, or areas packed too closely, are warnings.
"""

from __future__ import annotations

import logging
import math

from trackcheck.engine.config import ValidatorConfig
from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check
from trackcheck.utils.areas import AreaRules, detect_areas, evaluate_area, spacing_statistics

logger = logging.getLogger(__name__)


def start_rules(cfg: ValidatorConfig) -> AreaRules:
    return AreaRules(
        label="Start",
        min_radius=cfg.min_start_area_radius,
        detection_coverage=cfg.start_detection_coverage,
        min_coverage=cfg.start_min_coverage,
        good_coverage=cfg.start_good_coverage,
        player_spacing=cfg.player_spacing,
        max_detected=cfg.max_detected_start_areas,
    )


@check(
    id="V2.01",
    stage=Stage.AREAS,
    dependencies=["V0.01"],
    description="Validate or auto-detect player start areas",
)
def start_areas(ctx: ValidationContext) -> None:
    cfg = ctx.config
    rules = start_rules(cfg)
    mask = ctx.mask

    if mask is None:
        ctx.start_areas = []
    elif ctx.start_hints:
        ctx.start_areas = [
            evaluate_area(mask, a.x, a.y, a.radius, rules, cfg.center_tolerance)
            for a in ctx.start_hints
        ]
    else:
        candidates = detect_areas(mask, rules, cfg.detection_stride_factor, cfg.detection_probe)
        ctx.start_areas = [
            evaluate_area(mask, c.x, c.y, c.radius, rules, cfg.center_tolerance, auto_detected=True)
            for c in candidates
        ]
        ctx.add_warning(
            "start_areas",
            "No start areas defined - auto-detected potential locations",
            f"Found {len(candidates)} potential start locations",
            {"autoDetected": True, "count": len(candidates)},
        )

    valid = ctx.valid_start_areas()
    invalid = [a for a in ctx.start_areas if not a.is_valid]
    required = math.ceil(cfg.max_players / 2)

    ctx.metrics["startAreas"] = len(ctx.start_areas)
    ctx.metrics["validStartAreas"] = len(valid)
    ctx.metrics["invalidStartAreas"] = len(invalid)

    if not valid:
        ctx.add_error(
            "start_areas",
            "critical",
            "No valid start areas found",
            "Track must have at least one suitable starting location for players",
        )
    elif len(valid) < required:
        ctx.add_warning(
            "start_areas",
            f"Limited start areas: {len(valid)} valid (recommended: {required})",
            "Additional start areas would improve player distribution",
        )

    spacing = spacing_statistics(valid)
    if spacing is not None:
        ctx.metrics["minStartAreaSpacing"] = spacing["min_distance"]
        if spacing["min_distance"] < cfg.player_spacing * 2:
            ctx.add_warning(
                "start_areas",
                "Start areas too close together",
                f"Minimum distance: {spacing['min_distance']:.1f}px "
                f"(recommended: {cfg.player_spacing * 2:g}px)",
                {"minDistance": spacing["min_distance"]},
            )

    ctx.analysis["startAreas"] = {
        "total": len(ctx.start_areas),
        "valid": len(valid),
        "invalid": len(invalid),
        "required": required,
        "spacing": spacing,
        "validAreas": [a.to_dict() for a in valid],
        "invalidAreas": [a.to_dict() for a in invalid],
    }

    logger.debug("Start areas: %d/%d valid", len(valid), len(ctx.start_areas))
