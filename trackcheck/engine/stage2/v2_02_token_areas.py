"""V2.02 — Token Areas.

Goal/token spawn areas: smaller than start areas, and when auto-detected
they keep away from the valid start areas and favour the canvas edges.
"""

from __future__ import annotations

import logging

from trackcheck.engine.config import ValidatorConfig
from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check
from trackcheck.utils.areas import AreaRules, detect_areas, evaluate_area

logger = logging.getLogger(__name__)


def token_rules(cfg: ValidatorConfig) -> AreaRules:
    return AreaRules(
        label="Token",
        min_radius=cfg.min_token_area_radius,
        detection_coverage=cfg.token_detection_coverage,
        min_coverage=cfg.token_min_coverage,
        max_detected=cfg.max_detected_token_areas,
    )


@check(
    id="V2.02",
    stage=Stage.AREAS,
    dependencies=["V2.01"],
    description="Validate or auto-detect token spawn areas",
)
def token_areas(ctx: ValidationContext) -> None:
    cfg = ctx.config
    rules = token_rules(cfg)
    mask = ctx.mask

    if mask is None:
        ctx.token_areas = []
    elif ctx.token_hints:
        ctx.token_areas = [
            evaluate_area(mask, a.x, a.y, a.radius, rules, cfg.center_tolerance)
            for a in ctx.token_hints
        ]
    else:
        candidates = detect_areas(
            mask,
            rules,
            cfg.detection_stride_factor,
            cfg.detection_probe,
            avoid=ctx.valid_start_areas(),
            avoid_distance=cfg.token_avoid_distance,
            rank_by_spread=True,
        )
        ctx.token_areas = [
            evaluate_area(mask, c.x, c.y, c.radius, rules, cfg.center_tolerance, auto_detected=True)
            for c in candidates
        ]
        ctx.add_warning(
            "token_areas",
            "No token areas defined - auto-detected potential locations",
            f"Found {len(candidates)} potential token spawn locations",
            {"autoDetected": True, "count": len(candidates)},
        )

    valid = ctx.valid_token_areas()
    invalid = [a for a in ctx.token_areas if not a.is_valid]

    ctx.metrics["tokenAreas"] = len(ctx.token_areas)
    ctx.metrics["validTokenAreas"] = len(valid)
    ctx.metrics["invalidTokenAreas"] = len(invalid)

    if not valid:
        ctx.add_error(
            "token_areas",
            "critical",
            "No valid token spawn areas found",
            "Track must have suitable locations for token placement",
        )
    elif len(valid) < cfg.min_token_areas:
        ctx.add_warning(
            "token_areas",
            f"Limited token areas: {len(valid)} valid (recommended: {cfg.min_token_areas}+)",
            "More token areas provide better gameplay variety",
        )

    ctx.analysis["tokenAreas"] = {
        "total": len(ctx.token_areas),
        "valid": len(valid),
        "invalid": len(invalid),
        "validAreas": [a.to_dict() for a in valid],
        "invalidAreas": [a.to_dict() for a in invalid],
    }

    logger.debug("Token areas: %d/%d valid", len(valid), len(ctx.token_areas))
