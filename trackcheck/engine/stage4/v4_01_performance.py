"""V4.01 — Performance Estimate.

Weighted complexity score and a rough render-object count. Advisory only:
exceeding either limit produces a warning, never an error.
"""

from __future__ import annotations

import logging
import math

from trackcheck.engine.config import COMPLEXITY_WEIGHTS, RENDER_OBJECTS_PER_COMPLEXITY
from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check

logger = logging.getLogger(__name__)


def complexity_score(
    cells: int,
    regions: int,
    width_variance: float,
    avg_width: float,
    network_edges: int,
    weights: dict[str, float] = COMPLEXITY_WEIGHTS,
) -> float:
    score = cells * weights["cells"]
    score += regions * weights["regions"]
    if avg_width > 0:
        score += (width_variance / avg_width) * weights["width_spread"]
    score += network_edges * weights["network_edges"]
    return score


def performance_rating(complexity: float, limit: float) -> str:
    if complexity < limit * 0.5:
        return "excellent"
    if complexity < limit * 0.8:
        return "good"
    if complexity < limit:
        return "acceptable"
    return "poor"


@check(
    id="V4.01",
    stage=Stage.ASSESSMENT,
    dependencies=["V1.01", "V1.02", "V3.01"],
    description="Estimate rendering complexity",
)
def performance(ctx: ValidationContext) -> None:
    cfg = ctx.config
    m = ctx.metrics

    complexity = complexity_score(
        cells=int(m.get("totalPixels", 0)),
        regions=int(m.get("connectedRegions", 0)),
        width_variance=float(m.get("widthVariance", 0.0)),
        avg_width=float(m.get("avgTrackWidth", 0.0)),
        network_edges=ctx.network.edge_count if ctx.network is not None else 0,
    )
    render_objects = math.ceil(complexity * RENDER_OBJECTS_PER_COMPLEXITY)

    m["complexityScore"] = complexity
    m["estimatedRenderObjects"] = render_objects
    ctx.report.performance["complexity"] = complexity

    if complexity > cfg.max_complexity_score:
        ctx.add_warning(
            "performance",
            f"High complexity score: {complexity:.1f} "
            f"(max recommended: {cfg.max_complexity_score:g})",
            "Complex tracks may impact game performance",
            {"complexity": complexity, "limit": cfg.max_complexity_score},
        )

    if render_objects > cfg.max_render_objects:
        ctx.add_warning(
            "performance",
            f"High render object count: ~{render_objects} (max: {cfg.max_render_objects})",
            "May cause performance issues on slower devices",
            {"renderObjects": render_objects, "limit": cfg.max_render_objects},
        )

    rating = performance_rating(complexity, cfg.max_complexity_score)
    ctx.analysis["performance"] = {
        "complexityScore": complexity,
        "estimatedRenderObjects": render_objects,
        "performanceRating": rating,
    }

    logger.debug("Performance: complexity %.1f, ~%d render objects", complexity, render_objects)
