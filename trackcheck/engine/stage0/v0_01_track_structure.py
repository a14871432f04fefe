"""V0.01 — Track Structure.

Classify the canonical RGBA pixels into the traversable mask and count
track vs wall cells.
"""

from __future__ import annotations

import logging

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check
from trackcheck.utils.mask import classify_rgba, mask_statistics

logger = logging.getLogger(__name__)


@check(
    id="V0.01",
    stage=Stage.SAMPLING,
    description="Classify pixels into track and wall cells",
)
def track_structure(ctx: ValidationContext) -> None:
    if ctx.mask is None:
        if ctx.rgba is None:
            raise ValueError("No pixels to classify")
        ctx.mask = classify_rgba(ctx.rgba, ctx.config.mask_encoding)

    stats = mask_statistics(ctx.mask)
    ctx.metrics.update(stats)
    ctx.analysis["structure"] = {
        "trackPixelCount": stats["trackPixels"],
        "wallPixelCount": stats["wallPixels"],
        "coverage": stats["trackCoverage"],
    }

    logger.debug(
        "Analyzed %d pixels: %d track, %d walls",
        stats["totalPixels"],
        stats["trackPixels"],
        stats["wallPixels"],
    )
