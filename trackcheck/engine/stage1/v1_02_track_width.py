"""V1.02 — Track Width.

Chamfer distance transform → local width (2 × distance to nearest wall).
Too-narrow sections are errors, too-wide sections and highly variable
width are warnings.
"""

from __future__ import annotations

import logging

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check
from trackcheck.utils.distance import WidthStats, chamfer_distance, sample_points, width_statistics

logger = logging.getLogger(__name__)


@check(
    id="V1.02",
    stage=Stage.STRUCTURE,
    dependencies=["V0.01"],
    description="Measure track width with a distance transform",
)
def track_width(ctx: ValidationContext) -> None:
    cfg = ctx.config
    track = ctx.track_pixels
    if track == 0 or ctx.mask is None:
        stats = WidthStats()
    else:
        ctx.distance = chamfer_distance(ctx.mask)
        stats = width_statistics(ctx.distance, ctx.mask, cfg.min_track_width, cfg.max_track_width)
    ctx.width_stats = stats

    ctx.metrics.update({
        "minTrackWidth": stats.min,
        "maxTrackWidth": stats.max,
        "avgTrackWidth": stats.average,
        "medianTrackWidth": stats.median,
        "widthVariance": stats.variance,
        "narrowPoints": stats.narrow_count,
        "widePoints": stats.wide_count,
    })
    ctx.analysis["width"] = {
        "min": stats.min,
        "max": stats.max,
        "average": stats.average,
        "median": stats.median,
        "variance": stats.variance,
        "narrowPointCount": stats.narrow_count,
        "widePointCount": stats.wide_count,
    }
    if track == 0:
        return

    if stats.min < cfg.min_track_width:
        narrow_share = stats.narrow_count / track
        ctx.add_error(
            "width",
            "critical" if narrow_share > cfg.narrow_ratio_critical else "major",
            f"Track too narrow: minimum width {stats.min:.1f}px "
            f"(required: {cfg.min_track_width:g}px)",
            f"{stats.narrow_count} points narrower than {cfg.min_track_width:g}px",
            {
                "minWidth": stats.min,
                "narrowRatio": narrow_share,
                "narrowPoints": sample_points(stats.narrow_points, cfg.max_payload_points),
            },
        )

    if stats.max > cfg.max_track_width:
        ctx.add_warning(
            "width",
            f"Track very wide: maximum width {stats.max:.1f}px "
            f"(recommended max: {cfg.max_track_width:g}px)",
            f"{stats.wide_count} points wider than {cfg.max_track_width:g}px",
            {
                "maxWidth": stats.max,
                "widePoints": sample_points(stats.wide_points, cfg.max_payload_points),
            },
        )

    if stats.variance > stats.average * cfg.width_variation_limit:
        ctx.add_warning(
            "width",
            "High width variation detected",
            "Track width varies significantly, which may affect gameplay balance",
            {"variance": stats.variance, "avgWidth": stats.average},
        )

    ctx.visual_data["narrowPoints"] = sample_points(stats.narrow_points, cfg.max_visual_points)
    ctx.visual_data["widePoints"] = sample_points(stats.wide_points, cfg.max_visual_points)

    logger.debug(
        "Width analysis: %.1f-%.1fpx (avg: %.1fpx)", stats.min, stats.max, stats.average
    )
