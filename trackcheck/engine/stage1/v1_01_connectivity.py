"""V1.01 — Connectivity.

Partition the track into 4-connected regions. One region is a fully
connected circuit; extra regions are isolated sections, an error when
they hold more than 5% of the track and isolated sections are not allowed.
"""

from __future__ import annotations

import logging

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check
from trackcheck.utils.regions import isolated_ratio, label_regions

logger = logging.getLogger(__name__)


@check(
    id="V1.01",
    stage=Stage.STRUCTURE,
    dependencies=["V0.01"],
    description="Find connected track regions and report fragmentation",
)
def connectivity(ctx: ValidationContext) -> None:
    cfg = ctx.config
    track = ctx.track_pixels

    if track == 0 or ctx.mask is None:
        ctx.metrics.update({
            "connectedRegions": 0,
            "largestRegionSize": 0,
            "isolatedPixelRatio": 0.0,
            "smallRegions": 0,
        })
        ctx.analysis["connectivity"] = {
            "totalRegions": 0,
            "largestRegion": 0,
            "isolatedSections": 0,
            "connectivity": "none",
        }
        ctx.add_error(
            "connectivity",
            "critical",
            "No track pixels found - track appears to be entirely walls",
            "The track must have white pixels indicating navigable areas",
        )
        return

    ctx.labels, ctx.regions = label_regions(ctx.mask)
    count = len(ctx.regions)
    largest = max(r.size for r in ctx.regions)
    ratio = isolated_ratio(ctx.regions, track)

    ctx.metrics["connectedRegions"] = count
    ctx.metrics["largestRegionSize"] = largest
    ctx.metrics["isolatedPixelRatio"] = ratio
    ctx.metrics["smallRegions"] = sum(1 for r in ctx.regions if r.size < cfg.small_region_cells)

    if count > 1:
        message = f"Track has {count} disconnected regions"
        if cfg.allow_isolated_sections:
            ctx.add_warning(
                "connectivity",
                message,
                "Isolated sections are allowed by the active rule set",
                {"regions": count, "isolatedRatio": ratio},
            )
        elif ratio > cfg.isolated_ratio_limit:
            ctx.add_error(
                "connectivity",
                "major",
                message,
                f"{ratio * 100:.1f}% of track area is isolated from the main path",
                {"regions": count, "isolatedRatio": ratio},
            )
        else:
            ctx.add_warning(
                "connectivity",
                message,
                "Small isolated sections detected but within acceptable limits",
                {"regions": count, "isolatedRatio": ratio},
            )

    ctx.analysis["connectivity"] = {
        "totalRegions": count,
        "largestRegion": largest,
        "isolatedSections": count - 1,
        "isolatedPixelRatio": ratio,
        "connectivity": "fully_connected" if count == 1 else "fragmented",
        "regions": [
            {"label": r.label, "size": r.size, "bbox": list(r.bbox)}
            for r in sorted(ctx.regions, key=lambda r: r.size, reverse=True)[:20]
        ],
    }

    logger.debug("Found %d connected regions (isolated ratio %.3f)", count, ratio)
