"""V1.03 — Track Coverage.

Share of the canvas that is track: too little is an error, too much is a
warning (an open canvas offers no challenge).
"""

from __future__ import annotations

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check


@check(
    id="V1.03",
    stage=Stage.STRUCTURE,
    dependencies=["V0.01"],
    description="Check the track covers a sensible share of the canvas",
)
def track_coverage(ctx: ValidationContext) -> None:
    cfg = ctx.config
    coverage = float(ctx.metrics.get("trackCoverage", 0.0))

    if coverage < cfg.min_track_coverage:
        status = "too_low"
        ctx.add_error(
            "coverage",
            "major",
            f"Track coverage too low: {coverage * 100:.1f}% "
            f"(minimum: {cfg.min_track_coverage * 100:.1f}%)",
            "Increase track area or reduce wall sections",
            {"coverage": coverage, "required": cfg.min_track_coverage},
        )
    elif coverage > cfg.max_track_coverage:
        status = "too_high"
        ctx.add_warning(
            "coverage",
            f"Track coverage very high: {coverage * 100:.1f}% "
            f"(recommended max: {cfg.max_track_coverage * 100:.1f}%)",
            "High coverage may reduce gameplay challenge",
            {"coverage": coverage, "recommended": cfg.max_track_coverage},
        )
    else:
        status = "optimal"

    ctx.analysis["coverage"] = {
        "percentage": coverage,
        "status": status,
        "trackPixels": ctx.metrics.get("trackPixels", 0),
        "totalPixels": ctx.metrics.get("totalPixels", 0),
    }
