"""V4.03 — Suggestions.

Maps every error and warning to a remediation template. Priority follows the
finding's severity; suggestions sharing an action appear once.
"""

from __future__ import annotations

import logging

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check

logger = logging.getLogger(__name__)

PRIORITY_BY_SEVERITY = {
    "critical": "critical",
    "major": "high",
    "minor": "medium",
    "warning": "medium",
}

# (kind, tier) -> (suggestion kind, message, details, action)
TEMPLATES: dict[tuple[str, str], tuple[str, str, str, str]] = {
    ("width", "error"): (
        "improvement",
        "Widen narrow track sections",
        "Use a larger brush size or the rectangle tool to expand areas narrower than {min_width:g}px",
        "expand_narrow_areas",
    ),
    ("width", "warning"): (
        "optimization",
        "Even out the track width",
        "Narrow overly wide sections so the track keeps a consistent racing line",
        "balance_width",
    ),
    ("connectivity", "error"): (
        "improvement",
        "Connect isolated track sections",
        "Use the brush or line tool to create bridges between disconnected areas",
        "connect_regions",
    ),
    ("coverage", "error"): (
        "improvement",
        "Increase track coverage",
        "Add more track area or reduce wall sections to meet minimum coverage requirements",
        "increase_coverage",
    ),
    ("start_areas", "error"): (
        "improvement",
        "Create a start area",
        "Paint a wide open section of at least {start_radius:g}px radius for players to start from",
        "add_start_areas",
    ),
    ("start_areas", "warning"): (
        "optimization",
        "Add more starting positions",
        "Create additional wide areas near the track start for better player distribution",
        "add_start_areas",
    ),
    ("token_areas", "error"): (
        "improvement",
        "Create token spawn areas",
        "Paint wide sections of at least {token_radius:g}px radius away from the start",
        "add_token_areas",
    ),
    ("token_areas", "warning"): (
        "optimization",
        "Add more token spawn locations",
        "Create wider areas at different track locations for token placement variety",
        "add_token_areas",
    ),
    ("path_length", "error"): (
        "improvement",
        "Lengthen the route between start and goals",
        "Add turns or detours so the shortest path reaches {min_path:g}px",
        "lengthen_paths",
    ),
}


@check(
    id="V4.03",
    stage=Stage.ASSESSMENT,
    dependencies=["V1.03", "V4.01", "V4.02"],
    description="Turn findings into remediation suggestions",
)
def suggestions(ctx: ValidationContext) -> None:
    cfg = ctx.config
    fields = {
        "min_width": cfg.min_track_width,
        "start_radius": cfg.min_start_area_radius,
        "token_radius": cfg.min_token_area_radius,
        "min_path": cfg.min_path_length,
    }
    seen = {s.action for s in ctx.report.suggestions if s.action}

    findings = [(f, "error") for f in ctx.report.errors] + [(f, "warning") for f in ctx.report.warnings]
    for finding, tier in findings:
        template = TEMPLATES.get((finding.kind, tier))
        if template is None:
            continue
        kind, message, details, action = template
        if action in seen:
            continue
        seen.add(action)
        ctx.add_suggestion(
            kind,
            PRIORITY_BY_SEVERITY.get(finding.severity, "medium"),
            message,
            details.format(**fields),
            action,
        )

    gameplay = ctx.analysis.get("gameplay", {})
    if ctx.metrics.get("connectedRegions") == 1 and gameplay.get("variety") == "low":
        if "add_branches" not in seen:
            seen.add("add_branches")
            ctx.add_suggestion(
                "enhancement",
                "low",
                "Consider adding alternative paths",
                "Create branches or shortcuts to increase strategic options",
                "add_branches",
            )

    if ctx.analysis.get("performance", {}).get("performanceRating") == "poor":
        if "simplify_design" not in seen:
            ctx.add_suggestion(
                "optimization",
                "medium",
                "Simplify track design for better performance",
                "Reduce complexity by creating smoother curves and fewer small sections",
                "simplify_design",
            )

    logger.debug("%d suggestions", len(ctx.report.suggestions))
