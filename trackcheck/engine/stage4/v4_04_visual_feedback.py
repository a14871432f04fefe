"""V4.04 — Visual Feedback.

Problem areas and reference overlays for an editor to draw on top of the
canvas. Points and centres are in canonical canvas coordinates.
"""

from __future__ import annotations

from typing import Any

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check

COLORS = {
    "narrow": "#ff6b6b",
    "wide": "#ffd93d",
    "invalid_start": "#ff4757",
    "invalid_token": "#ff6348",
    "valid_start": "#2ed573",
    "valid_token": "#1e90ff",
}

MESSAGES = {
    "narrow": "Track too narrow",
    "wide": "Track very wide",
    "invalid_start": "Invalid start area",
    "invalid_token": "Invalid token area",
    "valid_start": "Valid start area",
    "valid_token": "Valid token area",
}


def _area_marker(kind: str, area: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": kind,
        "x": area["x"],
        "y": area["y"],
        "radius": area["radius"],
        "color": COLORS[kind],
        "message": MESSAGES[kind],
    }


@check(
    id="V4.04",
    stage=Stage.ASSESSMENT,
    dependencies=["V1.02", "V2.01", "V2.02"],
    description="Build problem-area and overlay markers",
)
def visual_feedback(ctx: ValidationContext) -> None:
    problem_areas: list[dict[str, Any]] = []
    overlays: list[dict[str, Any]] = []

    for kind in ("narrow", "wide"):
        points = ctx.visual_data.get(f"{kind}Points")
        if points:
            problem_areas.append({
                "type": kind,
                "points": points,
                "color": COLORS[kind],
                "message": MESSAGES[kind],
            })

    start = ctx.analysis.get("startAreas", {})
    token = ctx.analysis.get("tokenAreas", {})
    problem_areas += [_area_marker("invalid_start", a) for a in start.get("invalidAreas", [])]
    problem_areas += [_area_marker("invalid_token", a) for a in token.get("invalidAreas", [])]
    overlays += [_area_marker("valid_start", a) for a in start.get("validAreas", [])]
    overlays += [_area_marker("valid_token", a) for a in token.get("validAreas", [])]

    ctx.visual_data["problemAreas"] = problem_areas
    ctx.visual_data["overlays"] = overlays
