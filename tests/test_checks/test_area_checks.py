"""Tests for the start and token area checks with caller-supplied areas."""

from __future__ import annotations

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.stage0.v0_01_track_structure import track_structure
from trackcheck.engine.stage2.v2_01_start_areas import start_areas
from trackcheck.engine.stage2.v2_02_token_areas import token_areas
from trackcheck.models.options import AreaSpec
from tests.conftest import rgba_from_mask, small_config, wall_mask, white_mask


def _areas(mask, starts=(), tokens=(), config=None) -> ValidationContext:
    ctx = ValidationContext(
        config=config or small_config(),
        rgba=rgba_from_mask(mask),
        start_hints=[AreaSpec(x=x, y=y) for x, y in starts],
        token_hints=[AreaSpec(x=x, y=y) for x, y in tokens],
    )
    track_structure(ctx)
    start_areas(ctx)
    token_areas(ctx)
    return ctx


def _messages(findings) -> list[str]:
    return [f.message for f in findings]


# --- Start areas ---


def test_single_start_area_is_too_few():
    ctx = _areas(white_mask(), starts=[(100, 50)], tokens=[(30, 50)])

    assert ctx.metrics["validStartAreas"] == 1
    assert ctx.report.errors_of("start_areas") == []
    # Six players need at least three start areas
    assert "Limited start areas: 1 valid (recommended: 3)" in _messages(
        ctx.report.warnings_of("start_areas")
    )
    assert ctx.analysis["startAreas"]["required"] == 3
    assert ctx.analysis["startAreas"]["spacing"] is None


def test_start_areas_too_close_together():
    ctx = _areas(white_mask(), starts=[(60, 50), (70, 50)], tokens=[(30, 50)])

    close = [w for w in ctx.report.warnings_of("start_areas") if w.message == "Start areas too close together"]
    assert len(close) == 1
    assert close[0].data["minDistance"] == 10.0
    assert ctx.metrics["minStartAreaSpacing"] == 10.0


def test_spread_start_areas_are_not_too_close():
    ctx = _areas(
        white_mask(),
        starts=[(30, 30), (100, 50), (170, 70)],
        tokens=[(30, 70)],
    )

    assert ctx.metrics["validStartAreas"] == 3
    assert ctx.report.warnings_of("start_areas") == []
    assert ctx.metrics["minStartAreaSpacing"] > 12.0


def test_start_area_off_track_is_invalid():
    ctx = _areas(wall_mask(), starts=[(100, 50)])

    assert ctx.metrics["invalidStartAreas"] == 1
    errors = ctx.report.errors_of("start_areas")
    assert [e.severity for e in errors] == ["critical"]
    invalid = ctx.analysis["startAreas"]["invalidAreas"][0]
    assert "Start area center is not on track" in invalid["errors"]


# --- Token areas ---


def test_single_token_area_is_too_few():
    ctx = _areas(white_mask(), starts=[(100, 50)], tokens=[(30, 50)])

    assert ctx.metrics["validTokenAreas"] == 1
    assert ctx.report.errors_of("token_areas") == []
    assert "Limited token areas: 1 valid (recommended: 3+)" in _messages(
        ctx.report.warnings_of("token_areas")
    )


def test_enough_token_areas():
    ctx = _areas(
        white_mask(),
        starts=[(100, 50)],
        tokens=[(30, 30), (30, 70), (170, 50)],
    )

    assert ctx.metrics["validTokenAreas"] == 3
    assert ctx.report.warnings_of("token_areas") == []
