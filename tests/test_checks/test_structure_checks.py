"""Tests for the structure checks run on purpose-built masks: width and coverage."""

from __future__ import annotations

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.stage0.v0_01_track_structure import track_structure
from trackcheck.engine.stage1.v1_02_track_width import track_width
from trackcheck.engine.stage1.v1_03_coverage import track_coverage
from tests.conftest import corridor_mask, rgba_from_mask, small_config, white_mask


def _sampled(mask, config=None) -> ValidationContext:
    ctx = ValidationContext(config=config or small_config(), rgba=rgba_from_mask(mask))
    track_structure(ctx)
    return ctx


def _messages(findings) -> list[str]:
    return [f.message for f in findings]


# --- Width ---


def test_open_canvas_is_too_wide():
    ctx = _sampled(white_mask())
    track_width(ctx)

    # Centre cells sit 50 cells from the nearest canvas edge
    assert ctx.metrics["maxTrackWidth"] == 100.0
    wide = [w for w in ctx.report.warnings_of("width") if w.message.startswith("Track very wide")]
    assert len(wide) == 1
    assert wide[0].data["maxWidth"] == 100.0
    assert ctx.metrics["widePoints"] > 0


def test_wide_limit_follows_config():
    ctx = _sampled(white_mask(), small_config(max_track_width=500.0))
    track_width(ctx)
    assert not any(m.startswith("Track very wide") for m in _messages(ctx.report.warnings_of("width")))
    assert ctx.metrics["widePoints"] == 0


def test_varying_width_warns():
    ctx = _sampled(white_mask())
    track_width(ctx)
    assert ctx.metrics["widthVariance"] > ctx.metrics["avgTrackWidth"] * 0.5
    assert "High width variation detected" in _messages(ctx.report.warnings_of("width"))


def test_uniform_corridor_has_no_width_warnings():
    # Every cell of a 2-row corridor touches a wall: width 2 everywhere
    ctx = _sampled(corridor_mask(2))
    track_width(ctx)

    assert ctx.metrics["minTrackWidth"] == ctx.metrics["maxTrackWidth"] == 2.0
    assert ctx.metrics["widthVariance"] == 0.0
    assert ctx.report.warnings_of("width") == []
    narrow = ctx.report.errors_of("width")
    assert len(narrow) == 1
    assert narrow[0].severity == "critical"


# --- Coverage ---


def test_low_coverage_is_an_error():
    # 4 of 100 rows: 4% track against a 5% floor
    ctx = _sampled(corridor_mask(4))
    track_coverage(ctx)

    errors = ctx.report.errors_of("coverage")
    assert len(errors) == 1
    assert errors[0].severity == "major"
    assert errors[0].message.startswith("Track coverage too low: 4.0%")
    assert ctx.analysis["coverage"]["status"] == "too_low"


def test_high_coverage_is_a_warning():
    ctx = _sampled(white_mask())
    track_coverage(ctx)

    assert ctx.report.errors_of("coverage") == []
    warnings = ctx.report.warnings_of("coverage")
    assert len(warnings) == 1
    assert warnings[0].message.startswith("Track coverage very high: 100.0%")
    assert ctx.analysis["coverage"]["status"] == "too_high"


def test_moderate_coverage_is_optimal():
    ctx = _sampled(corridor_mask(20))
    track_coverage(ctx)

    assert ctx.report.errors == []
    assert ctx.report.warnings == []
    assert ctx.analysis["coverage"]["status"] == "optimal"
    assert ctx.analysis["coverage"]["percentage"] == 0.2
