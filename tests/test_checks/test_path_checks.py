"""Tests for the path length check over the sampled network."""

from __future__ import annotations

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.stage0.v0_01_track_structure import track_structure
from trackcheck.engine.stage1.v1_01_connectivity import connectivity
from trackcheck.engine.stage2.v2_01_start_areas import start_areas
from trackcheck.engine.stage2.v2_02_token_areas import token_areas
from trackcheck.engine.stage3.v3_01_path_length import path_length
from trackcheck.models.options import AreaSpec
from tests.conftest import rgba_from_mask, small_config, wall_mask, white_mask


def _routed(mask, config=None, starts=(), tokens=(), with_areas=True) -> ValidationContext:
    ctx = ValidationContext(
        config=config or small_config(),
        rgba=rgba_from_mask(mask),
        start_hints=[AreaSpec(x=x, y=y) for x, y in starts],
        token_hints=[AreaSpec(x=x, y=y) for x, y in tokens],
    )
    track_structure(ctx)
    connectivity(ctx)
    if with_areas:
        start_areas(ctx)
        token_areas(ctx)
    path_length(ctx)
    return ctx


def _messages(findings) -> list[str]:
    return [f.message for f in findings]


def test_short_paths_are_a_major_error():
    # No path across a 200 × 100 canvas reaches 10000px
    ctx = _routed(white_mask(), small_config(min_path_length=10_000.0))

    errors = ctx.report.errors_of("path_length")
    assert len(errors) == 1
    assert errors[0].severity == "major"
    assert errors[0].message.startswith("Shortest path too short")
    assert errors[0].data["required"] == 10_000.0


def test_long_paths_are_a_warning():
    ctx = _routed(white_mask(), small_config(max_path_length=1.0))

    assert ctx.metrics["longestPath"] > 1.0
    long_paths = [w for w in ctx.report.warnings_of("path_length") if w.message.startswith("Longest path very long")]
    assert len(long_paths) == 1
    assert long_paths[0].data["recommended"] == 1.0


def test_single_route_has_low_diversity():
    # One start and one token give exactly one sampled length
    ctx = _routed(white_mask(), starts=[(20, 50)], tokens=[(180, 50)])

    assert ctx.analysis["pathLength"]["samples"] == 1
    assert ctx.analysis["pathLength"]["betweenAreas"] is True
    assert ctx.metrics["pathVariance"] == 0.0
    assert ctx.report.errors_of("path_length") == []
    assert _messages(ctx.report.warnings_of("path_length")) == ["Low path diversity detected"]


def test_random_pairs_are_diverse():
    # Without start and token areas, random node pairs are sampled
    ctx = _routed(white_mask(), with_areas=False)

    assert ctx.analysis["pathLength"]["betweenAreas"] is False
    assert ctx.analysis["pathLength"]["samples"] > 1
    assert "Low path diversity detected" not in _messages(ctx.report.warnings_of("path_length"))


def test_random_pairs_are_deterministic():
    first = _routed(white_mask(), with_areas=False)
    second = _routed(white_mask(), with_areas=False)
    assert first.analysis["pathLength"] == second.analysis["pathLength"]


def test_no_region_is_critical():
    ctx = _routed(wall_mask())

    errors = ctx.report.errors_of("path_length")
    assert [e.severity for e in errors] == ["critical"]
    assert ctx.metrics["shortestPath"] == 0.0
    assert "pathLength" not in ctx.analysis
