"""Tests for area evaluation and auto-detection."""

from __future__ import annotations

import math

import pytest

from trackcheck.utils.areas import (
    AreaResult,
    AreaRules,
    coverage_ratio,
    detect_areas,
    disc_pixel_count,
    evaluate_area,
    spacing_statistics,
    track_near,
)
from tests.conftest import wall_mask, white_mask

START_RULES = AreaRules(
    label="Start",
    min_radius=10,
    detection_coverage=0.7,
    min_coverage=0.6,
    max_detected=8,
    good_coverage=0.8,
    player_spacing=6.0,
)
TOKEN_RULES = AreaRules(label="Token", min_radius=8, detection_coverage=0.6, min_coverage=0.5, max_detected=6)


def test_disc_pixel_count_matches_lattice_points():
    count = disc_pixel_count(white_mask(), 50, 50, 10)
    expected = sum(1 for dx in range(-10, 11) for dy in range(-10, 11) if dx * dx + dy * dy <= 100)
    assert count == expected


def test_off_canvas_cells_are_walls():
    full = disc_pixel_count(white_mask(), 50, 50, 10)
    corner = disc_pixel_count(white_mask(), 0, 0, 10)
    assert corner < full / 3
    assert coverage_ratio(white_mask(), 0, 0, 10) < 0.3


def test_track_near_is_inclusive():
    mask = wall_mask(40, 40)
    mask[20, 25] = True
    assert track_near(mask, 20, 20, 5)
    assert not track_near(mask, 20, 20, 4)


def test_evaluate_valid_start_area():
    result = evaluate_area(white_mask(), 50, 50, None, START_RULES, center_tolerance=5)
    assert result.is_valid
    assert result.radius == 10
    assert result.coverage == pytest.approx(1.0, abs=0.02)
    assert result.max_players == math.floor(result.coverage * math.pi * 100 / 36)
    assert result.errors == []


def test_evaluate_area_off_track():
    result = evaluate_area(wall_mask(), 50, 50, 12, START_RULES, center_tolerance=5)
    assert not result.is_valid
    assert "Start area center is not on track" in result.errors
    assert any(e.startswith("Insufficient track coverage") for e in result.errors)


def test_evaluate_area_too_small():
    result = evaluate_area(white_mask(), 50, 50, 3, START_RULES, center_tolerance=5)
    assert not result.is_valid
    assert any("too small" in e for e in result.errors)
    assert any("one player" in w for w in result.warnings)


def test_low_coverage_warning():
    mask = white_mask()
    mask[:, :50] = False
    # Disc centred 3 px right of the wall edge: roughly 70% of it is track
    result = evaluate_area(mask, 53, 50, 10, START_RULES, center_tolerance=5)
    assert 0.6 < result.coverage < 0.8
    assert result.is_valid
    assert any(w.startswith("Low track coverage") for w in result.warnings)


def test_token_rules_skip_capacity():
    result = evaluate_area(white_mask(), 50, 50, None, TOKEN_RULES, center_tolerance=5)
    assert result.is_valid
    assert result.max_players is None


def test_detect_areas_on_white_canvas():
    found = detect_areas(white_mask(), START_RULES, stride_factor=2, probe=10)
    assert len(found) == START_RULES.max_detected
    assert all(a.auto_detected for a in found)
    assert all(a.radius == 10 for a in found)


def test_detect_areas_none_when_canvas_too_small():
    rules = AreaRules(label="Start", min_radius=60, detection_coverage=0.7, min_coverage=0.6, max_detected=8)
    assert detect_areas(white_mask(), rules, stride_factor=2, probe=10) == []


def test_detect_areas_none_on_wall_canvas():
    assert detect_areas(wall_mask(), START_RULES, stride_factor=2, probe=10) == []


def test_detect_areas_ranked_by_spread_and_avoiding():
    avoid = [AreaResult(x=10.0, y=10.0, radius=10.0, is_valid=True)]
    found = detect_areas(
        white_mask(),
        TOKEN_RULES,
        stride_factor=2,
        probe=10,
        avoid=avoid,
        avoid_distance=30.0,
        rank_by_spread=True,
    )
    assert found
    assert all(math.hypot(a.x - 10, a.y - 10) >= 30 for a in found)
    distances = [a.distance_from_center for a in found]
    assert distances == sorted(distances, reverse=True)


def test_spacing_statistics():
    areas = [AreaResult(x=0.0, y=0.0, radius=1.0), AreaResult(x=3.0, y=4.0, radius=1.0)]
    stats = spacing_statistics(areas)
    assert stats == {"min_distance": 5.0, "max_distance": 5.0, "avg_distance": 5.0}
    assert spacing_statistics(areas[:1]) is None
