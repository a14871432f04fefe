"""Tests for pixel classification and mask statistics."""

from __future__ import annotations

import numpy as np
import pytest

from trackcheck.engine.config import MaskEncoding
from trackcheck.utils.mask import classify_rgba, mask_statistics
from tests.conftest import BLACK, CLEAR, WHITE, rgba_from_mask, two_blob_mask


def _pixels(*colors) -> np.ndarray:
    return np.array([list(colors)], dtype=np.uint8)


def test_combined_encoding_accepts_white_and_transparent():
    rgba = _pixels(WHITE, BLACK, CLEAR, (250, 250, 250, 200))
    mask = classify_rgba(rgba, MaskEncoding.COMBINED)
    assert mask.tolist() == [[True, False, True, True]]


def test_painted_encoding_ignores_transparency():
    rgba = _pixels(WHITE, CLEAR)
    mask = classify_rgba(rgba, MaskEncoding.PAINTED)
    assert mask.tolist() == [[True, False]]


def test_alpha_encoding_ignores_paint():
    rgba = _pixels(WHITE, CLEAR, (255, 255, 255, 100))
    mask = classify_rgba(rgba, MaskEncoding.ALPHA)
    assert mask.tolist() == [[False, True, True]]


def test_near_white_needs_every_channel_above_200():
    rgba = _pixels((201, 201, 201, 255), (255, 255, 200, 255), (255, 150, 255, 255))
    mask = classify_rgba(rgba, MaskEncoding.PAINTED)
    assert mask.tolist() == [[True, False, False]]


@pytest.mark.parametrize("encoding", list(MaskEncoding))
def test_alpha_128_is_wall_in_every_encoding(encoding):
    rgba = _pixels((255, 255, 255, 128))
    assert not classify_rgba(rgba, encoding).any()


def test_mask_is_read_only():
    mask = classify_rgba(_pixels(WHITE))
    with pytest.raises(ValueError):
        mask[0, 0] = False


def test_rejects_non_rgba_shape():
    with pytest.raises(ValueError):
        classify_rgba(np.zeros((4, 4, 3), dtype=np.uint8))


def test_coverage_invariant():
    rng = np.random.default_rng(7)
    mask = rng.random((40, 60)) > 0.3
    stats = mask_statistics(mask)
    assert stats["trackPixels"] + stats["wallPixels"] == stats["totalPixels"]
    assert stats["trackCoverage"] == pytest.approx(stats["trackPixels"] / stats["totalPixels"])
    assert 0.0 <= stats["trackCoverage"] <= 1.0


def test_statistics_for_two_blobs():
    mask = classify_rgba(rgba_from_mask(two_blob_mask()))
    stats = mask_statistics(mask)
    assert stats["totalPixels"] == 200 * 100
    assert stats["wallPixels"] == 10 * 100
