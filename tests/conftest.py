"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from trackcheck.engine.config import ValidatorConfig
from trackcheck.engine.sources import PixelBuffer
from trackcheck.engine.validator import TrackValidator


# Canvas used by most tests: small enough that every check runs in milliseconds

CANVAS_WIDTH = 200
CANVAS_HEIGHT = 100

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
CLEAR = (0, 0, 0, 0)


def small_config(**overrides) -> ValidatorConfig:
    """Thresholds scaled down to the 200 × 100 test canvas."""
    values = dict(
        canvas_width=CANVAS_WIDTH,
        canvas_height=CANVAS_HEIGHT,
        min_track_width=8.0,
        max_track_width=60.0,
        min_path_length=20.0,
        max_path_length=1000.0,
        player_spacing=6.0,
        min_start_area_radius=10,
        min_token_area_radius=8,
        token_avoid_distance=30.0,
        network_stride=5,
    )
    values.update(overrides)
    return ValidatorConfig(**values)


def rgba_from_mask(mask: np.ndarray) -> np.ndarray:
    """Opaque white where the mask is True, opaque black elsewhere."""
    rgba = np.zeros(mask.shape + (4,), dtype=np.uint8)
    rgba[mask] = WHITE
    rgba[~mask] = BLACK
    return rgba


def white_mask(width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> np.ndarray:
    return np.ones((height, width), dtype=bool)


def wall_mask(width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> np.ndarray:
    return np.zeros((height, width), dtype=bool)


def two_blob_mask(width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> np.ndarray:
    """Left and right halves separated by a 10 px wall column."""
    mask = np.ones((height, width), dtype=bool)
    mid = width // 2
    mask[:, mid - 5 : mid + 5] = False
    return mask


def corridor_mask(
    thickness: int,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
) -> np.ndarray:
    """A horizontal corridor ``thickness`` rows tall through the middle of a wall canvas."""
    mask = np.zeros((height, width), dtype=bool)
    top = (height - thickness) // 2
    mask[top : top + thickness, :] = True
    return mask


def pixel_source(rgba: np.ndarray) -> PixelBuffer:
    height, width, channels = rgba.shape
    return PixelBuffer(data=rgba.tobytes(), width=width, height=height, channels=channels)


@pytest.fixture
def config() -> ValidatorConfig:
    return small_config()


@pytest.fixture
def validator() -> TrackValidator:
    return TrackValidator(config=small_config())


@pytest.fixture
def white_source() -> PixelBuffer:
    return pixel_source(rgba_from_mask(white_mask()))


@pytest.fixture
def wall_source() -> PixelBuffer:
    return pixel_source(rgba_from_mask(wall_mask()))
