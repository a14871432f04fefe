"""Track mask classification — RGBA pixels to a boolean traversable grid."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from trackcheck.engine.config import MaskEncoding

# Alpha strictly above this is opaque, strictly below is low-opacity.
# Exactly 128 is neither and classifies as wall in every encoding.
ALPHA_THRESHOLD = 128

# Every RGB channel strictly above this counts as near-white (painted track).
NEAR_WHITE = 200


def classify_rgba(
    rgba: NDArray[np.uint8],
    encoding: MaskEncoding = MaskEncoding.COMBINED,
) -> NDArray[np.bool_]:
    """Classify an (H, W, 4) RGBA array into a read-only traversable mask."""
    rgba = np.asarray(rgba)
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {rgba.shape}")

    alpha = rgba[..., 3]
    painted = (alpha > ALPHA_THRESHOLD) & np.all(rgba[..., :3] > NEAR_WHITE, axis=2)
    transparent = alpha < ALPHA_THRESHOLD

    if encoding == MaskEncoding.PAINTED:
        mask = painted
    elif encoding == MaskEncoding.ALPHA:
        mask = transparent
    else:
        mask = painted | transparent

    mask = np.ascontiguousarray(mask, dtype=bool)
    mask.flags.writeable = False
    return mask


def mask_statistics(mask: NDArray[np.bool_]) -> dict[str, float | int]:
    """Track/wall pixel counts and the track coverage ratio."""
    total = int(mask.size)
    track = int(np.count_nonzero(mask))
    return {
        "totalPixels": total,
        "trackPixels": track,
        "wallPixels": total - track,
        "trackCoverage": track / total if total else 0.0,
    }
