"""Chamfer distance transform and track width statistics.

Two raster passes with chamfer weights 1 (axial) and √2 (diagonal):
  forward  (top-left → bottom-right): up, up-left, up-right, left
  backward (bottom-right → top-left): down, down-right, down-left, right
Walls are seeded at 0. Each row's vertical/diagonal terms come from the
finished neighbouring row, so they vectorise; the in-row left (right)
propagation d[x] = min(c[x], d[x-1] + 1) is a running minimum of
c[k] - k, shifted back by x.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

AXIAL_STEP = 1.0
DIAGONAL_STEP = math.sqrt(2)


def chamfer_distance(mask: NDArray[np.bool_]) -> NDArray[np.float64]:
    """Distance from each traversable cell to the nearest wall.

    Cells beyond the canvas edge count as walls.
    """
    padded = np.pad(np.asarray(mask, dtype=bool), 1, mode="constant", constant_values=False)
    rows, cols = padded.shape
    dist = np.where(padded, np.inf, 0.0)
    offsets = np.arange(cols, dtype=np.float64)

    for y in range(1, rows):
        prev = dist[y - 1]
        cand = np.minimum(dist[y], prev + AXIAL_STEP)
        cand[1:] = np.minimum(cand[1:], prev[:-1] + DIAGONAL_STEP)
        cand[:-1] = np.minimum(cand[:-1], prev[1:] + DIAGONAL_STEP)
        dist[y] = np.minimum.accumulate(cand - offsets) + offsets

    for y in range(rows - 2, -1, -1):
        nxt = dist[y + 1]
        cand = np.minimum(dist[y], nxt + AXIAL_STEP)
        cand[:-1] = np.minimum(cand[:-1], nxt[1:] + DIAGONAL_STEP)
        cand[1:] = np.minimum(cand[1:], nxt[:-1] + DIAGONAL_STEP)
        rev = cand[::-1]
        dist[y] = (np.minimum.accumulate(rev - offsets) + offsets)[::-1]

    return dist[1:-1, 1:-1]


@dataclass
class WidthStats:
    """Aggregate local-width figures over every traversable cell."""

    min: float = 0.0
    max: float = 0.0
    average: float = 0.0
    median: float = 0.0
    variance: float = 0.0
    narrow_count: int = 0
    wide_count: int = 0
    # (N, 3) arrays of (x, y, width) rows for highlighting
    narrow_points: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 3)))
    wide_points: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 3)))


def width_statistics(
    distance: NDArray[np.float64],
    mask: NDArray[np.bool_],
    min_width: float,
    max_width: float,
) -> WidthStats:
    """Local width = 2 × distance; summarise it and collect narrow/wide cells."""
    ys, xs = np.nonzero(mask)
    if len(xs) == 0:
        return WidthStats()

    widths = distance[ys, xs] * 2.0
    ordered = np.sort(widths)

    narrow = widths < min_width
    wide = (widths > max_width) & ~narrow

    return WidthStats(
        min=float(ordered[0]),
        max=float(ordered[-1]),
        average=float(np.mean(widths)),
        median=float(ordered[len(ordered) // 2]),
        variance=float(np.var(widths)),
        narrow_count=int(np.count_nonzero(narrow)),
        wide_count=int(np.count_nonzero(wide)),
        narrow_points=np.column_stack([xs[narrow], ys[narrow], widths[narrow]]),
        wide_points=np.column_stack([xs[wide], ys[wide], widths[wide]]),
    )


def sample_points(points: NDArray[np.float64], limit: int) -> list[dict[str, float]]:
    """Evenly subsample (x, y, width) rows to at most ``limit`` dicts."""
    if limit <= 0 or len(points) == 0:
        return []
    if len(points) > limit:
        idx = np.linspace(0, len(points) - 1, limit).astype(int)
        points = points[idx]
    return [
        {"x": int(x), "y": int(y), "width": round(float(w), 2)}
        for x, y, w in points
    ]
