"""Connected region labelling over the traversable mask (4-connected)."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

# 4-directional adjacency: diagonal neighbours are not connected
_FOUR_CONNECTED = np.array(
    [[0, 1, 0],
     [1, 1, 1],
     [0, 1, 0]],
    dtype=bool,
)


@dataclass
class ConnectedRegion:
    """A maximal 4-connected set of traversable cells."""

    label: int
    size: int
    # (xmin, ymin, xmax, ymax), inclusive
    bbox: tuple[int, int, int, int]
    labels: NDArray[np.int32] | None = field(default=None, repr=False)

    def member_mask(self) -> NDArray[np.bool_]:
        if self.labels is None:
            return np.zeros((0, 0), dtype=bool)
        return self.labels == self.label

    def cells(self) -> NDArray[np.int64]:
        """(N, 2) array of (x, y) coordinates of the region's cells."""
        ys, xs = np.nonzero(self.member_mask())
        return np.column_stack([xs, ys])


def label_regions(mask: NDArray[np.bool_]) -> tuple[NDArray[np.int32], list[ConnectedRegion]]:
    """Partition the traversable cells into connected regions.

    Labelling is iterative (no recursion), so canvas size is bounded only by
    memory. Label 0 marks walls; regions are returned in label order.
    """
    labels, count = ndimage.label(mask, structure=_FOUR_CONNECTED)
    labels = labels.astype(np.int32, copy=False)
    if count == 0:
        return labels, []

    sizes = np.bincount(labels.ravel(), minlength=count + 1)
    regions: list[ConnectedRegion] = []
    for label, slices in enumerate(ndimage.find_objects(labels), start=1):
        if slices is None:
            continue
        rows, cols = slices
        regions.append(
            ConnectedRegion(
                label=label,
                size=int(sizes[label]),
                bbox=(cols.start, rows.start, cols.stop - 1, rows.stop - 1),
                labels=labels,
            )
        )
    return labels, regions


def isolated_ratio(regions: list[ConnectedRegion], track_pixels: int) -> float:
    """Fraction of track cells outside the largest region."""
    if track_pixels <= 0 or not regions:
        return 0.0
    largest = max(r.size for r in regions)
    return (track_pixels - largest) / track_pixels
