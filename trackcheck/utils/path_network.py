"""Sparse sampled path network for estimating (not routing) path lengths.

Exact shortest-path search over the canvas is deliberately avoided: a path
length is estimated from the straight-line distance between the nearest
network nodes, inflated by how sparsely the network is connected.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

# Inflation applied per unit of missing edge density:
#   length ≈ euclidean × (1 + (1 − density) × PATH_DETOUR_FACTOR)
PATH_DETOUR_FACTOR = 0.5


@dataclass
class PathNetwork:
    # (N, 2) node coordinates (x, y)
    nodes: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # (E, 3) rows of (i, j, weight)
    edges: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 3)))

    @property
    def node_count(self) -> int:
        return int(len(self.nodes))

    @property
    def edge_count(self) -> int:
        return int(len(self.edges))

    @property
    def edge_density(self) -> float:
        n = self.node_count
        if n < 2:
            return 0.0
        return self.edge_count / (n * (n - 1) / 2)

    def nearest_node(self, x: float, y: float) -> int:
        """Index of the node closest to (x, y), or -1 for an empty network."""
        if self.node_count == 0:
            return -1
        d2 = (self.nodes[:, 0] - x) ** 2 + (self.nodes[:, 1] - y) ** 2
        return int(np.argmin(d2))

    def estimate_length(self, start: int, end: int) -> float:
        if not (0 <= start < self.node_count and 0 <= end < self.node_count):
            return 0.0
        dx, dy = self.nodes[end] - self.nodes[start]
        euclidean = float(np.hypot(dx, dy))
        return euclidean * (1 + (1 - self.edge_density) * PATH_DETOUR_FACTOR)


def build_path_network(
    region_mask: NDArray[np.bool_],
    stride: int,
    connect_factor: float,
) -> PathNetwork:
    """Nodes on every ``stride``-th row/column that are traversable; edges within stride × factor."""
    stride = max(1, int(stride))
    ys, xs = np.nonzero(region_mask[::stride, ::stride])
    nodes = np.column_stack([xs * stride, ys * stride]).astype(np.float64)
    if len(nodes) < 2:
        return PathNetwork(nodes=nodes)

    tree = cKDTree(nodes)
    pairs = tree.query_pairs(r=stride * connect_factor, output_type="ndarray")
    if len(pairs) == 0:
        return PathNetwork(nodes=nodes)

    pairs = pairs[np.lexsort((pairs[:, 1], pairs[:, 0]))]
    deltas = nodes[pairs[:, 1]] - nodes[pairs[:, 0]]
    weights = np.hypot(deltas[:, 0], deltas[:, 1])
    edges = np.column_stack([pairs.astype(np.float64), weights])
    return PathNetwork(nodes=nodes, edges=edges)


def sample_path_lengths(
    network: PathNetwork,
    starts: list[tuple[float, float]],
    goals: list[tuple[float, float]],
    rng: np.random.Generator,
    max_pairs: int,
) -> list[float]:
    """Estimated lengths for every start × goal pair, or random node pairs without both."""
    lengths: list[float] = []
    if network.node_count == 0:
        return lengths

    if starts and goals:
        for sx, sy in starts:
            for gx, gy in goals:
                a = network.nearest_node(sx, sy)
                b = network.nearest_node(gx, gy)
                if a != -1 and b != -1:
                    length = network.estimate_length(a, b)
                    if length > 0:
                        lengths.append(length)
        return lengths

    n = network.node_count
    for _ in range(min(max_pairs, n)):
        a, b = (int(v) for v in rng.integers(0, n, size=2))
        if a != b:
            length = network.estimate_length(a, b)
            if length > 0:
                lengths.append(length)
    return lengths


def path_length_stats(lengths: list[float]) -> dict[str, float]:
    if not lengths:
        return {"shortest": 0.0, "longest": 0.0, "average": 0.0, "variance": 0.0}
    arr = np.asarray(lengths, dtype=np.float64)
    return {
        "shortest": float(arr.min()),
        "longest": float(arr.max()),
        "average": float(arr.mean()),
        "variance": float(arr.var()),
    }
