"""V3.01 — Path Length.

Sample a sparse network over the largest region and estimate start → token
path lengths (random node pairs when the areas are unknown). Too short is
an error, too long or too uniform are warnings.
"""

from __future__ import annotations

import logging

import numpy as np

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check
from trackcheck.utils.path_network import build_path_network, path_length_stats, sample_path_lengths

logger = logging.getLogger(__name__)


@check(
    id="V3.01",
    stage=Stage.ROUTING,
    dependencies=["V1.01", "V2.02"],
    description="Estimate path lengths over a sampled path network",
)
def path_length(ctx: ValidationContext) -> None:
    cfg = ctx.config
    region = ctx.largest_region

    if region is None:
        ctx.metrics.update({"shortestPath": 0.0, "longestPath": 0.0, "averagePath": 0.0, "pathVariance": 0.0})
        ctx.add_error(
            "path_length",
            "critical",
            "Cannot calculate path length - no connected track regions",
        )
        return

    ctx.network = build_path_network(
        region.member_mask(), cfg.network_stride, cfg.network_connect_factor
    )

    starts = [(a.x, a.y) for a in ctx.valid_start_areas()]
    goals = [(a.x, a.y) for a in ctx.valid_token_areas()]
    rng = np.random.default_rng(cfg.random_seed)
    lengths = sample_path_lengths(ctx.network, starts, goals, rng, cfg.path_sample_pairs)
    stats = path_length_stats(lengths)

    ctx.metrics.update({
        "shortestPath": stats["shortest"],
        "longestPath": stats["longest"],
        "averagePath": stats["average"],
        "pathVariance": stats["variance"],
        "networkEdges": ctx.network.edge_count,
    })

    if stats["shortest"] < cfg.min_path_length:
        ctx.add_error(
            "path_length",
            "major",
            f"Shortest path too short: {stats['shortest']:.0f}px "
            f"(minimum: {cfg.min_path_length:g}px)",
            "Track may be too easy or direct",
            {"shortest": stats["shortest"], "required": cfg.min_path_length},
        )

    if stats["longest"] > cfg.max_path_length:
        ctx.add_warning(
            "path_length",
            f"Longest path very long: {stats['longest']:.0f}px "
            f"(recommended max: {cfg.max_path_length:g}px)",
            "Very long paths may lead to extended race times",
            {"longest": stats["longest"], "recommended": cfg.max_path_length},
        )

    if stats["variance"] < stats["average"] * cfg.path_diversity_floor:
        ctx.add_warning(
            "path_length",
            "Low path diversity detected",
            "All paths are similar length - consider adding variety",
            {"variance": stats["variance"], "average": stats["average"]},
        )

    ctx.analysis["pathLength"] = {
        **stats,
        "diversity": stats["variance"] / stats["average"] if stats["average"] > 0 else 0.0,
        "samples": len(lengths),
        "betweenAreas": bool(starts and goals),
        "networkSize": ctx.network.node_count,
        "networkEdges": ctx.network.edge_count,
        "edgeDensity": ctx.network.edge_density,
    }

    logger.debug(
        "Path lengths: %.0f-%.0fpx (avg: %.0fpx)",
        stats["shortest"],
        stats["longest"],
        stats["average"],
    )
