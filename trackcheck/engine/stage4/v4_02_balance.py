"""V4.02 — Gameplay Balance.

Four bounded scores derived from metrics already on the report:

    fairness   = min(minStartAreaSpacing / (2 × playerSpacing), 1)
    difficulty = (# difficulty factors present) / 4
    variety    = weighted sum of variety factors, capped at 1
    balance    = wF × fairness + wD × (1 − 2|difficulty − 0.5|) + wV × variety

Fairness is undefined with fewer than two valid start areas and then enters
the balance formula as UNDEFINED_FAIRNESS. Moderate difficulty is rewarded.
"""

from __future__ import annotations

import logging
from typing import Any

from trackcheck.engine.config import (
    BALANCE_WEIGHTS,
    UNDEFINED_FAIRNESS,
    VARIETY_WEIGHTS,
    ValidatorConfig,
)
from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import Stage, check

logger = logging.getLogger(__name__)

DIFFICULTY_LABELS = ("very_easy", "easy", "medium", "hard", "very_hard")


def fairness_score(min_spacing: float | None, player_spacing: float) -> float | None:
    if min_spacing is None or player_spacing <= 0:
        return None
    return min(min_spacing / (player_spacing * 2), 1.0)


def fairness_label(score: float | None) -> str:
    if score is None:
        return "unknown"
    if score > 0.8:
        return "excellent"
    if score > 0.6:
        return "good"
    return "poor"


def difficulty_factors(metrics: dict[str, Any], cfg: ValidatorConfig) -> int:
    avg_width = float(metrics.get("avgTrackWidth", 0.0))
    factors = 0
    if avg_width < cfg.min_track_width * cfg.narrow_avg_width_factor:
        factors += 1
    if int(metrics.get("connectedRegions", 0)) > 1:
        factors += 1
    if float(metrics.get("widthVariance", 0.0)) > avg_width * cfg.difficulty_width_variance:
        factors += 1
    if float(metrics.get("shortestPath", 0.0)) > cfg.min_path_length * cfg.long_path_factor:
        factors += 1
    return factors


def variety_score(
    metrics: dict[str, Any],
    path_diversity: float,
    cfg: ValidatorConfig,
    weights: dict[str, float] = VARIETY_WEIGHTS,
) -> float:
    score = 0.0
    if path_diversity > cfg.diverse_path_threshold:
        score += weights["path_diversity"]
    if int(metrics.get("validTokenAreas", 0)) > cfg.variety_token_areas:
        score += weights["token_areas"]
    if float(metrics.get("widthVariance", 0.0)) > 0:
        score += weights["width_variance"]
    if int(metrics.get("connectedRegions", 0)) == 1:
        score += weights["single_region"]
    return min(score, 1.0)


def variety_label(score: float) -> str:
    if score > 0.8:
        return "excellent"
    if score > 0.6:
        return "good"
    if score > 0.4:
        return "moderate"
    return "low"


def balance_score(
    fairness: float | None,
    difficulty: float,
    variety: float,
    weights: dict[str, float] = BALANCE_WEIGHTS,
) -> float:
    fair = UNDEFINED_FAIRNESS if fairness is None else fairness
    return (
        fair * weights["fairness"]
        + (1 - abs(difficulty - 0.5) * 2) * weights["difficulty"]
        + variety * weights["variety"]
    )


def balance_label(score: float) -> str:
    if score > 0.8:
        return "excellent"
    if score > 0.6:
        return "good"
    if score > 0.4:
        return "fair"
    return "poor"


@check(
    id="V4.02",
    stage=Stage.ASSESSMENT,
    dependencies=["V1.01", "V1.02", "V2.01", "V2.02", "V3.01"],
    description="Score fairness, difficulty, variety and overall balance",
)
def gameplay_balance(ctx: ValidationContext) -> None:
    cfg = ctx.config
    m = ctx.metrics

    spacing = m.get("minStartAreaSpacing") if len(ctx.valid_start_areas()) >= 2 else None
    fairness = fairness_score(spacing, cfg.player_spacing)

    factors = difficulty_factors(m, cfg)
    difficulty = factors / 4

    diversity = float(ctx.analysis.get("pathLength", {}).get("diversity", 0.0))
    variety = variety_score(m, diversity, cfg)

    balance = balance_score(fairness, difficulty, variety)

    gameplay = {
        "fairness": fairness_label(fairness),
        "fairnessScore": fairness,
        "difficulty": DIFFICULTY_LABELS[factors],
        "difficultyScore": difficulty,
        "variety": variety_label(variety),
        "varietyScore": variety,
        "balance": balance_label(balance),
        "balanceScore": balance,
    }
    ctx.analysis["gameplay"] = gameplay

    if gameplay["fairness"] == "poor":
        ctx.add_suggestion(
            "gameplay",
            "high",
            "Improve start area distribution",
            "Spread start areas more evenly to ensure fair player positioning",
            "spread_start_areas",
        )
    if gameplay["variety"] == "low":
        ctx.add_suggestion(
            "gameplay",
            "medium",
            "Add more gameplay variety",
            "Consider adding more token spawn areas or varying track width",
            "add_variety",
        )

    logger.debug("Gameplay balance: %s (%.0f%%)", gameplay["balance"], balance * 100)
