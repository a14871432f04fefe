"""Track validation engine."""

from trackcheck.engine.registry import check, Stage, get_registry
from trackcheck.engine.context import ValidationContext
from trackcheck.engine.pipeline import Pipeline

__all__ = [
    "check",
    "Stage",
    "get_registry",
    "ValidationContext",
    "Pipeline",
]
