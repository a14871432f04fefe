"""Pipeline orchestrator — runs checks in dependency order.

Every check runs regardless of earlier findings so one pass gives the caller
the complete picture. A check that raises is logged and recorded; the rest
still run.
"""

from __future__ import annotations

import logging
import time

from trackcheck.engine.context import ValidationContext
from trackcheck.engine.registry import CheckRegistry, get_registry, load_checks

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates the check pipeline."""

    def __init__(self, registry: CheckRegistry | None = None) -> None:
        self.registry = registry or load_checks()

    def run(self, ctx: ValidationContext) -> ValidationContext:
        """Run every registered check on the given context."""
        start = time.perf_counter()
        ordered = self.registry.resolve_order()

        logger.debug("Pipeline: %d checks queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_checks.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.report.stage_failures[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d checks in %.0fms",
            len(ctx.completed_checks),
            len(ordered),
            total,
        )
        return ctx


def create_pipeline() -> Pipeline:
    """Factory function for a pipeline over the global check registry."""
    load_checks()
    return Pipeline(registry=get_registry())
