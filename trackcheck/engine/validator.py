"""TrackValidator — decode a source, run the check pipeline, score and cache.

The only suspension point is the source decode; the checks themselves run to
completion. Concurrent calls for the same source and options either share
the one in-flight validation (``share``) or, with ``stale``, return the last
completed report while anything is still running.

The pipeline runs on the event loop thread: while the checks run (most of
a second on the full 4000 × 2000 canvas) no other request is served.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from trackcheck.engine.cache import ValidationCache
from trackcheck.engine.config import (
    BALANCE_BONUS,
    PRESET_NAMES,
    PRESETS,
    SEVERITY_PENALTIES,
    UNKNOWN_SEVERITY_PENALTY,
    WARNING_PENALTY,
    ConcurrencyPolicy,
    ValidatorConfig,
)
from trackcheck.engine.context import ValidationContext
from trackcheck.engine.pipeline import Pipeline, create_pipeline
from trackcheck.engine.report import ValidationReport
from trackcheck.engine.sources import TrackSource, content_fingerprint, decode_source, source_identity
from trackcheck.models.options import ValidationOptions

logger = logging.getLogger(__name__)


class TrackValidator:
    """Validates track rasters against a ValidatorConfig."""

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        cache: ValidationCache[ValidationReport] | None = None,
        pipeline: Pipeline | None = None,
        policy: ConcurrencyPolicy | str = ConcurrencyPolicy.SHARE,
        decode_timeout: float | None = 10.0,
    ) -> None:
        self.config = config or ValidatorConfig()
        self.cache: ValidationCache[ValidationReport] = cache if cache is not None else ValidationCache()
        self.pipeline = pipeline or create_pipeline()
        self.policy = ConcurrencyPolicy(policy)
        self.decode_timeout = decode_timeout
        self.last_report: ValidationReport | None = None
        self.validations = 0
        self._running = 0
        self._in_flight: dict[str, asyncio.Task[ValidationReport]] = {}

    async def validate(
        self,
        source: TrackSource,
        options: ValidationOptions | None = None,
    ) -> ValidationReport:
        """Validate one source. Raises UnsupportedSourceKind / SourceLoadFailure only."""
        options = options or ValidationOptions()

        if self.policy is ConcurrencyPolicy.STALE and self._running and self.last_report is not None:
            logger.info("Validation in progress, returning last completed report")
            return self.last_report

        key = f"{source_identity(source)}:{options.fingerprint()}:{int(options.force)}"
        task = self._in_flight.get(key)
        if task is None:
            self._running += 1
            task = asyncio.ensure_future(self._run(source, options))
            self._in_flight[key] = task
            task.add_done_callback(lambda t: self._finish(key, t))
        else:
            logger.debug("Joining in-flight validation %s", key)
        return await asyncio.shield(task)

    def _finish(self, key: str, task: asyncio.Task[ValidationReport]) -> None:
        self._running -= 1
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _run(self, source: TrackSource, options: ValidationOptions) -> ValidationReport:
        start = time.perf_counter()
        rgba = await decode_source(
            source, self.config.canvas_width, self.config.canvas_height, self.decode_timeout
        )
        cache_key = f"{content_fingerprint(rgba)}:{options.fingerprint()}"

        if not options.force:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Cache hit %s", cache_key)
                self.last_report = cached
                return cached

        config = self.config.with_preset(options.preset)
        if options.allow_isolated_sections is not None:
            config = config.with_overrides(allow_isolated_sections=options.allow_isolated_sections)

        ctx = ValidationContext(
            config=config,
            rgba=rgba,
            start_hints=list(options.start_areas),
            token_hints=list(options.token_areas),
            routes=list(options.routes),
        )
        self.pipeline.run(ctx)

        report = ctx.report
        report.is_valid = not report.errors
        report.score = self.calculate_score(report)
        report.performance["validation_time_ms"] = (time.perf_counter() - start) * 1000
        report.timestamp = time.time()
        report.cache_key = cache_key

        self.cache.set(cache_key, report)
        self.last_report = report
        self.validations += 1

        logger.info(
            "Validation complete: %s (%d errors, %d warnings, score %.0f) in %.0fms",
            "VALID" if report.is_valid else "INVALID",
            len(report.errors),
            len(report.warnings),
            report.score,
            report.performance["validation_time_ms"],
        )
        return report

    @staticmethod
    def calculate_score(report: ValidationReport) -> float:
        """100 minus per-finding penalties plus a balance bonus, clamped to [0, 100]."""
        score = 100.0
        for error in report.errors:
            score -= SEVERITY_PENALTIES.get(error.severity, UNKNOWN_SEVERITY_PENALTY)
        score -= WARNING_PENALTY * len(report.warnings)

        balance = report.analysis.get("gameplay", {}).get("balanceScore")
        if balance:
            score += balance * BALANCE_BONUS
        return max(0.0, min(100.0, score))

    # --- Management ---

    def preset_names(self) -> list[str]:
        return list(PRESET_NAMES)

    def get_preset(self, name: str) -> dict[str, Any]:
        """Preset table entry; unknown names fall back to ``custom``."""
        key = name if name in PRESETS else "custom"
        preset = PRESETS[key]
        return {"id": key, "name": preset["name"], "overrides": dict(preset["overrides"])}

    def update_config(self, **changes: Any) -> ValidatorConfig:
        """Replace config fields; cached reports are dropped since they no longer apply."""
        self.config = self.config.with_overrides(**changes)
        self.cache.clear()
        logger.info("Config updated: %s", ", ".join(sorted(changes)))
        return self.config

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Validation cache cleared")

    def stats(self) -> dict[str, Any]:
        return {
            "validations": self.validations,
            "in_flight": len(self._in_flight),
            "policy": self.policy.value,
            "checks": self.pipeline.registry.count,
            "cache": self.cache.stats(),
            "last_validation_ms": (
                self.last_report.performance.get("validation_time_ms")
                if self.last_report is not None
                else None
            ),
        }
