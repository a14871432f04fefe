"""Check registry — every validation check is a standalone function registered via decorator.

Usage:
    @check(id="V1.02", stage=Stage.STRUCTURE, dependencies=["V0.01"])
    def track_width(ctx: ValidationContext) -> None:
        ctx.metrics["minTrackWidth"] = ...

Adding a new check = creating one module with the decorator inside a stage package.
"""

from __future__ import annotations

import enum
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from trackcheck.engine.context import ValidationContext

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    SAMPLING = 0
    STRUCTURE = 1
    AREAS = 2
    ROUTING = 3
    ASSESSMENT = 4


STAGE_PACKAGES = ["stage0", "stage1", "stage2", "stage3", "stage4"]


@dataclass
class CheckSpec:
    id: str
    stage: Stage
    fn: Callable[["ValidationContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class CheckRegistry:
    """Registry of validation checks."""

    def __init__(self) -> None:
        self._checks: dict[str, CheckSpec] = {}

    def register(self, spec: CheckSpec) -> None:
        if spec.id in self._checks:
            raise ValueError(f"Duplicate check ID: {spec.id}")
        self._checks[spec.id] = spec
        logger.debug("Registered check %s (%s)", spec.id, spec.stage.name)

    def resolve_order(self) -> list[CheckSpec]:
        """Topological sort of every registered check, ties broken by ID."""
        pool = self._checks

        # Kahn's algorithm
        in_degree: dict[str, int] = {cid: 0 for cid in pool}
        for cid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[cid] += 1

        queue = sorted([cid for cid, d in in_degree.items() if d == 0])
        ordered: list[CheckSpec] = []

        while queue:
            cid = queue.pop(0)
            ordered.append(pool[cid])
            for other_id, other_spec in pool.items():
                if cid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort()

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._checks)


# Module-level singleton
_registry = CheckRegistry()


def get_registry() -> CheckRegistry:
    return _registry


def check(
    *,
    id: str,
    stage: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a check function."""

    def decorator(fn: Callable[["ValidationContext"], None]):
        spec = CheckSpec(
            id=id,
            stage=stage,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator


def load_checks() -> CheckRegistry:
    """Import every check module so the @check decorators fire."""
    for stage_name in STAGE_PACKAGES:
        package = importlib.import_module(f"trackcheck.engine.{stage_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")
    return _registry
