"""Stage registry for the figure builder.

Each stage is a function of ``FigureContext`` registered with ``@stage`` from a
module under ``comicrig.engine.stages``. Stages run phase by phase; inside a
phase, declared dependencies decide the order and stage IDs break ties.
A stage may only depend on stages of its own or an earlier phase.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from comicrig.engine.context import FigureContext

logger = logging.getLogger(__name__)

StageFn = Callable[["FigureContext"], None]


class Phase(enum.IntEnum):
    PROJECTION = 0
    BODY = 1
    LIMBS = 2
    FACE = 3
    COMPOSITION = 4


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: StageFn
    dependencies: list[str] = field(default_factory=list)
    description: str = ""

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.phase, self.id)


class StageRegistry:
    """Builder stages keyed by ID."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def _required(self, targets: set[str]) -> dict[str, StageSpec]:
        """``targets`` plus everything they depend on, directly or not."""
        required: dict[str, StageSpec] = {}
        pending = list(targets)
        while pending:
            sid = pending.pop()
            if sid in required:
                continue
            if sid not in self._stages:
                raise ValueError(f"Unknown stage ID: {sid}")
            required[sid] = self._stages[sid]
            pending.extend(required[sid].dependencies)
        return required

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[StageSpec]:
        """Stages in run order; ``requested_ids`` limits the run to those and their dependencies."""
        pool = self._required(set(self._stages) if requested_ids is None else requested_ids)

        dependents: dict[str, list[str]] = {sid: [] for sid in pool}
        waiting: dict[str, int] = {}
        for spec in pool.values():
            for dep in spec.dependencies:
                if pool[dep].phase > spec.phase:
                    raise ValueError(f"{spec.id} ({spec.phase.name}) depends on later stage {dep}")
                dependents[dep].append(spec.id)
            waiting[spec.id] = len(spec.dependencies)

        ready = [spec.sort_key for spec in pool.values() if waiting[spec.id] == 0]
        heapq.heapify(ready)
        ordered: list[StageSpec] = []
        while ready:
            _, sid = heapq.heappop(ready)
            ordered.append(pool[sid])
            for other in dependents[sid]:
                waiting[other] -= 1
                if waiting[other] == 0:
                    heapq.heappush(ready, pool[other].sort_key)

        if len(ordered) != len(pool):
            stuck = sorted(sid for sid, n in waiting.items() if n > 0)
            raise ValueError(f"Circular dependency among stages: {', '.join(stuck)}")
        return ordered


_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(*, id: str, phase: Phase, dependencies: list[str] | None = None, description: str = ""):
    """Register the decorated function as a builder stage."""

    def decorator(fn: StageFn) -> StageFn:
        _registry.register(StageSpec(id, phase, fn, list(dependencies or []), description))
        return fn

    return decorator
