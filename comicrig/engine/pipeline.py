"""Builder pipeline: runs registered stages in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from comicrig.engine.context import FigureContext
from comicrig.engine.registry import StageRegistry, get_registry

logger = logging.getLogger(__name__)

STAGES_PACKAGE = "comicrig.engine.stages"


class StageError(RuntimeError):
    """A builder stage raised; the original exception is chained."""

    def __init__(self, stage_id: str, message: str) -> None:
        super().__init__(f"{stage_id}: {message}")
        self.stage_id = stage_id


def register_stages() -> None:
    """Import every stage module so @stage decorators fire."""
    package = importlib.import_module(STAGES_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{STAGES_PACKAGE}.{module_name}")


class FigurePipeline:
    """Orchestrates the figure builder stages."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        if registry is None:
            register_stages()
            registry = get_registry()
        self.registry = registry

    def run(self, ctx: FigureContext, until: str | set[str] | None = None) -> FigureContext:
        """Run all stages, or only ``until`` and its transitive dependencies."""
        start = time.perf_counter()
        requested = {until} if isinstance(until, str) else until
        ordered = self.registry.resolve_order(requested)

        logger.debug("Figure pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                logger.warning("  %s FAILED: %s", spec.id, e)
                raise StageError(spec.id, str(e)) from e
            ctx.completed_stages.add(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            ctx.timings[spec.id] = elapsed
            logger.debug("  %s completed in %.2fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.debug(
            "Figure pipeline complete: %d/%d stages in %.1fms",
            len(ctx.completed_stages),
            len(ordered),
            total,
        )
        return ctx
