"""
Engine — Pipeline orchestration.

The engine selects a pipeline, runs its passes in order over one
line, runs validators, and packages the result.

The engine is NOT where directive logic lives.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional

from tdr.core.context import TransformContext, TransformRequest
from tdr.core.contracts import Validator
from tdr.ir.enums import TransformStatus
from tdr.ir.schema import TransformResult


# Type alias for a pass function
PassFn = Callable[[TransformContext], TransformContext]


@dataclass
class Pipeline:
    """A named sequence of passes."""

    id: str
    name: str
    passes: list[PassFn]
    validators: list[Validator] = field(default_factory=list)


class Engine:
    """
    Pipeline orchestrator.

    Runs passes in order, handles errors, and packages results.
    Lines never share a context, so one engine can serve several
    worker threads at once.
    """

    def __init__(self) -> None:
        self._pipelines: dict[str, Pipeline] = {}

    def register_pipeline(self, pipeline: Pipeline) -> None:
        """Register a pipeline by ID."""
        self._pipelines[pipeline.id] = pipeline

    def list_pipelines(self) -> list[str]:
        """List registered pipeline IDs."""
        return list(self._pipelines.keys())

    def get_pipeline(self, pipeline_id: str) -> Optional[Pipeline]:
        """Look up a registered pipeline."""
        return self._pipelines.get(pipeline_id)

    def transform(
        self,
        request: TransformRequest,
        pipeline_id: Optional[str] = None,
    ) -> TransformResult:
        """
        Resolve one line.

        Args:
            request: The transformation request
            pipeline_id: Which pipeline to use (default: 'default')

        Returns:
            TransformResult with the resolved text, trace, and diagnostics
        """
        pipeline_id = pipeline_id or "default"

        if pipeline_id not in self._pipelines:
            ctx = TransformContext.from_request(request)
            ctx.status = TransformStatus.ERROR
            ctx.add_diagnostic(
                level="error",
                code="PIPELINE_NOT_FOUND",
                message=f"Pipeline '{pipeline_id}' not registered",
                source="engine",
            )
            return ctx.to_result()

        pipeline = self._pipelines[pipeline_id]
        ctx = TransformContext.from_request(request)

        from tdr.core.logging import LineLogger
        tlog = LineLogger(request.request_id, request.line_number)

        for pass_fn in pipeline.passes:
            pass_name = pass_fn.__name__
            try:
                tlog.pass_start(pass_name)
                ctx = pass_fn(ctx)
                tlog.pass_end(pass_name)
            except Exception as e:
                tlog.pass_error(pass_name, e)
                ctx.status = TransformStatus.ERROR
                ctx.add_diagnostic(
                    level="error",
                    code="PASS_ERROR",
                    message=f"Pass '{pass_name}' failed: {e}",
                    source="engine",
                )
                ctx.add_trace(
                    pass_name=pass_name,
                    action="error",
                )
                break

        if ctx.status != TransformStatus.ERROR:
            for validator in pipeline.validators:
                for failure in validator.validate(ctx):
                    ctx.status = TransformStatus.PARTIAL
                    ctx.add_diagnostic(
                        level="warning",
                        code=f"VALIDATION_{validator.name.upper()}",
                        message=failure,
                        source=validator.name,
                    )

        tlog.line_complete(
            status=ctx.status.value,
            rewrites=len(ctx.trace),
            diagnostics=len(ctx.diagnostics),
        )

        return ctx.to_result()

    def transform_lines(
        self,
        lines: Iterable[str],
        pipeline_id: Optional[str] = None,
        workers: int = 1,
    ) -> Iterator[TransformResult]:
        """
        Resolve a sequence of lines, yielding results in input order.

        With ``workers > 1`` lines are resolved on a thread pool;
        ``Executor.map`` hands results back in submission order.
        """
        requests = (
            TransformRequest(text=line, line_number=number)
            for number, line in enumerate(lines, start=1)
        )

        if workers <= 1:
            for request in requests:
                yield self.transform(request, pipeline_id)
            return

        with ThreadPoolExecutor(max_workers=workers) as executor:
            yield from executor.map(
                lambda request: self.transform(request, pipeline_id),
                requests,
            )


# Global engine instance
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = Engine()
    return _engine


def transform(text: str, pipeline_id: Optional[str] = None) -> TransformResult:
    """
    Convenience function for resolving one line.

    Registers the standard pipelines on the global engine if needed.

    Args:
        text: Line to resolve
        pipeline_id: Which pipeline to use

    Returns:
        TransformResult
    """
    from tdr.cli.main import setup_pipelines

    engine = get_engine()
    if not engine.list_pipelines():
        setup_pipelines(engine)
    request = TransformRequest(text=text)
    return engine.transform(request, pipeline_id)


def resolve(text: str, pipeline_id: Optional[str] = None) -> str:
    """Resolve one line and return only the rewritten text."""
    return transform(text, pipeline_id).rendered_text or ""
