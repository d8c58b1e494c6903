"""
TransformContext — State passed between pipeline passes for one line.

Each pass reads ``ctx.text``, rewrites it, and records what changed.
Nothing in a context outlives the line it was created for.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from tdr.ir.enums import DiagnosticLevel, TransformStatus
from tdr.ir.schema import Diagnostic, TraceEntry, TransformResult


@dataclass
class TransformRequest:
    """Input to the transformation pipeline: one line of text."""

    text: str
    request_id: Optional[str] = None
    line_number: Optional[int] = None

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = str(uuid4())


@dataclass
class TransformContext:
    """
    Mutable context passed through pipeline passes.

    ``text`` is the current state of the line. Passes communicate
    only through it; trace and diagnostics are bookkeeping.
    """

    # Input
    request: TransformRequest
    raw_text: str

    # Current line, rewritten by each pass
    text: str = ""

    # Trace and diagnostics
    trace: list[TraceEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    status: TransformStatus = TransformStatus.SUCCESS

    # Internal
    start_time: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_request(cls, request: TransformRequest) -> "TransformContext":
        """Create a context from a transform request."""
        return cls(
            request=request,
            raw_text=request.text,
            text=request.text,
        )

    def rewrite(self, pass_name: str, action: str, new_text: str, rewrites: int = 0) -> bool:
        """
        Replace the current text and trace the change.

        Returns True if the text actually changed. Unchanged text
        leaves no trace entry.
        """
        if new_text == self.text:
            return False
        self.add_trace(
            pass_name=pass_name,
            action=action,
            before=self.text,
            after=new_text,
            rewrites=rewrites,
        )
        self.text = new_text
        return True

    def add_trace(self, pass_name: str, action: str, **kwargs: Any) -> None:
        """Add a trace entry."""
        self.trace.append(
            TraceEntry(
                id=str(uuid4()),
                timestamp=datetime.now(),
                pass_name=pass_name,
                action=action,
                before=kwargs.get("before"),
                after=kwargs.get("after"),
                rewrites=kwargs.get("rewrites", 0),
            )
        )

    def add_diagnostic(
        self,
        level: str,
        code: str,
        message: str,
        source: str,
    ) -> None:
        """Add a diagnostic message."""
        self.diagnostics.append(
            Diagnostic(
                id=str(uuid4()),
                level=DiagnosticLevel(level),
                code=code,
                message=message,
                source=source,
            )
        )

    def to_result(self) -> TransformResult:
        """Convert context to final TransformResult."""
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        return TransformResult(
            request_id=self.request.request_id or str(uuid4()),
            timestamp=self.start_time,
            processing_duration_ms=duration_ms,
            input_text=self.raw_text,
            rendered_text=self.text,
            trace=self.trace,
            diagnostics=self.diagnostics,
            status=self.status,
        )
