"""
IR Schema — Pydantic models for directives and transformation results.

Directive models exist only for the duration of one pass on one line.
They carry the raw matched text so a directive that fails to resolve
can be put back verbatim.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from tdr import __ir_version__
from tdr.ir.enums import Base, CaseModifier, DiagnosticLevel, TransformStatus

IR_VERSION = __ir_version__


# ============================================================================
# Directives
# ============================================================================

class ConversionDirective(BaseModel):
    """``digits(from)(to)``: parse the subject in one base, render in another."""

    raw: str = Field(..., description="Matched text, restored if parsing fails")
    subject: str = Field(..., description="Digit string the directive is attached to")
    from_base: Base
    to_base: Base


class ExplicitConversionDirective(BaseModel):
    """``(bin, N)`` / ``(hex, N)``: render a signed decimal literal."""

    raw: str
    to_base: Base
    literal: int = Field(..., description="Signed decimal value carried by the directive")


class SingleConversionDirective(BaseModel):
    """``digits(base)``: parse the subject in ``base``, render as decimal."""

    raw: str
    subject: str
    from_base: Base


class CaseDirective(BaseModel):
    """``word(up)``: apply a case modifier to one adjacent word."""

    raw: str
    subject: str
    modifier: CaseModifier


class ScopedCaseDirective(BaseModel):
    """
    ``phrase (up, 2)`` or ``(up, -2 phrase)``.

    A positive count selects words from the end of the phrase,
    a negative count selects words from the start. Zero selects nothing.
    """

    raw: str
    subject: str
    modifier: CaseModifier
    word_count: int


class ChainedDirective(BaseModel):
    """``value(op)(op)...``: several directives on the same subject."""

    raw: str
    subject: str
    operations: list[Union[CaseModifier, Base]] = Field(default_factory=list)

    @property
    def case_modifiers(self) -> list[CaseModifier]:
        """Case operations in chain order."""
        return [op for op in self.operations if isinstance(op, CaseModifier)]

    @property
    def conversions(self) -> list[Base]:
        """Conversion operations in chain order."""
        return [op for op in self.operations if isinstance(op, Base)]


# ============================================================================
# Trace, Diagnostics, Result
# ============================================================================

class TraceEntry(BaseModel):
    """A single transformation trace entry."""

    id: str
    timestamp: datetime
    pass_name: str
    action: str
    before: Optional[str] = None
    after: Optional[str] = None
    rewrites: int = 0


class Diagnostic(BaseModel):
    """A diagnostic message."""

    id: str
    level: DiagnosticLevel
    code: str
    message: str
    source: str


class TransformResult(BaseModel):
    """The complete output of resolving one line."""

    version: str = Field(default=IR_VERSION, description="IR schema version")
    request_id: str = Field(..., description="Unique transformation ID")
    timestamp: datetime = Field(..., description="When transformation occurred")
    processing_duration_ms: float = Field(default=0.0)

    input_text: str = Field(..., description="Line as it entered the pipeline")
    rendered_text: Optional[str] = Field(None, description="Resolved line")

    trace: list[TraceEntry] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    status: TransformStatus = TransformStatus.SUCCESS
