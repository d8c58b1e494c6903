"""
IR — Intermediate Representation

Directive models parsed from a line, plus the trace, diagnostics
and result of running a pipeline over it.
"""

from tdr.ir.enums import (
    Base,
    CaseModifier,
    DiagnosticLevel,
    TransformStatus,
)
from tdr.ir.schema import (
    CaseDirective,
    ChainedDirective,
    ConversionDirective,
    Diagnostic,
    ExplicitConversionDirective,
    ScopedCaseDirective,
    SingleConversionDirective,
    TraceEntry,
    TransformResult,
)

__all__ = [
    # Enums
    "Base",
    "CaseModifier",
    "DiagnosticLevel",
    "TransformStatus",
    # Directives
    "ConversionDirective",
    "ExplicitConversionDirective",
    "SingleConversionDirective",
    "CaseDirective",
    "ScopedCaseDirective",
    "ChainedDirective",
    # Results
    "TraceEntry",
    "Diagnostic",
    "TransformResult",
]
