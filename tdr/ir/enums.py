"""
IR Enums — Directive vocabulary, diagnostic levels and status codes.

No stringly-typed constants scattered across passes.
"""

from enum import Enum


# ============================================================================
# Directive Vocabulary
# ============================================================================

class Base(str, Enum):
    """
    Numeric bases a conversion directive can name.

    The directive token is the enum value: ``(bin)``, ``(hex)``.
    Decimal is never written as a directive; it is the implicit
    target of single-base conversions.
    """

    BIN = "bin"
    HEX = "hex"

    @property
    def radix(self) -> int:
        return 2 if self is Base.BIN else 16


class CaseModifier(str, Enum):
    """Case transformations a directive can request."""

    UP = "up"      # all characters uppercase
    LOW = "low"    # all characters lowercase
    CAP = "cap"    # first character uppercase, remainder lowercase


# ============================================================================
# Pipeline Status
# ============================================================================

class DiagnosticLevel(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class TransformStatus(str, Enum):
    """Overall transformation status."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"
