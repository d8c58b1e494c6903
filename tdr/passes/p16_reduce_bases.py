"""
Pass 16 — Single-Base Reduction

Resolves ``digits(hex)`` and ``digits(bin)`` to decimal, then removes
every marker of that base still left in the line.

    ff(hex)     -> 255
    1010 (bin)  -> 10
    xyz(hex)    -> xyz     (not hex digits: subject kept, marker dropped)
    (bin)       ->         (bare marker deleted)

Each base is reduced to a fixed point. A rewrite always consumes one
marker, so the number of markers bounds the number of rounds.
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives import bases
from tdr.directives.grammar import (
    BASE_MARKER,
    SINGLE_CONVERSION,
    count_markers,
    parse_single_conversion,
)
from tdr.ir.enums import Base

PASS_NAME = "p16_reduce_bases"
log = get_pass_logger(PASS_NAME)


def reduce_base(text: str, base: Base) -> tuple[str, int]:
    """
    Convert ``base`` directives until none is left, then strip markers.

    Returns:
        (new text, number of conversions)
    """
    pattern = SINGLE_CONVERSION[base]
    converted = 0

    def _replace(match: re.Match) -> str:
        nonlocal converted
        directive = parse_single_conversion(match, base)
        decimal = bases.to_decimal(directive.subject, base)
        if decimal is None:
            log.debug("invalid_subject", subject=directive.subject, base=base.value)
            return directive.raw
        converted += 1
        return decimal

    # +1 round to observe the fixed point
    for _ in range(count_markers(text, base) + 1):
        new_text = pattern.sub(_replace, text)
        if new_text == text:
            break
        text = new_text

    return BASE_MARKER[base].sub("", text), converted


def reduce_hex(ctx: TransformContext) -> TransformContext:
    """Reduce ``(hex)`` directives to decimal and drop leftover markers."""
    new_text, converted = reduce_base(ctx.text, Base.HEX)
    if ctx.rewrite("p16_reduce_hex", "reduce_hex", new_text, rewrites=converted):
        log.verbose("hex_reduced", count=converted)
    return ctx


def reduce_bin(ctx: TransformContext) -> TransformContext:
    """Reduce ``(bin)`` directives to decimal and drop leftover markers."""
    new_text, converted = reduce_base(ctx.text, Base.BIN)
    if ctx.rewrite("p16_reduce_bin", "reduce_bin", new_text, rewrites=converted):
        log.verbose("bin_reduced", count=converted)
    return ctx
