"""
Pass 12 — Explicit Literals

Resolves ``(bin, N)`` and ``(hex, N)``, where the directive carries
its own signed decimal value instead of using a neighbouring subject.

    (bin, 5)   -> 101
    (hex, 255) -> FF
    (hex, -1)  -> FFFFFFFFFFFFFFFF
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives import bases
from tdr.directives.grammar import EXPLICIT_LITERAL, parse_explicit_literal

PASS_NAME = "p12_convert_literals"
log = get_pass_logger(PASS_NAME)


def convert_literals(ctx: TransformContext) -> TransformContext:
    """Render every explicit literal in its requested base."""
    converted = 0

    def _replace(match: re.Match) -> str:
        nonlocal converted
        directive = parse_explicit_literal(match)
        rendered = bases.render_signed(directive.literal, directive.to_base)
        if rendered is None:
            log.debug("literal_out_of_range", literal=directive.literal)
            return directive.raw
        converted += 1
        return rendered

    new_text = EXPLICIT_LITERAL.sub(_replace, ctx.text)

    if ctx.rewrite(PASS_NAME, "convert_literals", new_text, rewrites=converted):
        log.verbose("literals_converted", count=converted)

    return ctx
