"""
Pass 10 — Conversion Pairs

Resolves ``digits(from)(to)``: the digits are parsed in the first
base and rendered in the second.

    101(bin)(hex)   ->  5
    11111111(bin)(hex) -> FF
    ff(hex)(bin)    ->  11111111

A subject that is not valid in the first base is left untouched,
markers included. Pairs followed by a third attached operation belong
to the chain resolver (p14).
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives import bases
from tdr.directives.grammar import CONVERSION_PAIR, parse_conversion_pair

PASS_NAME = "p10_convert_pairs"
log = get_pass_logger(PASS_NAME)


def convert_pairs(ctx: TransformContext) -> TransformContext:
    """Resolve every two-base conversion in the line."""
    converted = 0

    def _replace(match: re.Match) -> str:
        nonlocal converted
        directive = parse_conversion_pair(match)
        rendered = bases.convert(directive.subject, directive.from_base, directive.to_base)
        if rendered is None:
            log.debug(
                "invalid_subject",
                subject=directive.subject,
                base=directive.from_base.value,
            )
            return directive.raw
        converted += 1
        return rendered

    new_text = CONVERSION_PAIR.sub(_replace, ctx.text)

    if ctx.rewrite(PASS_NAME, "convert_pairs", new_text, rewrites=converted):
        log.verbose("pairs_converted", count=converted)

    return ctx
