"""
Pass 20 — Case Modifiers

Resolves case directives that follow their subject:

    it was the best of times (up, 2)  -> it was the best OF TIMES
    hello (cap)                       -> Hello
    SHOUTING(low)                     -> shouting

Scoped directives are resolved first so ``(up, 2)`` is never read
as a word followed by a plain ``(up)``. The scoped window reaches
back at most eleven words.
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives.case import apply_case, apply_modifier
from tdr.directives.grammar import (
    SCOPED_CASE,
    SINGLE_CASE,
    parse_case,
    parse_scoped_case,
)

PASS_NAME = "p20_case_modifiers"
log = get_pass_logger(PASS_NAME)


def _apply_scoped(match: re.Match) -> str:
    directive = parse_scoped_case(match)
    log.debug(
        "scoped_modifier",
        modifier=directive.modifier.value,
        count=directive.word_count,
        subject=directive.subject,
    )
    return apply_modifier(directive.subject, directive.modifier, directive.word_count)


def _apply_single(match: re.Match) -> str:
    directive = parse_case(match)
    return apply_case(directive.subject, directive.modifier)


def apply_case_modifiers(ctx: TransformContext) -> TransformContext:
    """Resolve scoped ``(mod, N)`` and single ``(mod)`` directives."""
    text, scoped = SCOPED_CASE.subn(_apply_scoped, ctx.text)
    text, single = SINGLE_CASE.subn(_apply_single, text)

    if ctx.rewrite(PASS_NAME, "apply_case_modifiers", text, rewrites=scoped + single):
        log.verbose("case_applied", scoped=scoped, single=single)

    return ctx
