"""
Pass 14 — Directive Chains

Resolves ``value(op)(op)...`` where the operations are directly
attached to a digit-like subject and at least one is a conversion.

Resolution order is fixed and is NOT positional:

1. Every case modifier in the chain, left to right
2. The first conversion that parses, rendered as decimal

Later conversions are ignored once one succeeds.

    ff(up)(hex)        -> 255
    10(hex)(bin)(hex)  -> 16
    10(low)(bin)       -> 2

Chains without a conversion are left for the case passes (p20, p22).
A chain where no conversion parses is left untouched.
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives import bases
from tdr.directives.case import apply_chain
from tdr.directives.grammar import CHAIN, parse_chain
from tdr.ir.schema import ChainedDirective

PASS_NAME = "p14_resolve_chains"
log = get_pass_logger(PASS_NAME)


def resolve_chain(directive: ChainedDirective) -> str:
    """Resolve one parsed chain, falling back to its raw text."""
    if not directive.conversions:
        return directive.raw

    value = apply_chain(directive.subject, directive.case_modifiers)

    for base in directive.conversions:
        decimal = bases.to_decimal(value, base)
        if decimal is not None:
            return decimal

    log.debug("chain_unresolved", subject=directive.subject, raw=directive.raw)
    return directive.raw


def resolve_chains(ctx: TransformContext) -> TransformContext:
    """Resolve every conversion chain in the line."""
    resolved = 0

    def _replace(match: re.Match) -> str:
        nonlocal resolved
        directive = parse_chain(match)
        result = resolve_chain(directive)
        if result != directive.raw:
            resolved += 1
        return result

    new_text = CHAIN.sub(_replace, ctx.text)

    if ctx.rewrite(PASS_NAME, "resolve_chains", new_text, rewrites=resolved):
        log.verbose("chains_resolved", count=resolved)

    return ctx
