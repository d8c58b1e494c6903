"""
Pass 22 — Case Chains

Resolves several case modifiers attached to the same word, applied
left to right:

    word(up)(low)(cap) -> Word

Whitespace after the chain is kept as it was.
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives.case import apply_chain
from tdr.directives.grammar import CASE_CHAIN, parse_case_chain

PASS_NAME = "p22_case_chains"
log = get_pass_logger(PASS_NAME)


def _apply_chain(match: re.Match) -> str:
    directive = parse_case_chain(match)
    return apply_chain(directive.subject, directive.case_modifiers) + match.group(3)


def apply_case_chains(ctx: TransformContext) -> TransformContext:
    """Resolve every case chain in the line."""
    text, count = CASE_CHAIN.subn(_apply_chain, ctx.text)

    if ctx.rewrite(PASS_NAME, "apply_case_chains", text, rewrites=count):
        log.verbose("chains_applied", count=count)

    return ctx
