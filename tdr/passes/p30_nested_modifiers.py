"""
Pass 30 — Nested Modifiers

Resolves parenthesized scoped modifiers whose text is written inside
the group, which may in turn contain further groups:

    (up, 2 the quick brown fox)              -> the quick BROWN FOX
    (cap, -1 (low, 1 HELLO WORLD) again)     -> Hello world again

Groups are resolved innermost first: each round rewrites every group
that has no parentheses left inside it. Every rewrite removes one
opening parenthesis, so the number of parentheses bounds the number
of rounds.
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives.case import apply_modifier
from tdr.directives.grammar import NESTED_GROUP, count_groups, parse_nested_group

PASS_NAME = "p30_nested_modifiers"
log = get_pass_logger(PASS_NAME)


def _apply_group(match: re.Match) -> str:
    directive = parse_nested_group(match)
    return apply_modifier(directive.subject, directive.modifier, directive.word_count)


def resolve_groups(text: str) -> tuple[str, int, int]:
    """
    Rewrite nested groups until none is left.

    Returns:
        (new text, groups resolved, rounds taken)
    """
    resolved = 0
    rounds = 0
    for _ in range(count_groups(text) + 1):
        text, count = NESTED_GROUP.subn(_apply_group, text)
        if count == 0:
            break
        resolved += count
        rounds += 1
    return text, resolved, rounds


def resolve_nested(ctx: TransformContext) -> TransformContext:
    """Resolve nested modifier groups innermost first."""
    text, resolved, rounds = resolve_groups(ctx.text)

    if ctx.rewrite(PASS_NAME, "resolve_nested", text, rewrites=resolved):
        log.verbose("groups_resolved", groups=resolved, rounds=rounds)

    return ctx
