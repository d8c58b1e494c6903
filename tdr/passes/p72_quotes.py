"""
Pass 72 — Quote Normalization

Trims whitespace inside single- and double-quoted spans so the quote
characters hug the text they enclose:

    he said " hello there " to me  ->  he said "hello there" to me
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger

PASS_NAME = "p72_quotes"
log = get_pass_logger(PASS_NAME)

# An opening single quote never follows a letter, so "it's" is an apostrophe
SINGLE_QUOTED = re.compile(r"(?<!\w)'([^']+)'")
DOUBLE_QUOTED = re.compile(r'"([^"]+)"')


def normalize_quotes(ctx: TransformContext) -> TransformContext:
    """Trim the interior of quoted spans."""
    text, single = SINGLE_QUOTED.subn(lambda m: "'" + m.group(1).strip() + "'", ctx.text)
    text, double = DOUBLE_QUOTED.subn(lambda m: '"' + m.group(1).strip() + '"', text)

    if ctx.rewrite(PASS_NAME, "normalize_quotes", text, rewrites=single + double):
        log.verbose("quotes_normalized", single=single, double=double)

    return ctx
