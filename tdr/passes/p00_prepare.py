"""
Pass 00 — Line Preparation

Strips surrounding whitespace so every later pass sees the line
as the line source would have delivered it.
"""

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger

PASS_NAME = "p00_prepare"
log = get_pass_logger(PASS_NAME)


def prepare(ctx: TransformContext) -> TransformContext:
    """Strip leading and trailing whitespace from the line."""
    log.debug("preparing", input_chars=len(ctx.raw_text), line=ctx.request.line_number)

    if ctx.rewrite(PASS_NAME, "stripped", ctx.text.strip()):
        log.debug("stripped", output_chars=len(ctx.text))

    return ctx
