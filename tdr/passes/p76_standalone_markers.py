"""
Pass 76 — Standalone Marker Cleanup

Removes case markers that never found a subject, such as a line that
starts with "(up)", together with the whitespace in front of them.
"""

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger
from tdr.directives.grammar import CASE_MARKER

PASS_NAME = "p76_standalone_markers"
log = get_pass_logger(PASS_NAME)


def strip_standalone_markers(ctx: TransformContext) -> TransformContext:
    """Delete leftover ``(up)`` / ``(low)`` / ``(cap)`` markers."""
    text, removed = CASE_MARKER.subn("", ctx.text)
    text = text.strip()

    if ctx.rewrite(PASS_NAME, "strip_standalone_markers", text, rewrites=removed):
        log.verbose("markers_removed", count=removed)

    return ctx
