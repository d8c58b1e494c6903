"""
Pass 70 — Punctuation Normalization

Runs after every directive has been resolved, since directive syntax
uses parentheses and commas that are not sentence punctuation.

Fixes, in order:
1. Period runs attach to the previous token, spaces inside removed,
   one space after ("wait . . ." -> "wait... ")
2. "!" and "?" runs attach to the previous token, one space after;
   "!?" / "?!" become a canonical pair; a pair followed by a period
   loses the space before it
3. "," ";" ":" attach to the previous token, one space after
4. Whitespace runs collapse to one space, line trimmed
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger

PASS_NAME = "p70_punctuation"
log = get_pass_logger(PASS_NAME)

# (?<!\s) starts whitespace-led patterns only at the start of a run,
# so a long run is scanned once
PERIOD_RUN = re.compile(r"(?<!\s)\s*(\.(?:\s*\.)*)\s*")

# (pattern, replacement), applied in order
MARK_RULES = [
    # "!" runs
    (re.compile(r"(?<=\S)\s+(?=!)"), ""),
    (re.compile(r"(?<=!)\s+(?=\S)"), " "),
    # "?" runs
    (re.compile(r"(?<=\S)\s+(?=\?)"), ""),
    (re.compile(r"(?<=\?)\s+(?=\S)"), " "),
    # Mixed pairs
    (re.compile(r"(?<!\s)\s*!\?\s*"), "!? "),
    (re.compile(r"(?<!\s)\s*\?!\s*"), "?! "),
    (re.compile(r"(![?!]|[?!]!)\s*\.\s*"), r"\1."),
]

CLAUSE_MARK = re.compile(r"(?<!\s)\s*([,;:])\s*")

# Applied after clause marks, which may have pushed "!" / "?" apart
MARK_JOIN = re.compile(r"([!?])\s*([!?])")
MARK_AT_END = re.compile(r"([!?])\s*$")

WHITESPACE_RUN = re.compile(r"\s{2,}")


def _attach_periods(match: re.Match) -> str:
    return re.sub(r"\s+", "", match.group(1)) + " "


def normalize_spacing(text: str) -> str:
    """Apply every punctuation spacing rule to one line."""
    text = PERIOD_RUN.sub(_attach_periods, text)

    for pattern, replacement in MARK_RULES:
        text = pattern.sub(replacement, text)

    text = CLAUSE_MARK.sub(lambda m: m.group(1) + " ", text)

    text = MARK_JOIN.sub(r"\1\2", text)
    text = MARK_AT_END.sub(r"\1 ", text)

    text = WHITESPACE_RUN.sub(" ", text)
    return text.strip()


def normalize_punctuation(ctx: TransformContext) -> TransformContext:
    """Normalize whitespace around sentence punctuation."""
    if not ctx.text:
        return ctx

    if ctx.rewrite(PASS_NAME, "normalize_punctuation", normalize_spacing(ctx.text)):
        log.verbose("punctuation_normalized", output_chars=len(ctx.text))
    else:
        log.debug("no_changes")

    return ctx
