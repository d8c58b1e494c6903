"""
Pass 74 — Article Agreement

Corrects "a" / "an" before the following word using a first-letter
test only: "an" before a, e, i, o, u (either case), "a" otherwise.
There is no exception list, so "a unicorn" becomes "an unicorn" and
"an hour" becomes "a hour".

A fully uppercase article is replaced in uppercase ("A" -> "AN"),
anything else in lowercase ("An" -> "an").
"""

import re

from tdr.core.context import TransformContext
from tdr.core.logging import get_pass_logger

PASS_NAME = "p74_articles"
log = get_pass_logger(PASS_NAME)

ARTICLE = re.compile(r"\b([Aa][Nn]?)\s+(\w+)")
VOWELS = frozenset("aeiouAEIOU")


def choose_article(article: str, word: str) -> str:
    """Pick the article for ``word``, keeping the case style of ``article``."""
    chosen = "an" if word[:1] in VOWELS else "a"
    if article == article.upper():
        return chosen.upper()
    return chosen


def fix_articles(ctx: TransformContext) -> TransformContext:
    """Make every a/an agree with the word after it."""
    fixed = 0

    def _replace(match: re.Match) -> str:
        nonlocal fixed
        article, word = match.group(1), match.group(2)
        chosen = choose_article(article, word)
        if chosen != article:
            fixed += 1
        return f"{chosen} {word}"

    text = ARTICLE.sub(_replace, ctx.text)

    if ctx.rewrite(PASS_NAME, "fix_articles", text, rewrites=fixed):
        log.verbose("articles_fixed", count=fixed)

    return ctx
