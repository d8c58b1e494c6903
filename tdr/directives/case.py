"""
Case Modifier — upper/lower/capitalize a word or a window of words.

A window is chosen by a signed count over the whitespace-split words
of a phrase:

- positive count: that many words from the end
- negative count: that many words from the start
- zero: no words

Counts larger than the phrase select the whole phrase.
"""

from typing import Union

from tdr.ir.enums import CaseModifier


def apply_case(word: str, modifier: Union[CaseModifier, str]) -> str:
    """Apply a single case modifier to one word."""
    modifier = CaseModifier(modifier)
    if modifier is CaseModifier.UP:
        return word.upper()
    if modifier is CaseModifier.LOW:
        return word.lower()
    return word[:1].upper() + word[1:].lower()


def select_window(word_total: int, count: int) -> range:
    """Indices of the words a signed count selects out of ``word_total`` words."""
    if count > 0:
        return range(max(word_total - count, 0), word_total)
    if count < 0:
        return range(0, min(-count, word_total))
    return range(0)


def apply_modifier(text: str, modifier: Union[CaseModifier, str], count: int) -> str:
    """
    Apply ``modifier`` to the window of ``text`` selected by ``count``.

    Words are re-joined with single spaces; unselected words are kept as is.

    >>> apply_modifier("the quick brown fox", "up", 2)
    'the quick BROWN FOX'
    >>> apply_modifier("the quick brown fox", "up", -2)
    'THE QUICK brown fox'
    """
    words = text.split()
    for i in select_window(len(words), count):
        words[i] = apply_case(words[i], modifier)
    return " ".join(words)


def apply_chain(word: str, modifiers: list) -> str:
    """Apply several case modifiers to one word, left to right."""
    for modifier in modifiers:
        word = apply_case(word, modifier)
    return word
