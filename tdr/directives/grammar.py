"""
Directive Grammar — the textual syntax of directives inside a line.

Recognized forms:

    101(bin)(hex)          conversion pair: parse in the first base, render in the second
    (bin, 5) / (hex, -1)   explicit literal: render a signed decimal
    ff(up)(hex)            chain: case modifiers, then the first conversion that succeeds
    1010(bin) / ff(hex)    single base: render as decimal
    word(up)               case modifier on one word
    word(up)(low)          case chain on one word
    some words (up, 2)     scoped case modifier over the trailing words
    (up, -2 some words)    nested scoped modifier, may contain further groups

Patterns are compiled once here; the parse helpers turn a match into an
IR directive model that keeps the raw matched text.
"""

import re
from typing import Optional

from tdr.ir.enums import Base, CaseModifier
from tdr.ir.schema import (
    CaseDirective,
    ChainedDirective,
    ConversionDirective,
    ExplicitConversionDirective,
    ScopedCaseDirective,
    SingleConversionDirective,
)

_BASES = "bin|hex"
_MODIFIERS = "up|low|cap"
_OPERATIONS = f"{_MODIFIERS}|{_BASES}"

# =============================================================================
# Conversion Patterns
# =============================================================================

# digits(bin)(hex), but not when a third chained operation follows
CONVERSION_PAIR = re.compile(
    rf"\b([0-9A-Fa-f]+)\s*\(\s*({_BASES})\s*\)\s*\(\s*({_BASES})\s*\)"
    rf"(?!\((?:{_OPERATIONS})\))"
)

# (bin, 12) / (hex, -3)
EXPLICIT_LITERAL = re.compile(rf"\(\s*({_BASES})\s*,\s*(-?[0-9]+)\s*\)")

# ff(up)(hex)(bin): operations directly attached, no spaces
CHAIN = re.compile(rf"\b([0-9A-Fa-f]+)((?:\((?:{_OPERATIONS})\))+)")
CHAIN_OPERATION = re.compile(rf"\(({_OPERATIONS})\)")

SINGLE_CONVERSION = {
    Base.HEX: re.compile(r"\b([0-9A-Fa-f]+)\s*\(\s*hex\s*\)"),
    Base.BIN: re.compile(r"\b([0-9]+)\s*\(\s*bin\s*\)"),
}

# Leftover marker, with the whitespace that separated it from its word.
# (?<!\s) makes a whitespace run match from its start only.
BASE_MARKER = {
    Base.HEX: re.compile(r"(?<!\s)\s*\(\s*hex\s*\)"),
    Base.BIN: re.compile(r"(?<!\s)\s*\(\s*bin\s*\)"),
}

# =============================================================================
# Case Patterns
# =============================================================================

# Up to eleven words followed by (up, N) or (up, -N)
SCOPED_CASE = re.compile(
    rf"\b((?:\w+\s+){{0,10}}?\w+)\s*\(\s*({_MODIFIERS})\s*,\s*(-?[0-9]+)\s*\)"
)

SINGLE_CASE = re.compile(rf"\b(\w+)\s*\(\s*({_MODIFIERS})\s*\)")

CASE_CHAIN = re.compile(rf"\b(\w+)((?:\((?:{_MODIFIERS})\))+)(\s*)")
CASE_CHAIN_OPERATION = re.compile(rf"\(({_MODIFIERS})\)")

# Innermost group only: the free text may not contain parentheses
NESTED_GROUP = re.compile(rf"\(\s*({_MODIFIERS})\s*,\s*(-?[0-9]+)(?![0-9])([^()]*)\)")

CASE_MARKER = re.compile(rf"(?<!\s)\s*\(\s*(?:{_MODIFIERS})\s*\)")


# =============================================================================
# Parsers
# =============================================================================

def parse_conversion_pair(match: re.Match) -> ConversionDirective:
    return ConversionDirective(
        raw=match.group(0),
        subject=match.group(1),
        from_base=Base(match.group(2)),
        to_base=Base(match.group(3)),
    )


def parse_explicit_literal(match: re.Match) -> ExplicitConversionDirective:
    return ExplicitConversionDirective(
        raw=match.group(0),
        to_base=Base(match.group(1)),
        literal=int(match.group(2)),
    )


def parse_chain(match: re.Match) -> ChainedDirective:
    operations = []
    for token in CHAIN_OPERATION.findall(match.group(2)):
        try:
            operations.append(CaseModifier(token))
        except ValueError:
            operations.append(Base(token))
    return ChainedDirective(
        raw=match.group(0),
        subject=match.group(1),
        operations=operations,
    )


def parse_single_conversion(match: re.Match, base: Base) -> SingleConversionDirective:
    return SingleConversionDirective(
        raw=match.group(0),
        subject=match.group(1),
        from_base=base,
    )


def parse_scoped_case(match: re.Match) -> ScopedCaseDirective:
    return ScopedCaseDirective(
        raw=match.group(0),
        subject=match.group(1),
        modifier=CaseModifier(match.group(2)),
        word_count=int(match.group(3)),
    )


def parse_nested_group(match: re.Match) -> ScopedCaseDirective:
    return ScopedCaseDirective(
        raw=match.group(0),
        subject=match.group(3).strip(),
        modifier=CaseModifier(match.group(1)),
        word_count=int(match.group(2)),
    )


def parse_case(match: re.Match) -> CaseDirective:
    return CaseDirective(
        raw=match.group(0),
        subject=match.group(1),
        modifier=CaseModifier(match.group(2)),
    )


def parse_case_chain(match: re.Match) -> ChainedDirective:
    return ChainedDirective(
        raw=match.group(0),
        subject=match.group(1),
        operations=[CaseModifier(t) for t in CASE_CHAIN_OPERATION.findall(match.group(2))],
    )


def count_markers(text: str, base: Optional[Base] = None) -> int:
    """
    Number of base markers left in ``text``.

    This is the decreasing measure of the single-base fixed point:
    every successful rewrite consumes one marker.
    """
    bases = [base] if base else list(Base)
    return sum(len(BASE_MARKER[b].findall(text)) for b in bases)


def count_groups(text: str) -> int:
    """Number of opening parentheses, the measure of nested resolution."""
    return text.count("(")
