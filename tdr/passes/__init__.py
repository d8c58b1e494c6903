"""Passes — Pipeline stages for TDR line resolution."""

from tdr.passes.p00_prepare import prepare
from tdr.passes.p10_convert_pairs import convert_pairs
from tdr.passes.p12_convert_literals import convert_literals
from tdr.passes.p14_resolve_chains import resolve_chains
from tdr.passes.p16_reduce_bases import reduce_bin, reduce_hex
from tdr.passes.p20_case_modifiers import apply_case_modifiers
from tdr.passes.p22_case_chains import apply_case_chains
from tdr.passes.p30_nested_modifiers import resolve_nested
from tdr.passes.p70_punctuation import normalize_punctuation
from tdr.passes.p72_quotes import normalize_quotes
from tdr.passes.p74_articles import fix_articles
from tdr.passes.p76_standalone_markers import strip_standalone_markers

__all__ = [
    "prepare",
    "convert_pairs",
    "convert_literals",
    "resolve_chains",
    "reduce_hex",
    "reduce_bin",
    "apply_case_modifiers",
    "apply_case_chains",
    "resolve_nested",
    "normalize_punctuation",
    "normalize_quotes",
    "fix_articles",
    "strip_standalone_markers",
]
