"""
TDR — Text Directive Resolver

A deterministic line rewriter that resolves inline directives
(base conversions, case modifiers, scoped and nested modifiers)
and normalizes punctuation, quotes and articles.

Each line is an independent unit of work.
"""

__version__ = "0.1.0"
__ir_version__ = "0.1.0"
