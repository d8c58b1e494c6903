"""
Directives — grammar, base conversion and case modification.

These are the leaves of the pipeline: pure functions over strings,
with no knowledge of contexts or passes.
"""
