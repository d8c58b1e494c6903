"""
IR Serialization — JSON export for transformation results.

``to_json`` renders one result for ``tdr resolve --format json``;
``write_json_lines`` streams results, one compact JSON object per line,
for ``tdr process --trace-out``.
"""

from typing import IO, Iterable, Iterator, Optional

from tdr.ir.schema import TransformResult


def to_json(result: TransformResult, indent: Optional[int] = 2) -> str:
    """Serialize a TransformResult to JSON string."""
    return result.model_dump_json(indent=indent)


def write_json_lines(
    results: Iterable[TransformResult],
    sink: IO[str],
) -> Iterator[TransformResult]:
    """
    Write each result to ``sink`` as it passes through.

    Yields the results unchanged so the trace can be written while the
    caller consumes them.
    """
    for result in results:
        sink.write(to_json(result, indent=None) + "\n")
        yield result
