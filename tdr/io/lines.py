"""
Line I/O — the shell around the pipeline.

Reads lines from a text file (trimmed, empty lines skipped), hands them
to the engine, and writes one resolved line per input line in the same
order. I/O failures propagate as OSError and stop processing.
"""

from contextlib import ExitStack
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from tdr.core.engine import Engine
from tdr.core.logging import LogChannel, get_logger
from tdr.ir.enums import TransformStatus
from tdr.ir.schema import TransformResult
from tdr.ir.serialization import write_json_lines

log = get_logger(LogChannel.IO)

PathLike = Union[str, Path]


def ensure_file_exists(path: PathLike) -> Path:
    """Create an empty file at ``path`` if nothing exists there yet."""
    path = Path(path)
    if not path.exists():
        path.touch()
        log.verbose("file_created", path=str(path))
    return path


def read_lines(path: PathLike) -> Iterator[str]:
    """
    Yield the lines of ``path`` stripped of surrounding whitespace.

    Empty lines never reach the pipeline.
    """
    with open(path, encoding="utf-8") as f:
        for raw_line in f:
            line = raw_line.strip()
            if line:
                yield line


def write_lines(path: PathLike, lines: Iterable[str]) -> int:
    """Write each line followed by a newline. Returns the number written."""
    written = 0
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
            written += 1
    return written


def process_file(
    input_path: PathLike,
    output_path: PathLike,
    engine: Engine,
    pipeline_id: Optional[str] = None,
    workers: int = 1,
    create_missing: bool = True,
    trace_path: Optional[PathLike] = None,
) -> int:
    """
    Resolve every line of ``input_path`` into ``output_path``.

    With ``trace_path`` every TransformResult (trace and diagnostics
    included) is also written there as JSON Lines, in line order.

    Returns:
        Number of lines written

    Raises:
        FileNotFoundError: If the input is missing and ``create_missing`` is off
        OSError: On any read or write failure
        ValueError: If input and output are the same file
    """
    if Path(input_path).resolve() == Path(output_path).resolve():
        raise ValueError(f"Input and output are the same file: {input_path}")

    if create_missing:
        ensure_file_exists(input_path)
        ensure_file_exists(output_path)

    log.info(
        "processing_started",
        input=str(input_path),
        output=str(output_path),
        pipeline=pipeline_id or "default",
        workers=workers,
    )

    failed = 0

    def _resolved(results: Iterable[TransformResult]) -> Iterator[str]:
        nonlocal failed
        for result in results:
            if result.status == TransformStatus.ERROR:
                failed += 1
                for diag in result.diagnostics:
                    log.warning("line_failed", code=diag.code, message=diag.message)
            yield result.rendered_text or ""

    with ExitStack() as stack:
        results = engine.transform_lines(read_lines(input_path), pipeline_id, workers)
        if trace_path is not None:
            sink = stack.enter_context(open(trace_path, "w", encoding="utf-8"))
            results = write_json_lines(results, sink)
        written = write_lines(output_path, _resolved(results))

    log.info("processing_complete", lines=written, failed=failed)
    return written
