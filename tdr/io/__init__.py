"""I/O shell: line source and line sink around the pipeline."""

from tdr.io.lines import ensure_file_exists, process_file, read_lines, write_lines

__all__ = ["ensure_file_exists", "read_lines", "write_lines", "process_file"]
