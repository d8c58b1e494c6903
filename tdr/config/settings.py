"""
Settings — Run configuration for the line processor.

Sources, lowest precedence first:
1. Defaults (sample.txt -> result.txt, default pipeline, one worker)
2. A YAML file passed with --config
3. Environment: TDR_INPUT, TDR_OUTPUT, TDR_PIPELINE, TDR_WORKERS
4. Explicit overrides (command-line arguments)

Example file:

    input: notes.txt
    output: notes.resolved.txt
    pipeline: default
    workers: 4
    trace: notes.trace.jsonl
    logging:
      level: verbose
      format: json
      channels: [PIPELINE, IO]

Logging keys left unset fall back to TDR_LOG_* in tdr.core.logging.
"""

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_INPUT = "sample.txt"
DEFAULT_OUTPUT = "result.txt"

_ENV_KEYS = {
    "TDR_INPUT": "input_path",
    "TDR_OUTPUT": "output_path",
    "TDR_PIPELINE": "pipeline",
    "TDR_WORKERS": "workers",
}

_LOG_LEVELS = {"silent", "info", "verbose", "debug"}


class Settings(BaseModel):
    """Validated run configuration."""

    input_path: Path = Field(default=Path(DEFAULT_INPUT))
    output_path: Path = Field(default=Path(DEFAULT_OUTPUT))
    pipeline: str = "default"
    workers: int = Field(default=1, ge=1)
    create_missing: bool = Field(
        default=True,
        description="Create empty input/output files when they do not exist",
    )
    trace_path: Optional[Path] = Field(
        default=None,
        description="JSON Lines file receiving every line's full result",
    )

    log_level: Optional[str] = None
    log_format: Optional[str] = None
    log_channels: Optional[list[str]] = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value.lower() not in _LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return value.lower() if value else value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in ("console", "json"):
            raise ValueError(f"unknown log format '{value}'")
        return value


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a settings file and flatten it into Settings field names."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    values: dict[str, Any] = {}
    for key in ("pipeline", "workers", "create_missing"):
        if key in data:
            values[key] = data[key]
    if "input" in data:
        values["input_path"] = data["input"]
    if "output" in data:
        values["output_path"] = data["output"]
    if "trace" in data:
        values["trace_path"] = data["trace"]

    logging_data = data.get("logging") or {}
    for key in ("level", "format", "channels"):
        if key in logging_data:
            values[f"log_{key}"] = logging_data[key]

    return values


def load_settings(
    path: Union[str, Path, None] = None,
    **overrides: Any,
) -> Settings:
    """
    Build Settings from a YAML file, the environment and overrides.

    Overrides whose value is None are ignored, so argparse namespaces
    can be passed straight through.

    Raises:
        FileNotFoundError: If ``path`` is given but does not exist
        ValueError: If the file or any value is invalid
    """
    values: dict[str, Any] = {}

    if path is not None:
        values.update(_read_yaml(Path(path)))

    for env_key, field_name in _ENV_KEYS.items():
        env_value = os.environ.get(env_key)
        if env_value:
            values[field_name] = env_value

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e}") from e
