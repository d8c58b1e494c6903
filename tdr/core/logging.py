"""
Channel-Aware Structured Logging for TDR.

Every logger belongs to one channel, and every message has a level:

    channel     what is logged
    PIPELINE    pass start/end, per-line summary
    CONVERT     base conversions (p10-p16)
    CASE        case, scoped and nested modifiers (p20-p30)
    NORMALIZE   punctuation, quotes, articles, markers (p70-p76)
    IO          line source and sink
    SYSTEM      errors, status

Levels: silent < info < verbose < debug. A message is emitted when its
channel is enabled and the configured level is at least its own.
Warnings and errors skip the channel filter; only ``silent`` hides them.

Environment (used when configure_logging gets no explicit value):
- TDR_LOG_LEVEL: silent/info/verbose/debug
- TDR_LOG_FORMAT: console/json
- TDR_LOG_CHANNELS: comma-separated channel names, all when unset

Output goes to stderr; stdout carries resolved text only.
"""

import logging
import os
import sys
import time
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog


class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse a level name; unknown names mean INFO."""
        try:
            return cls[s.strip().upper()]
        except KeyError:
            return cls.INFO


class LogChannel(str, Enum):
    """Semantic log channels."""
    PIPELINE = "PIPELINE"
    CONVERT = "CONVERT"
    CASE = "CASE"
    NORMALIZE = "NORMALIZE"
    IO = "IO"
    SYSTEM = "SYSTEM"

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


# Pass number prefix -> channel
PASS_CHANNELS = {
    "p00": LogChannel.PIPELINE,
    "p10": LogChannel.CONVERT,
    "p12": LogChannel.CONVERT,
    "p14": LogChannel.CONVERT,
    "p16": LogChannel.CONVERT,
    "p20": LogChannel.CASE,
    "p22": LogChannel.CASE,
    "p30": LogChannel.CASE,
    "p70": LogChannel.NORMALIZE,
    "p72": LogChannel.NORMALIZE,
    "p74": LogChannel.NORMALIZE,
    "p76": LogChannel.NORMALIZE,
}

# verbose and debug both map to stdlib DEBUG; the channel logger does the finer filtering
_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}


@dataclass
class LogState:
    """Process-wide logging configuration."""
    level: LogLevel = LogLevel.INFO
    format: str = "console"
    channels: set = field(default_factory=lambda: set(LogChannel))
    configured: bool = False


_state = LogState()


def _parse_channels(values: Iterable[Union[LogChannel, str]]) -> set:
    parsed = set()
    for value in values:
        channel = value if isinstance(value, LogChannel) else LogChannel.from_string(value)
        if channel is not None:
            parsed.add(channel)
    return parsed


def _renderer(format: str):
    if format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[Iterable[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog and the stdlib root handler.

    Arguments left as None fall back to the TDR_LOG_* environment.
    Without ``force`` only the first call has an effect.
    """
    if _state.configured and not force:
        return

    if level is None:
        level = os.environ.get("TDR_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("TDR_LOG_FORMAT", "console")

    if channels is None:
        channels = os.environ.get("TDR_LOG_CHANNELS", "").split(",")
    enabled = _parse_channels(channels) or set(LogChannel)

    _state.level = level
    _state.format = format
    _state.channels = enabled

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_STDLIB_LEVELS[level],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_renderer(format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration (CLI flags after import-time loggers) must take effect
        cache_logger_on_first_use=False,
    )

    _state.configured = True


class ChannelLogger:
    """A structlog logger bound to one channel, filtered by level."""

    def __init__(self, channel: LogChannel, name: Optional[str] = None, pass_name: Optional[str] = None):
        self.channel = channel
        self.name = name or f"tdr.{channel.value.lower()}"
        self.pass_name = pass_name
        self._logger = structlog.get_logger(self.name)

    def _emit(self, method: str, level: LogLevel, event: str, fields: dict, filtered: bool = True) -> None:
        if _state.level == LogLevel.SILENT or _state.level < level:
            return
        if filtered and self.channel not in _state.channels:
            return
        fields["channel"] = self.channel.value
        if self.pass_name:
            fields["pass"] = self.pass_name
        getattr(self._logger, method)(event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("info", LogLevel.INFO, event, fields)

    def verbose(self, event: str, **fields: Any) -> None:
        self._emit("debug", LogLevel.VERBOSE, event, fields)

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("debug", LogLevel.DEBUG, event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._emit("warning", LogLevel.INFO, event, fields, filtered=False)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("error", LogLevel.INFO, event, fields, filtered=False)


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """Get a logger for ``channel`` (SYSTEM for unknown names)."""
    configure_logging()
    if isinstance(channel, str) and not isinstance(channel, LogChannel):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM
    return ChannelLogger(channel=channel)


def get_pass_logger(pass_name: str, channel: Optional[LogChannel] = None) -> ChannelLogger:
    """
    Get a logger for a pipeline pass.

    The channel comes from the pass number prefix ("p16_..." -> CONVERT)
    unless given explicitly; unknown prefixes log on PIPELINE.
    """
    configure_logging()
    if channel is None:
        channel = PASS_CHANNELS.get(pass_name[:3], LogChannel.PIPELINE)
    return ChannelLogger(channel=channel, name=f"tdr.{pass_name}", pass_name=pass_name)


class LineLogger:
    """
    Pipeline logging for one line.

    Binds the request ID and line number into structlog's context
    variables until the line is complete. Each worker thread has its
    own context, so concurrent lines never see each other's fields.
    """

    def __init__(self, request_id: str, line_number: Optional[int] = None):
        self._log = get_logger(LogChannel.PIPELINE)
        self._started = time.perf_counter()
        self._pass_started = self._started

        structlog.contextvars.bind_contextvars(request_id=request_id)
        if line_number is not None:
            structlog.contextvars.bind_contextvars(line=line_number)

    def pass_start(self, pass_name: str) -> None:
        self._pass_started = time.perf_counter()
        self._log.debug("pass_started", pass_name=pass_name)

    def pass_end(self, pass_name: str) -> None:
        elapsed = (time.perf_counter() - self._pass_started) * 1000
        self._log.debug("pass_completed", pass_name=pass_name, duration_ms=round(elapsed, 3))

    def pass_error(self, pass_name: str, error: Exception) -> None:
        self._log.error(
            "pass_failed",
            pass_name=pass_name,
            error=str(error),
            error_type=type(error).__name__,
        )

    def line_complete(self, status: str, **metrics: Any) -> None:
        """Log the line summary and drop the bound context."""
        elapsed = (time.perf_counter() - self._started) * 1000
        self._log.verbose("line_complete", status=status, duration_ms=round(elapsed, 3), **metrics)
        structlog.contextvars.clear_contextvars()
