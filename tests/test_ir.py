"""
Tests for IR serialization and channel logging.
"""

import io
import json

import pytest
import structlog

from tdr.core.context import TransformRequest
from tdr.core.logging import (
    LineLogger,
    LogChannel,
    LogLevel,
    configure_logging,
    get_logger,
    get_pass_logger,
)
from tdr.ir.schema import TransformResult
from tdr.ir.serialization import to_json, write_json_lines


@pytest.fixture
def result(engine):
    return engine.transform(TransformRequest(text="ff(up)(hex) (up)"))


@pytest.fixture
def log_output(capsys):
    """Capture stderr logging, restoring the default configuration after."""
    yield capsys
    configure_logging(level="info", format="console", channels=list(LogChannel), force=True)


def json_events(err: str) -> list:
    return [json.loads(line) for line in err.splitlines() if line.strip()]


class TestSerialization:

    def test_json_roundtrip(self, result):
        restored = TransformResult.model_validate_json(to_json(result))

        assert restored.rendered_text == "255"
        assert restored.request_id == result.request_id
        assert [t.pass_name for t in restored.trace] == [t.pass_name for t in result.trace]

    def test_json_lines_one_object_per_result(self, engine):
        results = list(engine.transform_lines(["ff(hex)", "a apple"]))
        sink = io.StringIO()

        passed = list(write_json_lines(results, sink))

        assert passed == results
        lines = sink.getvalue().splitlines()
        assert len(lines) == 2
        assert [json.loads(line)["rendered_text"] for line in lines] == ["255", "an apple"]

    def test_json_lines_written_lazily(self, result):
        sink = io.StringIO()
        stream = write_json_lines([result], sink)

        assert sink.getvalue() == ""
        next(stream)
        assert sink.getvalue().count("\n") == 1


class TestLogging:

    @pytest.mark.parametrize("pass_name,channel", [
        ("p00_prepare", LogChannel.PIPELINE),
        ("p16_reduce_bases", LogChannel.CONVERT),
        ("p30_nested_modifiers", LogChannel.CASE),
        ("p74_articles", LogChannel.NORMALIZE),
        ("custom", LogChannel.PIPELINE),
    ])
    def test_pass_logger_channel(self, pass_name, channel):
        assert get_pass_logger(pass_name).channel is channel

    @pytest.mark.parametrize("name,level", [
        ("silent", LogLevel.SILENT),
        (" Verbose ", LogLevel.VERBOSE),
        ("DEBUG", LogLevel.DEBUG),
        ("loud", LogLevel.INFO),
    ])
    def test_level_from_string(self, name, level):
        assert LogLevel.from_string(name) is level

    def test_json_output_on_stderr(self, log_output):
        configure_logging(level="info", format="json", channels=list(LogChannel), force=True)

        get_logger(LogChannel.IO).info("hello", path="notes.txt")

        captured = log_output.readouterr()
        assert captured.out == ""
        event = json_events(captured.err)[-1]
        assert event["event"] == "hello"
        assert event["channel"] == "IO"
        assert event["path"] == "notes.txt"

    def test_disabled_channel_hides_info_not_warnings(self, log_output):
        configure_logging(level="info", format="json", channels=["convert"], force=True)
        logger = get_logger(LogChannel.IO)

        logger.info("hidden")
        logger.warning("shown")

        events = [e["event"] for e in json_events(log_output.readouterr().err)]
        assert events == ["shown"]

    def test_silent_hides_errors(self, log_output):
        configure_logging(level="silent", format="json", force=True)

        get_logger(LogChannel.SYSTEM).error("failure")

        assert log_output.readouterr().err == ""

    def test_verbose_hidden_at_info(self, log_output):
        configure_logging(level="info", format="json", channels=list(LogChannel), force=True)

        get_logger(LogChannel.CASE).verbose("detail")

        assert log_output.readouterr().err == ""

    def test_line_logger_binds_request_fields(self, log_output):
        configure_logging(level="verbose", format="json", channels=list(LogChannel), force=True)

        LineLogger("req-1", line_number=3).line_complete("success", passes=2)

        event = json_events(log_output.readouterr().err)[-1]
        assert event["event"] == "line_complete"
        assert event["request_id"] == "req-1"
        assert event["line"] == 3
        assert event["passes"] == 2
        assert structlog.contextvars.get_contextvars() == {}
