"""
Tests for run configuration loading.
"""

from pathlib import Path

import pytest

from tdr.config.settings import Settings, load_settings


def test_defaults(clean_env):
    settings = load_settings()

    assert settings.input_path == Path("sample.txt")
    assert settings.output_path == Path("result.txt")
    assert settings.pipeline == "default"
    assert settings.workers == 1
    assert settings.create_missing is True
    assert settings.trace_path is None


def test_yaml_file(clean_env, tmp_path):
    config = tmp_path / "tdr.yaml"
    config.write_text(
        "input: notes.txt\n"
        "output: notes.out\n"
        "workers: 4\n"
        "trace: notes.trace.jsonl\n"
        "logging:\n"
        "  level: VERBOSE\n"
        "  channels: [CONVERT, IO]\n"
    )

    settings = load_settings(config)

    assert settings.input_path == Path("notes.txt")
    assert settings.output_path == Path("notes.out")
    assert settings.workers == 4
    assert settings.trace_path == Path("notes.trace.jsonl")
    assert settings.log_level == "verbose"
    assert settings.log_channels == ["CONVERT", "IO"]


def test_environment_over_file(clean_env, tmp_path):
    config = tmp_path / "tdr.yaml"
    config.write_text("workers: 4\npipeline: surface\n")
    clean_env.setenv("TDR_WORKERS", "3")

    settings = load_settings(config)

    assert settings.workers == 3
    assert settings.pipeline == "surface"


def test_overrides_win(clean_env):
    clean_env.setenv("TDR_PIPELINE", "surface")

    settings = load_settings(pipeline="directives", workers=None)

    assert settings.pipeline == "directives"
    assert settings.workers == 1


def test_missing_file(clean_env, tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


@pytest.mark.parametrize("content", [
    "workers: [unclosed\n",
    "- just\n- a list\n",
    "workers: 0\n",
    "logging:\n  level: loud\n",
    "logging:\n  format: xml\n",
])
def test_invalid_file(clean_env, tmp_path, content):
    config = tmp_path / "bad.yaml"
    config.write_text(content)

    with pytest.raises(ValueError):
        load_settings(config)


def test_settings_model_rejects_zero_workers():
    with pytest.raises(ValueError):
        Settings(workers=0)
