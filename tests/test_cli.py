"""
Tests for the command-line interface.
"""

import json

from tdr.cli.main import build_parser, main


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_parser_defaults():
    args = build_parser().parse_args(["process"])

    assert args.input is None
    assert args.output is None
    assert args.workers is None
    assert args.check_idempotence is False


def test_resolve_prints_text(capsys):
    assert main(["resolve", "101(bin)(hex) and a apple"]) == 0
    assert capsys.readouterr().out == "5 and an apple\n"


def test_resolve_json(capsys):
    assert main(["resolve", "ff(hex)", "--format", "json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["rendered_text"] == "255"
    assert data["status"] == "success"
    assert data["input_text"] == "ff(hex)"


def test_resolve_unknown_pipeline(capsys):
    assert main(["resolve", "text", "--pipeline", "nope"]) == 1
    assert "PIPELINE_NOT_FOUND" in capsys.readouterr().err


def test_process_files(clean_env, tmp_path, capsys):
    source = tmp_path / "sample.txt"
    target = tmp_path / "result.txt"
    source.write_text("This is so exciting (up, 2)\nwait . . .\n", encoding="utf-8")

    code = main(["process", str(source), str(target), "--log-level", "silent"])

    assert code == 0
    assert target.read_text(encoding="utf-8") == "This is SO EXCITING\nwait...\n"
    assert capsys.readouterr().out == (
        f"Successfully processed {source} and saved to {target}\n"
    )


def test_process_defaults_to_sample_and_result(clean_env, tmp_path, capsys):
    clean_env.chdir(tmp_path)
    (tmp_path / "sample.txt").write_text("1010(bin)\n")

    assert main(["process", "--log-level", "silent"]) == 0
    assert (tmp_path / "result.txt").read_text() == "10\n"


def test_process_unknown_pipeline(clean_env, tmp_path, capsys):
    code = main([
        "process",
        str(tmp_path / "in.txt"),
        str(tmp_path / "out.txt"),
        "--pipeline", "nope",
        "--log-level", "silent",
    ])

    assert code == 2
    assert "unknown pipeline" in capsys.readouterr().err


def test_process_invalid_workers(clean_env, tmp_path, capsys):
    code = main(["process", str(tmp_path / "in.txt"), "--workers", "0"])

    assert code == 2
    assert "Error" in capsys.readouterr().err


def test_process_missing_config(clean_env, tmp_path, capsys):
    assert main(["process", "--config", str(tmp_path / "nope.yaml")]) == 2


def test_process_same_file_fails(clean_env, tmp_path, capsys):
    path = tmp_path / "both.txt"
    path.write_text("x\n")

    assert main(["process", str(path), str(path), "--log-level", "silent"]) == 1
    assert path.read_text() == "x\n"


def test_process_trace_out(clean_env, tmp_path, capsys):
    source = tmp_path / "sample.txt"
    target = tmp_path / "result.txt"
    trace = tmp_path / "trace.jsonl"
    source.write_text("1010(bin)\nthe quick brown fox (up, -2)\n", encoding="utf-8")

    code = main([
        "process", str(source), str(target),
        "--trace-out", str(trace),
        "--log-level", "silent",
    ])

    assert code == 0
    lines = trace.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["rendered_text"] for line in lines] == [
        "10",
        "THE QUICK brown fox",
    ]
    assert target.read_text(encoding="utf-8") == "10\nTHE QUICK brown fox\n"
