"""
Golden tests for regression testing.

Golden tests lock in the resolved form of representative lines.
Any change to these expectations requires explicit review.
"""

from pathlib import Path

import pytest
import yaml

from tdr.cli.main import setup_default_pipeline
from tdr.core.context import TransformRequest
from tdr.core.engine import Engine
from tdr.ir.enums import TransformStatus

# Path to golden test cases
GOLDEN_DIR = Path(__file__).parent / "data" / "golden"


@pytest.fixture
def engine():
    """Create an engine with the default pipeline, checking idempotence."""
    eng = Engine()
    setup_default_pipeline(eng, check_idempotence=True)
    return eng


def load_golden_lines():
    """Load every (input, expected) pair from the golden YAML files."""
    lines = []
    for yaml_file in sorted(GOLDEN_DIR.glob("case_*.yaml")):
        with open(yaml_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        for i, line in enumerate(data["lines"]):
            line["_id"] = f"{data['name']}-{i}"
            lines.append(line)
    return lines


golden_lines = load_golden_lines()
golden_ids = [line["_id"] for line in golden_lines]


@pytest.mark.parametrize("golden_line", golden_lines, ids=golden_ids)
class TestGoldenLines:
    """Parameterized golden tests."""

    def test_resolved_text(self, engine, golden_line):
        result = engine.transform(TransformRequest(text=golden_line["input"]))

        assert result.rendered_text == golden_line["expected"], (
            f"Input:  {golden_line['input']}\n"
            f"Output: {result.rendered_text}"
        )

    def test_passes_idempotence_check(self, engine, golden_line):
        """The idempotence validator finds nothing to change in the output."""
        result = engine.transform(TransformRequest(text=golden_line["input"]))

        assert result.status == TransformStatus.SUCCESS, [d.message for d in result.diagnostics]

    def test_expected_resolves_to_itself(self, engine, golden_line):
        result = engine.transform(TransformRequest(text=golden_line["expected"]))
        assert result.rendered_text == golden_line["expected"]


def test_golden_files_present():
    assert len(golden_lines) >= 20
