import pytest

from tdr.cli.main import setup_pipelines
from tdr.core.engine import Engine


@pytest.fixture
def engine():
    """Create an engine with every standard pipeline registered."""
    eng = Engine()
    setup_pipelines(eng)
    return eng


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TDR_* settings from the environment."""
    for key in ("TDR_INPUT", "TDR_OUTPUT", "TDR_PIPELINE", "TDR_WORKERS"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
