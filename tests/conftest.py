from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
FIXTURES = ROOT / "tests" / "fixtures"
for path in (SRC, FIXTURES):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: Any) -> Path:
    """Point config to a temp path so tests don't touch user state."""
    cfg_path = tmp_path / "snapi.toml"
    monkeypatch.setenv("SNAPI_CONFIG", str(cfg_path))
    for var in ("SNAPI_STRICT_TYPES", "SNAPI_LOG_LEVEL", "SNAPI_CAPABILITY_MODULES"):
        monkeypatch.delenv(var, raising=False)
    return cfg_path


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use an in-memory Rich console during tests."""
    test_console = Console(record=True, width=200)
    import snapi.core.console as core_console
    import snapi.main as snapi_main

    monkeypatch.setattr(core_console, "console", test_console)
    monkeypatch.setattr(snapi_main, "console", test_console)
    return test_console
