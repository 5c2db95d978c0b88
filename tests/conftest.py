"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add action_validator/ to Python path so `from actval.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "action_validator"))

import pytest

os.environ["ACTVAL_DEV_MODE"] = "true"

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def valid_workflow_yaml(fixtures_dir: Path) -> str:
    return (fixtures_dir / "workflow_valid.yml").read_text()


@pytest.fixture
def valid_action_yaml(fixtures_dir: Path) -> str:
    return (fixtures_dir / "action.yml").read_text()


@pytest.fixture
def empty_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
