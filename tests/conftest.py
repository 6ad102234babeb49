"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from vimflow.core import EditorState, compile_exercise  # noqa: E402
from vimflow.core.state import INSERT  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


def _compile(goals, flow_type="sequential", title="Test exercise"):
    return compile_exercise(
        {
            "title": title,
            "description": "fixture",
            "sample_code": ["let x = 10;", "let y = 20;"],
            "goals": goals,
            "flow_type": flow_type,
        }
    )


@pytest.fixture
def make_exercise():
    """Factory compiling an exercise from raw goal mappings."""
    return _compile


@pytest.fixture
def position_goals():
    """Two position goals: (0, 3) then (1, 3)."""
    return [
        {"type": "position", "target": [0, 3], "description": "first", "hint": "lll"},
        {"type": "position", "target": [1, 3], "description": "second", "hint": "j"},
    ]


@pytest.fixture
def sequential_exercise(position_goals):
    return _compile(position_goals, "sequential")


@pytest.fixture
def any_order_exercise(position_goals):
    return _compile(position_goals, "any_order")


@pytest.fixture
def parallel_exercise():
    return _compile(
        [
            {"type": "position", "target": [0, 6], "description": "on word"},
            {"type": "mode", "target": "insert", "description": "insert"},
        ],
        "parallel",
    )


@pytest.fixture
def origin_state():
    return EditorState.default()


@pytest.fixture
def insert_at_word_state():
    return EditorState(mode=INSERT, cursor_line=0, cursor_col=6)
