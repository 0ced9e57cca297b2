"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def predictions_json(fixtures_dir):
    """Raw datagetter JSON response for station 9411340."""
    return (fixtures_dir / "predictions.json").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def predictions_csv(fixtures_dir):
    """Raw datagetter CSV response with one non-numeric height."""
    return (fixtures_dir / "predictions.csv").read_text(encoding="utf-8")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
