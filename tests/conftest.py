"""
Pytest configuration and fixtures for trpg-importer tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing trpg_importer
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def read_fixture():
    """Return a loader for fixture files as text."""
    def _read(name: str) -> str:
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")
    return _read
