"""Pytest configuration for simple_redirector tests."""
import sys
from pathlib import Path

# Add src/ to path for src-layout imports without an install.
_PROJECT_ROOT = Path(__file__).parent.parent
_SRC = _PROJECT_ROOT / 'src'
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import pytest

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def good_mapping_path() -> Path:
    return FIXTURES_DIR / 'test-redirect-map.yml'


@pytest.fixture
def bad_mapping_path() -> Path:
    return FIXTURES_DIR / 'bad-redirect-map.yml'
