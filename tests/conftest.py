import sys
import os
from tempfile import TemporaryDirectory
import pytest
# Ensure the project root is on sys.path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tests.test_utils import topo_path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with TemporaryDirectory() as dir_path:
        yield dir_path


@pytest.fixture
def pinmux_topo():
    return topo_path("pinmux.topo")


@pytest.fixture(autouse=True)
def clear_topowrangler_env(monkeypatch):
    """Keep TW_* overrides from the calling shell out of CLI tests."""
    for name in list(os.environ):
        if name.startswith("TW_"):
            monkeypatch.delenv(name, raising=False)
