import tempfile

import pytest

from pathvalue.config import get_settings
from pathvalue.io import MemoryFileSystem
from pathvalue.io import dirs


MOCK_HOME = "/mock/home/dir"


@pytest.fixture(autouse=True)
def fresh_caches():
    """Process-wide caches are read from the environment, reset them around each test."""
    dirs.reset()
    get_settings.cache_clear()
    yield
    dirs.reset()
    get_settings.cache_clear()


@pytest.fixture
def mock_env(monkeypatch):
    """A fake home directory with only XDG_CONFIG_HOME overridden."""
    monkeypatch.setenv("HOME", MOCK_HOME)
    for var in ("XDG_CACHE_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", "/xdg/config")
    dirs.reset()
    return MOCK_HOME


@pytest.fixture
def temp_root(monkeypatch, tmp_path):
    """Point the system temp directory at the test's tmp_path."""
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    return tmp_path


@pytest.fixture
def memory_fs():
    """An empty in-memory filesystem, activate it with `use_fs`."""
    fs = MemoryFileSystem()
    fs.clear()
    yield fs
    fs.clear()
