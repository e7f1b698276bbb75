# tests/io/test_dirs.py

from pathvalue.io import Path, dirs
from pathvalue.io.dirs import StandardDirs, resolve_standard_dirs


class TestHomeDir:
    def test_home_dir(self, mock_env):
        assert Path.home_dir() == Path("/mock/home/dir")
        assert dirs.home_dir() is dirs.home_dir()

    def test_home_dir_is_cached_until_reset(self, mock_env, monkeypatch):
        first = Path.home_dir()
        monkeypatch.setenv("HOME", "/elsewhere")
        assert Path.home_dir() == first
        dirs.reset()
        assert Path.home_dir() == Path("/elsewhere")


class TestStandardDirs:
    def test_standard_dirs(self, mock_env):
        found = Path.standard_dirs()
        assert isinstance(found, StandardDirs)
        assert str(found.cache) == "/mock/home/dir/.cache"
        assert str(found.config) == "/xdg/config"
        assert str(found.data) == "/mock/home/dir/.local/share"
        assert str(found.state) == "/mock/home/dir/.local/state"

    def test_config_file_under_config_dir(self, mock_env):
        config_file = Path.standard_dirs().config.join("foo/bar.json")
        assert str(config_file) == "/xdg/config/foo/bar.json"
        assert str(config_file.basename) == "bar.json"

    def test_empty_variable_falls_back(self):
        env = {"XDG_CACHE_HOME": "", "XDG_DATA_HOME": "/data//here/"}
        found = resolve_standard_dirs(env, home=Path("/home/u"))
        assert found.cache == Path("/home/u/.cache")
        assert found.config == Path("/home/u/.config")
        assert found.data == Path("/data/here/")
        assert found.state == Path("/home/u/.local/state")
