"""Tests for settings and ConfigManager."""

import tempfile
from pathlib import Path

import pytest

from bkm.config import ConfigError, ConfigManager, default_data_dir, load_settings
from bkm.core.bookmark_repository import FileBookmarkRepository
from bkm.core.config_repository import FileConfigRepository
from bkm.models.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("BKM_DATA_DIR", "BKM_LOG_LEVEL", "BKM_UNIQUE_TITLES"):
        monkeypatch.delenv(key, raising=False)


class TestSettings:
    """Test Settings model."""

    def test_defaults(self):
        """Test default settings."""
        settings = Settings(_env_file=None)

        assert settings.data_dir is None
        assert settings.log_level == "WARNING"
        assert settings.unique_titles is False

    def test_from_environment(self, monkeypatch):
        """Test BKM_* variables are read."""
        monkeypatch.setenv("BKM_DATA_DIR", "/tmp/bkm-data")
        monkeypatch.setenv("BKM_LOG_LEVEL", "debug")
        monkeypatch.setenv("BKM_UNIQUE_TITLES", "true")

        settings = Settings(_env_file=None)

        assert settings.data_dir == Path("/tmp/bkm-data")
        assert settings.log_level == "DEBUG"
        assert settings.unique_titles is True

    def test_invalid_log_level(self, monkeypatch):
        """Test an unknown log level is rejected."""
        monkeypatch.setenv("BKM_LOG_LEVEL", "chatty")

        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings()


class TestConfigManager:
    """Test ConfigManager functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.data_dir = Path(self.temp_dir) / "bkm"

    def teardown_method(self):
        """Clean up test fixtures."""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_explicit_data_dir(self):
        """Test an explicit directory wins and file paths follow it."""
        cm = ConfigManager(self.data_dir, settings=Settings(_env_file=None))

        assert cm.data_dir == self.data_dir
        assert cm.bookmarks_file == self.data_dir / "bookmarks.json"
        assert cm.config_file == self.data_dir / "config.json"

    def test_uses_env_data_dir_when_not_provided(self, monkeypatch):
        """Test ConfigManager reads BKM_DATA_DIR."""
        env_dir = Path(self.temp_dir) / "from_env"
        monkeypatch.setenv("BKM_DATA_DIR", str(env_dir))

        assert ConfigManager().data_dir == env_dir

    def test_default_data_dir(self):
        """Test the fallback location."""
        cm = ConfigManager(settings=Settings(_env_file=None))

        assert cm.data_dir == default_data_dir()
        assert cm.data_dir.parts[-3:] == (".local", "share", "bkm")

    def test_ensure_data_dir(self):
        """Test the data directory is created."""
        cm = ConfigManager(self.data_dir, settings=Settings(_env_file=None))

        cm.ensure_data_dir()
        cm.ensure_data_dir()

        assert self.data_dir.is_dir()

    def test_ensure_data_dir_blocked_by_file(self):
        """Test a file at the data path raises ConfigError."""
        self.data_dir.parent.mkdir(parents=True, exist_ok=True)
        self.data_dir.write_text("not a directory", encoding="utf-8")
        cm = ConfigManager(self.data_dir, settings=Settings(_env_file=None))

        with pytest.raises(ConfigError):
            cm.ensure_data_dir()

    def test_repositories_use_data_dir(self):
        """Test repositories are wired to the data directory."""
        cm = ConfigManager(self.data_dir, settings=Settings(_env_file=None))

        bookmarks = cm.bookmark_repository()
        config = cm.config_repository()

        assert isinstance(bookmarks, FileBookmarkRepository)
        assert isinstance(config, FileConfigRepository)
        assert bookmarks.data_file == cm.bookmarks_file
        assert config.data_file == cm.config_file
