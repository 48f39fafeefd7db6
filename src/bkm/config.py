"""Data directory resolution and repository wiring."""

from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .core.bookmark_repository import BOOKMARKS_FILE, FileBookmarkRepository
from .core.config_repository import CONFIG_FILE, FileConfigRepository
from .models.config import Settings


class ConfigError(Exception):
    """Configuration-related error."""

    pass


def default_data_dir() -> Path:
    return Path.home() / ".local" / "share" / "bkm"


def load_settings() -> Settings:
    """Load settings from the environment.

    Raises:
        ConfigError: If an environment value is invalid
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


class ConfigManager:
    """Resolves where bkm keeps its files and builds the repositories."""

    def __init__(self, data_dir: Optional[Path] = None, settings: Optional[Settings] = None):
        """Initialize configuration manager.

        Args:
            data_dir: Data directory. Defaults to BKM_DATA_DIR, then ~/.local/share/bkm
            settings: Preloaded settings; read from the environment when omitted
        """
        self.settings = settings if settings is not None else load_settings()

        if data_dir is None:
            data_dir = self.settings.data_dir or default_data_dir()

        self.data_dir = Path(data_dir).expanduser()
        self.bookmarks_file = self.data_dir / BOOKMARKS_FILE
        self.config_file = self.data_dir / CONFIG_FILE

    def ensure_data_dir(self) -> None:
        """Create the data directory if needed.

        Raises:
            ConfigError: If the directory cannot be created
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Failed to create data directory {self.data_dir}: {e}") from e

        if not self.data_dir.is_dir():
            raise ConfigError(f"Data path is not a directory: {self.data_dir}")

    def bookmark_repository(self) -> FileBookmarkRepository:
        return FileBookmarkRepository(self.data_dir)

    def config_repository(self) -> FileConfigRepository:
        return FileConfigRepository(self.data_dir)
