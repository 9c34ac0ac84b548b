"""Configuration management for the subtitle search application."""

import os
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from searchvid.exceptions import ConfigurationError

DEFAULT_PAGE_SIZE = 10
DEFAULT_SUBTITLE_EXTENSIONS = ("srt", "vtt")
DEFAULT_VIDEO_EXTENSIONS = ("mp4",)


class ConfigManager:
    """Manages application configuration from .env files and environment variables."""

    def __init__(self, start_directory: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            start_directory: Directory searched first for a .env file.
                Usually the directory being searched for subtitles.
        """
        self.start_directory = start_directory
        self.loaded_from = self._load_environment()

    def _candidate_env_files(self) -> List[Path]:
        home_dir = Path.home()
        candidates = []
        if self.start_directory:
            candidates.append(Path(self.start_directory) / ".env")
        candidates.append(home_dir / ".env")
        candidates.append(home_dir / ".config" / "searchvid" / ".env")
        return candidates

    def _load_environment(self) -> Optional[Path]:
        """
        Load environment variables in order of precedence:
        1. Search directory .env
        2. User home directory .env
        3. ~/.config/searchvid/.env
        4. System environment variables only

        Returns:
            Path of the .env file that was loaded, or None
        """
        for env_path in self._candidate_env_files():
            if env_path.is_file():
                load_dotenv(env_path)
                return env_path

        # Fall back to system environment variables only
        return None

    def get_config_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get configuration value with fallback."""
        return os.getenv(key, default)

    def get_int_config_value(self, key: str, default: Optional[int] = None) -> int:
        """Get integer configuration value with fallback."""
        default_string = str(default) if default is not None else None
        value = self.get_config_value(key, default_string)
        if value is None:
            return default if default is not None else 0
        try:
            return int(value)
        except ValueError as e:
            error_message = "Invalid integer value for %s: %s" % (key, value)
            raise ConfigurationError(error_message, key) from e

    def get_list_config_value(self, key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
        """Get a comma separated configuration value as a tuple."""
        value = self.get_config_value(key)
        if value is None:
            return default
        items = split_extensions(value)
        if not items:
            raise ConfigurationError("Empty list value for %s" % key, key)
        return items

    @property
    def player_path(self) -> Optional[str]:
        return self.get_config_value("SEARCHVID_PLAYER")

    @property
    def page_size(self) -> int:
        return self.get_int_config_value("SEARCHVID_PAGE_SIZE", DEFAULT_PAGE_SIZE)

    @property
    def subtitle_extensions(self) -> Tuple[str, ...]:
        return self.get_list_config_value("SEARCHVID_SUBTITLE_EXT", DEFAULT_SUBTITLE_EXTENSIONS)

    @property
    def video_extensions(self) -> Tuple[str, ...]:
        return self.get_list_config_value("SEARCHVID_VIDEO_EXT", DEFAULT_VIDEO_EXTENSIONS)

    @property
    def log_file(self) -> Optional[str]:
        return self.get_config_value("SEARCHVID_LOG_FILE")


def split_extensions(value: str) -> Tuple[str, ...]:
    """
    Split a comma separated extension list, e.g. "srt, .VTT" -> ("srt", "vtt")

    Args:
        value: Raw comma separated string

    Returns:
        Tuple of lowercase extensions without leading dots
    """
    extensions = []
    for part in value.split(","):
        extension = part.strip().lstrip(".").lower()
        if extension and extension not in extensions:
            extensions.append(extension)
    return tuple(extensions)
