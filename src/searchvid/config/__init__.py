"""Configuration management."""

from searchvid.config.config import ConfigManager

__all__ = ["ConfigManager"]
