"""Custom exceptions for the subtitle search application."""

from typing import Optional


class SearchVidError(Exception):
    """Base class for application errors."""

    pass


class ConfigurationError(SearchVidError):
    """Raised when a configuration value is missing or invalid."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class PlayerError(SearchVidError):
    """Raised when the video player cannot be launched."""

    pass


class UnsupportedPlatformError(PlayerError):
    """Raised when playback is requested on an operating system we do not know."""

    def __init__(self, system: str):
        super().__init__("Unsupported operating system: %s" % system)
        self.system = system
