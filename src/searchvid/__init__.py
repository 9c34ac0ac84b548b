"""Search subtitle files and jump to the matching moment in the video."""

__version__ = "1.0.0"
