"""Core services: parsing, matching, searching and playback."""
