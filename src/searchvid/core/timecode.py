"""
Subtitle time code helpers
Converts between SRT time strings (HH:MM:SS,mmm) and milliseconds
"""


def parse_timestamp(time_str: str) -> int:
    """
    Parse SRT time format (HH:MM:SS,mmm) to milliseconds

    Malformed input is not an error: it yields 0.

    Args:
        time_str: Time string in format "HH:MM:SS,mmm"

    Returns:
        Milliseconds since the start of the video
    """
    time_part, _, ms_part = time_str.partition(",")
    if not time_part or not ms_part:
        return 0

    parts = time_part.split(":")
    if len(parts) != 3 or not all(parts):
        return 0

    try:
        hours, minutes, seconds = (int(part) for part in parts)
        milliseconds = int(ms_part)
    except ValueError:
        return 0

    return (hours * 3600 + minutes * 60 + seconds) * 1000 + milliseconds


def _split_milliseconds(total_ms: int):
    total_seconds = total_ms // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return hours, minutes, seconds, total_ms % 1000


def format_milliseconds(total_ms: int) -> str:
    """Format milliseconds back to SRT time format HH:MM:SS,mmm"""
    hours, minutes, seconds, milliseconds = _split_milliseconds(total_ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"


def format_display_time(total_ms: int) -> str:
    """Format milliseconds the way media players show it: HH:MM:SS.mmm"""
    hours, minutes, seconds, milliseconds = _split_milliseconds(total_ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"
