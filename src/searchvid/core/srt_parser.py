"""
Subtitle file parser
Reads SRT and WebVTT files into timed subtitle entries
"""

import logging
import os
import re
from typing import List, Optional, Tuple

from searchvid.core.models import SubtitleEntry
from searchvid.core.timecode import parse_timestamp

logger = logging.getLogger(__name__)

ENCODINGS = ["utf-8-sig", "cp1252", "latin-1"]
LINE_BREAK = re.compile(r"\r?\n")

BLOCK_SEPARATOR = re.compile(r"(?:\r?\n){2,}")
SRT_TIME_LINE = re.compile(r"(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})")
VTT_TIME_LINE = re.compile(
    r"((?:\d+:)?\d{2}:\d{2}[.,]\d{1,3})\s*-->\s*((?:\d+:)?\d{2}:\d{2}[.,]\d{1,3})"
)


class SubtitleParser:
    """Simple SRT/VTT parser; malformed blocks are skipped rather than reported"""

    @staticmethod
    def parse_srt_content(content: str) -> List[SubtitleEntry]:
        """
        Parse SRT text into entries

        Each block must contain an index line, a time line and at least one
        line of text. The original index is ignored and entries are numbered
        from 1 in file order.

        Args:
            content: Raw SRT file content

        Returns:
            List of SubtitleEntry in block order
        """
        entries = []

        for block in BLOCK_SEPARATOR.split(content):
            if not block.strip():
                continue

            lines = LINE_BREAK.split(block.strip("\r\n"))
            # A valid entry needs at least an index, a timestamp, and text.
            if len(lines) < 3:
                continue

            time_match = SRT_TIME_LINE.search(lines[1])
            if not time_match:
                continue

            start_time, end_time = time_match.groups()
            entries.append(
                _make_entry(len(entries) + 1, start_time, end_time, "\n".join(lines[2:]))
            )

        return entries

    @staticmethod
    def normalize_vtt_timestamp(timestamp: str) -> str:
        """
        Convert WebVTT timestamp to SRT format

        Parameters:
            timestamp: WebVTT timestamp string (e.g. '01:02.5', '01:02:03.456')

        Returns:
            Formatted SRT timestamp string (HH:MM:SS,mmm)
        """
        parts = timestamp.replace(",", ".").strip().split(":")

        if len(parts) == 2:
            hours = 0
            minutes = int(parts[0])
            seconds_part = parts[1]
        elif len(parts) == 3:
            hours = int(parts[0])
            minutes = int(parts[1])
            seconds_part = parts[2]
        else:
            return "00:00:00,000"

        seconds_string, _, milliseconds_string = seconds_part.partition(".")
        seconds = int(seconds_string)
        milliseconds = int((milliseconds_string + "000")[:3])

        return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"

    @staticmethod
    def parse_vtt_content(content: str) -> List[SubtitleEntry]:
        """
        Parse WebVTT text into entries

        The WEBVTT header and NOTE, STYLE and REGION blocks are skipped, cue
        identifiers are optional and cue settings after the end time are
        ignored.

        Parameters:
            content: Raw VTT file content

        Returns:
            List of SubtitleEntry in cue order
        """
        entries = []

        for block in BLOCK_SEPARATOR.split(content.lstrip("\ufeff")):
            lines = LINE_BREAK.split(block.strip("\r\n"))
            if not lines:
                continue

            if lines[0].startswith(("WEBVTT", "NOTE", "STYLE", "REGION")):
                continue

            cue = _find_vtt_cue(lines)
            if cue is None:
                continue

            time_line_index, time_match = cue
            text_lines = lines[time_line_index + 1 :]
            if not text_lines:
                continue

            start_time = SubtitleParser.normalize_vtt_timestamp(time_match.group(1))
            end_time = SubtitleParser.normalize_vtt_timestamp(time_match.group(2))
            entries.append(
                _make_entry(len(entries) + 1, start_time, end_time, "\n".join(text_lines))
            )

        return entries

    @staticmethod
    def parse_content(content: str, file_path: str = "") -> List[SubtitleEntry]:
        """Parse content with the parser matching the file extension or header"""
        extension = os.path.splitext(file_path)[1].lower()
        if extension == ".vtt" or content.lstrip("\ufeff").startswith("WEBVTT"):
            return SubtitleParser.parse_vtt_content(content)
        return SubtitleParser.parse_srt_content(content)

    @staticmethod
    def read_subtitle_file(file_path: str) -> Optional[str]:
        """Read a subtitle file trying several encodings"""
        for encoding in ENCODINGS:
            try:
                with open(file_path, "r", encoding=encoding) as file:
                    return file.read()
            except UnicodeDecodeError:
                continue
        return None

    @staticmethod
    def parse_subtitle_file(file_path: str) -> List[SubtitleEntry]:
        """
        Parse a subtitle file and return its entries

        Read errors are logged and produce an empty list so that one bad
        file does not stop a search.
        """
        try:
            content = SubtitleParser.read_subtitle_file(file_path)
        except OSError as error:
            logger.error("Error parsing subtitle file %s: %s", file_path, error)
            return []

        if content is None:
            logger.error("Could not decode subtitle file %s", file_path)
            return []

        logger.debug("Parsing subtitle file: %s", file_path)
        return SubtitleParser.parse_content(content, file_path)


def _find_vtt_cue(lines: List[str]) -> Optional[Tuple[int, re.Match]]:
    # The time line is first, or second after a cue identifier
    for index in range(min(2, len(lines))):
        time_match = VTT_TIME_LINE.search(lines[index])
        if time_match:
            return index, time_match
    return None


def _make_entry(entry_id: int, start_time: str, end_time: str, text: str) -> SubtitleEntry:
    return SubtitleEntry(
        id=entry_id,
        start_time=start_time,
        end_time=end_time,
        text=text,
        start_time_ms=parse_timestamp(start_time),
        end_time_ms=parse_timestamp(end_time),
    )
