"""Shared fixtures for the searchvid tests."""

from pathlib import Path
from typing import List, Optional

import pytest

from searchvid.core.models import SearchResult, SubtitleEntry, SubtitleMatch
from searchvid.core.timecode import format_milliseconds


def srt_text(lines: List[str], step_ms: int = 2000) -> str:
    """Build SRT content with one entry per line of text"""
    blocks = []
    for index, line in enumerate(lines):
        start = index * step_ms
        blocks.append(
            f"{index + 1}\n{format_milliseconds(start)} --> {format_milliseconds(start + 1500)}\n{line}\n"
        )
    return "\n".join(blocks)


def make_result(file_path: str, texts: List[str], video_path: Optional[str] = None) -> SearchResult:
    matches = [
        SubtitleMatch(
            SubtitleEntry(
                id=index,
                start_time=format_milliseconds(index * 1000),
                end_time=format_milliseconds(index * 1000 + 500),
                text=text,
                start_time_ms=index * 1000,
                end_time_ms=index * 1000 + 500,
            )
        )
        for index, text in enumerate(texts, 1)
    ]
    return SearchResult(file_path=file_path, video_path=video_path, matches=matches)


@pytest.fixture
def write_file(tmp_path):
    def _write(relative_path: str, content: str = "") -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
