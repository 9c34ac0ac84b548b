"""Data models shared by the search engine and the user interface."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from searchvid.config.config import DEFAULT_SUBTITLE_EXTENSIONS, DEFAULT_VIDEO_EXTENSIONS


@dataclass(frozen=True)
class SubtitleEntry:
    """Represents a single timed subtitle entry"""

    id: int
    start_time: str
    end_time: str
    text: str
    start_time_ms: int
    end_time_ms: int


@dataclass(frozen=True)
class SubtitleMatch:
    """A subtitle entry that matched the query; score is None for exact matches"""

    subtitle: SubtitleEntry
    score: Optional[float] = None


@dataclass
class SearchResult:
    """All matches found in one subtitle file"""

    file_path: str
    video_path: Optional[str]
    matches: List[SubtitleMatch] = field(default_factory=list)


@dataclass(frozen=True)
class SearchOptions:
    """Parameters for a single search pass"""

    query: str
    directory: str
    exact_match: bool = True
    subtitle_extensions: Tuple[str, ...] = DEFAULT_SUBTITLE_EXTENSIONS
    video_extensions: Tuple[str, ...] = DEFAULT_VIDEO_EXTENSIONS
    recursive: bool = True
    verbose: bool = False


@dataclass(frozen=True)
class DisplayOptions:
    """How results are shown; exact_match is the default mode for new searches"""

    page_size: int = 10
    tree_view: bool = False
    exact_match: bool = True
