"""
Subtitle search engine
Finds subtitle files, parses them and matches the query exactly or fuzzily
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from rapidfuzz import fuzz, utils

from searchvid.core.matcher import VideoMatcher
from searchvid.core.models import SearchOptions, SearchResult, SubtitleEntry, SubtitleMatch
from searchvid.core.srt_parser import SubtitleParser

logger = logging.getLogger(__name__)

IGNORED_DIRECTORIES = {"node_modules", ".git", "__pycache__", ".venv", "venv"}

# Fuzzy matches are kept when their distance (1 - similarity) is at most this
FUZZY_DISTANCE_THRESHOLD = 0.4


def find_subtitle_files(
    directory: str, extensions: Iterable[str], recursive: bool = True
) -> List[str]:
    """
    Find subtitle files under a directory

    Args:
        directory: Directory to search
        extensions: Subtitle extensions without the dot, e.g. ("srt", "vtt")
        recursive: Search subdirectories too

    Returns:
        Sorted list of absolute file paths
    """
    root = Path(os.path.abspath(os.path.expanduser(directory)))
    if not root.is_dir():
        raise NotADirectoryError("Directory does not exist: %s" % root)

    found = set()
    for extension in extensions:
        pattern = "*.%s" % extension.lstrip(".")
        candidates = root.rglob(pattern) if recursive else root.glob(pattern)
        for candidate in candidates:
            relative_parts = candidate.relative_to(root).parts[:-1]
            if IGNORED_DIRECTORIES.intersection(relative_parts):
                continue
            if candidate.is_file():
                found.add(str(candidate))

    return sorted(found)


def exact_matches(entries: List[SubtitleEntry], query: str) -> List[SubtitleMatch]:
    """Case-insensitive substring search over entry text"""
    needle = query.lower()
    return [SubtitleMatch(subtitle=entry) for entry in entries if needle in entry.text.lower()]


def fuzzy_matches(entries: List[SubtitleEntry], query: str) -> List[SubtitleMatch]:
    """
    Approximate search over entry text, best match first

    Scores are similarities in [0, 1]; entries further than
    FUZZY_DISTANCE_THRESHOLD from the query are dropped.
    """
    pattern = utils.default_process(query)
    if not entries or not pattern:
        return []

    score_cutoff = (1 - FUZZY_DISTANCE_THRESHOLD) * 100
    scored = []
    for entry in entries:
        text = utils.default_process(entry.text)
        # The query is the pattern; a line shorter than it is compared whole
        if len(text) >= len(pattern):
            score = fuzz.partial_ratio(pattern, text, score_cutoff=score_cutoff)
        else:
            score = fuzz.ratio(pattern, text, score_cutoff=score_cutoff)
        if score:
            scored.append((score, entry))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [SubtitleMatch(subtitle=entry, score=round(score / 100, 4)) for score, entry in scored]


class SubtitleSearcher:
    """Runs one search pass over a directory of subtitle files"""

    def __init__(self, parser: Optional[SubtitleParser] = None):
        self.parser = parser or SubtitleParser()

    def search_file(
        self, subtitle_file: str, options: SearchOptions, matcher: VideoMatcher
    ) -> Optional[SearchResult]:
        entries = self.parser.parse_subtitle_file(subtitle_file)
        if options.exact_match:
            matches = exact_matches(entries, options.query)
        else:
            matches = fuzzy_matches(entries, options.query)

        if not matches:
            return None

        video_path = matcher.match_video(subtitle_file)
        return SearchResult(file_path=subtitle_file, video_path=video_path, matches=matches)

    def search(self, options: SearchOptions) -> List[SearchResult]:
        """
        Search every subtitle file under options.directory

        Per-file failures are logged and skipped; if the directory itself
        cannot be listed the result is an empty list.

        Args:
            options: Query and search settings

        Returns:
            One SearchResult per file with at least one match
        """
        try:
            subtitle_files = find_subtitle_files(
                options.directory, options.subtitle_extensions, options.recursive
            )
        except OSError as error:
            logger.error("Error finding subtitle files: %s", error)
            return []

        logger.info("Found %d subtitle files to search", len(subtitle_files))
        if not subtitle_files:
            logger.warning(
                "No subtitle files found in %s. Expected files with extension(s): %s",
                options.directory,
                ", ".join(options.subtitle_extensions),
            )

        matcher = VideoMatcher(options.video_extensions)
        results = []

        for subtitle_file in subtitle_files:
            try:
                result = self.search_file(subtitle_file, options, matcher)
            except Exception as error:
                logger.error("Error searching %s: %s", subtitle_file, error, exc_info=options.verbose)
                continue
            if result is not None:
                results.append(result)

        logger.info(
            "%d files matched %r (%s search)",
            len(results),
            options.query,
            "exact" if options.exact_match else "fuzzy",
        )
        return results


def search_subtitles(options: SearchOptions) -> List[SearchResult]:
    """Convenience wrapper around SubtitleSearcher.search"""
    return SubtitleSearcher().search(options)
