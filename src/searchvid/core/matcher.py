"""
Video matcher module
Pairs a subtitle file with the video file it belongs to
"""

import logging
import os
import re
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = (".mp4", ".mkv", ".avi", ".mov", ".wmv", ".flv", ".webm")
MIN_SIMILARITY = 0.5

LANGUAGE_SUFFIX = re.compile(r"\.[a-z]{2,3}$")
NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


class VideoMatcher:
    """Finds the video file that goes with a subtitle file in the same folder"""

    def __init__(self, preferred_extensions: Iterable[str] = ()):
        self.video_extensions = self._merge_extensions(preferred_extensions)

    @staticmethod
    def _merge_extensions(preferred_extensions: Iterable[str]) -> Tuple[str, ...]:
        merged = []
        for extension in list(preferred_extensions) + list(VIDEO_EXTENSIONS):
            extension = "." + extension.strip().lstrip(".").lower()
            if extension != "." and extension not in merged:
                merged.append(extension)
        return tuple(merged)

    def extract_base_name(self, filename: str) -> str:
        """
        Extract base name from a subtitle filename

        Removes the extension and a trailing language code, so both
        'movie.srt' and 'movie.en.srt' give 'movie'.

        Parameters:
            filename: The filename to extract base name from

        Returns:
            Base name without extension or language code
        """
        base_name = os.path.splitext(os.path.basename(filename))[0]
        return LANGUAGE_SUFFIX.sub("", base_name)

    @staticmethod
    def normalize_name(name: str) -> str:
        """Lowercase and drop everything that is not a letter or digit"""
        return NON_ALPHANUMERIC.sub("", name.lower())

    @staticmethod
    def similarity(first: str, second: str) -> float:
        """
        Containment based similarity of two normalized names

        Returns:
            shorter length / longer length when one name contains the other, else 0
        """
        if not first or not second:
            return 0.0
        if first in second or second in first:
            return min(len(first), len(second)) / max(len(first), len(second))
        return 0.0

    def find_video_files(self, directory_path: str) -> List[str]:
        """
        Find all video files in the specified directory

        Parameters:
            directory_path: Path to search for video files

        Returns:
            Sorted list of video filenames
        """
        return sorted(
            filename
            for filename in os.listdir(directory_path)
            if os.path.splitext(filename)[1].lower() in self.video_extensions
        )

    def find_exact_match(self, directory_path: str, base_name: str) -> Optional[str]:
        for extension in self.video_extensions:
            video_path = os.path.join(directory_path, base_name + extension)
            if os.path.isfile(video_path):
                return video_path
        return None

    def find_similar_match(self, directory_path: str, base_name: str) -> Optional[str]:
        """Pick the sibling video whose name best contains (or is contained in) the base name"""
        try:
            video_files = self.find_video_files(directory_path)
        except OSError as error:
            logger.debug("Error reading directory %s: %s", directory_path, error)
            return None

        if not video_files:
            return None

        logger.debug(
            "Found %d videos in %s, checking for partial matches",
            len(video_files),
            directory_path,
        )
        normalized_subtitle_name = self.normalize_name(base_name)
        best_match = None
        best_score = 0.0

        for video_file in video_files:
            video_name = self.normalize_name(os.path.splitext(video_file)[0])
            score = self.similarity(normalized_subtitle_name, video_name)
            # Strictly greater: on a tie the first file in name order wins
            if score > best_score:
                best_score = score
                best_match = video_file

        if best_match is not None and best_score > MIN_SIMILARITY:
            match_path = os.path.join(directory_path, best_match)
            logger.info("Found similar video file: %s (similarity: %.2f)", match_path, best_score)
            return match_path

        return None

    def match_video(self, subtitle_path: str) -> Optional[str]:
        """
        Find the video file for a subtitle file

        Parameters:
            subtitle_path: Path of the subtitle file

        Returns:
            Path of the matching video file, or None if nothing qualifies
        """
        directory_path = os.path.dirname(os.path.abspath(subtitle_path))
        base_name = self.extract_base_name(subtitle_path)
        logger.debug("Looking for video matching %s (base name %s)", subtitle_path, base_name)

        video_path = self.find_exact_match(directory_path, base_name)
        if video_path is None:
            video_path = self.find_similar_match(directory_path, base_name)

        if video_path is None:
            logger.info("No matching video found for subtitle: %s", subtitle_path)
        return video_path
