#!/usr/bin/env python3
"""
Main entry point for the subtitle search tool
Searches subtitle files for a phrase and plays the video at the matching moment
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from searchvid import __version__
from searchvid.config.config import ConfigManager, split_extensions
from searchvid.core.models import DisplayOptions, SearchOptions
from searchvid.exceptions import SearchVidError
from searchvid.log_setup import setup_logging
from searchvid.ui.tui import SearchVidTUI

logger = logging.getLogger(__name__)


def validate_directory(directory_path: str) -> str:
    """Validate and resolve directory path"""
    wdir = os.path.abspath(os.path.expanduser(directory_path))

    if not os.path.exists(wdir):
        raise SearchVidError(f"Directory '{wdir}' does not exist.")

    if not os.path.isdir(wdir):
        raise SearchVidError(f"'{wdir}' is not a directory.")

    return wdir


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="searchvid",
        description="Search subtitle files and play the video at the matching moment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Interactive controls:
        Up/Down      Navigate through results
        Left/Right   Change pages
        Enter        Play selected video
        /            Start a new search (? prefix for fuzzy, ! for exact)
        Esc          Leave search mode
        +/-          Adjust page size by 5
        q            Quit

        Examples:
        searchvid "hello world"
        searchvid "hello world" --directory ./videos --no-exact-match
        searchvid "hello world" --no-recursive --subtitle-ext srt --page-size 5
        searchvid "hello world" --tree-view
        """,
    )

    parser.add_argument("query", help="Text to search for")
    parser.add_argument(
        "-d",
        "--directory",
        default=".",
        help="Directory containing video and subtitle files (default: current directory)",
    )
    parser.add_argument(
        "-s",
        "--subtitle-ext",
        default=None,
        help="Comma separated subtitle extensions (default: srt,vtt)",
    )
    parser.add_argument(
        "-v",
        "--video-ext",
        default=None,
        help="Comma separated video extensions to try first (default: mp4)",
    )
    parser.add_argument(
        "--recursive",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Search subdirectories (default: on)",
    )
    parser.add_argument(
        "-e",
        "--exact-match",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use exact matching; --no-exact-match uses fuzzy search (default: on)",
    )
    parser.add_argument("--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "-p",
        "--page-size",
        type=int,
        default=None,
        help="Number of results per page, 5-100 (default: 10)",
    )
    parser.add_argument(
        "-t",
        "--tree-view",
        action="store_true",
        help="Group matches under their subtitle file",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--version", action="version", version=f"searchvid {__version__}")
    return parser


def build_options(args: argparse.Namespace, config: ConfigManager, directory: str):
    """Merge command line arguments over configuration defaults"""
    if args.subtitle_ext:
        subtitle_extensions = split_extensions(args.subtitle_ext)
    else:
        subtitle_extensions = config.subtitle_extensions

    if args.video_ext:
        video_extensions = split_extensions(args.video_ext)
    else:
        video_extensions = config.video_extensions

    page_size = args.page_size if args.page_size is not None else config.page_size

    search_options = SearchOptions(
        query=args.query,
        directory=directory,
        exact_match=args.exact_match,
        subtitle_extensions=subtitle_extensions,
        video_extensions=video_extensions,
        recursive=args.recursive,
        verbose=args.verbose,
    )
    display_options = DisplayOptions(
        page_size=page_size,
        tree_view=args.tree_view,
        exact_match=args.exact_match,
    )
    return search_options, display_options


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        working_directory = validate_directory(args.directory)
        config = ConfigManager(working_directory)
        setup_logging(verbose=args.verbose, log_file=args.log_file or config.log_file)
        if config.loaded_from:
            logger.info("Loaded configuration from %s", config.loaded_from)

        search_options, display_options = build_options(args, config, working_directory)
        app = SearchVidTUI(
            search_options,
            display_options,
            console=console,
            player_path=config.player_path,
        )
        return app.run()

    except KeyboardInterrupt:
        console.print("\nGoodbye!")
        return 0
    except SearchVidError as e:
        console.print(Panel(f"Error: {e}", style="red"))
        return 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
