"""Main Terminal User Interface controller."""

import logging
from dataclasses import replace
from typing import Callable, List, Optional

import readchar
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from searchvid.core.models import DisplayOptions, SearchOptions, SearchResult
from searchvid.core.player import PlayerLauncher
from searchvid.core.search import SubtitleSearcher
from searchvid.exceptions import PlayerError
from searchvid.ui.browser import Key, KeyPress, NewSearchAction, PlayAction, QuitAction, ResultBrowser
from searchvid.ui.components import UIComponents
from searchvid.ui.pagination import ResultPaginator

logger = logging.getLogger(__name__)

KEY_MAP = {
    readchar.key.UP: Key.UP,
    readchar.key.DOWN: Key.DOWN,
    readchar.key.LEFT: Key.LEFT,
    readchar.key.RIGHT: Key.RIGHT,
    readchar.key.ENTER: Key.ENTER,
    readchar.key.CR: Key.ENTER,
    readchar.key.LF: Key.ENTER,
    readchar.key.ESC: Key.ESCAPE,
    readchar.key.BACKSPACE: Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def translate_key(raw_key: str) -> KeyPress:
    """Map a readchar key string onto the browser's key vocabulary"""
    if raw_key in KEY_MAP:
        return KEY_MAP[raw_key]
    # On POSIX readchar returns a lone Esc joined to the next byte typed
    if raw_key.startswith(readchar.key.ESC):
        return Key.ESCAPE
    return raw_key


class SearchVidTUI:
    """Main TUI controller: search, render, read a key, act"""

    def __init__(
        self,
        options: SearchOptions,
        display: DisplayOptions,
        searcher: Optional[SubtitleSearcher] = None,
        launcher: Optional[PlayerLauncher] = None,
        player_path: Optional[str] = None,
        console: Optional[Console] = None,
        read_key: Optional[Callable[[], str]] = None,
    ):
        self.options = options
        self.display = display
        self.console = console or Console()
        self.searcher = searcher or SubtitleSearcher()
        self.messages: List[str] = []
        self.notices: List[str] = []
        self.launcher = launcher or PlayerLauncher(player_path, report=self.add_message)
        self.read_key = read_key or readchar.readkey

        self.ui = UIComponents()
        self.paginator = ResultPaginator([], display.page_size, display.tree_view)
        self.browser = ResultBrowser(self.paginator, default_exact=display.exact_match)

    def add_message(self, message: str) -> None:
        """Queue a message for the next screen refresh"""
        logger.warning(message)
        self.messages.append(message)

    def clear_screen(self):
        """Clear the console."""
        self.console.clear()

    def perform_search(self, query: str, exact_match: bool) -> List[SearchResult]:
        """Run a search and show its results; previous results are replaced"""
        self.options = replace(self.options, query=query, exact_match=exact_match)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            progress.add_task(f'Searching for "{query}"...', total=None)
            results = self.searcher.search(self.options)

        self.paginator.set_results(results)
        return results

    def render(self):
        query_buffer = self.browser.query_buffer if self.browser.is_editing else None
        screen = self.ui.create_screen(
            self.paginator,
            self.options.query,
            self.options.exact_match,
            self.options.directory,
            query_buffer=query_buffer,
            default_exact=self.display.exact_match,
            messages=self.messages,
            notices=self.notices,
        )
        self.console.print(screen)

    def play(self, action: PlayAction):
        """Start the player for the selected row"""
        result = action.row.result
        if result.video_path is None:
            self.notices.append("No video file found for this subtitle")
            return

        try:
            self.launcher.play(result.video_path, action.row.match.subtitle.start_time_ms)
        except PlayerError as error:
            self.add_message(str(error))

    def run(self) -> int:
        """
        Main application loop

        Returns:
            Exit code for the process
        """
        self.perform_search(self.options.query, self.options.exact_match)

        while True:
            self.clear_screen()
            self.render()
            self.messages = []
            self.notices = []

            action = self.browser.handle_key(translate_key(self.read_key()))

            if isinstance(action, QuitAction):
                return action.exit_code
            if isinstance(action, PlayAction):
                self.play(action)
            elif isinstance(action, NewSearchAction):
                self.perform_search(action.query, action.exact_match)
