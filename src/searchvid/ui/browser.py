"""
Key handling for the results screen
A small state machine that turns key presses into actions, independent of rendering
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union

from searchvid.ui.pagination import PAGE_SIZE_STEP, ResultPaginator, ResultRow


class Key(enum.Enum):
    """Non-printable keys the browser reacts to"""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"


class BrowserState(enum.Enum):
    BROWSING = "browsing"
    EDITING_QUERY = "editing_query"


@dataclass(frozen=True)
class PlayAction:
    row: ResultRow


@dataclass(frozen=True)
class NewSearchAction:
    query: str
    exact_match: bool


@dataclass(frozen=True)
class QuitAction:
    exit_code: int = 0


Action = Union[PlayAction, NewSearchAction, QuitAction]
KeyPress = Union[Key, str]


def resolve_query_mode(raw_query: str, default_exact: bool):
    """
    Apply the query prefix convention

    With exact matching as the default a leading '?' asks for a fuzzy
    search; with fuzzy as the default a leading '!' asks for an exact one.
    The prefix is removed from the query.

    Returns:
        Tuple of (query, exact_match)
    """
    toggle_prefix = "?" if default_exact else "!"
    if raw_query.startswith(toggle_prefix):
        return raw_query[1:], not default_exact
    return raw_query, default_exact


class ResultBrowser:
    """Browsing and query editing modes over a ResultPaginator"""

    def __init__(self, paginator: ResultPaginator, default_exact: bool = True):
        self.paginator = paginator
        self.default_exact = default_exact
        self.state = BrowserState.BROWSING
        self.query_buffer = ""

    @property
    def is_editing(self) -> bool:
        return self.state is BrowserState.EDITING_QUERY

    def handle_key(self, key: KeyPress) -> Optional[Action]:
        """Process one key press and return the action it triggers, if any"""
        if self.state is BrowserState.EDITING_QUERY:
            return self._handle_editing_key(key)
        return self._handle_browsing_key(key)

    def _handle_browsing_key(self, key: KeyPress) -> Optional[Action]:
        paginator = self.paginator
        if key is Key.UP:
            paginator.move_up()
        elif key is Key.DOWN:
            paginator.move_down()
        elif key is Key.LEFT:
            paginator.previous_page()
        elif key is Key.RIGHT:
            paginator.next_page()
        elif key is Key.ENTER:
            row = paginator.selected_row()
            if row is not None:
                return PlayAction(row)
        elif key == "/":
            self.state = BrowserState.EDITING_QUERY
            self.query_buffer = ""
        elif key == "q":
            return QuitAction(exit_code=0)
        elif key == "+":
            paginator.adjust_page_size(PAGE_SIZE_STEP)
        elif key == "-":
            paginator.adjust_page_size(-PAGE_SIZE_STEP)
        return None

    def _handle_editing_key(self, key: KeyPress) -> Optional[Action]:
        if key is Key.ENTER:
            query, exact_match = resolve_query_mode(self.query_buffer, self.default_exact)
            self._leave_editing()
            return NewSearchAction(query=query, exact_match=exact_match)
        if key is Key.ESCAPE:
            self._leave_editing()
        elif key is Key.BACKSPACE:
            self.query_buffer = self.query_buffer[:-1]
        elif isinstance(key, str) and len(key) == 1 and key.isprintable():
            self.query_buffer += key
        return None

    def _leave_editing(self) -> None:
        self.state = BrowserState.BROWSING
        self.query_buffer = ""
