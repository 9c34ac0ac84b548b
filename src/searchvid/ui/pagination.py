"""Page and selection state for the results screen."""

import math
from dataclasses import dataclass
from typing import List, Optional

from searchvid.core.models import SearchResult, SubtitleMatch

MIN_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100
PAGE_SIZE_STEP = 5


def clamp_page_size(page_size: int) -> int:
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, page_size))


@dataclass(frozen=True)
class ResultRow:
    """One selectable row: a single match, or a whole file in tree view"""

    result: SearchResult
    match: SubtitleMatch


class ResultPaginator:
    """Splits search results into pages and tracks the selected row"""

    def __init__(self, results: List[SearchResult], page_size: int = 10, tree_view: bool = False):
        self.tree_view = tree_view
        self.page_size = clamp_page_size(page_size)
        self.current_page = 0
        self.selected_index = 0
        self.results: List[SearchResult] = []
        self.rows: List[ResultRow] = []
        self.set_results(results)

    def _build_rows(self) -> List[ResultRow]:
        if self.tree_view:
            return [ResultRow(result, result.matches[0]) for result in self.results if result.matches]
        return [ResultRow(result, match) for result in self.results for match in result.matches]

    def _reset_position(self) -> None:
        self.selected_index = 0
        self.current_page = min(self.current_page, self.total_pages - 1)

    def set_results(self, results: List[SearchResult]) -> None:
        """Replace the results shown; selection goes back to the first row"""
        self.results = list(results)
        self.rows = self._build_rows()
        self._reset_position()

    def set_page_size(self, page_size: int) -> None:
        self.page_size = clamp_page_size(page_size)
        self._reset_position()

    def adjust_page_size(self, delta: int = PAGE_SIZE_STEP) -> None:
        self.set_page_size(self.page_size + delta)

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.rows) / self.page_size))

    @property
    def total_items(self) -> int:
        """Files in tree view, individual matches otherwise"""
        if self.tree_view:
            return len(self.results)
        return sum(len(result.matches) for result in self.results)

    @property
    def start_index(self) -> int:
        return self.current_page * self.page_size

    def current_rows(self) -> List[ResultRow]:
        return self.rows[self.start_index : self.start_index + self.page_size]

    def selected_row(self) -> Optional[ResultRow]:
        rows = self.current_rows()
        if 0 <= self.selected_index < len(rows):
            return rows[self.selected_index]
        return None

    def move_up(self) -> None:
        if self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        if self.selected_index < len(self.current_rows()) - 1:
            self.selected_index += 1

    def next_page(self) -> None:
        if self.current_page < self.total_pages - 1:
            self.current_page += 1
            self.selected_index = 0

    def previous_page(self) -> None:
        if self.current_page > 0:
            self.current_page -= 1
            self.selected_index = 0
