"""
UI components for the subtitle search TUI
Builds the rich renderables for the results screen
"""

import os
from typing import List, Optional

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from searchvid.core.models import SubtitleMatch
from searchvid.core.timecode import format_display_time
from searchvid.ui.pagination import ResultPaginator

SELECTED_STYLE = "bold white on blue"
HIGHLIGHT_STYLE = "black on yellow"


def highlight_text(text: str, query: str) -> Text:
    """Subtitle text with every case-insensitive occurrence of query highlighted"""
    rich_text = Text(text.replace("\n", " / "))
    if query:
        rich_text.highlight_words([query], style=HIGHLIGHT_STYLE, case_sensitive=False)
    return rich_text


def format_score(match: SubtitleMatch) -> str:
    if match.score is None:
        return ""
    return f"{match.score:.2f}"


class UIComponents:
    """Reusable UI components for the TUI"""

    def create_header(self, query: str, total_items: int, exact_match: bool, directory: str) -> Panel:
        """Create results header panel"""
        mode = "exact" if exact_match else "fuzzy"
        title_text = Text(f'Results for "{query}" ({total_items} matches, {mode})', style="bold blue")
        directory_text = Text(f"Directory: {directory}", style="dim")
        return Panel(Group(title_text, directory_text), box=box.ROUNDED, border_style="blue")

    def create_flat_view(self, paginator: ResultPaginator, query: str) -> Table:
        """One row per match, the selected row highlighted"""
        table = Table(box=box.SIMPLE, expand=True, show_edge=False)
        table.add_column("", width=1)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Time", style="green", no_wrap=True)
        table.add_column("Subtitle", ratio=3)
        table.add_column("File", style="dim", ratio=1, overflow="ellipsis")
        table.add_column("Score", style="yellow", justify="right")

        for index, row in enumerate(paginator.current_rows()):
            is_selected = index == paginator.selected_index
            subtitle = row.match.subtitle
            table.add_row(
                ">" if is_selected else "",
                str(paginator.start_index + index + 1),
                format_display_time(subtitle.start_time_ms),
                highlight_text(subtitle.text, query),
                os.path.basename(row.result.file_path),
                format_score(row.match),
                style=SELECTED_STYLE if is_selected else None,
            )

        return table

    def create_tree_view(self, paginator: ResultPaginator, query: str) -> Tree:
        """One node per file with its matches nested underneath"""
        tree = Tree("Files", hide_root=True, guide_style="dim")

        for index, row in enumerate(paginator.current_rows()):
            is_selected = index == paginator.selected_index
            result = row.result
            marker = ">" if is_selected else " "
            label = Text(
                f"{marker} [{paginator.start_index + index + 1}] {os.path.basename(result.file_path)}",
                style=SELECTED_STYLE if is_selected else "bold",
            )
            if result.video_path is None:
                label.append("  (no video)", style="yellow")
            branch = tree.add(label)

            for match_index, match in enumerate(result.matches, 1):
                line = Text(f"[{match_index}] {format_display_time(match.subtitle.start_time_ms)} ")
                line.append_text(highlight_text(match.subtitle.text, query))
                branch.add(line)

        return tree

    def create_empty_results(self, query: str) -> Panel:
        return Panel(f'No matches found for "{query}"', style="yellow")

    def create_search_prompt(self, query_buffer: str, default_exact: bool) -> Panel:
        """Panel shown while the user types a new query"""
        if query_buffer:
            content = Text(query_buffer + "_")
        elif default_exact:
            content = Text("Type to search (? for fuzzy search)", style="dim")
        else:
            content = Text("Type to search (! for exact search)", style="dim")
        return Panel(content, title="New search", box=box.ROUNDED, border_style="cyan")

    def create_footer(self, paginator: ResultPaginator) -> Text:
        return Text(
            f"{paginator.current_page + 1}/{paginator.total_pages} | "
            f"page size {paginator.page_size} | "
            "↑↓:nav | ←/→:pages | enter:play | /:search | +/-:size | esc:cancel | q:quit",
            style="dim",
        )

    def create_messages(self, messages: List[str], style: str = "red") -> Optional[Panel]:
        """Errors are red, notices such as a missing video are yellow"""
        if not messages:
            return None
        return Panel("\n".join(messages), style=style)

    def create_screen(
        self,
        paginator: ResultPaginator,
        query: str,
        exact_match: bool,
        directory: str,
        query_buffer: Optional[str] = None,
        default_exact: bool = True,
        messages: Optional[List[str]] = None,
        notices: Optional[List[str]] = None,
    ) -> Group:
        """Compose the whole results screen"""
        parts: List[RenderableType] = [
            self.create_header(query, paginator.total_items, exact_match, directory)
        ]

        if not paginator.rows:
            parts.append(self.create_empty_results(query))
        elif paginator.tree_view:
            parts.append(self.create_tree_view(paginator, query))
        else:
            parts.append(self.create_flat_view(paginator, query))

        if query_buffer is not None:
            parts.append(self.create_search_prompt(query_buffer, default_exact))

        message_panel = self.create_messages(messages or [])
        if message_panel is not None:
            parts.append(message_panel)

        notice_panel = self.create_messages(notices or [], style="yellow")
        if notice_panel is not None:
            parts.append(notice_panel)

        parts.append(self.create_footer(paginator))
        return Group(*parts)
