"""Terminal implementation of the commit selection display.

Draws the selection with rich on the alternate screen and reads single key
presses with click.getchar().
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager

import click
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.screen import Screen
from rich.table import Table
from rich.text import Text

from chuck.core.dad_comments import get_dad_comment
from chuck.core.display import CommitDisplay
from chuck.core.errors import ChuckError
from chuck.core.selection import SelectionEvent, SelectionMode, SelectionState

# Header, blank lines and footer around the commit list
_CHROME_LINES = 6
# Subject, files, comment, blank separator
_LINES_PER_COMMIT = 4

_KEY_EVENTS: dict[str, SelectionEvent] = {
    "\x1b[A": SelectionEvent.MOVE_UP,
    "\x1bOA": SelectionEvent.MOVE_UP,
    "\xe0H": SelectionEvent.MOVE_UP,
    "k": SelectionEvent.MOVE_UP,
    "\x1b[B": SelectionEvent.MOVE_DOWN,
    "\x1bOB": SelectionEvent.MOVE_DOWN,
    "\xe0P": SelectionEvent.MOVE_DOWN,
    "j": SelectionEvent.MOVE_DOWN,
    " ": SelectionEvent.TOGGLE,
    "a": SelectionEvent.SELECT_ALL,
    "n": SelectionEvent.SELECT_NONE,
    "i": SelectionEvent.INVERT,
    "?": SelectionEvent.HELP,
    "h": SelectionEvent.HELP,
    "\r": SelectionEvent.CONFIRM,
    "\n": SelectionEvent.CONFIRM,
    "q": SelectionEvent.QUIT,
    "\x1b": SelectionEvent.QUIT,
}

_HELP_ROWS = [
    ("↑ / k", "Move up"),
    ("↓ / j", "Move down"),
    ("Space", "Toggle the commit under the cursor"),
    ("a", "Select all commits"),
    ("n", "Select no commits"),
    ("i", "Invert the selection"),
    ("Enter", "Chuck the selected commits back to the template"),
    ("q / Esc", "Quit without doing anything"),
    ("? / h", "Show this help"),
]


def event_for_key(key: str) -> SelectionEvent:
    """Map a raw key press to a selection event."""
    return _KEY_EVENTS.get(key, SelectionEvent.UNKNOWN)


def format_files(files: tuple[str, ...]) -> str:
    """Summarize changed files: up to three in full, otherwise two and a count."""
    if len(files) <= 3:
        return ", ".join(files)
    return f"{', '.join(files[:2])} and {len(files) - 2} more"


def visible_window(cursor: int, total: int, capacity: int) -> range:
    """Indices of the commits to draw so that the cursor stays on screen."""
    capacity = max(1, capacity)
    if total <= capacity:
        return range(total)
    start = min(max(cursor - capacity // 2, 0), total - capacity)
    return range(start, start + capacity)


def build_selection_view(state: SelectionState, height: int | None = None) -> RenderableType:
    """Render the selection state as a rich renderable.

    Args:
        state: State to draw
        height: Terminal height in lines; None draws every commit
    """
    if state.mode is SelectionMode.HELP:
        return _build_help_view()

    total = len(state.commits)
    if height is None:
        window = range(total)
    else:
        window = visible_window(state.cursor, total, (height - _CHROME_LINES) // _LINES_PER_COMMIT)

    lines: list[RenderableType] = [
        Text("🧔 Chuck: Sorting commits like a pro", style="bold"),
        Text(""),
        Text(f"Found {total} commits since template:"),
        Text(""),
    ]
    if window.start > 0:
        lines.append(Text(f"  ↑ {window.start} more", style="dim"))

    for index in window:
        commit = state.commits[index]
        is_current = index == state.cursor
        is_selected = state.is_selected(commit)

        line = Text()
        line.append("> " if is_current else "  ", style="bold cyan")
        line.append("[✓] " if is_selected else "[ ] ", style="green" if is_selected else "dim")
        line.append(commit.short_hash, style="yellow")
        line.append(" - ")
        line.append(commit.subject, style="bold" if is_current else "")
        if commit.is_merge:
            line.append(" (merge)", style="magenta")
        lines.append(line)

        if commit.files:
            lines.append(Text(f"    Files: {format_files(commit.files)}", style="dim"))
        lines.append(Text(f"    {get_dad_comment(commit.subject, is_selected)}", style="italic"))
        lines.append(Text(""))

    remaining = total - window.stop
    if remaining > 0:
        lines.append(Text(f"  ↓ {remaining} more", style="dim"))

    lines.append(
        Text(
            f"{len(state.selected)} selected | ↑/↓: navigate, Space: toggle, "
            "Enter: chuck 'em back, q: quit, ?: help",
            style="dim",
        )
    )
    return Group(*lines)


def _build_help_view() -> RenderableType:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column()
    for key, description in _HELP_ROWS:
        table.add_row(key, description)
    return Panel(
        Group(table, Text(""), Text("Press any key to return", style="dim")),
        title="🧔 Chuck keys",
        border_style="cyan",
        padding=(1, 2),
    )


class TerminalDisplay(CommitDisplay):
    """Production display drawing on the terminal's alternate screen."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console if console is not None else Console()
        self._screen: Screen | None = None

    @contextmanager
    def session(self) -> Iterator[None]:
        if not (sys.stdin.isatty() and self._console.is_terminal):
            raise ChuckError("Selecting commits needs an interactive terminal.")

        with self._console.screen(hide_cursor=True) as screen:
            self._screen = screen
            try:
                yield
            finally:
                self._screen = None

    def render(self, state: SelectionState) -> None:
        view = build_selection_view(state, height=self._console.size.height)
        if self._screen is not None:
            self._screen.update(view)
        else:
            self._console.print(view)

    def read_event(self) -> SelectionEvent:
        try:
            key = click.getchar()
        except (KeyboardInterrupt, EOFError):
            # Ctrl-C / Ctrl-D while in raw mode
            return SelectionEvent.QUIT
        return event_for_key(key)
