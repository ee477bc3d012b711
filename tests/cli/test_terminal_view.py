"""Tests for the rich selection view and key mapping."""

from io import StringIO

import pytest
from rich.console import Console, RenderableType
from tests.test_utils.builders import make_commit

from chuck.cli.terminal import (
    TerminalDisplay,
    build_selection_view,
    event_for_key,
    format_files,
    visible_window,
)
from chuck.core.errors import ChuckError
from chuck.core.selection import SelectionEvent, SelectionState, transition

COMMITS = [
    make_commit("c1", "Add string helpers", files=("src/utils/strings.py",)),
    make_commit("c2", "Configure deploy", files=("a.yml", "b.yml", "c.yml", "d.yml", "e.yml")),
]


def _render(view: RenderableType) -> str:
    buffer = StringIO()
    Console(file=buffer, width=120, color_system=None).print(view)
    return buffer.getvalue()


def test_format_files_lists_up_to_three() -> None:
    assert format_files(("a.py", "b.py", "c.py")) == "a.py, b.py, c.py"


def test_format_files_truncates_longer_lists() -> None:
    assert format_files(("a.py", "b.py", "c.py", "d.py")) == "a.py, b.py and 2 more"


def test_view_shows_header_cursor_checkboxes_and_comments() -> None:
    state = transition(SelectionState.initial(COMMITS), SelectionEvent.TOGGLE)

    text = _render(build_selection_view(state))

    assert "Chuck: Sorting commits like a pro" in text
    assert "Found 2 commits since template:" in text
    assert "> [✓] c100000 - Add string helpers" in text
    assert "  [ ] c200000 - Configure deploy" in text
    assert "Files: a.yml, b.yml and 3 more" in text
    assert '"Yep, chuck that back to template"' in text
    assert '"Nah, that stays with your app"' in text
    assert "1 selected" in text


def test_help_view_lists_keys() -> None:
    state = transition(SelectionState.initial(COMMITS), SelectionEvent.HELP)

    text = _render(build_selection_view(state))

    assert "Invert the selection" in text
    assert "Press any key to return" in text


def test_visible_window_keeps_cursor_on_screen() -> None:
    assert visible_window(cursor=0, total=3, capacity=10) == range(3)
    assert visible_window(cursor=0, total=20, capacity=5) == range(0, 5)
    assert visible_window(cursor=10, total=20, capacity=5) == range(8, 13)
    assert visible_window(cursor=19, total=20, capacity=5) == range(15, 20)


@pytest.mark.parametrize(
    ("key", "event"),
    [
        ("\x1b[A", SelectionEvent.MOVE_UP),
        ("k", SelectionEvent.MOVE_UP),
        ("\x1b[B", SelectionEvent.MOVE_DOWN),
        (" ", SelectionEvent.TOGGLE),
        ("a", SelectionEvent.SELECT_ALL),
        ("n", SelectionEvent.SELECT_NONE),
        ("i", SelectionEvent.INVERT),
        ("?", SelectionEvent.HELP),
        ("\r", SelectionEvent.CONFIRM),
        ("q", SelectionEvent.QUIT),
        ("\x1b", SelectionEvent.QUIT),
        ("z", SelectionEvent.UNKNOWN),
    ],
)
def test_key_mapping(key: str, event: SelectionEvent) -> None:
    assert event_for_key(key) is event


def test_session_requires_a_terminal() -> None:
    display = TerminalDisplay(Console(file=StringIO()))

    with pytest.raises(ChuckError):
        with display.session():
            pass
