"""Fake display that replays scripted key events."""

from collections.abc import Iterator
from contextlib import contextmanager

from chuck.core.display import CommitDisplay
from chuck.core.selection import SelectionEvent, SelectionState


class FakeDisplay(CommitDisplay):
    """In-memory display for driving the selection loop in tests.

    Events are returned in order; once the script runs out the fake answers
    QUIT so a test can never hang on input.
    """

    def __init__(self, *, events: list[SelectionEvent]) -> None:
        self._events = list(events)
        self._rendered: list[SelectionState] = []
        self._sessions = 0

    @property
    def rendered(self) -> list[SelectionState]:
        """Every state passed to render(), in order."""
        return self._rendered

    @property
    def sessions(self) -> int:
        """Number of interactive sessions opened."""
        return self._sessions

    @contextmanager
    def session(self) -> Iterator[None]:
        self._sessions += 1
        yield

    def render(self, state: SelectionState) -> None:
        self._rendered.append(state)

    def read_event(self) -> SelectionEvent:
        if not self._events:
            return SelectionEvent.QUIT
        return self._events.pop(0)
