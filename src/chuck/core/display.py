"""Display port for the interactive commit selection."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from chuck.core.selection import SelectionEvent, SelectionState


class CommitDisplay(ABC):
    """Abstract terminal used by the selection drive loop.

    Implementations only draw state and translate raw input into
    SelectionEvent values; they never mutate the selection.
    """

    @contextmanager
    def session(self) -> Iterator[None]:
        """Hold the terminal for the duration of an interactive session."""
        yield

    @abstractmethod
    def render(self, state: SelectionState) -> None:
        """Draw the commit list for the given state."""
        ...

    @abstractmethod
    def read_event(self) -> SelectionEvent:
        """Block until the user presses a key and return the matching event."""
        ...
