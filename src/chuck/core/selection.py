"""Commit selection state machine.

The interactive session is split into a pure transition function
(`transition`) and a drive loop (`run_selection`) that reads events from a
display port and renders every intermediate state. Only the drive loop
touches I/O.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import TYPE_CHECKING

from chuck.core.git.abc import CommitRef

if TYPE_CHECKING:
    from chuck.core.display import CommitDisplay

logger = logging.getLogger(__name__)


class SelectionMode(Enum):
    BROWSING = auto()
    HELP = auto()
    CONFIRMED = auto()
    CANCELLED = auto()


class SelectionEvent(Enum):
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    TOGGLE = auto()
    SELECT_ALL = auto()
    SELECT_NONE = auto()
    INVERT = auto()
    HELP = auto()
    CONFIRM = auto()
    QUIT = auto()
    UNKNOWN = auto()  # unmapped key; dismisses the help overlay


@dataclass(frozen=True)
class SelectionState:
    """Cursor, selection and mode over a non-empty delta.

    `selected` holds commit hashes; iteration order of the selection never
    matters because `selected_commits()` always answers in delta order.
    """

    commits: tuple[CommitRef, ...]
    cursor: int
    selected: frozenset[str]
    mode: SelectionMode

    @staticmethod
    def initial(commits: list[CommitRef]) -> "SelectionState":
        """Start browsing at the oldest commit with nothing selected.

        Raises:
            ValueError: If commits is empty
        """
        if not commits:
            raise ValueError("Cannot select from an empty list of commits")
        return SelectionState(
            commits=tuple(commits),
            cursor=0,
            selected=frozenset(),
            mode=SelectionMode.BROWSING,
        )

    @property
    def is_terminal(self) -> bool:
        return self.mode in (SelectionMode.CONFIRMED, SelectionMode.CANCELLED)

    @property
    def current(self) -> CommitRef:
        return self.commits[self.cursor]

    def is_selected(self, commit: CommitRef) -> bool:
        return commit.hash in self.selected

    def selected_commits(self) -> list[CommitRef]:
        """Selected commits in delta order."""
        return [commit for commit in self.commits if commit.hash in self.selected]


def transition(state: SelectionState, event: SelectionEvent) -> SelectionState:
    """Apply one input event to the selection state."""
    if state.is_terminal:
        return state

    if state.mode is SelectionMode.HELP:
        return replace(state, mode=SelectionMode.BROWSING)

    last_index = len(state.commits) - 1
    all_hashes = frozenset(commit.hash for commit in state.commits)

    match event:
        case SelectionEvent.MOVE_DOWN:
            return replace(state, cursor=min(state.cursor + 1, last_index))
        case SelectionEvent.MOVE_UP:
            return replace(state, cursor=max(state.cursor - 1, 0))
        case SelectionEvent.TOGGLE:
            return replace(state, selected=state.selected ^ {state.current.hash})
        case SelectionEvent.SELECT_ALL:
            return replace(state, selected=all_hashes)
        case SelectionEvent.SELECT_NONE:
            return replace(state, selected=frozenset())
        case SelectionEvent.INVERT:
            return replace(state, selected=all_hashes - state.selected)
        case SelectionEvent.HELP:
            return replace(state, mode=SelectionMode.HELP)
        case SelectionEvent.CONFIRM:
            # Confirming nothing keeps the user browsing
            if not state.selected:
                return state
            return replace(state, mode=SelectionMode.CONFIRMED)
        case SelectionEvent.QUIT:
            return replace(state, mode=SelectionMode.CANCELLED)
        case _:
            return state


def run_selection(commits: list[CommitRef], display: "CommitDisplay") -> SelectionState:
    """Drive an interactive session until the user confirms or quits.

    Renders the initial state, then for each event read from the display
    applies `transition` and re-renders.

    Returns:
        Final state; mode is CONFIRMED (with a non-empty selection) or CANCELLED
    """
    state = SelectionState.initial(commits)
    with display.session():
        display.render(state)
        while not state.is_terminal:
            event = display.read_event()
            state = transition(state, event)
            logger.debug(
                "event=%s cursor=%d selected=%d mode=%s",
                event.name,
                state.cursor,
                len(state.selected),
                state.mode.name,
            )
            display.render(state)
    return state
