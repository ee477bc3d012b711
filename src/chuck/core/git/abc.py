"""High-level git operations interface.

This module provides a clean abstraction over git subprocess calls, making the
codebase more testable and maintainable.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- FakeGit: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class CommitRef:
    """A commit as read from git. Never mutated by chuck."""

    hash: str
    short_hash: str
    author: str
    timestamp: datetime
    subject: str
    message: str
    files: tuple[str, ...]
    parent_count: int = 1

    @property
    def is_merge(self) -> bool:
        return self.parent_count > 1


class CherryPickOutcome(Enum):
    APPLIED = "applied"
    EMPTY = "empty"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class CherryPickResult:
    """Result of a single cherry-pick attempt."""

    outcome: CherryPickOutcome
    detail: str = ""


# ============================================================================
# Abstract Interface
# ============================================================================


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def get_repository_root(self, cwd: Path) -> Path | None:
        """Get the top-level directory of the repository containing cwd.

        Returns:
            Repository root, or None if cwd is not inside a git repository
        """
        ...

    @abstractmethod
    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch (None when HEAD is detached)."""
        ...

    @abstractmethod
    def has_uncommitted_changes(self, cwd: Path) -> bool:
        """Check if tracked files have staged or unstaged modifications."""
        ...

    @abstractmethod
    def list_remotes(self, repo_root: Path) -> dict[str, str]:
        """List configured remotes.

        Returns:
            Mapping of remote name -> fetch URL
        """
        ...

    @abstractmethod
    def add_remote(self, repo_root: Path, name: str, url: str) -> None:
        """Add a new remote."""
        ...

    @abstractmethod
    def set_remote_url(self, repo_root: Path, name: str, url: str) -> None:
        """Point an existing remote at a different URL."""
        ...

    @abstractmethod
    def fetch_remote(self, repo_root: Path, remote: str) -> None:
        """Fetch all branches of a remote.

        Raises:
            RuntimeError: If the fetch fails (network, auth, missing repository)
        """
        ...

    @abstractmethod
    def get_remote_default_branch(self, repo_root: Path, remote: str) -> str | None:
        """Get the branch the remote's HEAD points at.

        Returns:
            Branch name (e.g. 'main'), or None if the remote does not advertise HEAD
        """
        ...

    @abstractmethod
    def resolve_ref(self, repo_root: Path, ref: str) -> str | None:
        """Resolve a ref to a full commit SHA.

        Returns:
            Commit SHA, or None if the ref does not name a commit
        """
        ...

    @abstractmethod
    def list_commits_between(self, repo_root: Path, base: str, tip: str) -> list[CommitRef]:
        """List commits reachable from tip but not from base, oldest first.

        Only the first-parent line of tip is walked. Changed files are reported
        relative to each commit's first parent.

        Args:
            repo_root: Path to the repository root
            base: Commit excluded together with its ancestors
            tip: Commit whose history is walked

        Returns:
            Commits in authorship order (oldest first); empty when tip is
            base or an ancestor of base
        """
        ...

    @abstractmethod
    def checkout_new_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        """Create a branch at start_point and check it out."""
        ...

    @abstractmethod
    def cherry_pick(
        self, repo_root: Path, commit_sha: str, *, mainline: int | None
    ) -> CherryPickResult:
        """Cherry-pick a commit onto the current branch.

        A conflict leaves the cherry-pick in progress. An empty result leaves
        the cherry-pick in progress as well; callers decide whether to skip it.

        Args:
            repo_root: Path to the repository root
            commit_sha: Commit to replay
            mainline: Parent number to diff against for merge commits (None otherwise)
        """
        ...

    @abstractmethod
    def skip_cherry_pick(self, repo_root: Path) -> None:
        """Skip the cherry-pick currently in progress."""
        ...

    @abstractmethod
    def push_branch(self, repo_root: Path, remote: str, branch: str) -> None:
        """Push a local branch to a remote under the same name.

        Raises:
            RuntimeError: If the push is rejected or the remote is unreachable
        """
        ...
