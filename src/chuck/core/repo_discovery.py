"""Repository discovery functionality.

Discovers the git repository containing the invocation directory so every
component receives an explicit repository handle.
"""

from dataclasses import dataclass
from pathlib import Path

from chuck.core.git.abc import Git


@dataclass(frozen=True)
class RepoContext:
    """Represents a git repository root."""

    root: Path
    repo_name: str


@dataclass(frozen=True)
class NoRepoSentinel:
    """Sentinel value indicating execution outside a git repository.

    Commands that require repo context can check for this sentinel and fail fast.
    """

    message: str = "Not inside a git repository"


def discover_repo_or_sentinel(cwd: Path, git: Git) -> RepoContext | NoRepoSentinel:
    """Find the repository containing `cwd`.

    Args:
        cwd: Current working directory to start search from
        git: Git operations interface

    Returns:
        RepoContext if inside a git repository, NoRepoSentinel otherwise
    """
    root = git.get_repository_root(cwd)
    if root is None:
        return NoRepoSentinel(message=f"Not inside a git repository: {cwd}")

    return RepoContext(root=root, repo_name=root.name)
