"""Abstract base class for GitHub operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from chuck.core.github.types import RepoSlug, RepositoryInfo


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def is_installed(self) -> bool:
        """Check whether the GitHub CLI (gh) is available on PATH."""
        ...

    @abstractmethod
    def check_auth_status(self) -> tuple[bool, str | None, str | None]:
        """Check GitHub CLI authentication status.

        Returns:
            Tuple of (is_authenticated, username, hostname)
        """
        ...

    @abstractmethod
    def get_repository_info(self, repo_root: Path) -> RepositoryInfo | None:
        """Get fork metadata for the repository checked out at repo_root.

        Returns:
            RepositoryInfo, or None if gh cannot resolve the repository
            (no GitHub remote, API error)
        """
        ...

    @abstractmethod
    def get_default_branch(self, repo_root: Path, slug: RepoSlug) -> str | None:
        """Get the default branch of a repository.

        Returns:
            Branch name, or None if the query fails
        """
        ...
