"""Fake GitHub operations for testing.

FakeGitHub is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from pathlib import Path

from chuck.core.github.abc import GitHub
from chuck.core.github.types import RepoSlug, RepositoryInfo


class FakeGitHub(GitHub):
    """In-memory fake implementation of GitHub operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults.
    """

    def __init__(
        self,
        *,
        installed: bool = True,
        authenticated: bool = True,
        username: str | None = "octocat",
        repository_info: RepositoryInfo | None = None,
        default_branches: dict[RepoSlug, str] | None = None,
    ) -> None:
        """Create FakeGitHub with pre-configured state.

        Args:
            installed: Whether gh is reported as installed
            authenticated: Whether gh auth status succeeds
            username: Username reported by auth status
            repository_info: Returned by get_repository_info (None: not resolvable)
            default_branches: Mapping of repository -> default branch
        """
        self._installed = installed
        self._authenticated = authenticated
        self._username = username
        self._repository_info = repository_info
        self._default_branches = default_branches or {}
        self._repository_info_calls: list[Path] = []

    @property
    def repository_info_calls(self) -> list[Path]:
        """Read-only access to tracked get_repository_info() calls for test assertions."""
        return self._repository_info_calls

    def is_installed(self) -> bool:
        return self._installed

    def check_auth_status(self) -> tuple[bool, str | None, str | None]:
        if not self._installed:
            raise RuntimeError("Command not found while trying to check GitHub authentication")
        if not self._authenticated:
            return (False, None, None)
        return (True, self._username, "github.com")

    def get_repository_info(self, repo_root: Path) -> RepositoryInfo | None:
        self._repository_info_calls.append(repo_root)
        return self._repository_info

    def get_default_branch(self, repo_root: Path, slug: RepoSlug) -> str | None:
        return self._default_branches.get(slug)
