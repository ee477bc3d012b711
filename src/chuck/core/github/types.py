"""Type definitions for GitHub operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoSlug:
    """A repository identified by host, owner and name."""

    host: str  # e.g. "github.com"
    owner: str  # e.g. "acme"
    name: str  # e.g. "template"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def https_url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.name}.git"

    @property
    def ssh_url(self) -> str:
        return f"git@{self.host}:{self.owner}/{self.name}.git"

    def compare_url(self, base: str, head: str) -> str:
        """URL of the web page that opens a pull request from head into base."""
        return f"https://{self.host}/{self.owner}/{self.name}/compare/{base}...{head}?expand=1"


@dataclass(frozen=True)
class RepositoryInfo:
    """Fork metadata for a repository as reported by GitHub."""

    slug: RepoSlug
    is_fork: bool
    parent: RepoSlug | None  # None unless is_fork

