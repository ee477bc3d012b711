"""Parsing helpers for GitHub URLs and gh CLI output."""

import json
import re

from chuck.core.github.types import RepoSlug, RepositoryInfo

_SCP_URL = re.compile(r"^[\w.-]+@(?P<host>[^:/]+):(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$")
_SSH_URL = re.compile(
    r"^ssh://(?:[\w.-]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$"
)
_HTTPS_URL = re.compile(
    r"^https?://(?:[^@/]+@)?(?P<host>[^/]+)/(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$"
)
_AUTH_LINE = re.compile(r"Logged in to (?P<host>\S+) (?:account|as) (?P<user>[\w-]+)")


def parse_repo_url(url: str) -> RepoSlug | None:
    """Parse a git remote URL into a RepoSlug.

    Accepts the SCP-like SSH form (git@github.com:owner/repo.git), ssh:// URLs
    and HTTPS URLs with or without the .git suffix. All spellings of the same
    repository produce equal slugs.

    Returns:
        RepoSlug, or None if the URL is not in a recognized format
    """
    url = url.strip()
    for pattern in (_SCP_URL, _SSH_URL, _HTTPS_URL):
        match = pattern.match(url)
        if match is not None:
            return RepoSlug(
                host=match.group("host").lower(),
                owner=match.group("owner"),
                name=match.group("name"),
            )
    return None


def canonical_remote_url(url: str) -> str | None:
    """Normalize a remote URL, keeping its transport.

    HTTPS URLs become https://host/owner/repo.git. SSH URLs keep their user,
    port and scheme exactly as written; only a trailing slash is dropped and a
    missing .git suffix added.
    """
    slug = parse_repo_url(url)
    if slug is None:
        return None

    stripped = url.strip().rstrip("/")
    if stripped.startswith(("http://", "https://")):
        return slug.https_url
    if stripped.endswith(".git"):
        return stripped
    return f"{stripped}.git"


def parse_repository_info(stdout: str, host: str) -> RepositoryInfo:
    """Parse `gh repo view --json owner,name,url,isFork,parent` output.

    Raises:
        json.JSONDecodeError: If stdout is not JSON
        KeyError: If required fields are missing
    """
    data = json.loads(stdout)
    url_slug = parse_repo_url(data.get("url") or "")
    if url_slug is not None:
        host = url_slug.host

    slug = RepoSlug(host=host, owner=data["owner"]["login"], name=data["name"])

    parent_data = data.get("parent")
    parent: RepoSlug | None = None
    if data.get("isFork") and parent_data:
        parent = RepoSlug(host=host, owner=parent_data["owner"]["login"], name=parent_data["name"])

    return RepositoryInfo(slug=slug, is_fork=parent is not None, parent=parent)


def parse_gh_auth_status_output(output: str) -> tuple[bool, str | None, str | None]:
    """Parse `gh auth status` output.

    Recognizes both "Logged in to github.com as USER" and the newer
    "Logged in to github.com account USER" phrasing.

    Returns:
        Tuple of (is_authenticated, username, hostname)
    """
    match = _AUTH_LINE.search(output)
    if match is not None:
        return (True, match.group("user"), match.group("host"))

    if "Logged in to" in output:
        return (True, None, None)

    return (False, None, None)
