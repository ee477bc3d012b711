"""Upstream resolution.

Determines which repository the current project was derived from and makes
sure a fetched local remote points at it. Sources are tried in a fixed order:
GitHub fork parent, the `.chuckrc` template URL, then an existing
`chuck-template` remote.
"""

import logging
from dataclasses import dataclass

from chuck.core.config import CONFIG_FILENAME, load_chuck_config
from chuck.core.context import ChuckContext
from chuck.core.errors import (
    ChuckError,
    ConfigError,
    FetchFailed,
    NoUpstreamFound,
    ToolingMissingOrUnauthenticated,
    format_upstream_guidance,
)
from chuck.core.github.parsing import canonical_remote_url, parse_repo_url
from chuck.core.github.types import RepoSlug
from chuck.core.repo_discovery import RepoContext

logger = logging.getLogger(__name__)

# Reserved for chuck so user remotes (origin, upstream) are never touched
TEMPLATE_REMOTE = "chuck-template"

_FALLBACK_BRANCHES = ("main", "master")


@dataclass(frozen=True)
class ForkParent:
    slug: RepoSlug


@dataclass(frozen=True)
class ConfiguredTemplate:
    url: str
    remote: str


@dataclass(frozen=True)
class ExistingRemote:
    remote: str


UpstreamSource = ForkParent | ConfiguredTemplate | ExistingRemote


@dataclass(frozen=True)
class ResolvedUpstream:
    """An upstream source pinned to a fetched remote branch and commit."""

    source: UpstreamSource
    remote: str
    branch: str
    base_sha: str
    slug: RepoSlug | None  # None when the remote URL is not a recognizable host/owner/repo

    @property
    def display_name(self) -> str:
        if self.slug is not None:
            return f"{self.slug.full_name}@{self.branch}"
        return f"{self.remote}/{self.branch}"


@dataclass(frozen=True)
class _ForkDetection:
    parent: RepoSlug | None
    reason: str
    tooling_blocked: bool


def resolve_upstream(ctx: ChuckContext, repo: RepoContext) -> ResolvedUpstream:
    """Find the upstream, ensure its remote exists, fetch it and pin the base commit.

    Raises:
        NoUpstreamFound: If no source applies
        ToolingMissingOrUnauthenticated: If no source applies and fork detection
            could not run because gh is missing or unauthenticated
        ConfigError: If .chuckrc exists but is unusable
        FetchFailed: If fetching the upstream remote fails
    """
    attempts: list[str] = []

    detection = _detect_fork_parent(ctx, repo)
    if detection.parent is not None:
        parent = detection.parent
        ctx.feedback.info(f"🧔 Detected fork of {parent.full_name}")
        url = _url_matching_origin_transport(ctx, repo, parent)
        _ensure_template_remote(ctx, repo, url, parent)
        _fetch(ctx, repo, TEMPLATE_REMOTE)
        branch = ctx.github.get_default_branch(repo.root, parent)
        if branch is None or _remote_branch_sha(ctx, repo, TEMPLATE_REMOTE, branch) is None:
            branch = _detect_remote_branch(ctx, repo, TEMPLATE_REMOTE)
        return _pin(ctx, repo, ForkParent(slug=parent), branch, parent)
    attempts.append(detection.reason)

    config = load_chuck_config(repo.root)
    if config is not None:
        ctx.feedback.info(f"🧔 Found template in {CONFIG_FILENAME}: {config.template_url}")
        url = canonical_remote_url(config.template_url)
        slug = parse_repo_url(config.template_url)
        if url is None or slug is None:
            raise ConfigError(
                repo.root / CONFIG_FILENAME,
                f"unsupported template URL '{config.template_url}' "
                "(expected git@host:owner/repo.git or https://host/owner/repo[.git])",
            )
        _ensure_template_remote(ctx, repo, url, None)
        _fetch(ctx, repo, TEMPLATE_REMOTE)
        branch = _detect_remote_branch(ctx, repo, TEMPLATE_REMOTE)
        return _pin(ctx, repo, ConfiguredTemplate(url=url, remote=TEMPLATE_REMOTE), branch, slug)
    attempts.append(f"no {CONFIG_FILENAME} file in {repo.root}")

    remotes = ctx.git.list_remotes(repo.root)
    if TEMPLATE_REMOTE in remotes:
        existing_url = remotes[TEMPLATE_REMOTE]
        ctx.feedback.info(f"🧔 Using existing remote '{TEMPLATE_REMOTE}': {existing_url}")
        _fetch(ctx, repo, TEMPLATE_REMOTE)
        branch = _detect_remote_branch(ctx, repo, TEMPLATE_REMOTE)
        slug = parse_repo_url(existing_url)
        return _pin(ctx, repo, ExistingRemote(remote=TEMPLATE_REMOTE), branch, slug)
    attempts.append(f"no remote named '{TEMPLATE_REMOTE}'")

    if detection.tooling_blocked:
        raise ToolingMissingOrUnauthenticated(
            format_upstream_guidance(
                "No template or upstream found, and fork detection could not run.", attempts
            )
        )
    raise NoUpstreamFound(attempts)


def _detect_fork_parent(ctx: ChuckContext, repo: RepoContext) -> _ForkDetection:
    if not ctx.github.is_installed():
        return _ForkDetection(
            parent=None,
            reason="GitHub CLI (gh) is not installed; install it from https://cli.github.com/",
            tooling_blocked=True,
        )

    authenticated, username, hostname = ctx.github.check_auth_status()
    if not authenticated:
        return _ForkDetection(
            parent=None,
            reason="GitHub CLI is not authenticated; run: gh auth login",
            tooling_blocked=True,
        )
    logger.debug("gh authenticated as %s on %s", username, hostname)

    info = ctx.github.get_repository_info(repo.root)
    if info is None:
        return _ForkDetection(
            parent=None,
            reason="gh could not find this repository on GitHub",
            tooling_blocked=False,
        )
    if not info.is_fork or info.parent is None:
        return _ForkDetection(
            parent=None,
            reason=f"{info.slug.full_name} is not a fork on GitHub",
            tooling_blocked=False,
        )
    return _ForkDetection(parent=info.parent, reason="", tooling_blocked=False)


def _url_matching_origin_transport(ctx: ChuckContext, repo: RepoContext, slug: RepoSlug) -> str:
    """Use SSH for the template remote when origin uses SSH, HTTPS otherwise."""
    origin = ctx.git.list_remotes(repo.root).get("origin")
    if origin is not None and not origin.startswith(("http://", "https://")):
        return slug.ssh_url
    return slug.https_url


def _ensure_template_remote(
    ctx: ChuckContext, repo: RepoContext, url: str, slug: RepoSlug | None
) -> None:
    """Add or repoint the template remote.

    With a slug, an existing remote naming the same repository over any
    transport is kept. Without one, the normalized URLs must match.
    """
    remotes = ctx.git.list_remotes(repo.root)
    existing = remotes.get(TEMPLATE_REMOTE)
    if existing is None:
        ctx.git.add_remote(repo.root, TEMPLATE_REMOTE, url)
        ctx.feedback.info(f"🧔 Added remote '{TEMPLATE_REMOTE}': {url}")
        return

    if slug is not None:
        same_target = parse_repo_url(existing) == slug
    else:
        same_target = canonical_remote_url(existing) == url

    if not same_target:
        ctx.git.set_remote_url(repo.root, TEMPLATE_REMOTE, url)
        ctx.feedback.warning(f"🧔 Remote '{TEMPLATE_REMOTE}' pointed at {existing}; now {url}")
        return

    logger.debug("Remote %s already points at %s", TEMPLATE_REMOTE, existing)


def _fetch(ctx: ChuckContext, repo: RepoContext, remote: str) -> None:
    ctx.feedback.info(f"🧔 Fetching {remote}...")
    try:
        ctx.git.fetch_remote(repo.root, remote)
    except RuntimeError as e:
        raise FetchFailed(remote, str(e)) from e


def _remote_branch_sha(
    ctx: ChuckContext, repo: RepoContext, remote: str, branch: str
) -> str | None:
    return ctx.git.resolve_ref(repo.root, f"refs/remotes/{remote}/{branch}")


def _detect_remote_branch(ctx: ChuckContext, repo: RepoContext, remote: str) -> str:
    """Find the baseline branch: remote HEAD first, then main, then master."""
    advertised = ctx.git.get_remote_default_branch(repo.root, remote)
    if advertised is not None and _remote_branch_sha(ctx, repo, remote, advertised) is not None:
        return advertised

    for candidate in _FALLBACK_BRANCHES:
        if _remote_branch_sha(ctx, repo, remote, candidate) is not None:
            return candidate

    raise ChuckError(
        f"Could not determine the default branch of remote '{remote}'.\n"
        f"Checked the remote HEAD and {', '.join(_FALLBACK_BRANCHES)}."
    )


def _pin(
    ctx: ChuckContext,
    repo: RepoContext,
    source: UpstreamSource,
    branch: str,
    slug: RepoSlug | None,
) -> ResolvedUpstream:
    base_sha = _remote_branch_sha(ctx, repo, TEMPLATE_REMOTE, branch)
    if base_sha is None:
        raise ChuckError(f"Could not resolve refs/remotes/{TEMPLATE_REMOTE}/{branch} to a commit.")

    logger.debug("Upstream %s resolved to %s@%s (%s)", source, TEMPLATE_REMOTE, branch, base_sha)
    return ResolvedUpstream(
        source=source,
        remote=TEMPLATE_REMOTE,
        branch=branch,
        base_sha=base_sha,
        slug=slug,
    )
