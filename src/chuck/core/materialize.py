"""Branch materialization.

Turns a confirmed selection into a branch rooted at the upstream baseline:
create the branch, cherry-pick the selected commits in delta order, push it to
the upstream remote and report where to open a pull request.

A conflict stops the run and leaves everything already applied in place; a
failed push leaves the local branch in place. Nothing is rolled back.
"""

import logging
from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime

from chuck.core.context import ChuckContext
from chuck.core.errors import BranchCreationFailed, CherryPickConflict, CherryPickFailed
from chuck.core.git.abc import CherryPickOutcome, CommitRef
from chuck.core.repo_discovery import RepoContext
from chuck.core.upstream import ResolvedUpstream

logger = logging.getLogger(__name__)

BRANCH_PREFIX = "chuck/"


@dataclass(frozen=True)
class PushSucceeded:
    compare_url: str | None  # None when the upstream host/owner/repo is unknown


@dataclass(frozen=True)
class PushFailed:
    reason: str
    manual_command: str


@dataclass(frozen=True)
class PushSkipped:
    reason: str


PushOutcome = PushSucceeded | PushFailed | PushSkipped


@dataclass(frozen=True)
class BranchResult:
    """Outcome of a fully applied selection."""

    branch: str
    base_sha: str
    picked: tuple[str, ...]  # applied commit hashes, delta order
    skipped_empty: tuple[str, ...]  # hashes already present upstream
    push: PushOutcome

    @property
    def compare_url(self) -> str | None:
        if isinstance(self.push, PushSucceeded):
            return self.push.compare_url
        return None


def branch_name_for(now: datetime) -> str:
    """Derive the branch name from a timestamp (per-second granularity)."""
    return f"{BRANCH_PREFIX}{now.strftime('%Y%m%d-%H%M%S')}"


def order_by_delta(delta: list[CommitRef], selected: Collection[str]) -> list[CommitRef]:
    """Return the selected commits in delta order.

    Raises:
        ValueError: If a selected hash is not part of the delta
    """
    known = {commit.hash for commit in delta}
    unknown = [sha for sha in selected if sha not in known]
    if unknown:
        raise ValueError(f"Selected commits are not in the delta: {', '.join(unknown)}")
    return [commit for commit in delta if commit.hash in selected]


def materialize_branch(
    ctx: ChuckContext,
    repo: RepoContext,
    upstream: ResolvedUpstream,
    delta: list[CommitRef],
    selected: Collection[str],
) -> BranchResult:
    """Create the contribution branch and push it.

    Args:
        ctx: Application context
        repo: Repository to operate on
        upstream: Resolved upstream providing the base commit and push remote
        delta: Full delta, oldest first
        selected: Hashes of the commits to contribute, in any order

    Raises:
        BranchCreationFailed: If the branch cannot be created at the base commit
        CherryPickConflict: If a cherry-pick conflicts; later commits are not attempted
        CherryPickFailed: If a cherry-pick or skip fails for any other reason
    """
    picks = order_by_delta(delta, selected)
    branch = branch_name_for(ctx.time.now())

    ctx.feedback.info(f"🧔 Creating branch {branch} with {len(picks)} selected commit(s)...")
    logger.debug("Branch %s starts at %s", branch, upstream.base_sha)
    try:
        ctx.git.checkout_new_branch(repo.root, branch, upstream.base_sha)
    except RuntimeError as e:
        raise BranchCreationFailed(branch, upstream.base_sha, str(e)) from e

    applied: list[str] = []
    skipped: list[str] = []
    for commit in picks:
        ctx.feedback.info(f"🧔 Cherry-picking: {commit.short_hash} - {commit.subject}")
        mainline = 1 if commit.is_merge else None
        try:
            result = ctx.git.cherry_pick(repo.root, commit.hash, mainline=mainline)
        except RuntimeError as e:
            raise CherryPickFailed(branch, commit.hash, commit.subject, applied, str(e)) from e

        if result.outcome is CherryPickOutcome.APPLIED:
            applied.append(commit.hash)
        elif result.outcome is CherryPickOutcome.EMPTY:
            ctx.feedback.warning(
                f"🧔 Skipping empty commit: {commit.short_hash} - {commit.subject} "
                "(its changes are already upstream)"
            )
            try:
                ctx.git.skip_cherry_pick(repo.root)
            except RuntimeError as e:
                raise CherryPickFailed(
                    branch, commit.hash, commit.subject, applied, str(e)
                ) from e
            skipped.append(commit.hash)
        else:
            logger.debug("Cherry-pick of %s failed: %s", commit.hash, result.detail)
            raise CherryPickConflict(branch, commit.hash, commit.subject, applied)

    ctx.feedback.success(f"🧔 Created branch: {branch}")

    if applied:
        push = _push(ctx, repo, upstream, branch)
    else:
        push = PushSkipped(reason="every selected commit is already upstream")

    return BranchResult(
        branch=branch,
        base_sha=upstream.base_sha,
        picked=tuple(applied),
        skipped_empty=tuple(skipped),
        push=push,
    )


def _push(
    ctx: ChuckContext, repo: RepoContext, upstream: ResolvedUpstream, branch: str
) -> PushOutcome:
    ctx.feedback.info(f"🧔 Pushing {branch} to {upstream.remote}...")
    try:
        ctx.git.push_branch(repo.root, upstream.remote, branch)
    except RuntimeError as e:
        logger.debug("Push failed", exc_info=True)
        return PushFailed(reason=str(e), manual_command=f"git push {upstream.remote} {branch}")

    compare_url = None
    if upstream.slug is not None:
        compare_url = upstream.slug.compare_url(upstream.branch, branch)
    return PushSucceeded(compare_url=compare_url)
