"""End-to-end commit triage: resolve, enumerate, select, materialize."""

import logging
from dataclasses import dataclass

from chuck.core.context import ChuckContext
from chuck.core.delta import enumerate_delta
from chuck.core.errors import ChuckError, DirtyWorkingTree
from chuck.core.materialize import BranchResult, materialize_branch
from chuck.core.repo_discovery import RepoContext
from chuck.core.selection import SelectionMode, run_selection
from chuck.core.upstream import ResolvedUpstream, resolve_upstream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NothingToContribute:
    upstream: ResolvedUpstream


@dataclass(frozen=True)
class SelectionCancelled:
    upstream: ResolvedUpstream


@dataclass(frozen=True)
class Contributed:
    upstream: ResolvedUpstream
    result: BranchResult
    original_branch: str | None  # branch checked out before chuck switched away


TriageOutcome = NothingToContribute | SelectionCancelled | Contributed


def run_triage(ctx: ChuckContext, repo: RepoContext) -> TriageOutcome:
    """Run the full pipeline against a repository.

    Steps run strictly in sequence. Resolution and enumeration errors abort
    before the interactive session; an empty delta or a cancelled session
    skip materialization.

    Raises:
        DirtyWorkingTree: If tracked files have uncommitted changes
        ChuckError: Any resolution, enumeration or materialization failure
    """
    if ctx.git.has_uncommitted_changes(repo.root):
        raise DirtyWorkingTree(repo.root)

    original_branch = ctx.git.get_current_branch(repo.root)
    upstream = resolve_upstream(ctx, repo)

    tip_sha = ctx.git.resolve_ref(repo.root, "HEAD")
    if tip_sha is None:
        raise ChuckError(f"HEAD does not point at a commit in {repo.root}")

    ctx.feedback.info(f"🧔 Comparing {repo.repo_name} with template {upstream.display_name}...")
    delta = enumerate_delta(ctx.git, repo.root, upstream.base_sha, tip_sha)
    if not delta:
        return NothingToContribute(upstream=upstream)

    state = run_selection(delta, ctx.display)
    if state.mode is SelectionMode.CANCELLED:
        logger.debug("Selection cancelled with %d commit(s) selected", len(state.selected))
        return SelectionCancelled(upstream=upstream)

    result = materialize_branch(ctx, repo, upstream, delta, state.selected)
    return Contributed(upstream=upstream, result=result, original_branch=original_branch)
