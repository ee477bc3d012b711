"""Commit delta between the upstream baseline and the local branch tip."""

import logging
from pathlib import Path

from chuck.core.errors import DeltaEnumerationFailed
from chuck.core.git.abc import CommitRef, Git

logger = logging.getLogger(__name__)


def enumerate_delta(git: Git, repo_root: Path, base_sha: str, tip_sha: str) -> list[CommitRef]:
    """List local commits absent from upstream, oldest first.

    The order is both display order and cherry-pick order. Only the
    first-parent line of the tip is walked, so a merge commit appears once,
    standing for everything it brought in. An empty list means there is
    nothing to contribute (tip equals base, or tip is behind base).

    Raises:
        DeltaEnumerationFailed: If git cannot walk the range
    """
    if tip_sha == base_sha:
        logger.debug("Tip %s equals base; empty delta", tip_sha)
        return []

    try:
        commits = git.list_commits_between(repo_root, base_sha, tip_sha)
    except RuntimeError as e:
        raise DeltaEnumerationFailed(base_sha, tip_sha, str(e)) from e

    logger.debug(
        "Delta %s..%s: %d commit(s), %d merge(s)",
        base_sha[:7],
        tip_sha[:7],
        len(commits),
        sum(1 for commit in commits if commit.is_merge),
    )
    return commits
