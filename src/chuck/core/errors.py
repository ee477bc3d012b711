"""Error taxonomy for chuck.

Every fatal condition is a ChuckError subclass carrying a user-facing message
and the process exit code the CLI should use. Non-fatal conditions (nothing to
contribute, push failures) are modelled as values, not exceptions.
"""

from pathlib import Path


class ChuckError(Exception):
    """Base class for errors reported to the user."""

    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(ChuckError):
    """The .chuckrc file exists but cannot be used."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid {path.name} at {path}: {reason}")
        self.path = path
        self.reason = reason


class NoUpstreamFound(ChuckError):
    """None of fork detection, .chuckrc or an existing remote produced an upstream."""

    exit_code = 3

    def __init__(self, attempts: list[str]) -> None:
        super().__init__(format_upstream_guidance("No template or upstream found.", attempts))
        self.attempts = attempts


class ToolingMissingOrUnauthenticated(ChuckError):
    """A required tool is missing, or gh is not authenticated."""

    exit_code = 6


class FetchFailed(ChuckError):
    """Fetching the upstream remote failed."""

    exit_code = 4

    def __init__(self, remote: str, detail: str) -> None:
        super().__init__(f"Failed to fetch remote '{remote}':\n{detail}")
        self.remote = remote
        self.detail = detail


class DirtyWorkingTree(ChuckError):
    """The working tree has uncommitted changes."""

    exit_code = 7

    def __init__(self, repo_root: Path) -> None:
        super().__init__(
            f"Repository at {repo_root} has uncommitted changes.\n"
            "Commit or stash them first: chuck checks out a new branch to cherry-pick onto."
        )
        self.repo_root = repo_root


class CherryPickConflict(ChuckError):
    """A cherry-pick stopped on a conflict; earlier picks remain on the branch."""

    exit_code = 5

    def __init__(self, branch: str, commit_hash: str, subject: str, applied: list[str]) -> None:
        applied_note = (
            f"{len(applied)} earlier commit(s) were applied and remain on the branch."
            if applied
            else "No commits were applied before the conflict."
        )
        super().__init__(
            f"Cherry-pick of {commit_hash} ({subject}) conflicted on branch '{branch}'.\n"
            f"{applied_note}\n"
            "The branch is left in a partially-picked state. Resolve the conflict, then run:\n"
            "  git cherry-pick --continue\n"
            "or abandon this commit with:\n"
            "  git cherry-pick --abort"
        )
        self.branch = branch
        self.commit_hash = commit_hash
        self.applied = applied


class GitOperationFailed(ChuckError):
    """A git command chuck relies on failed outside of a cherry-pick conflict."""

    exit_code = 8


class DeltaEnumerationFailed(GitOperationFailed):
    def __init__(self, base_sha: str, tip_sha: str, detail: str) -> None:
        super().__init__(
            f"Could not list the commits between {base_sha[:7]} and {tip_sha[:7]}.\n"
            f"{detail}\n"
            "Nothing was changed in the repository."
        )
        self.detail = detail


class BranchCreationFailed(GitOperationFailed):
    def __init__(self, branch: str, base_sha: str, detail: str) -> None:
        super().__init__(
            f"Could not create branch '{branch}' at {base_sha[:7]}.\n"
            f"{detail}\n"
            "No commits were applied. If untracked files would be overwritten, "
            "move them aside and run chuck again."
        )
        self.branch = branch
        self.detail = detail


class CherryPickFailed(GitOperationFailed):
    """A cherry-pick (or skipping an empty one) failed without a conflict."""

    def __init__(
        self, branch: str, commit_hash: str, subject: str, applied: list[str], detail: str
    ) -> None:
        applied_note = (
            f"{len(applied)} earlier commit(s) were applied and remain on the branch: "
            + ", ".join(sha[:7] for sha in applied)
            if applied
            else "No commits were applied before the failure."
        )
        super().__init__(
            f"Cherry-pick of {commit_hash} ({subject}) failed on branch '{branch}'.\n"
            f"{detail}\n"
            f"{applied_note}\n"
            "Inspect the branch with git status; abandon an in-progress pick with:\n"
            "  git cherry-pick --abort"
        )
        self.branch = branch
        self.commit_hash = commit_hash
        self.applied = applied
        self.detail = detail


def format_upstream_guidance(headline: str, attempts: list[str]) -> str:
    """Build the message explaining how to point chuck at a template."""
    lines = [headline]
    for attempt in attempts:
        lines.append(f"  - {attempt}")
    lines.append("")
    lines.append("Chuck looks for the upstream in this order:")
    lines.append("  1. GitHub fork parent (requires an authenticated gh CLI: gh auth login)")
    lines.append("  2. A .chuckrc file in the repository root:")
    lines.append("       [template]")
    lines.append('       url = "git@github.com:your-org/your-template.git"')
    lines.append("  3. A remote named 'chuck-template':")
    lines.append("       git remote add chuck-template <template-url>")
    return "\n".join(lines)
