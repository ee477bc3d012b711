"""Production Git implementation using subprocess.

This module provides the real Git implementation that executes actual git
commands via subprocess.
"""

import subprocess
from datetime import datetime
from pathlib import Path

from chuck.core.git.abc import CherryPickOutcome, CherryPickResult, CommitRef, Git
from chuck.core.subprocess import run_subprocess_with_context

# Separators for `git log --format`; neither can appear in commit metadata.
_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x00"
_LOG_FORMAT = "%x1e%H%x00%h%x00%an%x00%aI%x00%P%x00%B%x00"


def parse_commit_log(output: str) -> list[CommitRef]:
    """Parse `git log --name-only` output produced with _LOG_FORMAT."""
    commits: list[CommitRef] = []
    for record in output.split(_RECORD_SEP):
        if not record.strip():
            continue

        parts = record.split(_FIELD_SEP, 6)
        if len(parts) != 7:
            continue

        sha, short_sha, author, date, parents, body, name_block = parts
        message = body.strip()
        subject = message.splitlines()[0] if message else ""
        files = tuple(line.strip() for line in name_block.splitlines() if line.strip())
        commits.append(
            CommitRef(
                hash=sha,
                short_hash=short_sha,
                author=author,
                timestamp=datetime.fromisoformat(date),
                subject=subject,
                message=message,
                files=files,
                parent_count=len(parents.split()),
            )
        )
    return commits


# ============================================================================
# Production Implementation
# ============================================================================


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def get_repository_root(self, cwd: Path) -> Path | None:
        """Get the top-level directory of the repository containing cwd."""
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        return Path(result.stdout.strip()).resolve()

    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch."""
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        branch = result.stdout.strip()
        if branch == "HEAD":
            return None

        return branch

    def has_uncommitted_changes(self, cwd: Path) -> bool:
        """Check if the working tree has uncommitted changes."""
        result = run_subprocess_with_context(
            ["git", "status", "--porcelain", "--untracked-files=no"],
            operation_context="check working tree status",
            cwd=cwd,
        )
        return bool(result.stdout.strip())

    def list_remotes(self, repo_root: Path) -> dict[str, str]:
        """List configured remotes with their fetch URLs."""
        result = subprocess.run(
            ["git", "config", "--get-regexp", r"^remote\..*\.url$"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        # Exit code 1 means no remote is configured
        if result.returncode != 0:
            return {}

        remotes: dict[str, str] = {}
        for line in result.stdout.splitlines():
            parts = line.split(maxsplit=1)
            if len(parts) != 2:
                continue
            key, url = parts
            name = key.removeprefix("remote.").removesuffix(".url")
            remotes[name] = url
        return remotes

    def add_remote(self, repo_root: Path, name: str, url: str) -> None:
        """Add a new remote."""
        run_subprocess_with_context(
            ["git", "remote", "add", name, url],
            operation_context=f"add remote '{name}' ({url})",
            cwd=repo_root,
        )

    def set_remote_url(self, repo_root: Path, name: str, url: str) -> None:
        """Point an existing remote at a different URL."""
        run_subprocess_with_context(
            ["git", "remote", "set-url", name, url],
            operation_context=f"set URL of remote '{name}' to {url}",
            cwd=repo_root,
        )

    def fetch_remote(self, repo_root: Path, remote: str) -> None:
        """Fetch all branches of a remote."""
        run_subprocess_with_context(
            ["git", "fetch", remote],
            operation_context=f"fetch remote '{remote}'",
            cwd=repo_root,
        )

    def get_remote_default_branch(self, repo_root: Path, remote: str) -> str | None:
        """Get the branch the remote's HEAD points at."""
        result = subprocess.run(
            ["git", "ls-remote", "--symref", remote, "HEAD"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        # Parse "ref: refs/heads/main\tHEAD" -> "main"
        for line in result.stdout.splitlines():
            if not line.startswith("ref: "):
                continue
            ref = line.removeprefix("ref: ").split("\t")[0].strip()
            if ref.startswith("refs/heads/"):
                return ref.removeprefix("refs/heads/")
        return None

    def resolve_ref(self, repo_root: Path, ref: str) -> str | None:
        """Resolve a ref to a full commit SHA."""
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        return result.stdout.strip()

    def list_commits_between(self, repo_root: Path, base: str, tip: str) -> list[CommitRef]:
        """List commits reachable from tip but not from base, oldest first."""
        result = run_subprocess_with_context(
            [
                "git",
                "log",
                "--reverse",
                "--first-parent",
                "--diff-merges=first-parent",
                "--name-only",
                f"--format={_LOG_FORMAT}",
                f"{base}..{tip}",
            ],
            operation_context=f"list commits in {base}..{tip}",
            cwd=repo_root,
        )
        return parse_commit_log(result.stdout)

    def checkout_new_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        """Create a branch at start_point and check it out."""
        run_subprocess_with_context(
            ["git", "checkout", "-b", branch, start_point],
            operation_context=f"create branch '{branch}' from '{start_point}'",
            cwd=repo_root,
        )

    def cherry_pick(
        self, repo_root: Path, commit_sha: str, *, mainline: int | None
    ) -> CherryPickResult:
        """Cherry-pick a commit onto the current branch."""
        cmd = ["git", "cherry-pick"]
        if mainline is not None:
            cmd.extend(["-m", str(mainline)])
        cmd.append(commit_sha)

        result = subprocess.run(
            cmd,
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode == 0:
            return CherryPickResult(CherryPickOutcome.APPLIED)

        output = (result.stdout + result.stderr).strip()
        lowered = output.lower()
        if "is now empty" in lowered or "nothing to commit" in lowered:
            return CherryPickResult(CherryPickOutcome.EMPTY, output)

        # A conflict leaves CHERRY_PICK_HEAD behind; anything else is a hard failure
        if self.resolve_ref(repo_root, "CHERRY_PICK_HEAD") is not None:
            return CherryPickResult(CherryPickOutcome.CONFLICT, output)

        raise RuntimeError(
            f"Failed to cherry-pick {commit_sha}\n"
            f"Command: {' '.join(cmd)}\n"
            f"Exit code: {result.returncode}\n"
            f"output: {output}"
        )

    def skip_cherry_pick(self, repo_root: Path) -> None:
        """Skip the cherry-pick currently in progress."""
        run_subprocess_with_context(
            ["git", "cherry-pick", "--skip"],
            operation_context="skip empty cherry-pick",
            cwd=repo_root,
        )

    def push_branch(self, repo_root: Path, remote: str, branch: str) -> None:
        """Push a local branch to a remote under the same name."""
        run_subprocess_with_context(
            ["git", "push", remote, f"{branch}:{branch}"],
            operation_context=f"push branch '{branch}' to remote '{remote}'",
            cwd=repo_root,
        )
