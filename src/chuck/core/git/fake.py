"""Fake Git operations for testing.

FakeGit is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from pathlib import Path

from chuck.core.git.abc import CherryPickOutcome, CherryPickResult, CommitRef, Git


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty dicts).

    Mutating operations are recorded and exposed through read-only properties
    for test assertions.
    """

    def __init__(
        self,
        *,
        repository_roots: dict[Path, Path] | None = None,
        current_branches: dict[Path, str] | None = None,
        dirty_paths: set[Path] | None = None,
        remotes: dict[str, str] | None = None,
        remote_default_branches: dict[str, str] | None = None,
        refs: dict[str, str] | None = None,
        commit_ranges: dict[tuple[str, str], list[CommitRef]] | None = None,
        fetch_failures: dict[str, str] | None = None,
        conflicting_commits: set[str] | None = None,
        empty_commits: set[str] | None = None,
        push_failures: dict[str, str] | None = None,
        log_failure: str | None = None,
        checkout_failure: str | None = None,
        cherry_pick_failures: dict[str, str] | None = None,
        skip_failure: str | None = None,
    ) -> None:
        """Create FakeGit with pre-configured state.

        Args:
            repository_roots: Mapping of cwd -> repository root
            current_branches: Mapping of cwd -> checked-out branch
            dirty_paths: Paths whose working tree has uncommitted changes
            remotes: Mapping of remote name -> URL
            remote_default_branches: Mapping of remote name -> branch HEAD points at
            refs: Mapping of ref name -> commit SHA (e.g. "HEAD", "refs/remotes/x/main")
            commit_ranges: Mapping of (base, tip) -> commits, oldest first
            fetch_failures: Mapping of remote name -> error text raised on fetch
            conflicting_commits: SHAs whose cherry-pick conflicts
            empty_commits: SHAs whose cherry-pick becomes empty
            push_failures: Mapping of remote name -> error text raised on push
            log_failure: Error text raised by list_commits_between
            checkout_failure: Error text raised by checkout_new_branch
            cherry_pick_failures: Mapping of SHA -> error text raised by cherry_pick
            skip_failure: Error text raised by skip_cherry_pick
        """
        self._repository_roots = repository_roots or {}
        self._current_branches = current_branches or {}
        self._dirty_paths = dirty_paths or set()
        self._remotes = dict(remotes or {})
        self._remote_default_branches = remote_default_branches or {}
        self._refs = dict(refs or {})
        self._commit_ranges = commit_ranges or {}
        self._fetch_failures = fetch_failures or {}
        self._conflicting_commits = conflicting_commits or set()
        self._empty_commits = empty_commits or set()
        self._push_failures = push_failures or {}
        self._log_failure = log_failure
        self._checkout_failure = checkout_failure
        self._cherry_pick_failures = cherry_pick_failures or {}
        self._skip_failure = skip_failure

        self._added_remotes: list[tuple[str, str]] = []
        self._remote_url_updates: list[tuple[str, str]] = []
        self._fetched_remotes: list[str] = []
        self._created_branches: list[tuple[str, str]] = []
        self._cherry_pick_attempts: list[tuple[str, int | None]] = []
        self._picked_commits: list[str] = []
        self._skipped_cherry_picks: int = 0
        self._pushed_branches: list[tuple[str, str]] = []

    @property
    def remotes(self) -> dict[str, str]:
        """Current remotes including any added during the test."""
        return self._remotes

    @property
    def added_remotes(self) -> list[tuple[str, str]]:
        """List of (name, url) tuples passed to add_remote()."""
        return self._added_remotes

    @property
    def remote_url_updates(self) -> list[tuple[str, str]]:
        """List of (name, url) tuples passed to set_remote_url()."""
        return self._remote_url_updates

    @property
    def fetched_remotes(self) -> list[str]:
        """Remote names fetched, in call order."""
        return self._fetched_remotes

    @property
    def created_branches(self) -> list[tuple[str, str]]:
        """List of (branch, start_point) tuples passed to checkout_new_branch()."""
        return self._created_branches

    @property
    def cherry_pick_attempts(self) -> list[tuple[str, int | None]]:
        """Every (sha, mainline) cherry-pick attempted, including failures."""
        return self._cherry_pick_attempts

    @property
    def picked_commits(self) -> list[str]:
        """SHAs that were applied to the current branch."""
        return self._picked_commits

    @property
    def skipped_cherry_picks(self) -> int:
        return self._skipped_cherry_picks

    @property
    def pushed_branches(self) -> list[tuple[str, str]]:
        """List of (remote, branch) tuples pushed successfully."""
        return self._pushed_branches

    def get_repository_root(self, cwd: Path) -> Path | None:
        return self._repository_roots.get(cwd)

    def get_current_branch(self, cwd: Path) -> str | None:
        return self._current_branches.get(cwd)

    def has_uncommitted_changes(self, cwd: Path) -> bool:
        return cwd in self._dirty_paths

    def list_remotes(self, repo_root: Path) -> dict[str, str]:
        return dict(self._remotes)

    def add_remote(self, repo_root: Path, name: str, url: str) -> None:
        if name in self._remotes:
            msg = f"Failed to add remote '{name}'\nstderr: error: remote {name} already exists."
            raise RuntimeError(msg)
        self._remotes[name] = url
        self._added_remotes.append((name, url))

    def set_remote_url(self, repo_root: Path, name: str, url: str) -> None:
        if name not in self._remotes:
            msg = f"Failed to set URL of remote '{name}'\nstderr: error: No such remote '{name}'"
            raise RuntimeError(msg)
        self._remotes[name] = url
        self._remote_url_updates.append((name, url))

    def fetch_remote(self, repo_root: Path, remote: str) -> None:
        if remote in self._fetch_failures:
            raise RuntimeError(self._fetch_failures[remote])
        self._fetched_remotes.append(remote)

    def get_remote_default_branch(self, repo_root: Path, remote: str) -> str | None:
        return self._remote_default_branches.get(remote)

    def resolve_ref(self, repo_root: Path, ref: str) -> str | None:
        return self._refs.get(ref)

    def list_commits_between(self, repo_root: Path, base: str, tip: str) -> list[CommitRef]:
        if self._log_failure is not None:
            raise RuntimeError(self._log_failure)
        if base == tip:
            return []
        return list(self._commit_ranges.get((base, tip), []))

    def checkout_new_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        if self._checkout_failure is not None:
            raise RuntimeError(self._checkout_failure)
        self._created_branches.append((branch, start_point))

    def cherry_pick(
        self, repo_root: Path, commit_sha: str, *, mainline: int | None
    ) -> CherryPickResult:
        self._cherry_pick_attempts.append((commit_sha, mainline))
        if commit_sha in self._cherry_pick_failures:
            raise RuntimeError(self._cherry_pick_failures[commit_sha])
        if commit_sha in self._conflicting_commits:
            return CherryPickResult(
                CherryPickOutcome.CONFLICT, f"error: could not apply {commit_sha[:7]}"
            )
        if commit_sha in self._empty_commits:
            return CherryPickResult(
                CherryPickOutcome.EMPTY, "The previous cherry-pick is now empty"
            )
        self._picked_commits.append(commit_sha)
        return CherryPickResult(CherryPickOutcome.APPLIED)

    def skip_cherry_pick(self, repo_root: Path) -> None:
        if self._skip_failure is not None:
            raise RuntimeError(self._skip_failure)
        self._skipped_cherry_picks += 1

    def push_branch(self, repo_root: Path, remote: str, branch: str) -> None:
        if remote in self._push_failures:
            raise RuntimeError(self._push_failures[remote])
        self._pushed_branches.append((remote, branch))
