"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

import click

from chuck.cli.output import user_output
from chuck.core.display import CommitDisplay
from chuck.core.git.abc import Git
from chuck.core.git.real import RealGit
from chuck.core.github.abc import GitHub
from chuck.core.github.real import RealGitHub
from chuck.core.repo_discovery import NoRepoSentinel, RepoContext, discover_repo_or_sentinel
from chuck.core.time.abc import Time
from chuck.core.time.real import RealTime
from chuck.core.user_feedback import InteractiveFeedback, UserFeedback


@dataclass(frozen=True)
class ChuckContext:
    """Immutable context holding all dependencies for chuck operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    github: GitHub
    time: Time
    display: CommitDisplay
    feedback: UserFeedback
    cwd: Path  # Current working directory at CLI invocation
    repo: RepoContext | NoRepoSentinel

    @staticmethod
    def for_test(
        git: Git | None = None,
        github: GitHub | None = None,
        time: Time | None = None,
        display: CommitDisplay | None = None,
        feedback: UserFeedback | None = None,
        cwd: Path | None = None,
        repo: RepoContext | NoRepoSentinel | None = None,
    ) -> "ChuckContext":
        """Create test context with optional pre-configured integration classes.

        Any dependency left as None is replaced by an empty fake.

        Args:
            git: Optional Git implementation. If None, creates empty FakeGit.
            github: Optional GitHub implementation. If None, creates FakeGitHub
                with no repository information.
            time: Optional Time implementation. If None, creates FakeTime.
            display: Optional display. If None, creates FakeDisplay that quits
                immediately.
            feedback: Optional UserFeedback. If None, creates FakeUserFeedback.
            cwd: Optional current working directory. If None, uses sentinel_path().
            repo: Optional RepoContext or NoRepoSentinel. If None, uses NoRepoSentinel().

        Returns:
            ChuckContext configured with provided values and test defaults
        """
        from tests.fakes.display import FakeDisplay
        from tests.fakes.time import FakeTime
        from tests.fakes.user_feedback import FakeUserFeedback
        from tests.test_utils.paths import sentinel_path

        from chuck.core.git.fake import FakeGit
        from chuck.core.github.fake import FakeGitHub

        return ChuckContext(
            git=git if git is not None else FakeGit(),
            github=github if github is not None else FakeGitHub(),
            time=time if time is not None else FakeTime(),
            display=display if display is not None else FakeDisplay(events=[]),
            feedback=feedback if feedback is not None else FakeUserFeedback(),
            cwd=cwd if cwd is not None else sentinel_path(),
            repo=repo if repo is not None else NoRepoSentinel(),
        )


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)

    Note:
        This is an acceptable use of try/except since we're wrapping a third-party
        API (Path.cwd()) that provides no way to check the condition first.
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def create_context() -> ChuckContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.
    """
    from chuck.cli.terminal import TerminalDisplay

    cwd, error_msg = safe_cwd()
    if cwd is None:
        assert error_msg is not None
        user_output(click.style("Error: ", fg="red") + error_msg)
        user_output("\nPlease change to a valid directory and try again.")
        raise SystemExit(1)

    git: Git = RealGit()
    repo = discover_repo_or_sentinel(cwd, git)

    return ChuckContext(
        git=git,
        github=RealGitHub(),
        time=RealTime(),
        display=TerminalDisplay(),
        feedback=InteractiveFeedback(),
        cwd=cwd,
        repo=repo,
    )
