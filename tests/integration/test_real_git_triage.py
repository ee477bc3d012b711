"""Integration tests running the triage pipeline against real git repositories."""

import shutil
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner
from tests.fakes.display import FakeDisplay
from tests.fakes.time import FakeTime
from tests.fakes.user_feedback import FakeUserFeedback

from chuck.cli.cli import cli
from chuck.core.context import ChuckContext
from chuck.core.errors import CherryPickConflict
from chuck.core.git.real import RealGit
from chuck.core.github.fake import FakeGitHub
from chuck.core.materialize import PushSucceeded
from chuck.core.repo_discovery import RepoContext, discover_repo_or_sentinel
from chuck.core.selection import SelectionEvent
from chuck.core.triage import Contributed, NothingToContribute, run_triage

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed"),
]

BRANCH = "chuck/20240315-143022"


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def _configure_identity(repo: Path) -> None:
    _git(repo, "config", "user.name", "Test Author")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")


def _commit(repo: Path, filename: str, content: str, message: str) -> str:
    path = repo / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    _git(repo, "add", filename)
    _git(repo, "commit", "-m", message)
    return _git(repo, "rev-parse", "HEAD")


@pytest.fixture
def template_and_app(tmp_path: Path) -> tuple[Path, Path]:
    """A bare template repository and an app cloned from it with a chuck-template remote."""
    template = tmp_path / "template.git"
    _git(tmp_path, "init", "--bare", "--initial-branch=main", str(template))

    seed = tmp_path / "seed"
    _git(tmp_path, "init", "--initial-branch=main", str(seed))
    _configure_identity(seed)
    _commit(seed, "README.md", "# Template\n", "Initial template")
    _git(seed, "push", str(template), "main:main")

    app = tmp_path / "app"
    _git(tmp_path, "clone", str(template), str(app))
    _configure_identity(app)
    _git(app, "remote", "add", "chuck-template", str(template))
    return template, app


def _ctx(app: Path, events: list[SelectionEvent]) -> tuple[ChuckContext, RepoContext]:
    git = RealGit()
    repo = discover_repo_or_sentinel(app, git)
    assert isinstance(repo, RepoContext)
    ctx = ChuckContext.for_test(
        git=git,
        github=FakeGitHub(),
        time=FakeTime(),
        display=FakeDisplay(events=events),
        feedback=FakeUserFeedback(),
        cwd=app,
        repo=repo,
    )
    return ctx, repo


def test_selected_commits_land_on_pushed_branch(template_and_app: tuple[Path, Path]) -> None:
    template, app = template_and_app
    c1 = _commit(app, "src/utils/strings.py", "def shout(s):\n    return s.upper()\n", "Add utils")
    _commit(app, "deploy.yml", "replicas: 3\n", "Configure deploy")
    c3 = _commit(app, "README.md", "# Template\n\nFixed typo.\n", "Fix typo in readme")

    ctx, repo = _ctx(
        app,
        [
            SelectionEvent.TOGGLE,
            SelectionEvent.MOVE_DOWN,
            SelectionEvent.MOVE_DOWN,
            SelectionEvent.TOGGLE,
            SelectionEvent.CONFIRM,
        ],
    )

    outcome = run_triage(ctx, repo)

    assert isinstance(outcome, Contributed)
    assert outcome.original_branch == "main"
    assert outcome.result.branch == BRANCH
    assert isinstance(outcome.result.push, PushSucceeded)
    # Local path remotes have no host/owner/repo to build a compare URL from
    assert outcome.result.push.compare_url is None

    subjects = _git(app, "log", "--format=%s", f"chuck-template/main..{BRANCH}").splitlines()
    assert subjects == ["Fix typo in readme", "Add utils"]
    assert not (app / "deploy.yml").exists()
    assert _git(template, "rev-parse", f"refs/heads/{BRANCH}") == _git(app, "rev-parse", BRANCH)

    # The originals are untouched on main
    assert _git(app, "rev-parse", "main") == c3
    assert _git(app, "rev-parse", "main~2") == c1


def test_delta_lists_files_oldest_first(template_and_app: tuple[Path, Path]) -> None:
    _, app = template_and_app
    _commit(app, "a.txt", "a\n", "First")
    _commit(app, "b.txt", "b\n", "Second")

    git = RealGit()
    base = git.resolve_ref(app, "refs/remotes/origin/main")
    tip = git.resolve_ref(app, "HEAD")
    assert base is not None and tip is not None

    commits = git.list_commits_between(app, base, tip)

    assert [c.subject for c in commits] == ["First", "Second"]
    assert [c.files for c in commits] == [("a.txt",), ("b.txt",)]
    assert all(len(c.hash) == 40 for c in commits)


def test_up_to_date_clone_has_nothing_to_contribute(template_and_app: tuple[Path, Path]) -> None:
    _, app = template_and_app
    ctx, repo = _ctx(app, [])

    outcome = run_triage(ctx, repo)

    assert isinstance(outcome, NothingToContribute)
    assert outcome.upstream.branch == "main"


def test_change_already_upstream_is_skipped(
    tmp_path: Path, template_and_app: tuple[Path, Path]
) -> None:
    template, app = template_and_app
    _commit(app, "shared.txt", "same change\n", "Add shared file")
    _commit(app, "other.txt", "other\n", "Add other file")

    # The template gets the identical change through a different commit
    seed = tmp_path / "seed"
    _commit(seed, "shared.txt", "same change\n", "Add shared file upstream")
    _git(seed, "push", str(template), "main:main")

    ctx, repo = _ctx(app, [SelectionEvent.SELECT_ALL, SelectionEvent.CONFIRM])

    outcome = run_triage(ctx, repo)

    assert isinstance(outcome, Contributed)
    assert len(outcome.result.skipped_empty) == 1
    assert len(outcome.result.picked) == 1
    subjects = _git(app, "log", "--format=%s", f"chuck-template/main..{BRANCH}").splitlines()
    assert subjects == ["Add other file"]


def test_conflict_leaves_partial_branch(
    tmp_path: Path, template_and_app: tuple[Path, Path]
) -> None:
    template, app = template_and_app
    c1 = _commit(app, "a.txt", "a\n", "Add a")
    c2 = _commit(app, "README.md", "# Mine\n", "Rewrite readme")
    _commit(app, "b.txt", "b\n", "Add b")

    seed = tmp_path / "seed"
    _commit(seed, "README.md", "# Theirs\n", "Rewrite readme upstream")
    _git(seed, "push", str(template), "main:main")

    ctx, repo = _ctx(app, [SelectionEvent.SELECT_ALL, SelectionEvent.CONFIRM])

    with pytest.raises(CherryPickConflict) as exc_info:
        run_triage(ctx, repo)

    assert exc_info.value.commit_hash == c2
    assert exc_info.value.applied == [c1]
    assert _git(app, "rev-parse", "--abbrev-ref", "HEAD") == BRANCH
    assert (app / "a.txt").exists()
    assert not (app / "b.txt").exists()


def test_untracked_file_blocking_checkout_is_reported(
    tmp_path: Path, template_and_app: tuple[Path, Path]
) -> None:
    template, app = template_and_app
    _commit(app, "a.txt", "a\n", "Add a")

    seed = tmp_path / "seed"
    _commit(seed, "new.txt", "from template\n", "Add new file upstream")
    _git(seed, "push", str(template), "main:main")
    (app / "new.txt").write_text("local scratch\n", encoding="utf-8")

    ctx, _ = _ctx(app, [SelectionEvent.TOGGLE, SelectionEvent.CONFIRM])

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 8, result.output
    assert isinstance(result.exception, SystemExit)
    assert f"Error: Could not create branch '{BRANCH}'" in result.output
    assert "new.txt" in result.output
    assert _git(app, "rev-parse", "--abbrev-ref", "HEAD") == "main"
    assert (app / "new.txt").read_text(encoding="utf-8") == "local scratch\n"


def test_merge_is_one_delta_entry_and_picked_against_first_parent(
    template_and_app: tuple[Path, Path],
) -> None:
    _, app = template_and_app
    _commit(app, "a.txt", "a\n", "Add a")
    _git(app, "checkout", "-b", "side")
    _commit(app, "s1.txt", "one\n", "Side one")
    _commit(app, "s2.txt", "two\n", "Side two")
    _git(app, "checkout", "main")
    _git(app, "merge", "--no-ff", "--no-edit", "-m", "Merge side", "side")

    git = RealGit()
    base = git.resolve_ref(app, "refs/remotes/origin/main")
    tip = git.resolve_ref(app, "HEAD")
    assert base is not None and tip is not None
    delta = git.list_commits_between(app, base, tip)

    assert [c.subject for c in delta] == ["Add a", "Merge side"]
    assert delta[1].is_merge
    assert delta[1].files == ("s1.txt", "s2.txt")

    # Select only the merge
    ctx, repo = _ctx(
        app, [SelectionEvent.MOVE_DOWN, SelectionEvent.TOGGLE, SelectionEvent.CONFIRM]
    )

    outcome = run_triage(ctx, repo)

    assert isinstance(outcome, Contributed)
    assert outcome.result.picked == (delta[1].hash,)
    subjects = _git(app, "log", "--format=%s", f"chuck-template/main..{BRANCH}").splitlines()
    assert subjects == ["Merge side"]
    assert (app / "s1.txt").exists()
    assert (app / "s2.txt").exists()
    assert not (app / "a.txt").exists()
