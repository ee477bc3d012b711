"""Tests for remote URL and gh output parsing."""

import json

import pytest

from chuck.core.github.parsing import (
    canonical_remote_url,
    parse_gh_auth_status_output,
    parse_repo_url,
    parse_repository_info,
)
from chuck.core.github.types import RepoSlug

TEMPLATE = RepoSlug(host="github.com", owner="acme", name="template")


@pytest.mark.parametrize(
    "url",
    [
        "git@github.com:acme/template.git",
        "git@github.com:acme/template",
        "ssh://git@github.com/acme/template.git",
        "https://github.com/acme/template.git",
        "https://github.com/acme/template",
        "https://GitHub.com/acme/template/",
    ],
)
def test_all_spellings_parse_to_same_slug(url: str) -> None:
    assert parse_repo_url(url) == TEMPLATE


def test_unrecognized_url_returns_none() -> None:
    assert parse_repo_url("/srv/git/template") is None


def test_canonical_url_rejects_unparseable_url() -> None:
    assert canonical_remote_url("not a url") is None


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://github.com/acme/template", "https://github.com/acme/template.git"),
        ("https://github.com/acme/template/", "https://github.com/acme/template.git"),
        ("git@github.com:acme/template", "git@github.com:acme/template.git"),
        ("git@github.com:acme/template.git", "git@github.com:acme/template.git"),
        ("deploy@git.example.com:acme/tmpl.git", "deploy@git.example.com:acme/tmpl.git"),
        (
            "ssh://git@git.example.com:2222/acme/tmpl.git",
            "ssh://git@git.example.com:2222/acme/tmpl.git",
        ),
        (
            "ssh://git@git.example.com:2222/acme/tmpl",
            "ssh://git@git.example.com:2222/acme/tmpl.git",
        ),
    ],
)
def test_canonical_url_keeps_transport_user_and_port(url: str, expected: str) -> None:
    assert canonical_remote_url(url) == expected


def test_compare_url() -> None:
    assert TEMPLATE.compare_url("main", "chuck/20240315-143022") == (
        "https://github.com/acme/template/compare/main...chuck/20240315-143022?expand=1"
    )


def test_parse_repository_info_for_fork() -> None:
    stdout = json.dumps(
        {
            "owner": {"login": "me"},
            "name": "app",
            "url": "https://github.com/me/app",
            "isFork": True,
            "parent": {"owner": {"login": "acme"}, "name": "template"},
        }
    )

    info = parse_repository_info(stdout, "github.com")

    assert info.is_fork
    assert info.slug == RepoSlug(host="github.com", owner="me", name="app")
    assert info.parent == TEMPLATE


def test_parse_repository_info_for_non_fork() -> None:
    stdout = json.dumps(
        {"owner": {"login": "me"}, "name": "app", "url": "", "isFork": False, "parent": None}
    )

    info = parse_repository_info(stdout, "github.com")

    assert not info.is_fork
    assert info.parent is None


@pytest.mark.parametrize(
    ("output", "expected"),
    [
        (
            "github.com\n  ✓ Logged in to github.com account octocat (keyring)\n",
            (True, "octocat", "github.com"),
        ),
        (
            "github.com\n  ✓ Logged in to github.com as octocat (oauth_token)\n",
            (True, "octocat", "github.com"),
        ),
        ("You are not logged into any GitHub hosts. Run gh auth login", (False, None, None)),
    ],
)
def test_parse_gh_auth_status_output(
    output: str, expected: tuple[bool, str | None, str | None]
) -> None:
    assert parse_gh_auth_status_output(output) == expected


def test_parse_repository_info_tolerates_null_url() -> None:
    stdout = json.dumps(
        {"owner": {"login": "me"}, "name": "app", "url": None, "isFork": False, "parent": None}
    )

    info = parse_repository_info(stdout, "github.enterprise.example")

    assert info.slug == RepoSlug(host="github.enterprise.example", owner="me", name="app")
