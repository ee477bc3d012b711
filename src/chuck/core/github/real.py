"""Production implementation of GitHub operations."""

import json
import logging
import shutil
from pathlib import Path

from chuck.core.github.abc import GitHub
from chuck.core.github.parsing import parse_gh_auth_status_output, parse_repository_info
from chuck.core.github.types import RepoSlug, RepositoryInfo
from chuck.core.subprocess import execute_gh_command, run_subprocess_with_context

logger = logging.getLogger(__name__)


class RealGitHub(GitHub):
    """Production implementation using gh CLI.

    All GitHub operations execute actual gh commands via subprocess.
    """

    def is_installed(self) -> bool:
        """Check whether gh is on PATH."""
        return shutil.which("gh") is not None

    def check_auth_status(self) -> tuple[bool, str | None, str | None]:
        """Check GitHub CLI authentication status.

        Runs `gh auth status` and parses the output to determine authentication status.
        """
        result = run_subprocess_with_context(
            ["gh", "auth", "status"],
            operation_context="check GitHub authentication status",
            check=False,
        )

        # gh auth status returns non-zero if not authenticated
        if result.returncode != 0:
            return (False, None, None)

        output = result.stdout + result.stderr
        return parse_gh_auth_status_output(output)

    def get_repository_info(self, repo_root: Path) -> RepositoryInfo | None:
        """Get fork metadata for the current repository.

        Note: Uses try/except as an acceptable error boundary for handling gh CLI
        failures. gh decides which remote maps to a GitHub repository; we cannot
        check that a priori without duplicating gh's logic.
        """
        try:
            stdout = execute_gh_command(
                ["gh", "repo", "view", "--json", "owner,name,url,isFork,parent"],
                repo_root,
            )
            return parse_repository_info(stdout, host="github.com")
        except (RuntimeError, json.JSONDecodeError, KeyError, TypeError) as e:
            logger.debug("gh repo view failed: %s", e)
            return None

    def get_default_branch(self, repo_root: Path, slug: RepoSlug) -> str | None:
        """Get the default branch of a repository via gh repo view."""
        try:
            stdout = execute_gh_command(
                [
                    "gh",
                    "repo",
                    "view",
                    f"{slug.host}/{slug.full_name}",
                    "--json",
                    "defaultBranchRef",
                    "--jq",
                    ".defaultBranchRef.name",
                ],
                repo_root,
            )
        except RuntimeError as e:
            logger.debug("gh default branch lookup failed: %s", e)
            return None

        branch = stdout.strip()
        return branch or None
