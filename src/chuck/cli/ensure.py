"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in the CLI
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

import shutil
from typing import TYPE_CHECKING, NoReturn

import click

from chuck.cli.output import user_output
from chuck.core.errors import ChuckError, ToolingMissingOrUnauthenticated
from chuck.core.repo_discovery import NoRepoSentinel, RepoContext

if TYPE_CHECKING:
    from chuck.core.context import ChuckContext


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str, *, exit_code: int = 1) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.
            exit_code: Process exit code to use on failure

        Raises:
            SystemExit: If condition is false
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(exit_code)

    @staticmethod
    def git_installed() -> None:
        """Ensure git is installed and available on PATH.

        Raises:
            SystemExit: If git is not found on PATH
        """
        Ensure.invariant(
            shutil.which("git") is not None,
            "git is not installed or not on PATH\n\nInstall it from: https://git-scm.com/",
            exit_code=ToolingMissingOrUnauthenticated.exit_code,
        )

    @staticmethod
    def in_repository(ctx: "ChuckContext") -> RepoContext:
        """Ensure chuck was started inside a git repository.

        Returns:
            The discovered repository (narrowed from RepoContext | NoRepoSentinel)

        Raises:
            SystemExit: If the current directory is not inside a repository
        """
        if isinstance(ctx.repo, NoRepoSentinel):
            user_output(click.style("Error: ", fg="red") + ctx.repo.message)
            raise SystemExit(1)
        return ctx.repo

    @staticmethod
    def fail(error: ChuckError) -> NoReturn:
        """Report a ChuckError and exit with its exit code."""
        user_output(click.style("Error: ", fg="red") + error.message)
        raise SystemExit(error.exit_code)
