"""Output utilities for CLI commands with clear intent."""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a user-facing message to stderr.

    Diagnostics and progress go to stderr so stdout stays free for
    machine-readable output.
    """
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    """Write a result meant for scripts (e.g. the pull request URL) to stdout."""
    click.echo(message, nl=nl)
