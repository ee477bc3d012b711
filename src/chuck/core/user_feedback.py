"""User-facing diagnostic output."""

from abc import ABC, abstractmethod

import click

from chuck.cli.output import user_output


class UserFeedback(ABC):
    """Provides user-facing progress and diagnostic output.

    Usage:
        ctx.feedback.info("🧔 Fetching template...")
        result = perform_operation()
        ctx.feedback.success("🧔 Branch pushed successfully!")
    """

    @abstractmethod
    def info(self, message: str) -> None:
        """Show informational message."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Show success message."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Show a message about a degraded but non-fatal step."""


class InteractiveFeedback(UserFeedback):
    """Feedback written to stderr with click styling."""

    def info(self, message: str) -> None:
        user_output(message)

    def success(self, message: str) -> None:
        user_output(click.style(message, fg="green"))

    def warning(self, message: str) -> None:
        user_output(click.style(message, fg="yellow"))
