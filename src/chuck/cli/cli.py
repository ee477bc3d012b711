import logging
import os

import click

from chuck.cli.ensure import Ensure
from chuck.cli.output import machine_output, user_output
from chuck.core.context import ChuckContext, create_context
from chuck.core.errors import ChuckError
from chuck.core.materialize import BranchResult, PushFailed, PushSkipped, PushSucceeded
from chuck.core.triage import (
    Contributed,
    NothingToContribute,
    SelectionCancelled,
    TriageOutcome,
    run_triage,
)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "CHUCK_DEBUG"


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="chuck")
@click.option("-v", "--verbose", is_flag=True, help="Log every git/gh command and decision.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Pick which local commits go back to the upstream template.

    Finds the repository this project was forked or templated from, lists
    the commits made since, lets you choose some, and pushes them as a new
    chuck/<timestamp> branch ready for a pull request.
    """
    if verbose or os.environ.get(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        Ensure.git_installed()
        ctx.obj = create_context()

    chuck_ctx: ChuckContext = ctx.obj
    repo = Ensure.in_repository(chuck_ctx)

    try:
        outcome = run_triage(chuck_ctx, repo)
    except ChuckError as e:
        Ensure.fail(e)

    _report_outcome(outcome)


def _report_outcome(outcome: TriageOutcome) -> None:
    match outcome:
        case NothingToContribute(upstream=upstream):
            user_output(
                f"🧔 Nothing to chuck: no commits since template {upstream.display_name}."
            )
        case SelectionCancelled():
            user_output("🧔 No commits chucked. Maybe next time, kiddo.")
        case Contributed(result=result, original_branch=original_branch):
            _report_branch(result, original_branch)


def _report_branch(result: BranchResult, original_branch: str | None) -> None:
    if result.skipped_empty:
        user_output(
            f"🧔 Skipped {len(result.skipped_empty)} commit(s) already in the template: "
            + ", ".join(sha[:7] for sha in result.skipped_empty)
        )

    match result.push:
        case PushSucceeded(compare_url=compare_url):
            user_output(click.style(f"🧔 Pushed {result.branch}", fg="green"))
            if compare_url is not None:
                user_output("🧔 Create pull request at:")
                machine_output(compare_url)
            user_output("🧔 Now go make that pull request, kiddo")
        case PushFailed(reason=reason, manual_command=manual_command):
            user_output(
                click.style("🧔 Push failed; the branch exists locally.", fg="yellow")
            )
            user_output(reason)
            user_output(f"Push it yourself with: {manual_command}")
        case PushSkipped(reason=reason):
            user_output(f"🧔 Nothing pushed: {reason}.")

    if original_branch is not None:
        user_output(f"🧔 Switch back with: git checkout {original_branch}")


def main() -> None:
    """CLI entry point used by the `chuck` console script."""
    cli()
