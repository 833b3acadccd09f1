"""edit command: replace a PR description with the review bot's summary."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console

from prflow_cli.commands.common import (
    build_provider,
    connect_repo,
    get_settings,
    no_prompt_option,
    repo_option,
    silent_option,
    validate_pr_number,
)
from prflow_core.gh.pull_request import get_pull, update_body
from prflow_core.workflow import WorkflowError, harvest_description

console = Console()

_PREVIEW_LINES = 5


@click.command("edit")
@click.argument("pr_number", callback=validate_pr_number)
@click.option(
    "--translate/--no-translate",
    default=None,
    help="Translate the summary with the AI provider. Overrides the config file.",
)
@click.option("--web", "-w", is_flag=True, help="Open the PR in the browser afterwards.")
@repo_option
@no_prompt_option
@silent_option
@click.pass_context
def edit_cmd(
    ctx,
    pr_number: int,
    translate: bool | None,
    web: bool,
    repo: str | None,
    no_prompt: bool,
    silent: bool,
):
    """Set the description of PR_NUMBER from the bot's "Summary of Changes".

    Reviews are searched before comments. The existing description is
    replaced, not merged.
    """
    console.quiet = silent
    no_prompt = no_prompt or silent
    settings = get_settings(ctx, repo=repo, translate=translate)

    this_repo, target = connect_repo(settings)
    try:
        pr = get_pull(this_repo, pr_number)
    except GithubException:
        raise click.ClickException(f"PR #{pr_number} not found in {target.slug}.")

    console.print(f"Processing PR #{pr_number}: {pr.title}", markup=False)
    console.print(f"Looking for {settings.bot_author}'s '{settings.summary_marker}'...", markup=False)

    translator = None
    if settings.translate:
        translator = build_provider(settings, console)
        if translator is None:
            console.print("[yellow][WARN] Translation skipped; the summary is used as-is.[/yellow]")

    try:
        description = harvest_description(pr, settings, translator)
    except WorkflowError as e:
        raise click.ClickException(str(e))
    except GithubException as e:
        raise click.ClickException(f"Could not read reviews for PR #{pr_number}: {e}")

    console.print("New description preview:")
    for line in description.splitlines()[:_PREVIEW_LINES]:
        console.print(f"  {line}", markup=False, highlight=False)
    console.print("  ...")

    if not no_prompt and not click.confirm(f"Replace the description of PR #{pr_number}?", default=True):
        raise click.Abort()

    try:
        update_body(pr, description)
    except GithubException as e:
        raise click.ClickException(f"Could not update PR #{pr_number}: {e}")
    console.print(f"[green]Description of PR #{pr_number} updated.[/green]")

    if web:
        click.launch(pr.html_url)
