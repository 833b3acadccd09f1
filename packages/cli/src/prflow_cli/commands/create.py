"""create command: open a PR from the current branch."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape

from prflow_cli.commands.common import (
    build_provider,
    connect_repo,
    get_settings,
    no_prompt_option,
    repo_option,
    require_git,
    silent_option,
)
from prflow_core import git
from prflow_core.ai import suggest_title
from prflow_core.config import ConfigError
from prflow_core.labels import load_label_mapping
from prflow_core.title import build_edit_seed
from prflow_core.workflow import WorkflowError, build_draft, gather_branch_context, submit_draft

console = Console()


@click.command("create")
@click.option("--base", "-b", default=None, help="Target branch. Defaults to base_branch in the config (main).")
@click.option("--head", "-H", default=None, help="Branch to open the PR from. Defaults to the current branch.")
@click.option("--draft", is_flag=True, help="Open the PR as a draft.")
@click.option("--no-push", is_flag=True, help="Do not push the head branch before creating the PR.")
@repo_option
@no_prompt_option
@silent_option
@click.pass_context
def create_cmd(
    ctx,
    base: str | None,
    head: str | None,
    draft: bool,
    no_push: bool,
    repo: str | None,
    no_prompt: bool,
    silent: bool,
):
    """Create a pull request with a generated title and label.

    The title comes from a manual edit, an AI suggestion or the latest commit
    subject, in that order. The label is picked from the type→label mapping
    in .pr-labels (or the built-in defaults) and created if missing.
    """
    console.quiet = silent
    no_prompt = no_prompt or silent
    settings = get_settings(ctx, repo=repo)

    require_git()
    try:
        mapping = load_label_mapping(settings)
    except ConfigError as e:
        raise click.UsageError(str(e))

    try:
        branch = gather_branch_context(settings, head=head, base=base)
    except WorkflowError as e:
        raise click.ClickException(str(e))

    console.print(f"[cyan][INFO] Current branch: {branch.head} => target branch: {branch.base}[/cyan]")
    console.print(f"Commits on {branch.head} ({len(branch.commits)}):")
    for commit in branch.commits:
        console.print(f"  [dim]{commit.sha}[/dim] {escape(commit.subject)}", highlight=False)
    issue = f", issue #{branch.issue_number}" if branch.issue_number is not None else ""
    console.print(f"Change type: [bold]{branch.change_type}[/bold]{issue}")

    ai_suggestion = None
    provider = build_provider(settings, console)
    if provider is not None:
        console.print(f"\nGenerating a title suggestion with {provider.name}...")
        ai_suggestion = suggest_title(provider, branch.head, branch.subjects)
        if ai_suggestion:
            console.print(f"AI suggested title: [bold]{escape(ai_suggestion)}[/bold]")
        else:
            console.print("[yellow][WARN] No usable title suggestion; using the commit history instead.[/yellow]")

    try:
        pr_draft = build_draft(branch, mapping, ai_suggestion)
        console.print(f"\nProposed title: [bold]{escape(pr_draft.title)}[/bold]")

        if not no_prompt and click.confirm("Edit the PR title and body manually?", default=False):
            seed = build_edit_seed(pr_draft.title, branch.change_type, branch.issue_number)
            edited = click.edit(seed, extension=".md", require_save=False)
            if edited is not None:
                pr_draft = build_draft(branch, mapping, ai_suggestion, edited)
    except WorkflowError as e:
        raise click.ClickException(str(e))

    console.print(f"PR title: {pr_draft.title}", markup=False)
    console.print(f"Title source: {pr_draft.source}", markup=False)
    console.print(f"PR label: {pr_draft.label}", markup=False)
    if pr_draft.body:
        console.print(f"PR body:\n{pr_draft.body}", markup=False)

    this_repo, target = connect_repo(settings)

    if not no_push:
        console.print(f"Pushing {branch.head} to {settings.remote}...")
        try:
            git.push_branch(settings.remote, branch.head)
        except git.GitError as e:
            raise click.ClickException(f"Could not push {branch.head}: {e}")

    console.print(f"Creating PR from {branch.head} to {branch.base} on {target.slug}...")
    try:
        pr, label_ok = submit_draft(this_repo, settings, branch, pr_draft, draft_pr=draft)
    except GithubException as e:
        raise click.ClickException(f"Could not create the pull request: {e}")

    if not label_ok:
        console.print(f"[yellow][WARN] Could not create label '{escape(pr_draft.label)}'.[/yellow]")
    console.print(f"[green]PR created: {pr.html_url}[/green]")
    console.print(f"[green]PR number: {pr.number}[/green]")
