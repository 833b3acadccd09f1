"""open command: show a PR in the browser."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console

from prflow_cli.commands.common import connect_repo, get_settings, repo_option, validate_pr_number
from prflow_core import git
from prflow_core.gh.pull_request import find_pulls_for_branch, get_pull

console = Console()


@click.command("open")
@click.argument("pr_number", required=False, callback=validate_pr_number)
@repo_option
@click.pass_context
def open_cmd(ctx, pr_number: int | None, repo: str | None):
    """Open PR_NUMBER, or the open PR for the current branch, in the browser."""
    settings = get_settings(ctx, repo=repo)
    this_repo, target = connect_repo(settings)

    try:
        if pr_number is not None:
            pr = get_pull(this_repo, pr_number)
        else:
            try:
                branch = git.current_branch()
            except git.GitError as e:
                raise click.ClickException(f"Could not determine the current branch: {e}")
            pulls = find_pulls_for_branch(this_repo, target.owner, branch)
            if not pulls:
                raise click.ClickException(f"No open PR found for branch '{branch}'. Pass a PR number.")
            pr = pulls[0]
    except GithubException as e:
        raise click.ClickException(f"Could not look up the PR in {target.slug}: {e}")

    console.print(f"#{pr.number} {pr.title}", markup=False)
    console.print(pr.html_url, markup=False)
    click.launch(pr.html_url)
