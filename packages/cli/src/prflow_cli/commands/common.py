"""Helpers shared by the create, edit and open commands."""

from __future__ import annotations

import dataclasses
import logging
import re

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape

from prflow_core import git
from prflow_core.config import Settings
from prflow_core.providers import get_provider
from prflow_core.providers.base import BaseProvider

logger = logging.getLogger(__name__)

_PR_NUMBER_RE = re.compile(r"^[0-9]+$")

no_prompt_option = click.option("--no-prompt", "-n", is_flag=True, help="Do not ask for any input.")
silent_option = click.option("--silent", "-s", is_flag=True, help="Suppress progress output; implies --no-prompt.")
repo_option = click.option(
    "--repo",
    default=None,
    help="Repository as [HOST/]OWNER/NAME. Defaults to the upstream remote of the current branch.",
)


def get_settings(ctx: click.Context, **overrides) -> Settings:
    settings = ctx.obj.get("settings") if ctx.obj else None
    if settings is None:
        from prflow_core.config import load_config

        settings = load_config()
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(settings, **overrides) if overrides else settings


def validate_pr_number(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    if value is None:
        return None
    if not _PR_NUMBER_RE.match(value.strip()):
        raise click.BadParameter(f"PR number must be a number, got {value!r}.")
    return int(value)


def require_git() -> None:
    if not git.git_available():
        raise click.UsageError("git is not installed or not on PATH.")


def connect_repo(settings: Settings):
    """Resolve the repository target and token, returning (repo, target)."""
    from prflow_cli.auth import resolve_github_token
    from prflow_core.gh.pull_request import get_repo
    from prflow_core.workflow import resolve_repo_target

    if not settings.repo:
        require_git()
    try:
        target = resolve_repo_target(settings)
    except git.GitError as e:
        raise click.UsageError(f"Could not determine the GitHub repository: {e}\nPass --repo OWNER/NAME.")

    token = settings.github_token or resolve_github_token(target.host)
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )

    try:
        return get_repo(target, token), target
    except GithubException as e:
        raise click.ClickException(f"Could not access {target.slug} on {target.host}: {e}")


def build_provider(settings: Settings, console: Console) -> BaseProvider | None:
    """Return the AI provider, or None when AI is unavailable (never fatal)."""
    try:
        provider = get_provider(settings)
    except ImportError as e:
        console.print(f"[yellow][WARN] {escape(str(e))}[/yellow]")
        return None
    if provider is None:
        key = "ANTHROPIC_API_KEY" if settings.provider == "anthropic" else "OPENAI_API_KEY"
        console.print(f"[dim]{key} is not set; AI assistance is disabled.[/dim]")
    return provider
