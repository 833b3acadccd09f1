"""CLI entry point for prflow.

Commands:
  create  open a PR with a resolved conventional-commit title and label
  edit    replace a PR description with the review bot's summary
  open    open a PR in the browser
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from prflow_cli.commands.create import create_cmd
from prflow_cli.commands.edit import edit_cmd
from prflow_cli.commands.open import open_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prflow"),
    prog_name="prflow",
)
@click.option(
    "--config",
    "config_path",
    default=".prflow.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRFLOW_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Create and maintain GitHub pull requests from your commit history."""
    from prflow_core.config import ConfigError, load_config

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(str(e))


main.add_command(create_cmd)
main.add_command(edit_cmd)
main.add_command(open_cmd)
