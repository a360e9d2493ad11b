"""CLI entry point for tfcomment.

Commands:
  comment  — create or update the Terraform report comment on a pull request
  render   — print the report body without posting it
  marker   — print the hidden marker used to find the comment again
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from tfcomment_cli.commands.comment import comment_cmd
from tfcomment_cli.commands.marker import marker_cmd
from tfcomment_cli.commands.render import render_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("tfcomment"),
    prog_name="tfcomment",
)
@click.option(
    "--config",
    "config_path",
    default=".tfcomment.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="TFCOMMENT_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Summarise Terraform CI output as a single pull request comment."""
    from tfcomment_core.config import load_config

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        ctx.obj["config"] = load_config(config_path)
    except ValueError as e:
        raise click.UsageError(str(e))


main.add_command(comment_cmd)
main.add_command(render_cmd)
main.add_command(marker_cmd)
