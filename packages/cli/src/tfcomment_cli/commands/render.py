"""render command — build the report without touching GitHub."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from tfcomment_cli.commands.options import build_context, context_options
from tfcomment_core.commenter import render_comment

console = Console()


@click.command("render")
@context_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the comment body to this file instead of stdout.",
)
@click.pass_context
def render_cmd(ctx, staging_dir: str, plan_unit: str | None, output: str | None, **values):
    """Render the report comment body from staged transcripts.

    Useful for previewing locally or for handing the body to another
    publishing step.
    """
    config = dict(ctx.obj["config"]) if ctx.obj else {}
    if plan_unit:
        config["plan_truncate_unit"] = plan_unit

    report = render_comment(build_context(**values), config, staging_dir)

    if output:
        Path(output).write_text(report.body, encoding="utf-8")
        console.print(f"[green]Wrote comment body to {output}.[/green]")
    else:
        click.echo(report.body)
