"""marker command — print the hidden comment marker for a context."""

from __future__ import annotations

import click

from tfcomment_core.marker import build_marker


@click.command("marker")
@click.option("--environment", envvar="ENVIRONMENT", required=True, help="Terraform environment name.")
@click.option("--working-directory", envvar="WORKING_DIRECTORY", default=".", show_default=True)
@click.option("--workflow-ref", envvar="GITHUB_WORKFLOW_REF", default="", help="owner/repo/path@ref of the workflow.")
def marker_cmd(environment: str, working_directory: str, workflow_ref: str):
    """Print the marker that identifies this run's comment on a pull request."""
    click.echo(build_marker(environment, working_directory, workflow_ref))
