"""comment command — publish the Terraform report on a pull request."""

from __future__ import annotations

import os

import click
from github import GithubException
from rich.console import Console

from tfcomment_cli.commands.options import build_context, context_options
from tfcomment_core.commenter import run_comment
from tfcomment_core.gh.comments import get_repo, pr_number_from_event

console = Console()


@click.command("comment")
@click.option(
    "--repo",
    envvar="GITHUB_REPOSITORY",
    required=True,
    help="GitHub repository in owner/name format.",
)
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Defaults to the PR in the Actions event payload.",
)
@context_options
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the comment without posting to GitHub.",
)
@click.pass_context
def comment_cmd(ctx, repo: str, pr_number: int | None, staging_dir: str, plan_unit: str | None, shadow: bool, **values):
    """Create or update the Terraform report comment on a pull request.

    Reads terraform-outputs-<stage>.txt transcripts from the staging directory,
    builds the report, and edits the comment a previous run left for the same
    workflow, environment and working directory (or creates one).

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token with pull-requests: write (or use gh CLI)
    """
    from tfcomment_cli.auth import resolve_github_token

    config = dict(ctx.obj["config"]) if ctx.obj else {}
    if plan_unit:
        config["plan_truncate_unit"] = plan_unit

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    if pr_number is None:
        pr_number = pr_number_from_event(os.environ.get("GITHUB_EVENT_PATH"))
    if pr_number is None:
        raise click.UsageError("No pull request number. Pass --pr or run from a pull_request event.")

    report_ctx = build_context(repository=repo, **values)

    try:
        this_repo = get_repo(repo, token=token)
        summary = run_comment(
            repo=repo,
            pr_number=pr_number,
            ctx=report_ctx,
            config=config,
            staging_dir=staging_dir,
            shadow=shadow,
            repo_obj=this_repo,
        )
    except (ValueError, GithubException) as e:
        raise click.ClickException(str(e))

    if summary.truncated:
        console.print("[yellow]Some output was truncated; the comment links to the full logs.[/yellow]")
