"""Core comment pipeline: transcripts -> report -> create-or-update on the PR."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from github import GithubException
from rich.console import Console
from rich.markdown import Markdown

from tfcomment_core.gh.comments import decide_publish, get_issue, get_repo, list_comments, publish_comment
from tfcomment_core.report import ReportComment, ReportContext, build_report
from tfcomment_core.transcripts import read_all

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class CommentSummary:
    """What run_comment did. ``action`` is "create", "update", or "shadow"."""

    repo: str
    pr_number: int
    action: str
    marker: str
    comment_id: int | None = None
    truncated: bool = False


def render_comment(ctx: ReportContext, config: dict, staging_dir: str | Path) -> ReportComment:
    """Read all stage transcripts from ``staging_dir`` and build the report."""
    transcripts = read_all(staging_dir)
    return build_report(transcripts, ctx, config)


def print_shadow_comment(report: ReportComment, decision_action: str) -> None:
    """Print the comment to the terminal instead of posting it."""
    console.print(f"\n[bold]Shadow run — comment would be {decision_action}d (not posted)[/bold]\n")
    console.print(Markdown(report.body))


def run_comment(
    repo: str,
    pr_number: int,
    ctx: ReportContext,
    config: dict,
    staging_dir: str | Path,
    shadow: bool = False,
    repo_obj=None,
) -> CommentSummary:
    """Build the report for this run and publish it to the pull request.

    Existing comments are listed in full before matching, then exactly one
    create or update call is made. Two runs racing on the same PR can both
    see "no comment yet" and both create one; nothing here prevents that.
    """
    report = render_comment(ctx, config, staging_dir)
    if report.truncated:
        logger.info("Report for %s was truncated to fit the comment", ctx.environment)

    this_repo = repo_obj if repo_obj is not None else get_repo(repo, token=config["github_token"])

    try:
        issue = get_issue(this_repo, pr_number)
    except GithubException:
        raise ValueError(f"PR #{pr_number} not found in {repo}.")

    comments = list_comments(issue)
    decision = decide_publish(comments, report.marker, ctx.environment)
    logger.debug("Matched %d existing comment(s); decision: %s", len(comments), decision)

    if shadow:
        print_shadow_comment(report, decision.action)
        return CommentSummary(
            repo=repo,
            pr_number=pr_number,
            action="shadow",
            marker=report.marker,
            comment_id=decision.comment_id,
            truncated=report.truncated,
        )

    posted = publish_comment(issue, report.body, decision)
    if decision.action == "update":
        console.print(f"[green]Updated comment {decision.comment_id} on {repo}#{pr_number}.[/green]")
    else:
        console.print(f"[green]Created comment on {repo}#{pr_number}.[/green]")

    return CommentSummary(
        repo=repo,
        pr_number=pr_number,
        action=decision.action,
        marker=report.marker,
        comment_id=getattr(posted, "id", decision.comment_id),
        truncated=report.truncated,
    )
