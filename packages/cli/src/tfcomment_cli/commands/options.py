"""Report context options shared by the comment and render commands.

Every option falls back to the environment variable the GitHub Actions step
exports, so in CI the commands usually run with no flags at all.
"""

from __future__ import annotations

import os

import click

from tfcomment_core.report import ReportContext, StageOutcome

_OUTCOMES = click.Choice([o.value for o in StageOutcome] + ["cancelled", ""], case_sensitive=False)

_CONTEXT_OPTIONS = [
    click.option("--environment", envvar="ENVIRONMENT", required=True, help="Terraform environment name."),
    click.option(
        "--working-directory",
        envvar="WORKING_DIRECTORY",
        default=".",
        show_default=True,
        help="Directory containing the Terraform configuration.",
    ),
    click.option("--plan-summary", envvar="PLAN_SUMMARY", default="", help="The plan's 'Plan: ...' line."),
    click.option(
        "--lock-changed/--no-lock-changed",
        envvar="LOCK_CHANGED",
        default=False,
        help="Whether terraform init modified .terraform.lock.hcl.",
    ),
    click.option("--workflow-ref", envvar="GITHUB_WORKFLOW_REF", default="", help="owner/repo/path@ref of the workflow."),
    click.option("--fmt-outcome", envvar="FMT_OUTCOME", type=_OUTCOMES, default="", help="Outcome of terraform fmt."),
    click.option("--init-outcome", envvar="INIT_OUTCOME", type=_OUTCOMES, default="", help="Outcome of terraform init."),
    click.option(
        "--validate-outcome", envvar="VALIDATE_OUTCOME", type=_OUTCOMES, default="", help="Outcome of terraform validate."
    ),
    click.option("--plan-outcome", envvar="PLAN_OUTCOME", type=_OUTCOMES, default="", help="Outcome of terraform plan."),
    click.option("--terraform-version", envvar="TERRAFORM_VERSION", default="", help="Terraform version used."),
    click.option(
        "--staging-dir",
        envvar="RUNNER_TEMP",
        default="/tmp",
        show_default=True,
        type=click.Path(file_okay=False),
        help="Directory holding terraform-outputs-<stage>.txt transcripts.",
    ),
    click.option(
        "--plan-unit",
        type=click.Choice(["lines", "chars"]),
        default=None,
        help="Bound the plan by line count (short comments) or characters (long comments). Overrides config file.",
    ),
]


def context_options(func):
    for option in reversed(_CONTEXT_OPTIONS):
        func = option(func)
    return func


def build_context(
    environment: str,
    working_directory: str,
    plan_summary: str,
    lock_changed: bool,
    workflow_ref: str,
    fmt_outcome: str,
    init_outcome: str,
    validate_outcome: str,
    plan_outcome: str,
    terraform_version: str,
    repository: str = "",
) -> ReportContext:
    """Assemble a ReportContext from option values plus the Actions run metadata."""
    return ReportContext(
        environment=environment,
        working_directory=working_directory,
        plan_summary=plan_summary or "",
        lock_changed=lock_changed,
        workflow_ref=workflow_ref or "",
        fmt_outcome=StageOutcome.parse(fmt_outcome),
        init_outcome=StageOutcome.parse(init_outcome),
        validate_outcome=StageOutcome.parse(validate_outcome),
        plan_outcome=StageOutcome.parse(plan_outcome),
        terraform_version=terraform_version or "",
        server_url=os.environ.get("GITHUB_SERVER_URL", "https://github.com"),
        repository=repository or os.environ.get("GITHUB_REPOSITORY", ""),
        run_id=os.environ.get("GITHUB_RUN_ID", ""),
        actor=os.environ.get("GITHUB_ACTOR", ""),
        event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
    )
