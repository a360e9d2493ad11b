"""Assembly of the pull request comment from filtered stage output.

build_report is pure: transcripts and context in, markdown out. The comment's
shape depends on how far the pipeline got. If init failed, nothing after it
is rendered. If validate failed, the plan is not rendered. Only the pieces
that end up in the body can trigger the "output truncated" notice.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tfcomment_core.config import DEFAULT_CONFIG, plan_bound
from tfcomment_core.filters import extract_plan, filter_init, filter_validate
from tfcomment_core.marker import build_marker
from tfcomment_core.resources import build_summary, extract_changes
from tfcomment_core.transcripts import Transcripts
from tfcomment_core.utils.truncate import BoundedText, truncate


class StageOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"

    @classmethod
    def parse(cls, value) -> StageOutcome:
        """Map a step outcome string to a StageOutcome.

        Anything other than success/failure (empty, "cancelled", unset) is
        treated as skipped.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text == cls.SUCCESS.value:
            return cls.SUCCESS
        if text == cls.FAILURE.value:
            return cls.FAILURE
        return cls.SKIPPED


_GLYPH = {
    StageOutcome.SUCCESS: "✅",
    StageOutcome.FAILURE: "❌",
    StageOutcome.SKIPPED: "⏭️",
}
_WARNING_GLYPH = "⚠️"


@dataclass(frozen=True)
class ReportContext:
    environment: str
    working_directory: str = "."
    plan_summary: str = ""
    lock_changed: bool = False
    workflow_ref: str = ""
    fmt_outcome: StageOutcome = StageOutcome.SKIPPED
    init_outcome: StageOutcome = StageOutcome.SKIPPED
    validate_outcome: StageOutcome = StageOutcome.SKIPPED
    plan_outcome: StageOutcome = StageOutcome.SKIPPED
    terraform_version: str = ""
    server_url: str = "https://github.com"
    repository: str = ""
    run_id: str = ""
    actor: str = ""
    event_name: str = ""

    @property
    def logs_url(self) -> str | None:
        if not (self.server_url and self.repository and self.run_id):
            return None
        return f"{self.server_url.rstrip('/')}/{self.repository}/actions/runs/{self.run_id}"


@dataclass(frozen=True)
class ReportComment:
    body: str
    marker: str
    truncated: bool = False


def _details(summary: str, text: str, fence: str = "", expanded: bool = False) -> str:
    tag = "<details open>" if expanded else "<details>"
    return f"{tag}<summary>{summary}</summary>\n\n```{fence}\n{text}\n```\n\n</details>"


def _header_summary(plan_summary: str) -> str:
    if plan_summary and "to add" in plan_summary:
        return f"> 📊 **{plan_summary.strip()}**"
    if plan_summary and "No changes" in plan_summary:
        return "> ✨ **No changes.** Your infrastructure matches the configuration."
    return ""


def _lock_warning(working_directory: str) -> str:
    return (
        "> ⚠️ **Lock file outdated** - Run locally:\n"
        "> ```bash\n"
        f"> cd {working_directory} && terraform init -upgrade && git add .terraform.lock.hcl"
        ' && git commit -m "chore: update terraform lock"\n'
        "> ```"
    )


def _status_table(ctx: ReportContext, validate_warnings: bool) -> str:
    fmt = _WARNING_GLYPH if ctx.fmt_outcome is StageOutcome.FAILURE else _GLYPH[ctx.fmt_outcome]
    init = _GLYPH[ctx.init_outcome]

    if ctx.init_outcome is StageOutcome.FAILURE:
        validate = plan = _GLYPH[StageOutcome.SKIPPED]
    else:
        if ctx.validate_outcome is StageOutcome.SUCCESS and validate_warnings:
            validate = _WARNING_GLYPH
        else:
            validate = _GLYPH[ctx.validate_outcome]
        if ctx.validate_outcome is StageOutcome.FAILURE:
            plan = _GLYPH[StageOutcome.SKIPPED]
        else:
            plan = _GLYPH[ctx.plan_outcome]

    lock = _WARNING_GLYPH if ctx.lock_changed else _GLYPH[StageOutcome.SUCCESS]
    return (
        "| Format | Init | Validate | Plan | Lock |\n"
        "|:------:|:----:|:--------:|:----:|:----:|\n"
        f"| {fmt} | {init} | {validate} | {plan} | {lock} |"
    )


def _cost_section(cost: str, max_lines: int) -> BoundedText | None:
    if not cost or not cost.strip() or "Cost estimation failed" in cost:
        return None
    return truncate(cost, max_lines)


def _footer(ctx: ReportContext) -> str:
    run = []
    if ctx.actor:
        run.append(f"Pushed by: @{ctx.actor}")
    if ctx.event_name:
        run.append(f"Action: `{ctx.event_name}`")

    parts = []
    if ctx.terraform_version:
        parts.append(f"Terraform v{ctx.terraform_version.lstrip('v')}")
    if run:
        parts.append(", ".join(run))
    return f"*{' · '.join(parts)}*" if parts else ""


def _truncation_notice(ctx: ReportContext) -> str:
    url = ctx.logs_url
    if url:
        return f"**⚠️ Output truncated due to length. [View full logs]({url}).**"
    return "**⚠️ Output truncated due to length. See the workflow run logs for the full output.**"


def build_report(transcripts: Transcripts, ctx: ReportContext, config: dict | None = None) -> ReportComment:
    """Compose the full comment body for one run."""
    config = {**DEFAULT_CONFIG, **(config or {})}
    marker = build_marker(ctx.environment, ctx.working_directory, ctx.workflow_ref)

    validate_text = filter_validate(transcripts.validate) or ""
    validate_warnings = "Warning:" in validate_text

    # Only what ends up in the body counts towards the truncation notice.
    rendered: list[BoundedText] = []
    sections: list[str] = []
    resource_summary = ""

    if ctx.init_outcome is StageOutcome.FAILURE:
        init = truncate(filter_init(transcripts.init), config["init_max_lines"])
        rendered.append(init)
        sections.append(_details("❌ Init Failed - Show Details", init.text, expanded=True))
        sections.append("> ❌ **Terraform init failed!** Fix the errors above before merging.")
    elif ctx.validate_outcome is StageOutcome.FAILURE:
        validate = truncate(validate_text, config["validate_max_lines"])
        rendered.append(validate)
        sections.append(_details("❌ Validation Failed - Show Details", validate.text, expanded=True))
        sections.append("> ❌ **Terraform validation failed!** Fix the errors above before merging.")
    else:
        if validate_warnings:
            validate = truncate(validate_text, config["validate_max_lines"])
            rendered.append(validate)
            sections.append(_details("⚠️ Validation Output", validate.text))

        limit, unit = plan_bound(config)
        if ctx.plan_outcome is StageOutcome.SUCCESS:
            plan = extract_plan(transcripts.plan, limit, unit)
            rendered.append(plan)
            resource_summary = build_summary(extract_changes(transcripts.plan)).strip()
            sections.append(_details("Show Plan", plan.text, fence="terraform"))

            cost = _cost_section(transcripts.cost, config["cost_max_lines"])
            if cost is not None:
                rendered.append(cost)
                sections.append("#### Cost Estimation 💰\n\n" + _details("Show Cost Breakdown", cost.text))
        elif ctx.plan_outcome is StageOutcome.FAILURE:
            plan = extract_plan(transcripts.plan, limit, unit)
            rendered.append(plan)
            sections.append(_details("❌ Plan Failed - Show Details", plan.text, expanded=True))
            sections.append("> ❌ **Terraform plan failed!** Fix the errors above before merging.")
        else:
            sections.append("> ⏭️ Plan was skipped.")

    blocks = [f"{marker}\n## Terraform {ctx.environment}"]
    header = _header_summary(ctx.plan_summary)
    if header:
        blocks.append(header)
    if ctx.lock_changed:
        blocks.append(_lock_warning(ctx.working_directory))
    if resource_summary:
        blocks.append(resource_summary)
    blocks.append(_status_table(ctx, validate_warnings))
    if ctx.fmt_outcome is StageOutcome.FAILURE:
        blocks.append("> ⚠️ Formatting issues found (non-blocking). Run `terraform fmt -recursive` locally.")
    blocks.extend(sections)

    footer = _footer(ctx)
    if footer:
        blocks.append(footer)

    truncated = any(piece.truncated for piece in rendered)
    if truncated:
        blocks.append(_truncation_notice(ctx))

    return ReportComment(body="\n\n".join(blocks), marker=marker, truncated=truncated)
