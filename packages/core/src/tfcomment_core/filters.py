"""Noise filters for Terraform init, validate and plan transcripts.

Each filter takes the raw captured output of one pipeline stage and returns
the part a reviewer actually needs to read. They are deliberately
conservative: when a transcript doesn't have the shape a filter expects, the
filter shows more rather than less.
"""

from __future__ import annotations

import re

from tfcomment_core.utils.truncate import NO_OUTPUT, BoundedText, truncate

# Written by the init step between `terraform init` and the `-upgrade` retry.
INIT_RETRY_SEPARATOR = "--- First attempt failed, trying with -upgrade ---"

PLAN_INDICATORS = (
    "Note: Objects have changed outside of Terraform",
    "Terraform will perform the following actions:",
    "No changes. Your infrastructure matches the configuration.",
    "Planning failed. Terraform encountered an error while generating this plan.",
    "Plan:",
    "Changes to Outputs:",
    "Error:",
)

# TF_LOG style lines: "2026-02-10T20:47:12.684Z [INFO]  provider: ..."
_LOG_LINE_RE = re.compile(
    r"^\s*\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?\s*\[(?:INFO|DEBUG|TRACE|WARN|ERROR)\]"
)

# Provider SDK telemetry fields, e.g. "tf_rpc=ValidateResourceConfig @module=sdk.proto".
_DIAGNOSTIC_FIELD_RE = re.compile(
    r"(?:^|\s)(?:"
    r"diagnostic_(?:detail|severity|summary|attribute)"
    r"|tf_(?:provider_addr|resource_type|data_source_type|proto_version|req_id|rpc|attribute_path)"
    r"|@caller|@module"
    r")="
)

_CONTINUATION_RE = re.compile(r"^\s*\|")

_PROTECTED_PREFIXES = ("Warning:", "Error:", "Success!", "on ", "with ")


def filter_init(content: str | None) -> str | None:
    """Return the actionable error segment of an init transcript.

    Only output after the last retry separator counts. Within it, everything
    before the first ``Error:`` line is provider download noise. If there is
    no error at all, the untouched input is returned so nothing is hidden.
    """
    if not content or not content.strip():
        return content

    segment = content
    separator_at = content.rfind(INIT_RETRY_SEPARATOR)
    if separator_at >= 0:
        segment = content[separator_at + len(INIT_RETRY_SEPARATOR) :]

    lines = segment.split("\n")
    for i, line in enumerate(lines):
        if "Error:" in line:
            return "\n".join(lines[i:]).strip()
    return content


def _is_protected(line: str) -> bool:
    return line.lstrip().startswith(_PROTECTED_PREFIXES)


def filter_validate(content: str | None) -> str | None:
    """Strip provider log telemetry from a validate transcript.

    Human-readable diagnostics (``Warning:``/``Error:`` blocks, their
    ``on <file> line N`` / ``with <address>`` context and the final
    ``Success!`` line) always survive. Running the filter on its own output
    changes nothing.
    """
    if not content or not content.strip():
        return content

    kept: list[str] = []
    in_dropped_block = False
    for line in content.split("\n"):
        if _is_protected(line):
            kept.append(line)
            in_dropped_block = False
            continue
        if _LOG_LINE_RE.match(line) or _DIAGNOSTIC_FIELD_RE.search(line):
            in_dropped_block = True
            continue
        if in_dropped_block and _CONTINUATION_RE.match(line):
            continue
        in_dropped_block = False
        kept.append(line)

    collapsed: list[str] = []
    for line in kept:
        if not line.strip() and collapsed and not collapsed[-1].strip():
            continue
        collapsed.append(line)

    return "\n".join(collapsed).strip()


def extract_plan(content: str | None, limit: int = 500, unit: str = "lines") -> BoundedText:
    """Cut the plan preamble (refresh/state lock chatter) and bound the rest.

    The relevant section starts at the first line containing any of
    PLAN_INDICATORS. Without one there is no safe cut point, so the whole
    transcript is kept.
    """
    if not content or not content.strip() or content == "null":
        return BoundedText(NO_OUTPUT)

    lines = content.split("\n")
    start = next(
        (i for i, line in enumerate(lines) if any(indicator in line for indicator in PLAN_INDICATORS)),
        0,
    )
    return truncate("\n".join(lines[start:]), limit, unit)
