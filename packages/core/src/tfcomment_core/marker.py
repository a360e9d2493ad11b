"""Comment identity markers.

Every report carries a hidden HTML marker derived from (workflow, environment,
working directory). On the next run the marker is how we find our own comment
again and edit it instead of stacking up new ones.
"""

from __future__ import annotations

from urllib.parse import quote

MARKER_PREFIX = "<!-- tfcomment:"
_MARKER_SUFFIX = " -->"


def workflow_path(workflow_ref: str | None) -> str:
    """Reduce ``owner/repo/.github/workflows/x.yml@refs/...`` to the in-repo path.

    A ref that is only ``owner/repo@...`` carries no workflow path and yields "".
    """
    if not workflow_ref:
        return ""
    path = workflow_ref.split("@", 1)[0].strip()
    segments = path.split("/")
    if len(segments) >= 2:
        return "/".join(segments[2:])
    return path


def _encode(value: str | None) -> str:
    # Percent-encoding keeps spaces, "=" and ">" out of the values, so one
    # marker can never be a prefix or substring of another.
    return quote(value or "", safe="/")


def build_marker(environment: str | None, working_directory: str | None, workflow_ref: str | None) -> str:
    return (
        f"{MARKER_PREFIX} workflow={_encode(workflow_path(workflow_ref))}"
        f" env={_encode(environment)} dir={_encode(working_directory)}{_MARKER_SUFFIX}"
    )


def legacy_heading(environment: str | None) -> str:
    # Trailing newline so "prod" doesn't match "## Terraform prod-eu".
    return f"## Terraform {environment or ''}\n"
