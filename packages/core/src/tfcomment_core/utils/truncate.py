"""Size bounding for captured command output.

CI failures are almost always explained by the last lines a tool printed, so
truncation keeps the tail and drops the head. Every call returns its own
BoundedText — there is no shared "something was truncated" flag; callers that
need to know combine the ``truncated`` fields of the pieces they render.
"""

from __future__ import annotations

from dataclasses import dataclass

NO_OUTPUT = "No output available"

_UNITS = ("lines", "chars")


@dataclass(frozen=True)
class BoundedText:
    text: str
    truncated: bool = False


def truncate(content: str | None, limit: int, unit: str = "lines") -> BoundedText:
    """Bound ``content`` to ``limit`` lines or characters, keeping the tail.

    When content is removed, a single banner line reporting how many units
    were dropped is prepended. Character mode only ever cuts on a line
    boundary: the kept portion always starts right after a newline.
    """
    if unit not in _UNITS:
        raise ValueError(f"Unknown truncation unit: {unit!r}. Choose 'lines' or 'chars'.")

    if not content or not content.strip():
        return BoundedText(NO_OUTPUT)

    if unit == "lines":
        return _truncate_lines(content, limit)
    return _truncate_chars(content, limit)


def _truncate_lines(content: str, limit: int) -> BoundedText:
    lines = content.split("\n")
    if len(lines) <= limit:
        return BoundedText(content)

    kept = lines[-limit:] if limit > 0 else []
    dropped = len(lines) - len(kept)
    banner = f"... ({dropped} lines truncated) ..."
    return BoundedText("\n".join([banner, *kept]), truncated=True)


def _truncate_chars(content: str, limit: int) -> BoundedText:
    if len(content) <= limit:
        return BoundedText(content)

    start = len(content) - max(limit, 0)
    # Mid-line start: skip forward to the beginning of the next full line.
    if start > 0 and content[start - 1] != "\n":
        newline = content.find("\n", start)
        start = len(content) if newline == -1 else newline + 1

    kept = content[start:]
    banner = f"... ({len(content) - len(kept)} characters truncated) ..."
    return BoundedText(f"{banner}\n{kept}" if kept else banner, truncated=True)
