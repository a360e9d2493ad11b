"""Resource change extraction from human-readable plan output."""

from __future__ import annotations

import re
from dataclasses import dataclass

MAX_RESOURCE_LINES = 20

# "  # module.svc.aws_ecs_service.ecs will be updated in-place"
# "  # aws_instance.disk must be replaced"
_RESOURCE_LINE_RE = re.compile(r"^\s*#\s+(.+)\s+(will be|must be)\s+(.+)$")

_CATEGORIES = (
    ("created", "🟢 Will be Created"),
    ("updated", "🔄 Will be Updated"),
    ("deleted", "🔴 Will be Deleted"),
    ("replaced", "⚠️ Will be Replaced"),
)


@dataclass(frozen=True)
class ResourceChangeSet:
    created: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    replaced: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.created or self.updated or self.deleted or self.replaced)


def _categorize(action: str) -> str | None:
    if action == "created":
        return "created"
    if action == "updated in-place":
        return "updated"
    if action == "destroyed":
        return "deleted"
    if "replaced" in action:
        return "replaced"
    return None


def extract_changes(content: str | None) -> ResourceChangeSet:
    """Parse ``# <address> will be <action>`` headers into categories.

    This is best-effort scraping of Terraform's prose, not a plan parser:
    anything that doesn't match the header shape is ignored, and an address
    is only recorded the first time it is categorized.
    """
    if not content or not content.strip():
        return ResourceChangeSet()

    found: dict[str, list[str]] = {key: [] for key, _ in _CATEGORIES}
    seen: set[str] = set()
    for line in content.split("\n"):
        match = _RESOURCE_LINE_RE.match(line)
        if not match:
            continue
        address = match.group(1).strip()
        category = _categorize(match.group(3).strip())
        if category is None or address in seen:
            continue
        seen.add(address)
        found[category].append(address)

    return ResourceChangeSet(**{key: tuple(items) for key, items in found.items()})


def build_summary(changes: ResourceChangeSet) -> str:
    """Render a change set as markdown, one bold-labelled list per category.

    Returns an empty string when nothing changes so callers can drop the
    section entirely.
    """
    if changes.is_empty():
        return ""

    sections = []
    for key, label in _CATEGORIES:
        items = getattr(changes, key)
        if not items:
            continue
        lines = [f"- `{address}`" for address in items[:MAX_RESOURCE_LINES]]
        if len(items) > MAX_RESOURCE_LINES:
            lines.append(f"- *... and {len(items) - MAX_RESOURCE_LINES} more*")
        sections.append(f"**{label}**\n" + "\n".join(lines))

    return "\n" + "\n\n".join(sections) + "\n"
