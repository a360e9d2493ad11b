"""Finding and publishing the report comment on a pull request.

Comments posted before markers existed only carry the ``## Terraform <env>``
heading. Those are still claimed once, as long as they don't already belong
to some other marker; the update then stamps our marker on them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from github import Github

from tfcomment_core.marker import MARKER_PREFIX, legacy_heading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishDecision:
    action: str  # "create" | "update"
    comment_id: int | None = None


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_issue(repo, pr_number: int):
    # PR conversation comments live on the issue side of the API.
    return repo.get_issue(pr_number)


def list_comments(issue) -> list:
    """Fetch every comment on the thread, draining all pages before returning."""
    return list(issue.get_comments())


def find_existing(comments, marker: str, environment: str | None):
    """Return the comment this run should update, or None to create a new one."""
    comments = [c for c in comments if c.body]

    for comment in comments:
        if marker in comment.body:
            return comment

    heading = legacy_heading(environment)
    for comment in comments:
        if heading in comment.body and MARKER_PREFIX not in comment.body:
            logger.debug("Claiming legacy comment %s for %s", comment.id, marker)
            return comment

    return None


def decide_publish(comments, marker: str, environment: str | None) -> PublishDecision:
    existing = find_existing(comments, marker, environment)
    if existing is None:
        return PublishDecision(action="create")
    return PublishDecision(action="update", comment_id=existing.id)


def publish_comment(issue, body: str, decision: PublishDecision):
    """Apply a PublishDecision: edit the matched comment or create a new one."""
    if decision.action == "update":
        comment = issue.get_comment(decision.comment_id)
        comment.edit(body)
        return comment
    return issue.create_comment(body)


def pr_number_from_event(event_path: str | None) -> int | None:
    """Read the pull request number from a GitHub Actions event payload.

    Returns None when the file is missing, unreadable, or not a PR event.
    """
    if not event_path:
        return None
    try:
        with open(event_path, encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug("Could not read event payload %s: %s", event_path, e)
        return None
    if not isinstance(event, dict):
        return None

    number = (event.get("pull_request") or {}).get("number") or (event.get("issue") or {}).get("number")
    return number if isinstance(number, int) else None
