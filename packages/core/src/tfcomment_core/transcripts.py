"""Reading stage transcripts from the runner's staging directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STAGES = ("fmt", "init", "validate", "plan", "cost")


@dataclass(frozen=True)
class Transcripts:
    fmt: str = ""
    init: str = ""
    validate: str = ""
    plan: str = ""
    cost: str = ""


def transcript_path(stage: str, staging_dir: str | Path) -> Path:
    return Path(staging_dir) / f"terraform-outputs-{stage}.txt"


def read_transcript(stage: str, staging_dir: str | Path) -> str:
    """Return the captured output for ``stage``, or "" if there is none.

    A stage that never ran leaves no file behind; that is normal, not an error.
    """
    path = transcript_path(stage, staging_dir)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("No transcript for %s at %s: %s", stage, path, e)
        return ""


def read_all(staging_dir: str | Path) -> Transcripts:
    return Transcripts(**{stage: read_transcript(stage, staging_dir) for stage in STAGES})
