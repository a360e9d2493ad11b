"""Tests for reading staged transcripts."""

from tfcomment_core.transcripts import Transcripts, read_all, read_transcript, transcript_path


def test_transcript_path_is_namespaced_by_stage(tmp_path):
    assert transcript_path("plan", tmp_path) == tmp_path / "terraform-outputs-plan.txt"


def test_reads_existing_transcript(tmp_path):
    (tmp_path / "terraform-outputs-init.txt").write_text("Initialized", encoding="utf-8")
    assert read_transcript("init", tmp_path) == "Initialized"


def test_missing_transcript_is_empty(tmp_path):
    assert read_transcript("cost", tmp_path) == ""


def test_missing_staging_dir_is_empty(tmp_path):
    assert read_transcript("plan", tmp_path / "does-not-exist") == ""


def test_invalid_utf8_is_replaced_not_fatal(tmp_path):
    (tmp_path / "terraform-outputs-plan.txt").write_bytes(b"Plan: 1 to add\xff\n")
    assert read_transcript("plan", tmp_path).startswith("Plan: 1 to add")


def test_read_all_collects_every_stage(tmp_path):
    (tmp_path / "terraform-outputs-validate.txt").write_text("Success!", encoding="utf-8")
    (tmp_path / "terraform-outputs-plan.txt").write_text("No changes.", encoding="utf-8")
    assert read_all(tmp_path) == Transcripts(validate="Success!", plan="No changes.")
