"""Tests for tail-preserving truncation."""

import pytest

from tfcomment_core.utils.truncate import NO_OUTPUT, BoundedText, truncate


def _numbered(count: int, prefix: str = "line") -> str:
    return "\n".join(f"{prefix}{i}" for i in range(count))


class TestEmptyInput:
    @pytest.mark.parametrize("content", [None, "", "   ", "\n\n\t"])
    def test_returns_no_output_sentinel(self, content):
        assert truncate(content, 10) == BoundedText(NO_OUTPUT, False)

    def test_sentinel_in_chars_mode(self):
        assert truncate("", 10, "chars") == BoundedText(NO_OUTPUT, False)


class TestLineMode:
    def test_returns_content_as_is_when_under_limit(self):
        content = "line1\nline2\nline3"
        result = truncate(content, 10)
        assert result.text == content
        assert result.truncated is False

    def test_exactly_at_limit_is_not_truncated(self):
        content = _numbered(5)
        assert truncate(content, 5) == BoundedText(content, False)

    def test_truncates_content_when_over_limit(self):
        result = truncate(_numbered(20), 5)
        assert result.truncated is True
        assert "15 lines truncated" in result.text
        assert "line19" in result.text
        assert "line0\n" not in result.text

    def test_keeps_only_the_tail(self):
        result = truncate(_numbered(20), 3)
        assert result.text.split("\n")[1:] == ["line17", "line18", "line19"]

    @pytest.mark.parametrize("limit", [1, 2, 7, 49])
    def test_at_most_limit_content_lines_plus_banner(self, limit):
        result = truncate(_numbered(50), limit)
        lines = result.text.split("\n")
        assert lines[0].startswith("... (")
        assert len(lines) - 1 <= limit

    @pytest.mark.parametrize("limit", [1, 3, 10])
    def test_last_line_always_present(self, limit):
        content = _numbered(30) + "\nthe very last line"
        assert truncate(content, limit).text.endswith("the very last line")

    def test_truncated_flag_is_independent_per_call(self):
        first = truncate(_numbered(100), 5)
        second = truncate("short", 50)
        assert first.truncated is True
        assert second.truncated is False


class TestCharMode:
    def test_under_limit_unchanged(self):
        assert truncate("abc\ndef", 100, "chars") == BoundedText("abc\ndef", False)

    def test_cuts_on_line_boundary(self):
        content = "aaaa\nbbbb\ncccc\ndddd"
        # Walking back 7 chars lands inside "cccc"; the kept text starts at "dddd".
        result = truncate(content, 7, "chars")
        assert result.truncated is True
        kept = result.text.split("\n", 1)[1]
        assert kept == "dddd"

    def test_window_starting_on_line_start_keeps_that_line(self):
        content = "aaaa\nbbbb\ncccc"
        result = truncate(content, 9, "chars")
        assert result.text.split("\n", 1)[1] == "bbbb\ncccc"

    def test_kept_text_never_exceeds_limit(self):
        content = "\n".join("x" * (i % 13 + 1) for i in range(200))
        for limit in (10, 57, 300, 1000):
            result = truncate(content, limit, "chars")
            kept = result.text.split("\n", 1)[1] if "\n" in result.text else ""
            assert len(kept) <= limit

    def test_kept_text_starts_after_newline_in_original(self):
        content = "\n".join(f"row-{i}-" + "y" * (i % 7) for i in range(100))
        result = truncate(content, 123, "chars")
        kept = result.text.split("\n", 1)[1]
        start = len(content) - len(kept)
        assert content[start - 1] == "\n"
        assert content.endswith(kept)

    def test_banner_reports_dropped_characters(self):
        content = "aaaa\nbbbb\ncccc\ndddd"
        result = truncate(content, 7, "chars")
        assert result.text.startswith(f"... ({len(content) - 4} characters truncated) ...")

    def test_single_oversized_line_keeps_nothing(self):
        result = truncate("z" * 50, 10, "chars")
        assert result.truncated is True
        assert result.text == "... (50 characters truncated) ..."


class TestUnits:
    def test_unknown_unit_raises(self):
        with pytest.raises(ValueError, match="Unknown truncation unit"):
            truncate("content", 5, "bytes")
