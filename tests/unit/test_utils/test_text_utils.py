"""Tests for description cleanup."""

from __future__ import annotations

from gamelog.utils.text_utils import clean_description


class TestCleanDescription:
    def test_empty(self) -> None:
        assert clean_description(None) == ""
        assert clean_description("") == ""

    def test_strips_html_and_whitespace(self) -> None:
        assert clean_description("<p>A   puzzle</p>\n<br/>game.") == "A puzzle game."

    def test_short_text_unchanged(self) -> None:
        text = "x" * 300
        assert clean_description(text) == text

    def test_cuts_at_sentence(self) -> None:
        first = "word " * 50  # 250 chars
        text = first.strip() + ". " + "more " * 60
        result = clean_description(text)
        assert result.endswith(".")
        assert len(result) == 250

    def test_cuts_at_space_with_ellipsis(self) -> None:
        text = "word " * 100
        result = clean_description(text)
        assert result.endswith("...")
        assert len(result) <= 303
        assert not result[:-3].endswith(" ")

    def test_hard_cut_without_spaces(self) -> None:
        result = clean_description("x" * 500)
        assert result == "x" * 300 + "..."
