"""Tests for title and header block extraction."""

import pytest

from readme_parser.pipeline.header_extractor import (
    HeaderBlock,
    extract_headers,
    extract_title,
    parse_header_line,
)
from readme_parser.pipeline.line_normalizer import LineCursor


def _cursor(text: str) -> LineCursor:
    return LineCursor.from_text(text)


class TestExtractTitle:
    """Tests for title detection."""

    def test_equals_wrapped_title(self) -> None:
        assert extract_title(_cursor("=== My Theme ===\nTags: a")) == "My Theme"

    def test_markdown_title(self) -> None:
        assert extract_title(_cursor("# My Theme #")) == "My Theme"

    def test_leading_blank_lines_skipped(self) -> None:
        assert extract_title(_cursor("\n\n  \n=== My Theme ===")) == "My Theme"

    def test_underline_is_discarded(self) -> None:
        """A setext ==== underline below the title is consumed."""
        cursor = _cursor("My Theme\n========\nTags: a")
        assert extract_title(cursor) == "My Theme"
        assert cursor.peek() == "Tags: a"

    def test_dash_underline_is_discarded(self) -> None:
        cursor = _cursor("My Theme\n---\nTags: a")
        assert extract_title(cursor) == "My Theme"
        assert cursor.peek() == "Tags: a"

    def test_title_markup_is_stripped_and_escaped(self) -> None:
        title = extract_title(_cursor("=== <b>Tom</b> & Jerry ==="))
        assert title == "Tom &amp; Jerry"

    def test_empty_document(self) -> None:
        assert extract_title(_cursor("")) == ""

    def test_placeholder_followed_by_real_name(self) -> None:
        """'Plugin Name' templates put the real name on the next line."""
        cursor = _cursor("=== Plugin Name ===\nMy Real Name\nTags: a")
        assert extract_title(cursor) == "My Real Name"
        assert cursor.peek() == "Tags: a"

    def test_placeholder_followed_by_header(self) -> None:
        """A header line after the placeholder is pushed back, name undetermined."""
        cursor = _cursor("=== Plugin Name ===\nContributors: bob\nTags: a")
        assert extract_title(cursor) is None
        assert cursor.peek() == "Contributors: bob"

    def test_placeholder_followed_by_long_line(self) -> None:
        long_line = "This is a description that is far too long to be a plugin name."
        cursor = _cursor(f"=== Plugin Name ===\n{long_line}")
        assert extract_title(cursor) is None
        assert cursor.peek() == long_line

    def test_placeholder_is_case_insensitive(self) -> None:
        assert extract_title(_cursor("=== PLUGIN NAME ===\nAcme")) == "Acme"

    def test_placeholder_at_end_of_document(self) -> None:
        assert extract_title(_cursor("=== Plugin Name ===")) is None


class TestParseHeaderLine:
    """Tests for single header line parsing."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("Tested up to: 6.4", ("tested", "6.4")),
            ("Tested: 6.4", ("tested", "6.4")),
            ("Requires at least: 5.0", ("requires", "5.0")),
            ("Requires: 5.0", ("requires", "5.0")),
            ("Requires PHP: 7.4", ("requires_php", "7.4")),
            ("TAGS: blog, news", ("tags", "blog, news")),
            ("* Contributors: alice", ("contributors", "alice")),
            ("Donate link: https://example.com/give", ("donate_link", "https://example.com/give")),
            ("Stable tag: 1.0", ("stable_tag", "1.0")),
            ("License: GPLv2", ("license", "GPLv2")),
            ("License URI: https://gnu.org", ("license_uri", "https://gnu.org")),
            ("Resources: fonts", ("resources", "fonts")),
        ],
    )
    def test_recognized_headers(self, line: str, expected: tuple[str, str]) -> None:
        assert parse_header_line(line) == expected

    def test_unknown_header(self) -> None:
        assert parse_header_line("Author: Someone") is None

    def test_value_split_on_first_colon(self) -> None:
        assert parse_header_line("Donate link: http://x.test:8080/") == (
            "donate_link",
            "http://x.test:8080/",
        )


class TestExtractHeaders:
    """Tests for the full header block."""

    def test_basic_block(self) -> None:
        cursor = _cursor(
            "=== My Theme ===\n"
            "Contributors: alice, bob\n"
            "Tags: blog\n"
            "Author: ignored\n"
            "\n"
            "Short description.\n"
        )
        block = extract_headers(cursor)

        assert block.name == "My Theme"
        assert block.headers == {"contributors": "alice, bob", "tags": "blog"}
        assert cursor.next_line() == "Short description."

    def test_blank_lines_inside_block(self) -> None:
        """Headers wrapped with blank lines between them are all read."""
        cursor = _cursor("=== T ===\nTags: a\n\nStable tag: 1.0\n\nText")
        block = extract_headers(cursor)

        assert block.headers == {"tags": "a", "stable_tag": "1.0"}
        assert cursor.next_line() == "Text"

    def test_later_duplicate_wins(self) -> None:
        block = extract_headers(_cursor("=== T ===\nTags: a\nTags: b"))
        assert block.get("tags") == "b"

    def test_no_headers(self) -> None:
        cursor = _cursor("=== T ===\nJust text.")
        block = extract_headers(cursor)

        assert block.headers == {}
        assert cursor.next_line() == "Just text."

    def test_heading_ends_block(self) -> None:
        cursor = _cursor("=== T ===\nTags: a\n== Description ==\nBody")
        extract_headers(cursor)
        assert cursor.next_line() == "== Description =="

    def test_block_to_end_of_document(self) -> None:
        cursor = _cursor("=== T ===\nTags: a")
        block = extract_headers(cursor)
        assert block.get("tags") == "a"
        assert cursor.exhausted is True

    def test_missing_header_returns_empty(self) -> None:
        assert HeaderBlock(name="T").get("license") == ""
