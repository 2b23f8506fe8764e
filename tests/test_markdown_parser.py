"""Unit tests for the line-level markdown helpers."""

from __future__ import annotations

import pytest

from keydoc.markdown_parser import (
    _unique_slug,
    code_block_end,
    find_images,
    iter_prose_lines,
    parse_heading,
    slugify,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("  This $%@! Long Title  ", "This-Long-Title"),
        ("Example: Adding numbers", "Example-Adding-numbers"),
        ("snake_case_name", "snake_case_name"),
        ("--edge--", "edge"),
    ],
)
def test_slugify_is_case_preserving(title: str, expected: str) -> None:
    assert slugify(title) == expected


def test_unique_slug_appends_suffixes() -> None:
    used: set[str] = set()
    assert _unique_slug("add", used) == "add"
    assert _unique_slug("add", used) == "add-2"
    assert _unique_slug("", used) == "section"


def test_fenced_block_ends_after_matching_fence() -> None:
    lines = ["```c", "x();", "```", "after"]
    assert code_block_end(lines, 0) == 3


def test_fence_requires_matching_character() -> None:
    lines = ["```", "~~~", "```", "after"]
    assert code_block_end(lines, 0) == 3


def test_unclosed_fence_runs_to_span_end() -> None:
    lines = ["~~~", "x", "y"]
    assert code_block_end(lines, 0) == 3
    assert code_block_end(lines, 0, 2) == 2


def test_indented_block_excludes_trailing_blank_lines() -> None:
    lines = ["    a", "", "    b", "", "text"]
    assert code_block_end(lines, 0) == 3


def test_indented_block_needs_permission() -> None:
    assert code_block_end(["    a"], 0, indented=False) is None
    assert code_block_end(["plain"], 0) is None


def test_iter_prose_lines_skips_code_interiors() -> None:
    lines = ["a", "```", "@fn x", "```", "b", "", "    code", "c"]
    assert list(iter_prose_lines(lines)) == [0, 4, 5, 7]


def test_indented_line_after_prose_is_not_code() -> None:
    lines = ["a paragraph", "    continued"]
    assert list(iter_prose_lines(lines)) == [0, 1]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("# Title", (1, "Title")),
        ("## Closed ##", (2, "Closed")),
        ("###### Six", (6, "Six")),
        ("####### Seven", None),
        ("#NoSpace", None),
        ("plain", None),
    ],
)
def test_parse_heading(line: str, expected: tuple[int, str] | None) -> None:
    assert parse_heading(line) == expected


def test_find_images_returns_links_in_order() -> None:
    line = 'See ![logo](img/logo.png "Logo") and ![x](y.gif).'
    found = find_images(line)
    assert [match.group("link") for match in found] == ["img/logo.png", "y.gif"]
    assert found[0].group("title") == "Logo"
