"""Unit tests for keyword recognition and header tokenization."""

from __future__ import annotations

import pytest

from keydoc.keywords import (
    Keyword,
    KeywordKind,
    TokenKind,
    match_keyword,
    split_arguments,
    tokenize_header,
)


@pytest.mark.parametrize(
    ("line", "keyword", "kind"),
    [
        ("@class Point  A 2D point", Keyword.CLASS, KeywordKind.SECTION),
        ("@defgroup io  Input", Keyword.DEFGROUP, KeywordKind.SECTION),
        ("@fn int f(void)", Keyword.FN, KeywordKind.SECTION),
        ("@mainpage Home", Keyword.MAINPAGE, KeywordKind.SECTION),
        ("@ingroup io", Keyword.INGROUP, KeywordKind.GROUPING),
        ("@inclass Point", Keyword.INCLASS, KeywordKind.GROUPING),
        ("@color w3-red", Keyword.COLOR, KeywordKind.STYLE),
        ("@font serif", Keyword.FONT, KeywordKind.STYLE),
        ("@logo ![x](x.png)", Keyword.LOGO, KeywordKind.STYLE),
        ("@version 1.0", Keyword.VERSION, KeywordKind.STYLE),
        ("@example Title", Keyword.EXAMPLE, KeywordKind.CONTENT),
        ("@param a value", Keyword.PARAM, KeywordKind.PROTOTYPE),
        ("@return nothing", Keyword.RETURN, KeywordKind.PROTOTYPE),
        ("@returns nothing", Keyword.RETURNS, KeywordKind.PROTOTYPE),
    ],
)
def test_match_keyword_classifies_vocabulary(
    line: str, keyword: Keyword, kind: KeywordKind
) -> None:
    found = match_keyword(line)
    assert found is not None, f"{line!r} should be a keyword line"
    assert found.keyword is keyword
    assert found.kind is kind


def test_match_keyword_reports_argument_and_column() -> None:
    found = match_keyword("@fn   int add(int a, int b)  ")
    assert found is not None
    assert found.argument == "int add(int a, int b)"
    assert found.column == 6, "column should point at the argument start"


def test_keyword_without_argument_has_empty_argument() -> None:
    found = match_keyword("@example")
    assert found is not None
    assert found.keyword is Keyword.EXAMPLE
    assert found.argument == ""


@pytest.mark.parametrize("line", ["@params x", "@defgroupx foo", "@todo later", "@"])
def test_unrecognized_at_words_are_unknown(line: str) -> None:
    found = match_keyword(line)
    assert found is not None
    assert found.keyword is Keyword.UNKNOWN
    assert found.kind is KeywordKind.PROTOTYPE


@pytest.mark.parametrize("line", ["  @fn int f(void)", "mail me@example.com", "", "x"])
def test_lines_not_starting_with_at_are_not_keywords(line: str) -> None:
    assert match_keyword(line) is None


def test_split_arguments_keeps_quoted_words() -> None:
    assert split_arguments('w3-red "Times New Roman" Arial') == [
        "w3-red",
        '"Times New Roman"',
        "Arial",
    ]


def test_tokenize_header_splits_sections_outside_code() -> None:
    lines = [
        "Intro text",
        "@ingroup io",
        "@defgroup m  Mod",
        "Body",
        "```",
        "@fn inside code",
        "```",
        "@mainpage Home",
        "x",
    ]
    tokens = tokenize_header(lines)
    assert [(token.kind, token.start, token.end) for token in tokens] == [
        (TokenKind.TEXT, 0, 1),
        (TokenKind.GROUPING, 1, 2),
        (TokenKind.SECTION, 2, 7),
        (TokenKind.SECTION, 7, 9),
    ]
    assert tokens[2].match is not None
    assert tokens[2].match.keyword is Keyword.DEFGROUP


def test_tokenize_header_ignores_non_structural_keywords() -> None:
    tokens = tokenize_header(["@param a value", "", "@color w3-red"])
    assert tokens == [], "parameter and style lines are not text"
