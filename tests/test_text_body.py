"""Unit tests for prose materialization, examples, styles and images."""

from __future__ import annotations

from pathlib import Path

import pytest

from keydoc.context import ParseContext
from keydoc.diagnostics import Diagnostics
from keydoc.model import DocumentModel, Example, ImageFile, Section
from keydoc.text_body import parse_text


@pytest.fixture
def ctx() -> ParseContext:
    """Provide a parse context for a markdown-like span without a header."""
    return ParseContext(DocumentModel(), Diagnostics(), Path("notes.md"))


def _run(ctx: ParseContext, lines: list[str]) -> tuple[Section, str | None]:
    ctx.lines = lines
    section = Section("notes")
    return section, parse_text(ctx, section, lines, 0, len(lines))


def test_keyword_lines_are_dropped_but_unknown_ones_kept(ctx: ParseContext) -> None:
    lines = ["@ingroup io", "Text.", "@param x ignored", "@since 2.0", ""]
    _, text = _run(ctx, lines)
    assert text == "Text.\n@since 2.0"


def test_only_keywords_yields_no_text(ctx: ParseContext) -> None:
    _, text = _run(ctx, ["", "@version 3", ""])
    assert text is None


def test_keywords_inside_code_blocks_are_inert(ctx: ParseContext) -> None:
    lines = ["```", "@color w3-red", "```"]
    section, text = _run(ctx, lines)
    assert section.bar_color is None
    assert text == "```\n@color w3-red\n```"


def test_color_with_all_three_values(ctx: ParseContext) -> None:
    section, _ = _run(ctx, ["@color w3-blue w3-text-white w3-text-indigo"])
    assert (section.bar_color, section.title_color, section.heading_color) == (
        "w3-blue",
        "w3-text-white",
        "w3-text-indigo",
    )


def test_later_style_keywords_overwrite_earlier_ones(ctx: ParseContext) -> None:
    section, _ = _run(ctx, ["@font Arial", '@font "Open Sans" Georgia'])
    assert section.font_body == '"Open Sans"'
    assert section.font_headings == "Georgia"


def test_color_without_value_warns(ctx: ParseContext) -> None:
    _run(ctx, ["@color"])
    assert ctx.diagnostics.codes() == ["W005"]


def test_example_keeps_its_code_block_in_prose(ctx: ParseContext) -> None:
    lines = ["@example Hello", "", "```c", "hello();", "```", "After."]
    section, text = _run(ctx, lines)
    assert section.examples == [Example("Example: Hello")]
    assert text == "\n".join(lines)
    assert ctx.diagnostics.count == 0


def test_example_with_indented_block(ctx: ParseContext) -> None:
    lines = ["@example Indented", "", "    run();", "", "Done."]
    section, _ = _run(ctx, lines)
    assert [example.title for example in section.examples] == ["Example: Indented"]
    assert ctx.diagnostics.count == 0


def test_example_without_code_block_still_counts(ctx: ParseContext) -> None:
    section, _ = _run(ctx, ["@example Lonely", "Just prose."])
    assert len(section.examples) == 1
    [event] = ctx.diagnostics.events
    assert event.code == "W006"
    assert event.location is not None
    assert event.location.line == 2


def test_example_without_title_warns(ctx: ParseContext) -> None:
    section, _ = _run(ctx, ["@example", "```", "x", "```"])
    assert section.examples == []
    assert ctx.diagnostics.codes() == ["W005"]


def test_missing_local_image_is_reported_at_its_link(ctx: ParseContext) -> None:
    _run(ctx, ["See ![chart](chart.png) here."])
    [event] = ctx.diagnostics.events
    assert event.code == "W012"
    assert event.detail == "chart.png"
    assert event.location is not None
    assert (event.location.line, event.location.column) == (1, 14)
    assert [image.link for image in ctx.model.images] == ["chart.png"]


def test_known_image_is_marked_referenced(ctx: ParseContext) -> None:
    image = ImageFile(Path("docs/chart.png"))
    ctx.model.image_files.append(image)
    _run(ctx, ['![chart](chart.png "Sales")'])
    assert image.referenced is True
    assert ctx.diagnostics.count == 0


def test_remote_and_nested_images_are_not_checked(ctx: ParseContext) -> None:
    _run(ctx, ["![a](https://example.com/a.png) ![b](img/b.png)"])
    assert ctx.diagnostics.count == 0
    assert len(ctx.model.images) == 2


def test_images_inside_code_are_ignored(ctx: ParseContext) -> None:
    _run(ctx, ["```", "![x](x.png)", "```"])
    assert ctx.model.images == []


def test_logo_registers_image(ctx: ParseContext) -> None:
    image = ImageFile(Path("acme.png"))
    ctx.model.image_files.append(image)
    section, text = _run(ctx, ["@logo ![Acme](acme.png)"])
    assert section.logo == "![Acme](acme.png)"
    assert image.referenced is True
    assert text is None


def test_logo_needs_image_syntax(ctx: ParseContext) -> None:
    section, _ = _run(ctx, ["@logo acme.png"])
    assert section.logo is None
    assert ctx.diagnostics.codes() == ["W005"]
