"""Turn a span of documentation lines into section prose.

Two passes run over the same span. The scan pass records examples and
applies style keywords to the owning :class:`~keydoc.model.Section`. The
materialize pass copies the span into prose, dropping section, grouping, style
and parameter keyword lines. Image references in the resulting prose are then
registered on the model and checked against the discovered image files.

Examples
--------
>>> from pathlib import Path
>>> from keydoc.context import ParseContext
>>> from keydoc.diagnostics import Diagnostics
>>> from keydoc.model import DocumentModel, Section
>>> ctx = ParseContext(DocumentModel(), Diagnostics(), Path("notes.c"))
>>> section = Section("notes")
>>> lines = ["@color w3-red", "", "Some prose.", "@param x unused", ""]
>>> parse_text(ctx, section, lines, 0, len(lines))
'Some prose.'
>>> section.bar_color, section.heading_color
('w3-red', 'w3-text-red')
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import EXAMPLE_PREFIX
from .diagnostics import WarningKind
from .keywords import Keyword, KeywordKind, KeywordMatch, match_keyword, split_arguments
from .markdown_parser import IMAGE_PATTERN, code_block_end, find_images, is_blank
from .model import Example, ImageRef

if typ.TYPE_CHECKING:
    from .context import ParseContext
    from .model import Section

logger = logging.getLogger(__name__)


def _skip_blank(lines: typ.Sequence[str], index: int, end: int) -> int:
    while index < end and is_blank(lines[index]):
        index += 1
    return index


def parse_example(
    ctx: ParseContext, section: Section, lines: typ.Sequence[str], index: int, end: int
) -> int:
    """Record the ``@example`` at ``lines[index]`` and return where scanning resumes.

    The example title is the rest of the keyword line. The code block that
    should follow (after optional blank lines) stays in the prose; the scan
    resumes after it. A missing block raises an "empty content" warning but
    the example is still recorded.
    """
    found = match_keyword(lines[index])
    title = found.argument if found is not None else ""
    if not title:
        ctx.warn(WarningKind.SYNTAX, "@example needs a title", index=index)
        return index + 1
    section.examples.append(Example(EXAMPLE_PREFIX + title))
    cursor = _skip_blank(lines, index + 1, end)
    block_end = code_block_end(lines, cursor, end)
    if block_end is None:
        ctx.warn(WarningKind.EMPTY, title, index=min(cursor, end - 1))
        return cursor
    return block_end


def register_image(ctx: ParseContext, link: str, index: int, column: int = 0) -> None:
    """Add ``link`` to the model's image references and check local files.

    A bare file name (no path separator) is expected among the images found
    before parsing; the match is flagged as referenced, a miss is warned.
    """
    ctx.model.images.append(ImageRef(link))
    if "/" in link or "\\" in link:
        return
    image = ctx.model.find_image_file(link)
    if image is None:
        ctx.warn(WarningKind.NO_IMAGE, link, index=index, column=column)
        return
    image.referenced = True


def apply_style(
    ctx: ParseContext, section: Section, found: KeywordMatch, index: int
) -> None:
    """Apply a style keyword to ``section``; later keywords overwrite earlier ones."""
    args = split_arguments(found.argument)
    match found.keyword:
        case Keyword.COLOR | Keyword.FONT if not args:
            ctx.warn(
                WarningKind.SYNTAX, f"{found.keyword.token} needs a value", index=index
            )
        case Keyword.COLOR:
            section.bar_color = args[0]
            if len(args) > 1:
                section.title_color = args[1]
            if len(args) > 2:
                section.heading_color = args[2]
            else:
                section.heading_color = "w3-text-" + args[0].removeprefix("w3-")
        case Keyword.FONT:
            section.font_body = args[0]
            if len(args) > 1:
                section.font_headings = args[1]
        case Keyword.LOGO:
            image = IMAGE_PATTERN.match(found.argument)
            if image is None:
                ctx.warn(
                    WarningKind.SYNTAX,
                    "@logo expects ![alt](link)",
                    index=index,
                    column=found.column,
                )
                return
            section.logo = image.group(0)
            register_image(
                ctx, image.group("link"), index, found.column + image.start("link")
            )
        case Keyword.VERSION:
            section.version = found.argument
        case _:
            logger.debug("ignoring %s in style position", found.keyword.token)


def apply_keywords(
    ctx: ParseContext, section: Section, lines: typ.Sequence[str], start: int, end: int
) -> None:
    """Record examples and apply style keywords found in ``lines[start:end]``."""
    cursor = start
    after_blank = True
    while cursor < end:
        block_end = code_block_end(lines, cursor, end, indented=after_blank)
        if block_end is not None:
            cursor = block_end
            after_blank = False
            continue
        found = match_keyword(lines[cursor])
        if found is not None and found.keyword is Keyword.EXAMPLE:
            cursor = parse_example(ctx, section, lines, cursor, end)
            after_blank = False
            continue
        if found is not None and found.kind is KeywordKind.STYLE:
            apply_style(ctx, section, found, cursor)
        after_blank = is_blank(lines[cursor])
        cursor += 1


def _materialize(lines: typ.Sequence[str], start: int, end: int) -> list[int]:
    kept: list[int] = []
    cursor = start
    after_blank = True
    while cursor < end:
        block_end = code_block_end(lines, cursor, end, indented=after_blank)
        if block_end is not None:
            kept.extend(range(cursor, block_end))
            cursor = block_end
            after_blank = False
            continue
        found = match_keyword(lines[cursor])
        keep = found is None or found.keyword in (Keyword.EXAMPLE, Keyword.UNKNOWN)
        if keep:
            kept.append(cursor)
        after_blank = is_blank(lines[cursor])
        cursor += 1
    while kept and is_blank(lines[kept[0]]):
        kept.pop(0)
    while kept and is_blank(lines[kept[-1]]):
        kept.pop()
    return kept


def scan_images(ctx: ParseContext, lines: typ.Sequence[str], kept: list[int]) -> None:
    """Register images found in the prose lines ``kept`` (indexes into ``lines``).

    Code blocks and keyword lines are skipped; the ``@logo`` image is
    registered when the keyword is applied.
    """
    prose = [lines[index] for index in kept]
    cursor = 0
    after_blank = True
    while cursor < len(prose):
        block_end = code_block_end(prose, cursor, indented=after_blank)
        if block_end is not None:
            cursor = block_end
            after_blank = False
            continue
        line = prose[cursor]
        if match_keyword(line) is None:
            for image in find_images(line):
                register_image(
                    ctx, image.group("link"), kept[cursor], image.start("link")
                )
        after_blank = is_blank(line)
        cursor += 1


def parse_text(
    ctx: ParseContext, section: Section, lines: typ.Sequence[str], start: int, end: int
) -> str | None:
    """Extract examples and styles from ``lines[start:end]`` and return the prose.

    Parameters
    ----------
    ctx : ParseContext
        Parse state; warnings are located through it.
    section : Section
        Section receiving examples and style overrides.
    lines : Sequence[str]
        Lines of the header or file being parsed.
    start, end : int
        Half-open span of ``lines`` to process.

    Returns
    -------
    str or None
        The materialized prose joined with newlines, or ``None`` when nothing
        but blank lines and interpreted keywords remain.
    """
    apply_keywords(ctx, section, lines, start, end)
    kept = _materialize(lines, start, end)
    if not kept:
        return None
    scan_images(ctx, lines, kept)
    return "\n".join(lines[index] for index in kept)


__all__ = [
    "apply_keywords",
    "apply_style",
    "parse_example",
    "parse_text",
    "register_image",
    "scan_images",
]
