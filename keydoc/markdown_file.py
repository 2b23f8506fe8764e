"""Parse a markdown input file.

A file whose first line is a section keyword is read as one big comment
header, so a ``README.md`` can carry the ``@mainpage``. Any other file becomes
a :class:`~keydoc.model.MarkdownDocument` whose text is copied verbatim;
examples, style keywords, images and the heading outline are still picked up.
"""

from __future__ import annotations

import typing as typ

from .keywords import Keyword, KeywordKind, match_keyword
from .markdown_parser import code_block_end, is_blank, parse_heading
from .model import Heading, MarkdownDocument, Section
from .sections import check_namespace, parse_header
from .text_body import apply_style, parse_example, scan_images

if typ.TYPE_CHECKING:
    from .context import ParseContext


def _outline(ctx: ParseContext, document: MarkdownDocument) -> None:
    lines = ctx.lines
    section = document.section
    cursor = 0
    after_blank = True
    while cursor < len(lines):
        block_end = code_block_end(lines, cursor, indented=after_blank)
        if block_end is not None:
            cursor = block_end
            after_blank = False
            continue
        found = match_keyword(lines[cursor])
        if found is not None and found.keyword is Keyword.EXAMPLE:
            cursor = parse_example(ctx, section, lines, cursor, len(lines))
            after_blank = False
            continue
        if found is not None and found.kind is KeywordKind.STYLE:
            apply_style(ctx, section, found, cursor)
        elif found is None and (heading := parse_heading(lines[cursor])) is not None:
            level, title = heading
            if section.subtitle is None:
                section.subtitle = title
            if level >= 2:
                document.headings.append(Heading(level, title))
        after_blank = is_blank(lines[cursor])
        cursor += 1


def parse_markdown_file(ctx: ParseContext, text: str) -> MarkdownDocument | None:
    """Add the markdown ``text`` read from ``ctx.path`` to the model.

    Returns
    -------
    MarkdownDocument or None
        The new document; ``None`` when the file was parsed as a header.
    """
    ctx.header = None
    ctx.lines = text.splitlines()
    first = match_keyword(ctx.lines[0]) if ctx.lines else None
    if first is not None and first.kind is KeywordKind.SECTION:
        parse_header(ctx)
        return None

    document = MarkdownDocument(Section(ctx.path.name), path=ctx.path)
    check_namespace(ctx, document.title, 0)
    ctx.model.insert_document(document)
    document.section.text = text
    _outline(ctx, document)
    scan_images(ctx, ctx.lines, list(range(len(ctx.lines))))
    return document


__all__ = ["parse_markdown_file"]
