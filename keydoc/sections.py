"""Parse keydoc comment headers into modules, classes, functions and the mainpage.

A header is split into tokens by :func:`~keydoc.keywords.tokenize_header`.
Grouping keywords switch the current module, section keywords open a module,
class, function or mainpage that runs until the next section keyword, and a
header holding only prose documents the function whose prototype sits next to
the comment.

Examples
--------
>>> from pathlib import Path
>>> from keydoc.context import ParseContext
>>> from keydoc.diagnostics import Diagnostics
>>> from keydoc.headers import find_headers
>>> from keydoc.model import DocumentModel
>>> source = (
...     "/*!\\n  @defgroup maths  Arithmetic\\n*/\\n"
...     "/*!\\n  Adds.\\n*/\\nint add(int a);\\n"
... )
>>> ctx = ParseContext(DocumentModel(), Diagnostics(), Path("maths.c"), "c")
>>> for header in find_headers(source, ctx.path):
...     ctx.header, ctx.lines = header, header.lines
...     parse_header(ctx)
>>> module = ctx.model.modules[0]
>>> module.title, module.section.subtitle, module.functions[0].name
('maths', 'Arithmetic', 'add')
"""

from __future__ import annotations

import logging
import typing as typ

from .diagnostics import WarningKind
from .keywords import (
    Keyword,
    KeywordKind,
    KeywordMatch,
    TokenKind,
    match_keyword,
    tokenize_header,
)
from .markdown_parser import is_blank, iter_prose_lines
from .model import Function, MainPage, Module, Section
from .prototypes import (
    assemble_prototype,
    discover_signature,
    extract_name,
    is_identifier,
)
from .text_body import apply_keywords, parse_text

if typ.TYPE_CHECKING:
    from .context import ParseContext

logger = logging.getLogger(__name__)


def check_namespace(ctx: ParseContext, title: str, index: int | None) -> bool:
    """Warn and return ``True`` when ``title`` clashes with an existing page."""
    if not ctx.model.title_collides(title):
        return False
    ctx.warn(WarningKind.DUPLICATE, title, index=index)
    return True


def _leading_name(ctx: ParseContext, found: KeywordMatch, index: int) -> str | None:
    parts = found.argument.split(maxsplit=1)
    name = parts[0] if parts else ""
    if not is_identifier(name):
        ctx.warn(
            WarningKind.SYNTAX,
            f"{found.keyword.token} expects an identifier",
            index=index,
            column=found.column,
        )
        return None
    return name


def resolve_grouping(ctx: ParseContext, found: KeywordMatch, index: int) -> None:
    """Make the module or class named by ``@ingroup``/``@inclass`` current.

    An unknown name creates a stub that a later ``@defgroup`` or ``@class``
    completes in place. The stub owns its title from then on, so the
    namespace is checked here rather than when the stub is filled.
    """
    name = _leading_name(ctx, found, index)
    if name is None:
        return
    is_class = found.keyword is Keyword.INCLASS
    module = ctx.model.find(name, is_class=is_class)
    if module is None:
        check_namespace(ctx, name, index)
        module = Module(Section(name))
        ctx.model.insert_module(module, is_class=is_class)
        logger.debug("created stub %s for %s", name, found.keyword.token)
    ctx.current_module = module


def parse_module(ctx: ParseContext, start: int, end: int, *, is_class: bool) -> None:
    """Declare the module or class opened at ``ctx.lines[start]``."""
    lines = ctx.lines
    found = match_keyword(lines[start])
    if found is None:
        return
    name = _leading_name(ctx, found, start)
    if name is None:
        return
    parts = found.argument.split(maxsplit=1)
    description = parts[1].strip() if len(parts) > 1 else ""
    module = ctx.model.find(name, is_class=is_class)
    if module is not None and not module.is_stub:
        ctx.warn(WarningKind.DUPLICATE, name, index=start)
        return
    if module is None:
        check_namespace(ctx, name, start)
        module = Module(Section(name))
        ctx.model.insert_module(module, is_class=is_class)
    module.section.subtitle = description
    ctx.current_module = module
    module.section.text = parse_text(ctx, module.section, lines, start + 1, end)


def _prototype_fragments(lines: typ.Sequence[str], start: int, end: int) -> list[str]:
    fragments = []
    for index in iter_prose_lines(lines, start, end):
        found = match_keyword(lines[index])
        if found is not None and found.kind is KeywordKind.PROTOTYPE:
            fragments.append(lines[index].rstrip())
    return fragments


def parse_function(
    ctx: ParseContext, start: int, end: int, prototype: str | None = None
) -> None:
    """Document one function from ``ctx.lines[start:end]``.

    Parameters
    ----------
    ctx : ParseContext
        Parse state; ``ctx.header`` must be set.
    start, end : int
        Half-open span of the function's lines within the header.
    prototype : str or None
        Explicit prototype from ``@fn``; ``None`` to look beside the comment.
    """
    lines = ctx.lines
    brief_index: int | None = None
    for index in iter_prose_lines(lines, start, end):
        found = match_keyword(lines[index])
        if found is not None and found.kind is KeywordKind.GROUPING:
            resolve_grouping(ctx, found, index)
        elif found is None and brief_index is None and not is_blank(lines[index]):
            brief_index = index

    module = ctx.current_module
    if module is None:
        ctx.warn(WarningKind.NO_MODULE, index=start)
        return

    header = ctx.header
    if prototype is not None:
        signature: str | None = prototype.strip()
    else:
        signature = discover_signature(header) if header is not None else None
    name = extract_name(signature) if signature else None
    if signature is None or name is None:
        docstring = prototype is None and header is not None and header.docstring
        kind = WarningKind.BAD_DOC_STRING if docstring else WarningKind.NO_FUNCTION
        ctx.warn(kind, signature or None, index=start)
        return

    function = Function(
        name=name,
        prototype=assemble_prototype(
            signature, _prototype_fragments(lines, start, end)
        ),
        brief=lines[brief_index].strip() if brief_index is not None else None,
        language=ctx.language,
    )
    notes_start = brief_index + 1 if brief_index is not None else start
    function.text = parse_text(ctx, module.section, lines, notes_start, end)
    ctx.model.insert_function(module, function)


def _subtitle_index(lines: typ.Sequence[str], start: int, end: int) -> int | None:
    for index in range(start, end):
        line = lines[index]
        if is_blank(line) or match_keyword(line) is not None:
            continue
        following = index + 1
        if following >= len(lines) or is_blank(lines[following]):
            return index
        return None
    return None


def parse_mainpage(ctx: ParseContext, start: int, end: int) -> None:
    """Declare the run's mainpage from ``ctx.lines[start:end]``.

    The first prose line becomes the subtitle when a blank line (or the end
    of the header) follows it; the body continues after it.
    """
    lines = ctx.lines
    if ctx.model.mainpage is not None:
        ctx.warn(WarningKind.DUPLICATE, "mainpage", index=start)
        return
    found = match_keyword(lines[start])
    section = Section(found.argument if found is not None else "")
    ctx.model.mainpage = MainPage(section)
    body_start = start + 1
    subtitle = _subtitle_index(lines, body_start, end)
    if subtitle is not None:
        apply_keywords(ctx, section, lines, body_start, subtitle)
        section.subtitle = lines[subtitle].strip()
        body_start = subtitle + 1
    section.text = parse_text(ctx, section, lines, body_start, end)


def parse_header(ctx: ParseContext) -> None:
    """Parse the header held in ``ctx.lines`` into the model.

    ``@fn`` sections are ignored when ``ctx.header`` is ``None``: markdown
    files have no source to take a prototype from.
    """
    lines = ctx.lines
    found_text = False
    for token in tokenize_header(lines):
        match token.kind:
            case TokenKind.GROUPING if token.match is not None:
                resolve_grouping(ctx, token.match, token.start)
            case TokenKind.TEXT:
                found_text = True
            case TokenKind.SECTION if token.match is not None:
                found_text = False
                _parse_section(ctx, token.match, token.start, token.end)
    if found_text and ctx.header is not None:
        parse_function(ctx, 0, len(lines))


def _parse_section(
    ctx: ParseContext, found: KeywordMatch, start: int, end: int
) -> None:
    match found.keyword:
        case Keyword.DEFGROUP:
            parse_module(ctx, start, end, is_class=False)
        case Keyword.CLASS:
            parse_module(ctx, start, end, is_class=True)
        case Keyword.FN if ctx.header is not None:
            parse_function(ctx, start, end, prototype=found.argument)
        case Keyword.MAINPAGE:
            parse_mainpage(ctx, start, end)
        case _:
            logger.debug("skipping %s in %s", found.keyword.token, ctx.path)


__all__ = [
    "check_namespace",
    "parse_function",
    "parse_header",
    "parse_mainpage",
    "parse_module",
    "resolve_grouping",
]
