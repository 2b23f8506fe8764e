r"""Line-level markdown recognizers shared by the parsers and renderers.

Documentation bodies are plain markdown, so keydoc needs to know where code
blocks start and stop (keywords inside them are inert), which lines are ATX
headings, where image references sit, and how a title becomes an anchor slug.
Everything here works on lists of lines without trailing newlines.

Example
-------
>>> from keydoc.markdown_parser import code_block_end, parse_heading, slugify
>>> lines = ["```c", "int x;", "```", "after"]
>>> code_block_end(lines, 0)
3
>>> parse_heading("## Getting Started")
(2, 'Getting Started')
>>> slugify("  This $%@! Long Title  ")
'This-Long-Title'
"""

from __future__ import annotations

import re
import typing as typ

FENCE_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})")
HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
IMAGE_PATTERN = re.compile(
    r'!\[(?P<alt>[^\]]*)\]\(\s*<?(?P<link>[^)\s>]+)>?(?:\s+"(?P<title>[^"]*)")?\s*\)'
)
SLUG_PATTERN = re.compile(r"[^\w]+")


def is_blank(line: str) -> bool:
    """Return ``True`` when ``line`` holds nothing but whitespace."""
    return not line.strip()


def _is_indented(line: str) -> bool:
    return line.startswith(("    ", "\t"))


def _fence_end(lines: typ.Sequence[str], index: int, end: int) -> int | None:
    match = FENCE_PATTERN.match(lines[index])
    if match is None:
        return None
    fence = match.group(2)
    closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
    for cursor in range(index + 1, end):
        if closing.match(lines[cursor]):
            return cursor + 1
    return end


def _indented_end(lines: typ.Sequence[str], index: int, end: int) -> int | None:
    if not _is_indented(lines[index]) or is_blank(lines[index]):
        return None
    last = index
    cursor = index + 1
    while cursor < end and (_is_indented(lines[cursor]) or is_blank(lines[cursor])):
        if not is_blank(lines[cursor]):
            last = cursor
        cursor += 1
    return last + 1


def code_block_end(
    lines: typ.Sequence[str],
    index: int,
    end: int | None = None,
    *,
    indented: bool = True,
) -> int | None:
    """Return the index just past the code block starting at ``index``.

    Parameters
    ----------
    lines : Sequence[str]
        Lines of the text being walked.
    index : int
        Candidate first line of a code block.
    end : int, optional
        Exclusive bound of the span; defaults to ``len(lines)``. An unclosed
        fence runs to this bound.
    indented : bool, optional
        Whether a four-space (or tab) indented block may start here. Callers
        pass ``False`` when the previous line is prose, because an indented
        line cannot interrupt a paragraph.

    Returns
    -------
    int or None
        Exclusive end of the block, or ``None`` when no block starts here.
    """
    stop = len(lines) if end is None else end
    if index >= stop:
        return None
    fenced = _fence_end(lines, index, stop)
    if fenced is not None:
        return fenced
    if indented:
        return _indented_end(lines, index, stop)
    return None


def iter_prose_lines(
    lines: typ.Sequence[str], start: int = 0, end: int | None = None
) -> typ.Iterator[int]:
    """Yield the indexes in ``[start, end)`` that are outside any code block."""
    stop = len(lines) if end is None else end
    cursor = start
    after_blank = True
    while cursor < stop:
        block_end = code_block_end(lines, cursor, stop, indented=after_blank)
        if block_end is not None:
            cursor = block_end
            after_blank = False
            continue
        yield cursor
        after_blank = is_blank(lines[cursor])
        cursor += 1


def parse_heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, text)`` for an ATX heading line, otherwise ``None``."""
    match = HEADING_PATTERN.match(line)
    if match is None:
        return None
    return len(match.group(1)), match.group(2).strip()


def find_images(line: str) -> list[re.Match[str]]:
    """Return every markdown image reference on ``line`` in order."""
    return list(IMAGE_PATTERN.finditer(line))


def slugify(title: str) -> str:
    """Return a case-preserving, dash-separated anchor id for ``title``."""
    return SLUG_PATTERN.sub("-", title.strip()).strip("-")


def _unique_slug(base: str, used: set[str]) -> str:
    """Generate a unique slug, appending numeric suffixes when needed."""
    candidate = base or "section"
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


__all__ = [
    "FENCE_PATTERN",
    "HEADING_PATTERN",
    "IMAGE_PATTERN",
    "_unique_slug",
    "code_block_end",
    "find_images",
    "is_blank",
    "iter_prose_lines",
    "parse_heading",
    "slugify",
]
