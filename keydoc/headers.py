"""Locate keydoc comment headers in source files and strip their syntax.

Three header shapes are recognized, whatever the language:

* block headers, ``/*!`` through ``*/``;
* runs of line comments starting with ``//!`` (or ``#!`` when not a shebang);
* doc-string headers, ``\"\"\"!`` or ``'''!`` through the closing quotes. The
  documented function's prototype precedes these.

Each :class:`CommentHeader` keeps the stripped lines together with the file
line and column each one came from, so warnings raised while parsing the
stripped text can be reported against the real file.

Examples
--------
>>> from pathlib import Path
>>> from keydoc.headers import find_headers
>>> source = "/*!\\n  @defgroup io  Input and output\\n*/\\nint x;\\n"
>>> [header.lines for header in find_headers(source, Path("io.c"))]
[['@defgroup io  Input and output']]
"""

from __future__ import annotations

import dataclasses as dc
import re
from pathlib import Path

from .diagnostics import SourceLocation

DECORATION_PATTERN = re.compile(r"^[-*=/\s]+$")
DOCSTRING_OPENERS = ('"""!', "'''!")
LINE_OPENERS = ("//!", "#!")


@dc.dataclass(slots=True)
class CommentHeader:
    """A stripped comment header plus the mapping back to its source file.

    Attributes
    ----------
    path : Path
        File the header was found in.
    lines : list[str]
        Header content with comment syntax and common indentation removed.
    origins : list[tuple[int, int]]
        For each entry of ``lines``, the 0-based file line and the 0-based
        column where the stripped text begins.
    start : int
        0-based file line holding the comment opener.
    end : int
        0-based file line just past the comment closer.
    source_lines : list[str]
        Every line of the file, used for prototype discovery and caret display.
    docstring : bool
        ``True`` for doc-string headers, whose prototype precedes the comment.
    """

    path: Path
    lines: list[str]
    origins: list[tuple[int, int]]
    start: int
    end: int
    source_lines: list[str]
    docstring: bool = False

    @property
    def text(self) -> str:
        """Return the stripped header as a single string."""
        return "\n".join(self.lines)

    def locate(self, index: int, column: int = 0) -> SourceLocation:
        """Map ``(index, column)`` in the stripped header to the source file."""
        if self.origins:
            line, offset = self.origins[min(max(index, 0), len(self.origins) - 1)]
        else:
            line, offset = self.start, 0
        text = self.source_lines[line] if line < len(self.source_lines) else ""
        return SourceLocation(self.path, line + 1, offset + column + 1, text)


@dc.dataclass(slots=True)
class _Piece:
    line: int
    column: int
    text: str


def _strip_gutter(pieces: list[_Piece], opener: int) -> None:
    """Remove a ``*`` gutter shared by every non-blank line after the opener."""
    content = [
        piece for piece in pieces if piece.text.strip() and piece.line != opener
    ]
    if not content:
        return
    if not all(piece.text.lstrip().startswith("*") for piece in content):
        return
    for piece in content:
        body = piece.text.lstrip()
        cut = len(piece.text) - len(body) + 1
        if body[1:2] == " ":
            cut += 1
        piece.column += cut
        piece.text = piece.text[cut:]


def _dedent(pieces: list[_Piece], opener: int) -> None:
    """Remove the indentation common to every non-blank line.

    Text sharing the opener's line is stripped on its own and does not take
    part in the common indentation, as with ``inspect.cleandoc``.
    """
    for piece in pieces:
        if piece.line == opener:
            body = piece.text.lstrip()
            piece.column += len(piece.text) - len(body)
            piece.text = body.rstrip()
    content = [
        piece for piece in pieces if piece.text.strip() and piece.line != opener
    ]
    if not content:
        return
    common = min(len(piece.text) - len(piece.text.lstrip()) for piece in content)
    for piece in pieces:
        if piece.line == opener:
            continue
        if piece.text.strip():
            piece.column += common
            piece.text = piece.text[common:].rstrip()
        else:
            piece.text = ""


def _build(
    path: Path,
    source_lines: list[str],
    pieces: list[_Piece],
    *,
    start: int,
    end: int,
    docstring: bool = False,
) -> CommentHeader:
    _dedent(pieces, start)
    while pieces and not pieces[0].text:
        pieces.pop(0)
    while pieces and not pieces[-1].text:
        pieces.pop()
    return CommentHeader(
        path=path,
        lines=[piece.text for piece in pieces],
        origins=[(piece.line, piece.column) for piece in pieces],
        start=start,
        end=end,
        source_lines=source_lines,
        docstring=docstring,
    )


def _enclosed_pieces(
    lines: list[str], start: int, column: int, closer: str
) -> tuple[list[_Piece], int]:
    """Collect the text between an opener ending at ``column`` and ``closer``."""
    pieces: list[_Piece] = []
    line = start
    offset = column
    while line < len(lines):
        text = lines[line]
        found = text.find(closer, offset)
        segment = text[offset:] if found < 0 else text[offset:found]
        pieces.append(_Piece(line, offset, segment))
        if found >= 0:
            return pieces, line + 1
        line += 1
        offset = 0
    return pieces, len(lines)


def _block_header(
    path: Path, lines: list[str], start: int, column: int
) -> CommentHeader:
    pieces, end = _enclosed_pieces(lines, start, column, "*/")
    edges = {start, end - 1}
    kept = [
        piece
        for piece in pieces
        if not (
            piece.line in edges
            and piece.text.strip()
            and DECORATION_PATTERN.match(piece.text)
        )
    ]
    if kept and kept[0].line == start and not kept[0].text.strip():
        kept.pop(0)
    _strip_gutter(kept, start)
    return _build(path, lines, kept, start=start, end=end)


def _docstring_header(
    path: Path, lines: list[str], start: int, column: int, quote: str
) -> CommentHeader:
    pieces, end = _enclosed_pieces(lines, start, column, quote)
    return _build(path, lines, pieces, start=start, end=end, docstring=True)


def _line_header(
    path: Path, lines: list[str], start: int, marker: str
) -> CommentHeader:
    pieces: list[_Piece] = []
    line = start
    while line < len(lines):
        body = lines[line].lstrip()
        if not body.startswith(marker) or _is_shebang(body):
            break
        column = len(lines[line]) - len(body) + len(marker)
        pieces.append(_Piece(line, column, lines[line][column:]))
        line += 1
    return _build(path, lines, pieces, start=start, end=line)


def _is_shebang(body: str) -> bool:
    return body.startswith("#!/")


def find_headers(text: str, path: Path) -> list[CommentHeader]:
    """Return every keydoc comment header in ``text`` in file order.

    Parameters
    ----------
    text : str
        Complete source file contents.
    path : Path
        Path of the file, recorded on each header for position reporting.

    Returns
    -------
    list[CommentHeader]
        Headers with at least one content line; empty comments are skipped.
    """
    lines = text.splitlines()
    headers: list[CommentHeader] = []
    index = 0
    while index < len(lines):
        body = lines[index].lstrip()
        indent = len(lines[index]) - len(body)
        header: CommentHeader | None = None
        if body.startswith("/*!"):
            header = _block_header(path, lines, index, indent + 3)
        elif body.startswith(DOCSTRING_OPENERS):
            header = _docstring_header(path, lines, index, indent + 4, body[:3])
        elif body.startswith(LINE_OPENERS) and not _is_shebang(body):
            marker = next(opener for opener in LINE_OPENERS if body.startswith(opener))
            header = _line_header(path, lines, index, marker)
        if header is None:
            index += 1
            continue
        if header.lines:
            headers.append(header)
        index = max(header.end, index + 1)
    return headers


__all__ = ["CommentHeader", "find_headers"]
