"""Find function signatures next to comment headers and pull out their names.

No language is parsed properly; a signature is whatever text runs from the
candidate line until its parentheses balance, and the name is the identifier
right before an opening parenthesis.

Examples
--------
>>> from keydoc.prototypes import extract_name
>>> extract_name("static int PoolAlloc(size_t n)")
'PoolAlloc'
>>> extract_name("pub fn parse<T>(input: &str) -> T")
'parse'
>>> extract_name("func (r *Reader) Next() bool")
'Next'
>>> extract_name("x = 42") is None
True
"""

from __future__ import annotations

import re
import textwrap
import typing as typ

from ._constants import MAX_PROTOTYPE_LINES
from .markdown_parser import is_blank

if typ.TYPE_CHECKING:
    from .headers import CommentHeader

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
NAME_BEFORE_PAREN = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*(?:<[^<>()]*>)?\s*$")
NOT_NAMES = frozenset(
    {"def", "fn", "func", "function", "if", "for", "while", "switch"}
    | {"return", "sizeof"}
)
TRAILING_PUNCTUATION = " \t{:;"


def is_identifier(text: str) -> bool:
    """Return ``True`` when ``text`` is exactly one ASCII identifier."""
    return IDENTIFIER_PATTERN.fullmatch(text) is not None


def extract_name(signature: str) -> str | None:
    """Return the callable name in ``signature`` or ``None``."""
    for paren in re.finditer(r"\(", signature):
        found = NAME_BEFORE_PAREN.search(signature[: paren.start()])
        if found is not None and found.group(1) not in NOT_NAMES:
            return found.group(1)
    return None


def _balanced_end(lines: typ.Sequence[str], start: int) -> tuple[int, int] | None:
    """Return ``(line, column)`` of the parenthesis closing the first one opened."""
    depth = 0
    opened = False
    stop = min(len(lines), start + MAX_PROTOTYPE_LINES)
    for index in range(start, stop):
        for column, char in enumerate(lines[index]):
            if char == "(":
                depth += 1
                opened = True
            elif char == ")" and opened:
                depth -= 1
                if depth == 0:
                    return index, column
        if not opened:
            return None
    return None


def signature_at(lines: typ.Sequence[str], start: int) -> tuple[str, int] | None:
    """Collect the signature beginning at ``lines[start]``.

    Returns
    -------
    tuple[str, int] or None
        The signature text (dedented, trailing ``{``, ``:`` or ``;`` removed)
        and the index of its last line; ``None`` when the line opens no
        parenthesis.
    """
    if start < 0 or start >= len(lines) or "(" not in lines[start]:
        return None
    closing = _balanced_end(lines, start)
    if closing is None:
        return lines[start].strip().rstrip(TRAILING_PUNCTUATION), start
    last, column = closing
    chunk = list(lines[start : last + 1])
    tail = chunk[-1][column + 1 :]
    brace = tail.find("{")
    if brace >= 0:
        tail = tail[:brace]
    chunk[-1] = chunk[-1][: column + 1] + tail
    text = textwrap.dedent("\n".join(line.rstrip() for line in chunk))
    return text.strip().rstrip(TRAILING_PUNCTUATION), last


def discover_signature(header: CommentHeader) -> str | None:
    """Return the signature that belongs with ``header``.

    Doc-string headers follow their signature, so the search walks upward
    for the nearest signature ending on the line above the header. Every
    other header precedes its signature: the first non-blank line after it.
    """
    lines = header.source_lines
    if header.docstring:
        floor = max(0, header.start - MAX_PROTOTYPE_LINES)
        for index in range(header.start - 1, floor - 1, -1):
            found = signature_at(lines, index)
            if found is not None and found[1] == header.start - 1:
                return found[0]
        return None
    index = header.end
    while index < len(lines) and is_blank(lines[index]):
        index += 1
    found = signature_at(lines, index)
    return found[0] if found is not None else None


def assemble_prototype(signature: str, fragments: typ.Sequence[str]) -> str:
    """Join ``signature`` and ``@param``-style lines into a prototype block.

    Each fragment ends in two spaces so markdown renders it on its own line.

    Examples
    --------
    >>> print(assemble_prototype("int add(int a, int b)", ["@param a left"]))
    int add(int a, int b)
    <BLANKLINE>
    @param a left
    """
    block = [signature]
    if fragments:
        block.append("")
        block.extend(line if line.endswith("  ") else f"{line}  " for line in fragments)
    return "\n".join(block)


__all__ = [
    "assemble_prototype",
    "discover_signature",
    "extract_name",
    "is_identifier",
    "signature_at",
]
