"""Recognize at-prefixed annotation keywords and tokenize comment headers.

A keyword only counts when it starts in column 0 and is followed by
whitespace or the end of the line. Anything else that starts with ``@`` is an
unknown keyword, kept for forward compatibility and treated like ``@param``.

Examples
--------
>>> from keydoc.keywords import Keyword, KeywordKind, match_keyword
>>> found = match_keyword("@defgroup maths  Simple arithmetic")
>>> found.keyword is Keyword.DEFGROUP, found.argument
(True, 'maths  Simple arithmetic')
>>> found.kind is KeywordKind.SECTION
True
>>> match_keyword("plain prose") is None
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

from .markdown_parser import is_blank, iter_prose_lines

ARGUMENT_PATTERN = re.compile(r'"[^"]*"|\S+')


class KeywordKind(enum.Enum):
    """Classes of keywords, which decide how a parser reacts to a line."""

    SECTION = "section"
    GROUPING = "grouping"
    STYLE = "style"
    CONTENT = "content"
    PROTOTYPE = "prototype"


class Keyword(enum.Enum):
    """The fixed keyword vocabulary plus the ``UNKNOWN`` placeholder."""

    CLASS = ("@class", KeywordKind.SECTION)
    COLOR = ("@color", KeywordKind.STYLE)
    DEFGROUP = ("@defgroup", KeywordKind.SECTION)
    EXAMPLE = ("@example", KeywordKind.CONTENT)
    FN = ("@fn", KeywordKind.SECTION)
    FONT = ("@font", KeywordKind.STYLE)
    INCLASS = ("@inclass", KeywordKind.GROUPING)
    INGROUP = ("@ingroup", KeywordKind.GROUPING)
    LOGO = ("@logo", KeywordKind.STYLE)
    MAINPAGE = ("@mainpage", KeywordKind.SECTION)
    PARAM = ("@param", KeywordKind.PROTOTYPE)
    RETURN = ("@return", KeywordKind.PROTOTYPE)
    RETURNS = ("@returns", KeywordKind.PROTOTYPE)
    VERSION = ("@version", KeywordKind.STYLE)
    UNKNOWN = ("@", KeywordKind.PROTOTYPE)

    def __init__(self, token: str, kind: KeywordKind) -> None:
        self.token = token
        self.kind = kind


_BY_TOKEN: dict[str, Keyword] = {
    keyword.token: keyword for keyword in Keyword if keyword is not Keyword.UNKNOWN
}


@dc.dataclass(frozen=True, slots=True)
class KeywordMatch:
    """A recognized keyword line.

    Attributes
    ----------
    keyword : Keyword
        The matched vocabulary entry, or ``Keyword.UNKNOWN``.
    argument : str
        Remainder of the line after the keyword, leading whitespace removed.
    column : int
        Column where ``argument`` starts, for position reporting.
    """

    keyword: Keyword
    argument: str
    column: int

    @property
    def kind(self) -> KeywordKind:
        """Return the class of the matched keyword."""
        return self.keyword.kind


def match_keyword(line: str) -> KeywordMatch | None:
    """Classify ``line`` as a keyword line or return ``None``.

    Parameters
    ----------
    line : str
        A single line without its newline.

    Returns
    -------
    KeywordMatch or None
        The keyword and its argument text; ``None`` when the line does not
        start with ``@`` in column 0.
    """
    if not line.startswith("@"):
        return None
    word = line.split(maxsplit=1)[0]
    keyword = _BY_TOKEN.get(word, Keyword.UNKNOWN)
    rest = line[len(word) :]
    argument = rest.lstrip()
    column = len(line) - len(argument)
    return KeywordMatch(keyword=keyword, argument=argument.rstrip(), column=column)


def split_arguments(argument: str) -> list[str]:
    """Split keyword arguments on whitespace, keeping ``"quoted words"`` whole."""
    return ARGUMENT_PATTERN.findall(argument)


class TokenKind(enum.Enum):
    """Structural roles of header lines after tokenization."""

    GROUPING = "grouping"
    SECTION = "section"
    TEXT = "text"


@dc.dataclass(frozen=True, slots=True)
class HeaderToken:
    """A span of header lines with its structural role.

    ``SECTION`` tokens cover the opening keyword line through the line before
    the next section keyword. ``GROUPING`` tokens cover a single line.
    ``TEXT`` tokens cover one non-blank, non-keyword line outside any section.
    """

    kind: TokenKind
    start: int
    end: int
    match: KeywordMatch | None = None


def tokenize_header(lines: typ.Sequence[str]) -> list[HeaderToken]:
    """Split a stripped comment header into grouping, section and text tokens.

    Keywords inside code blocks are inert, so a section only ends at the
    next section keyword that sits outside a code block.

    Examples
    --------
    >>> tokens = tokenize_header(["@ingroup io", "@fn int open(void)", "Opens."])
    >>> [(token.kind.value, token.start, token.end) for token in tokens]
    [('grouping', 0, 1), ('section', 1, 3)]
    """
    prose = list(iter_prose_lines(lines))
    tokens: list[HeaderToken] = []
    position = 0
    while position < len(prose):
        index = prose[position]
        found = match_keyword(lines[index])
        if found is not None and found.kind is KeywordKind.GROUPING:
            tokens.append(HeaderToken(TokenKind.GROUPING, index, index + 1, found))
            position += 1
            continue
        if found is not None and found.kind is KeywordKind.SECTION:
            position += 1
            while position < len(prose):
                following = match_keyword(lines[prose[position]])
                if following is not None and following.kind is KeywordKind.SECTION:
                    break
                position += 1
            end = prose[position] if position < len(prose) else len(lines)
            tokens.append(HeaderToken(TokenKind.SECTION, index, end, found))
            continue
        if found is None and not is_blank(lines[index]):
            tokens.append(HeaderToken(TokenKind.TEXT, index, index + 1))
        position += 1
    return tokens


__all__ = [
    "HeaderToken",
    "Keyword",
    "KeywordKind",
    "KeywordMatch",
    "TokenKind",
    "match_keyword",
    "split_arguments",
    "tokenize_header",
]
