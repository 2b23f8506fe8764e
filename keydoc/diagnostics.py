"""Structured warning events emitted while building the document model.

The parsers never print. They hand :class:`WarningEvent` values to a
:class:`Diagnostics` collector, which counts them and forwards each one to an
optional sink supplied by the caller (the CLI prints them to stderr through
:func:`format_warning`).

Examples
--------
>>> from keydoc.diagnostics import Diagnostics, WarningKind
>>> seen = []
>>> diagnostics = Diagnostics(sink=seen.append)
>>> diagnostics.warn(WarningKind.NO_OBJECTS)
>>> diagnostics.count, seen[0].code
(1, 'W011')
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import typing as typ
from pathlib import Path

logger = logging.getLogger(__name__)


class WarningKind(enum.Enum):
    """Stable warning codes and their human-readable messages."""

    NO_MODULE = ("W001", "no module or class defined")
    DUPLICATE = ("W002", "duplicate class, module, markdown document or mainpage")
    NO_FUNCTION = ("W003", "function does not follow comment")
    BAD_DOC_STRING = ("W004", "function does not precede doc string")
    SYNTAX = ("W005", "invalid syntax")
    EMPTY = (
        "W006",
        "empty content in example, must be fenced or indented code block",
    )
    INVALID_INPUT = ("W007", "file or folder doesn't exist")
    CREATE_FOLDER = ("W009", "could not create folder")
    CREATE_FILE = ("W010", "could not create file")
    NO_OBJECTS = (
        "W011",
        "no modules, classes, functions, examples or documents found",
    )
    NO_IMAGE = ("W012", "image file not found")
    READ_FILE = ("W014", "could not read file")

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message


@dc.dataclass(frozen=True, slots=True)
class SourceLocation:
    """A resolved position inside an input file.

    Attributes
    ----------
    path : Path
        File the warning refers to.
    line : int
        1-based line number.
    column : int
        1-based column number.
    text : str
        The full text of the offending line, for caret display.
    """

    path: Path
    line: int
    column: int
    text: str = ""


@dc.dataclass(frozen=True, slots=True)
class WarningEvent:
    """One warning raised during a run."""

    kind: WarningKind
    detail: str | None = None
    location: SourceLocation | None = None

    @property
    def code(self) -> str:
        """Return the stable short code, e.g. ``"W012"``."""
        return self.kind.code

    @property
    def message(self) -> str:
        """Return the message, with the detail appended when present."""
        if self.detail:
            return f"{self.kind.message}: {self.detail}"
        return self.kind.message


WarningSink = typ.Callable[[WarningEvent], None]


@dc.dataclass(slots=True)
class Diagnostics:
    """Collect warning events and forward them to an optional sink."""

    sink: WarningSink | None = None
    events: list[WarningEvent] = dc.field(default_factory=list)

    @property
    def count(self) -> int:
        """Return the number of warnings raised so far."""
        return len(self.events)

    def warn(
        self,
        kind: WarningKind,
        detail: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Record a warning and pass it to the sink."""
        event = WarningEvent(kind=kind, detail=detail, location=location)
        self.events.append(event)
        logger.debug("%s %s", event.code, event.message)
        if self.sink is not None:
            self.sink(event)

    def codes(self) -> list[str]:
        """Return the codes of every recorded event in order."""
        return [event.code for event in self.events]


def format_warning(event: WarningEvent) -> str:
    """Render ``event`` in ``file:line:col: warning`` form with a caret line.

    Examples
    --------
    >>> from pathlib import Path
    >>> where = SourceLocation(Path("a.c"), 3, 5, "@ingroup 9lives")
    >>> print(format_warning(WarningEvent(WarningKind.SYNTAX, None, where)))
    a.c:3:5: warning W005: invalid syntax
    @ingroup 9lives
        ^
    """
    where = event.location
    if where is None:
        return f"warning {event.code}: {event.message}"
    head = (
        f"{where.path}:{where.line}:{where.column}: "
        f"warning {event.code}: {event.message}"
    )
    if not where.text:
        return head
    caret = " " * max(where.column - 1, 0) + "^"
    return f"{head}\n{where.text}\n{caret}"


__all__ = [
    "Diagnostics",
    "SourceLocation",
    "WarningEvent",
    "WarningKind",
    "WarningSink",
    "format_warning",
]
