"""Per-file parse state threaded explicitly through every parsing call."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .diagnostics import Diagnostics, SourceLocation, WarningKind

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .headers import CommentHeader
    from .model import DocumentModel, Module


@dc.dataclass(slots=True)
class ParseContext:
    """State shared by the parsers while one input file is processed.

    A fresh context is created for every file, so the current module never
    leaks from one file into the next. It does persist across the comment
    headers of a single file.

    Attributes
    ----------
    model : DocumentModel
        Model receiving every entity built from the file.
    diagnostics : Diagnostics
        Collector for warnings raised while parsing.
    path : Path
        The file being parsed.
    language : str or None
        Language tag derived from the file extension, copied onto functions.
    current_module : Module or None
        Module or class that functions attach to.
    header : CommentHeader or None
        The comment header being parsed; ``None`` for markdown files, which
        also disables prototype discovery.
    lines : list[str]
        Lines currently being parsed (header lines or markdown file lines).
    """

    model: DocumentModel
    diagnostics: Diagnostics
    path: Path
    language: str | None = None
    current_module: Module | None = None
    header: CommentHeader | None = None
    lines: list[str] = dc.field(default_factory=list)

    def locate(self, index: int, column: int = 0) -> SourceLocation:
        """Resolve a line index and column of ``lines`` to a file position."""
        if self.header is not None:
            return self.header.locate(index, column)
        text = self.lines[index] if 0 <= index < len(self.lines) else ""
        return SourceLocation(self.path, index + 1, column + 1, text)

    def warn(
        self,
        kind: WarningKind,
        detail: str | None = None,
        *,
        index: int | None = None,
        column: int = 0,
    ) -> None:
        """Emit a warning, located at ``index`` when one is given."""
        location = None if index is None else self.locate(index, column)
        self.diagnostics.warn(kind, detail, location)


__all__ = ["ParseContext"]
