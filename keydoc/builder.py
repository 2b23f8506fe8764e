"""Walk the inputs of a run and assemble the document model.

:class:`DocumentBuilder` expands files, folders and glob patterns, records
image files before any parsing starts, then reads every source and markdown
file in turn. Each file gets a fresh :class:`~keydoc.context.ParseContext`,
so the current module never carries over between files.

Examples
--------
>>> from keydoc.builder import DocumentBuilder
>>> builder = DocumentBuilder(exts=(".c",))
>>> stats = builder.run(["src"])  # doctest: +SKIP
>>> stats.modules  # doctest: +SKIP
2
"""

from __future__ import annotations

import glob
import logging
import typing as typ
from pathlib import Path

from ._constants import (
    DEFAULT_SOURCE_EXTS,
    IMAGE_EXTS,
    LANGUAGE_BY_EXT,
    MARKDOWN_EXTS,
    MAX_FOLDER_DEPTH,
)
from .config.helpers import parse_extensions
from .context import ParseContext
from .diagnostics import Diagnostics, WarningKind, WarningSink
from .headers import find_headers
from .markdown_file import parse_markdown_file
from .model import DocumentModel, DocumentStats, ImageFile
from .sections import parse_header

logger = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[")


def _is_pattern(text: str) -> bool:
    return any(char in GLOB_CHARS for char in text)


def _walk(folder: Path, depth: int = 1) -> typ.Iterator[Path]:
    """Yield files under ``folder`` in sorted order, at most three levels deep."""
    try:
        entries = sorted(folder.iterdir())
    except OSError:
        logger.debug("cannot list %s", folder)
        return
    for entry in entries:
        if entry.is_dir():
            if depth < MAX_FOLDER_DEPTH:
                yield from _walk(entry, depth + 1)
        elif entry.is_file():
            yield entry


class DocumentBuilder:
    """Build a :class:`~keydoc.model.DocumentModel` from input paths."""

    def __init__(
        self,
        *,
        exts: str | typ.Iterable[str] = (),
        sort: bool = True,
        sink: WarningSink | None = None,
    ) -> None:
        """Initialize an empty model and warning collector.

        Parameters
        ----------
        exts : str or Iterable[str], optional
            Source extensions to parse, as ``".c.py"`` or a sequence; empty
            selects the default set.
        sort : bool, optional
            Alphabetical ordering policy for the model.
        sink : WarningSink, optional
            Callable receiving every warning as it is raised.
        """
        self.exts = parse_extensions(exts or DEFAULT_SOURCE_EXTS)
        self.model = DocumentModel(sort=sort)
        self.diagnostics = Diagnostics(sink=sink)

    def _expand(
        self, inputs: typ.Iterable[str | Path], *, report: bool
    ) -> typ.Iterator[Path]:
        for item in inputs:
            text = str(item)
            path = Path(text)
            if path.is_dir():
                yield from _walk(path)
            elif path.is_file():
                yield path
            elif _is_pattern(text) and (matches := sorted(glob.glob(text))):
                for match in matches:
                    found = Path(match)
                    yield from (_walk(found) if found.is_dir() else [found])
            elif report:
                self.diagnostics.warn(WarningKind.INVALID_INPUT, text)

    def prescan_images(self, inputs: typ.Iterable[str | Path]) -> list[ImageFile]:
        """Record every image file reachable from ``inputs``.

        Runs before parsing so prose references can be checked against them.
        Missing inputs are skipped silently here; :meth:`process` reports them.
        """
        for path in self._expand(inputs, report=False):
            if path.suffix.lower() not in IMAGE_EXTS:
                continue
            if self.model.find_image_file(path.name) is None:
                self.model.image_files.append(ImageFile(path))
        return self.model.image_files

    def process(self, inputs: typ.Iterable[str | Path]) -> None:
        """Parse every source and markdown file reachable from ``inputs``."""
        for path in self._expand(inputs, report=True):
            suffix = path.suffix.lower()
            if suffix in MARKDOWN_EXTS or suffix in self.exts:
                self.parse_file(path)
            else:
                logger.debug("skipping %s", path)

    def parse_file(self, path: Path) -> None:
        """Read ``path`` and merge its documentation into the model.

        An unreadable or empty file raises a "could not read" warning.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("failed to read %s: %s", path, exc)
            self.diagnostics.warn(WarningKind.READ_FILE, str(path))
            return
        if not text.strip():
            self.diagnostics.warn(WarningKind.READ_FILE, str(path))
            return
        self.model.files_scanned += 1
        suffix = path.suffix.lower()
        ctx = ParseContext(
            self.model, self.diagnostics, path, language=LANGUAGE_BY_EXT.get(suffix)
        )
        if suffix in MARKDOWN_EXTS:
            parse_markdown_file(ctx, text)
            return
        for header in find_headers(text, path):
            self.model.comments_processed += 1
            ctx.header = header
            ctx.lines = list(header.lines)
            parse_header(ctx)

    def stats(self) -> DocumentStats:
        """Return statistics for the model built so far."""
        return self.model.stats(self.diagnostics.count)

    def run(self, inputs: typ.Iterable[str | Path]) -> DocumentStats:
        """Pre-scan images, parse ``inputs`` and return the run statistics.

        A run that found nothing to document raises a "no objects" warning;
        callers skip output when ``stats.objects`` is zero.
        """
        items = list(inputs)
        self.prescan_images(items)
        self.process(items)
        if self.stats().objects == 0:
            self.diagnostics.warn(WarningKind.NO_OBJECTS)
        return self.stats()


__all__ = ["DocumentBuilder"]
