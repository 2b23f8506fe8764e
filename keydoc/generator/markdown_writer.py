"""Write the document model as one combined markdown file.

The file is named after the output folder: ``docs/`` produces
``docs/docs.md``. The mainpage (or a project summary) comes first, followed
by modules, classes and finally every markdown document with its headings
pushed one level down.
"""

from __future__ import annotations

import logging
import typing as typ

from ..diagnostics import WarningKind
from .prose import MARKDOWN_EXAMPLE_FORMAT, render_prose

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..diagnostics import Diagnostics
    from ..model import DocumentModel, Module

logger = logging.getLogger(__name__)


def _count(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


class MarkdownWriter:
    """Render a finished document model into a single markdown file."""

    def __init__(
        self, model: DocumentModel, output_dir: Path, diagnostics: Diagnostics
    ) -> None:
        self.model = model
        self.output_dir = output_dir
        self.diagnostics = diagnostics

    @property
    def output_path(self) -> Path:
        """Return the combined file path inside the output folder."""
        name = self.output_dir.resolve().name or "keydoc"
        return self.output_dir / f"{name}.md"

    def run(self) -> list[Path]:
        """Write the combined file and return it, or nothing on failure."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("mkdir %s failed: %s", self.output_dir, exc)
            self.diagnostics.warn(WarningKind.CREATE_FOLDER, str(self.output_dir))
            return []
        path = self.output_path
        try:
            path.write_text(self.render(), encoding="utf-8")
        except OSError as exc:
            logger.debug("write %s failed: %s", path, exc)
            self.diagnostics.warn(WarningKind.CREATE_FILE, str(path))
            return []
        return [path]

    def render(self) -> str:
        """Return the combined markdown text."""
        blocks: list[str] = []
        level = 0
        mainpage = self.model.mainpage
        stats = self.model.stats()
        if mainpage is not None:
            section = mainpage.section
            blocks.append(f"# {section.title}")
            if section.subtitle:
                blocks.append(section.subtitle)
            if section.version:
                blocks.append(f"version {section.version}")
            body = render_prose(section.text, example_format=MARKDOWN_EXAMPLE_FORMAT)
            if body:
                blocks.append(body)
            level = 1
        elif stats.pages > 1:
            name = self.output_path.stem
            summary = [
                _count(stats.modules, "Module", "Modules"),
                _count(stats.classes, "Class", "Classes"),
                _count(stats.documents, "Markdown Document", "Markdown Documents"),
                _count(stats.examples, "Example", "Examples"),
            ]
            blocks.append(f"# Project {name}")
            blocks.append("  \n".join(summary))
            level = 1

        for module in self.model.modules:
            blocks.extend(self._module_blocks(module, level, prefix=""))
        for module in self.model.classes:
            blocks.extend(self._module_blocks(module, level, prefix="Class "))
        for document in self.model.documents:
            body = render_prose(
                document.section.text,
                example_format=MARKDOWN_EXAMPLE_FORMAT,
                shift=level,
            )
            if body:
                blocks.append(body)
        return "\n\n".join(blocks) + "\n"

    def _module_blocks(self, module: Module, level: int, *, prefix: str) -> list[str]:
        section = module.section
        blocks = [f"{'#' * (level + 1)} {prefix}{module.title}"]
        if section.subtitle:
            blocks.append(section.subtitle)
        body = render_prose(
            section.text, example_format=MARKDOWN_EXAMPLE_FORMAT, shift=level + 1
        )
        if body:
            blocks.append(body)
        for function in module.functions:
            blocks.append(f"{'#' * (level + 2)} {function.name}")
            if function.brief:
                blocks.append(function.brief)
            blocks.append(f"{'#' * (level + 3)} Prototype")
            blocks.append(f"```{function.language or ''}\n{function.prototype}\n```")
            notes = render_prose(
                function.text, example_format=MARKDOWN_EXAMPLE_FORMAT, shift=level + 3
            )
            if notes:
                blocks.append(f"{'#' * (level + 3)} Notes")
                blocks.append(notes)
        return blocks


__all__ = ["MarkdownWriter"]
