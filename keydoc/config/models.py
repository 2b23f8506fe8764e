"""Typed dataclasses describing a keydoc build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import DEFAULT_SOURCE_EXTS


class BuildConfigError(ValueError):
    """Raised when the build configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class BuildConfig:
    """Options for one documentation build.

    Attributes
    ----------
    inputs : list[Path]
        Files, folders or glob patterns to scan.
    output_dir : Path or None
        Folder receiving the generated site; required unless ``no_build``.
    exts : tuple[str, ...]
        Source file extensions (with leading dots) parsed for comment headers.
    sort : bool
        Keep modules, classes, functions and documents in alphabetical order.
    markdown : bool
        Write one combined markdown file instead of an HTML site.
    no_index : bool
        Skip ``index.html``.
    no_build : bool
        Parse and report only; write nothing.
    pygments_style : str
        Pygments style used for highlighted code in HTML output.
    """

    inputs: list[Path] = dc.field(default_factory=list)
    output_dir: Path | None = None
    exts: tuple[str, ...] = tuple(
        f".{ext}" for ext in DEFAULT_SOURCE_EXTS.split(".") if ext
    )
    sort: bool = True
    markdown: bool = False
    no_index: bool = False
    no_build: bool = False
    pygments_style: str = "default"


__all__ = ["BuildConfig", "BuildConfigError"]
