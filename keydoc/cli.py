"""Cyclopts CLI entrypoint for extracting keydoc documentation.

The ``keydoc`` console script scans source files and markdown documents for
keydoc comment headers, reports warnings with file positions on stderr, and
writes either a static HTML site or one combined markdown file. The exit code
is 1 whenever a warning was raised, so CI can fail on documentation problems.

Examples
--------
Build an HTML site from a source folder:

>>> from keydoc.cli import app
>>> app.run(["build", "src", "--output-dir", "site"])  # doctest: +SKIP

Check the annotations without writing anything:

>>> app.run(["build", "src", "--no-build"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import DocumentBuilder
from .config import BuildConfigError, load_build_config, merge_overrides
from .diagnostics import WarningEvent, format_warning
from .generator import HtmlSiteWriter, MarkdownWriter
from .markdown_parser import slugify

if typ.TYPE_CHECKING:
    from .model import DocumentStats

app = App(name="keydoc", config=cyclopts.config.Env("KEYDOC_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _report(event: WarningEvent) -> None:
    print(format_warning(event), file=sys.stderr)


def _print_stats(stats: DocumentStats) -> None:
    print(f"  {stats.modules} modules")
    print(f"  {stats.functions} functions")
    print(f"  {stats.classes} classes")
    print(f"  {stats.methods} methods")
    print(f"  {stats.examples} examples")
    print(f"  {stats.documents} markdown documents")
    print(f"  {stats.images} images")
    print(f"{stats.files} files processed")
    print(f"{stats.comments} keydoc comments processed")
    print(f"{stats.warnings} warnings")


@app.command(help="Extract documentation and write an HTML site or markdown file.")
def build(
    *inputs: Path,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Folder for the generated output", env_var="KEYDOC_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to keydoc.yaml", env_var="KEYDOC_CONFIG"),
    ] = None,
    exts: typ.Annotated[
        str | None, Parameter(help="Source extensions to scan, e.g. .c.py")
    ] = None,
    sort: typ.Annotated[
        bool | None, Parameter(help="Sort modules, classes and functions")
    ] = None,
    markdown: typ.Annotated[
        bool | None,
        Parameter(help="Write one combined markdown file", negative=()),
    ] = None,
    no_index: typ.Annotated[
        bool | None, Parameter(help="Do not write index.html", negative=())
    ] = None,
    no_build: typ.Annotated[
        bool | None, Parameter(help="Parse and check only", negative=())
    ] = None,
    pygments_style: typ.Annotated[
        str | None, Parameter(help="Pygments style for highlighted code")
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log parsing steps", negative=())
    ] = False,
) -> int:
    """Run a documentation build.

    Parameters
    ----------
    *inputs : Path
        Files, folders or glob patterns to scan; appended to nothing, so they
        replace any ``inputs`` from the configuration file.
    output_dir : Path or None, optional
        Output folder; required unless ``no_build`` is set.
    config : Path or None, optional
        Configuration file; ``keydoc.yaml`` is used when present.
    exts, sort, markdown, no_index, no_build, pygments_style : optional
        Override the matching configuration values.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    int
        ``0`` when the run raised no warnings, ``1`` otherwise or on usage
        errors.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        settings = merge_overrides(
            load_build_config(config),
            inputs=list(inputs),
            output_dir=output_dir,
            exts=exts,
            sort=sort,
            markdown=markdown,
            no_index=no_index,
            no_build=no_build,
            pygments_style=pygments_style,
        )
    except (FileNotFoundError, BuildConfigError) as exc:
        print(f"keydoc: {exc}", file=sys.stderr)
        return 1
    if not settings.inputs:
        print("keydoc: no input files or folders given", file=sys.stderr)
        return 1
    if settings.output_dir is None and not settings.no_build:
        print("keydoc: --output-dir is required unless --no-build", file=sys.stderr)
        return 1

    builder = DocumentBuilder(exts=settings.exts, sort=settings.sort, sink=_report)
    stats = builder.run(settings.inputs)
    if stats.objects and not settings.no_build and settings.output_dir is not None:
        if settings.markdown:
            written = MarkdownWriter(
                builder.model, settings.output_dir, builder.diagnostics
            ).run()
        else:
            written = HtmlSiteWriter(
                builder.model,
                settings.output_dir,
                builder.diagnostics,
                pygments_style=settings.pygments_style,
                no_index=settings.no_index,
            ).run()
        for path in written:
            print(f"wrote {_format_path(path)}")
    final = builder.stats()
    _print_stats(final)
    return 1 if final.warnings else 0


@app.command(help="Print the anchor slug keydoc derives from TEXT.")
def slug(text: str) -> None:
    """Print the heading anchor for ``text``."""
    print(slugify(text))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``keydoc`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
