"""Write the document model as a static HTML site.

:class:`HtmlSiteWriter` renders one page per module, class and markdown
document plus an ``index.html`` landing page, using the Jinja templates
shipped in ``keydoc/templates``. Prose goes through
:class:`~keydoc.generator.renderer.HtmlContentRenderer`; prototypes are
highlighted with pygments in the function's language. Referenced image files
are copied next to the pages.

Example
-------
>>> from pathlib import Path
>>> from keydoc.builder import DocumentBuilder
>>> from keydoc.generator import HtmlSiteWriter
>>> builder = DocumentBuilder()
>>> builder.run(["src"])  # doctest: +SKIP
>>> writer = HtmlSiteWriter(builder.model, Path("site"), builder.diagnostics)
>>> writer.run()  # doctest: +SKIP
[PosixPath('site/keydoc.css'), PosixPath('site/index.html'), ...]
"""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .._constants import TABLE_OF_CONTENTS, W3_CSS_URL
from ..diagnostics import WarningKind
from ..markdown_parser import _unique_slug, slugify
from ..model import Section
from .models import PageStyle, resolve_style
from .prose import HTML_EXAMPLE_FORMAT, render_prose
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from ..diagnostics import Diagnostics
    from ..model import DocumentModel, MarkdownDocument, Module

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"
STYLESHEET_FILE = "keydoc.css"


def module_filename(module: Module) -> str:
    """Return the output file name of a module or class page."""
    return f"{module.title}.html"


def document_filename(document: MarkdownDocument) -> str:
    """Return the output file name of a markdown document page."""
    return f"{document.base_name}.html"


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


class HtmlSiteWriter:
    """Render a finished document model into HTML files on disk."""

    def __init__(
        self,
        model: DocumentModel,
        output_dir: Path,
        diagnostics: Diagnostics,
        *,
        pygments_style: str = "default",
        no_index: bool = False,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the writer with its model, destination and templates.

        Parameters
        ----------
        model : DocumentModel
            The finished, read-only document model.
        output_dir : Path
            Folder receiving the site; created when missing.
        diagnostics : Diagnostics
            Collector for folder and file creation failures.
        pygments_style : str, optional
            Style used for highlighted code.
        no_index : bool, optional
            Skip ``index.html``.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        """
        self.model = model
        self.output_dir = output_dir
        self.diagnostics = diagnostics
        self.no_index = no_index
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def writes_index(self) -> bool:
        """Return ``True`` when an ``index.html`` page belongs in the output."""
        if self.no_index:
            return False
        return self.model.mainpage is not None or self.model.stats().pages != 1

    def run(self) -> list[Path]:
        """Write every page, the stylesheet and referenced images.

        Returns
        -------
        list[Path]
            Files written, in write order. Empty when the output folder could
            not be created.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("mkdir %s failed: %s", self.output_dir, exc)
            self.diagnostics.warn(WarningKind.CREATE_FOLDER, str(self.output_dir))
            return []

        written: list[Path] = []
        self._write(STYLESHEET_FILE, self.renderer.stylesheet, written)
        if self.writes_index:
            self._write(INDEX_FILE, self.render_index(), written)
        for module in self.model.modules:
            self._write(module_filename(module), self.render_module(module), written)
        for module in self.model.classes:
            page = self.render_module(module, is_class=True)
            self._write(module_filename(module), page, written)
        for document in self.model.documents:
            page = self.render_document(document)
            self._write(document_filename(document), page, written)
        self._copy_images(written)
        return written

    def _write(self, name: str, content: str, written: list[Path]) -> None:
        path = self.output_dir / name
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.debug("write %s failed: %s", path, exc)
            self.diagnostics.warn(WarningKind.CREATE_FILE, str(path))
            return
        written.append(path)

    def _copy_images(self, written: list[Path]) -> None:
        for image in self.model.image_files:
            if not image.referenced:
                continue
            target = self.output_dir / image.path.name
            try:
                shutil.copyfile(image.path, target)
            except OSError as exc:
                logger.debug("copy %s failed: %s", image.path, exc)
                self.diagnostics.warn(WarningKind.CREATE_FILE, str(target))
                continue
            written.append(target)

    def _base_context(
        self, section: Section, title: str, *, is_index: bool = False
    ) -> dict[str, typ.Any]:
        style: PageStyle = resolve_style(section, self.model.mainpage)
        return {
            "title": title,
            "subtitle": section.subtitle,
            "style": style,
            "w3_css_url": W3_CSS_URL,
            "stylesheet": STYLESHEET_FILE,
            "home_href": None if is_index or not self.writes_index else INDEX_FILE,
        }

    def _prose(self, text: str | None, style_section: Section) -> str:
        heading_class = resolve_style(style_section, self.model.mainpage).heading_color
        body = render_prose(text, example_format=HTML_EXAMPLE_FORMAT)
        return self.renderer.markdown(body, heading_class)

    def render_index(self) -> str:
        """Render the landing page: mainpage prose plus links to every page."""
        mainpage = self.model.mainpage
        if mainpage is not None:
            section = mainpage.section
            title = section.title or TABLE_OF_CONTENTS
        else:
            section = Section(TABLE_OF_CONTENTS)
            title = TABLE_OF_CONTENTS
        context = self._base_context(section, title, is_index=True)
        context["body_html"] = self._prose(section.text, section)
        context["columns"] = self._index_columns()
        return self.env.get_template("index.jinja").render(**context)

    def _module_links(self, modules: list[Module]) -> list[dict[str, str | None]]:
        return [
            {
                "title": module.title,
                "href": module_filename(module),
                "description": module.section.subtitle or None,
            }
            for module in modules
        ]

    def _example_groups(self) -> list[dict[str, typ.Any]]:
        groups: list[dict[str, typ.Any]] = []

        def add(label: str, href: str, section: Section) -> None:
            if not section.examples:
                return
            links = [
                {"title": example.title, "href": f"{href}#{slugify(example.title)}"}
                for example in section.examples
            ]
            groups.append({"label": label, "links": links})

        if self.model.mainpage is not None:
            add("Main Page", INDEX_FILE, self.model.mainpage.section)
        for module in self.model.modules:
            add(f"Module {module.title}", module_filename(module), module.section)
        for module in self.model.classes:
            add(f"Class {module.title}", module_filename(module), module.section)
        for document in self.model.documents:
            add(
                f"Document {document.base_name}",
                document_filename(document),
                document.section,
            )
        return groups

    def _index_columns(self) -> list[dict[str, typ.Any]]:
        modules = self._module_links(self.model.modules)
        classes = self._module_links(self.model.classes)
        examples = self._example_groups()
        example_count = sum(len(group["links"]) for group in examples)
        documents = [
            {
                "title": document.base_name,
                "href": document_filename(document),
                "description": document.section.subtitle,
            }
            for document in self.model.documents
        ]
        columns: list[dict[str, typ.Any]] = []
        if modules and classes and examples and documents:
            combined = [{"label": "Modules", "links": modules}]
            combined.append({"label": "Classes", "links": classes})
            columns.append({"heading": "Modules & Classes", "groups": combined})
        else:
            if modules:
                heading = _plural(len(modules), "Module", "Modules")
                columns.append(
                    {"heading": heading, "groups": [{"label": None, "links": modules}]}
                )
            if classes:
                heading = _plural(len(classes), "Class", "Classes")
                columns.append(
                    {"heading": heading, "groups": [{"label": None, "links": classes}]}
                )
        if examples:
            heading = _plural(example_count, "Example", "Examples")
            columns.append({"heading": heading, "groups": examples})
        if documents:
            heading = _plural(len(documents), "Document", "Documents")
            columns.append(
                {"heading": heading, "groups": [{"label": None, "links": documents}]}
            )
        return columns

    def render_module(self, module: Module, *, is_class: bool = False) -> str:
        """Render a module or class page with one anchored block per function."""
        section = module.section
        context = self._base_context(section, module.title)
        used: set[str] = set()
        functions = []
        for function in module.functions:
            functions.append(
                {
                    "name": function.name,
                    "anchor": _unique_slug(slugify(function.name), used),
                    "brief": function.brief,
                    "prototype_html": self.renderer.prototype(
                        function.prototype, function.language
                    ),
                    "notes_html": self._prose(function.text, section),
                }
            )
        context.update(
            kind="Class" if is_class else "Module",
            body_html=self._prose(section.text, section),
            functions=functions,
        )
        return self.env.get_template("module.jinja").render(**context)

    def render_document(self, document: MarkdownDocument) -> str:
        """Render a markdown document page with an outline side bar."""
        section = document.section
        context = self._base_context(section, document.base_name)
        context["subtitle"] = None
        used: set[str] = set()
        context["outline"] = [
            {
                "title": heading.title,
                "level": heading.level,
                "anchor": _unique_slug(slugify(heading.title), used),
            }
            for heading in document.headings
        ]
        context["body_html"] = self._prose(section.text, section)
        return self.env.get_template("document.jinja").render(**context)


__all__ = ["HtmlSiteWriter", "document_filename", "module_filename"]
