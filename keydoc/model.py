"""Typed dataclasses describing the extracted documentation tree.

The :class:`DocumentModel` owns every entity created during a run: modules,
classes (same shape, separate list), markdown documents, the optional
mainpage, image references and discovered image files. Entities are created
while parsing, completed in place when a stub gains its declaration, and never
removed. Renderers treat the finished model as read-only.

Examples
--------
>>> from keydoc.model import DocumentModel, Module, Section
>>> model = DocumentModel()
>>> model.insert_module(Module(Section("zeta")))
>>> model.insert_module(Module(Section("Alpha")))
>>> [module.title for module in model.modules]
['Alpha', 'zeta']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ._constants import INDEX_TITLE, MARKDOWN_EXTS

T = typ.TypeVar("T")


@dc.dataclass(slots=True)
class Example:
    """Title reference to an example code block inside a section's prose."""

    title: str


@dc.dataclass(slots=True)
class Section:
    """Shared titled-entity shape embedded in modules, documents and the mainpage.

    Attributes
    ----------
    title : str
        Entity title; for documents the file name including its extension.
    subtitle : str or None
        One-line description. ``None`` means no subtitle was ever given.
    text : str or None
        Materialized markdown prose, or ``None`` when there is no body.
    bar_color, title_color, heading_color : str or None
        ``@color`` overrides.
    font_body, font_headings : str or None
        ``@font`` overrides.
    logo : str or None
        Markdown image text from ``@logo``.
    version : str or None
        ``@version`` text.
    examples : list[Example]
        Examples found in the section, in encounter order.
    """

    title: str
    subtitle: str | None = None
    text: str | None = None
    bar_color: str | None = None
    title_color: str | None = None
    heading_color: str | None = None
    font_body: str | None = None
    font_headings: str | None = None
    logo: str | None = None
    version: str | None = None
    examples: list[Example] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Function:
    """A documented function or method."""

    name: str
    prototype: str
    brief: str | None = None
    text: str | None = None
    language: str | None = None


@dc.dataclass(slots=True)
class Module:
    """A module (``@defgroup``) or class (``@class``) with its functions."""

    section: Section
    functions: list[Function] = dc.field(default_factory=list)

    @property
    def title(self) -> str:
        """Return the module or class name."""
        return self.section.title

    @property
    def is_stub(self) -> bool:
        """Return ``True`` while only a grouping reference has named this entity."""
        return self.section.subtitle is None and self.section.text is None


@dc.dataclass(slots=True)
class Heading:
    """An interior heading of a markdown document (levels 2 to 6)."""

    level: int
    title: str


@dc.dataclass(slots=True)
class MarkdownDocument:
    """A standalone markdown file and its heading outline."""

    section: Section
    path: Path
    headings: list[Heading] = dc.field(default_factory=list)

    @property
    def title(self) -> str:
        """Return the document title (the file name)."""
        return self.section.title

    @property
    def base_name(self) -> str:
        """Return the file name without its extension, used for output names."""
        return Path(self.section.title).stem


@dc.dataclass(slots=True)
class MainPage:
    """The run-wide singleton landing page."""

    section: Section


@dc.dataclass(slots=True)
class ImageRef:
    """An image link found in prose, e.g. ``logo.png`` or a full URL."""

    link: str


@dc.dataclass(slots=True)
class ImageFile:
    """An image discovered among the inputs before parsing begins."""

    path: Path
    referenced: bool = False


@dc.dataclass(frozen=True, slots=True)
class DocumentStats:
    """Aggregate counts reported at the end of a run."""

    modules: int
    functions: int
    classes: int
    methods: int
    examples: int
    documents: int
    images: int
    files: int
    comments: int
    warnings: int
    has_mainpage: bool = False

    @property
    def objects(self) -> int:
        """Return the number of documentable objects, counting the mainpage."""
        return (
            int(self.has_mainpage)
            + self.modules
            + self.functions
            + self.classes
            + self.methods
            + self.examples
            + self.documents
        )

    @property
    def pages(self) -> int:
        """Return how many standalone pages the model yields (index excluded)."""
        return self.modules + self.classes + self.documents


def sort_key(title: str) -> str:
    """Return the case-insensitive ordering key used by the sort policy."""
    return title.casefold()


def normalize_title(title: str) -> str:
    """Return ``title`` with any markdown extension stripped, case-folded.

    Examples
    --------
    >>> normalize_title("ReadMe.md"), normalize_title("FOO")
    ('readme', 'foo')
    """
    lowered = title.casefold()
    for ext in MARKDOWN_EXTS:
        if lowered.endswith(ext) and len(lowered) > len(ext):
            return lowered[: -len(ext)]
    return lowered


def _insert(
    items: list[T],
    item: T,
    title: str,
    key: typ.Callable[[T], str],
    *,
    sort: bool,
) -> None:
    """Append ``item`` or insert it after every entry that sorts before or equal."""
    if not sort:
        items.append(item)
        return
    wanted = sort_key(title)
    position = len(items)
    for index, existing in enumerate(items):
        if sort_key(key(existing)) > wanted:
            position = index
            break
    items.insert(position, item)


@dc.dataclass(slots=True)
class DocumentModel:
    """Everything extracted from the inputs of one run.

    Attributes
    ----------
    sort : bool
        When ``True`` modules, classes, functions and documents are kept in
        case-insensitive alphabetical order; otherwise in encounter order.
    modules, classes : list[Module]
        ``@defgroup`` and ``@class`` entities.
    documents : list[MarkdownDocument]
        Standalone markdown files.
    mainpage : MainPage or None
        The singleton landing page.
    images : list[ImageRef]
        Every image reference found in prose.
    image_files : list[ImageFile]
        Images discovered among the inputs.
    files_scanned, comments_processed : int
        Counters maintained by the builder.
    """

    sort: bool = True
    modules: list[Module] = dc.field(default_factory=list)
    classes: list[Module] = dc.field(default_factory=list)
    documents: list[MarkdownDocument] = dc.field(default_factory=list)
    mainpage: MainPage | None = None
    images: list[ImageRef] = dc.field(default_factory=list)
    image_files: list[ImageFile] = dc.field(default_factory=list)
    files_scanned: int = 0
    comments_processed: int = 0

    def find(self, title: str, *, is_class: bool) -> Module | None:
        """Return the module or class titled exactly ``title``."""
        entries = self.classes if is_class else self.modules
        return next((entry for entry in entries if entry.title == title), None)

    def insert_module(self, module: Module, *, is_class: bool = False) -> None:
        """Insert ``module`` into the module or class list per the sort policy."""
        entries = self.classes if is_class else self.modules
        _insert(
            entries, module, module.title, lambda entry: entry.title, sort=self.sort
        )

    def insert_function(self, module: Module, function: Function) -> None:
        """Insert ``function`` into ``module``; duplicate names are kept."""
        _insert(
            module.functions,
            function,
            function.name,
            lambda entry: entry.name,
            sort=self.sort,
        )

    def insert_document(self, document: MarkdownDocument) -> None:
        """Insert ``document`` into the document list per the sort policy."""
        _insert(
            self.documents,
            document,
            document.title,
            lambda entry: entry.title,
            sort=self.sort,
        )

    def title_collides(self, title: str) -> bool:
        """Return ``True`` when ``title`` clashes with an existing page name.

        Titles compare after :func:`normalize_title`. The literal ``index``
        is reserved whenever a mainpage exists or more than one page will be
        written.
        """
        wanted = normalize_title(title)
        existing = [entry.title for entry in (*self.modules, *self.classes)]
        existing.extend(document.title for document in self.documents)
        if any(normalize_title(other) == wanted for other in existing):
            return True
        if wanted == INDEX_TITLE:
            return self.mainpage is not None or len(existing) >= 1
        return False

    def find_image_file(self, name: str) -> ImageFile | None:
        """Return the discovered image whose file name is ``name``."""
        return next(
            (image for image in self.image_files if image.path.name == name), None
        )

    def iter_sections(self) -> typ.Iterator[Section]:
        """Yield every section: mainpage, modules, classes then documents."""
        if self.mainpage is not None:
            yield self.mainpage.section
        for module in (*self.modules, *self.classes):
            yield module.section
        for document in self.documents:
            yield document.section

    def stats(self, warnings: int = 0) -> DocumentStats:
        """Return aggregate counts for the current model."""
        return DocumentStats(
            modules=len(self.modules),
            functions=sum(len(module.functions) for module in self.modules),
            classes=len(self.classes),
            methods=sum(len(module.functions) for module in self.classes),
            examples=sum(len(section.examples) for section in self.iter_sections()),
            documents=len(self.documents),
            images=len(self.images),
            files=self.files_scanned,
            comments=self.comments_processed,
            warnings=warnings,
            has_mainpage=self.mainpage is not None,
        )


__all__ = [
    "DocumentModel",
    "DocumentStats",
    "Example",
    "Function",
    "Heading",
    "ImageFile",
    "ImageRef",
    "MainPage",
    "MarkdownDocument",
    "Module",
    "Section",
    "normalize_title",
    "sort_key",
]
