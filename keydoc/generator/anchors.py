"""Markdown extension giving rendered headings anchor ids and a color class."""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from ..markdown_parser import _unique_slug, slugify

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})


class HeadingAnchorExtension(Extension):
    """Add slug ids and the page's heading color class to every heading.

    The ids match :func:`keydoc.markdown_parser.slugify`, so side bars and
    the index can link straight to a heading or an example.
    """

    def __init__(self, heading_class: str | None = None) -> None:
        super().__init__()
        self.heading_class = heading_class

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the anchor treeprocessor on the Markdown instance."""
        processor = HeadingAnchorTreeprocessor(md, self.heading_class)
        md.treeprocessors.register(processor, "keydoc_heading_anchors", 15)


class HeadingAnchorTreeprocessor(Treeprocessor):
    """Assign unique ids and a class to heading elements."""

    def __init__(self, md: Markdown, heading_class: str | None) -> None:
        super().__init__(md)
        self.heading_class = heading_class

    def run(self, root: Element) -> Element:
        """Annotate headings in document order."""
        used: set[str] = set()
        for element in root.iter():
            if element.tag not in HEADING_TAGS:
                continue
            if not element.get("id"):
                text = "".join(element.itertext())
                element.set("id", _unique_slug(slugify(text), used))
            if self.heading_class:
                classes = element.get("class", "").split()
                if self.heading_class not in classes:
                    classes.append(self.heading_class)
                element.set("class", " ".join(classes))
        return root


__all__ = ["HeadingAnchorExtension", "HeadingAnchorTreeprocessor"]
