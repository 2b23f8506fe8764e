"""Renderers turning a finished keydoc document model into output files."""

from .anchors import HeadingAnchorExtension
from .html_writer import HtmlSiteWriter
from .markdown_writer import MarkdownWriter
from .models import LogoModel, PageStyle, resolve_style
from .renderer import HtmlContentRenderer

__all__ = [
    "HeadingAnchorExtension",
    "HtmlContentRenderer",
    "HtmlSiteWriter",
    "LogoModel",
    "MarkdownWriter",
    "PageStyle",
    "resolve_style",
]
