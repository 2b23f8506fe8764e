"""Shared dataclasses used by the keydoc writers."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .._constants import (
    DEFAULT_BAR_COLOR,
    DEFAULT_HEADING_COLOR,
    DEFAULT_TITLE_COLOR,
)
from ..markdown_parser import IMAGE_PATTERN

if typ.TYPE_CHECKING:
    from ..model import MainPage, Section


@dc.dataclass(slots=True)
class LogoModel:
    """Image shown in the page bar in place of the default Home link."""

    src: str
    alt: str
    title: str | None = None


@dc.dataclass(slots=True)
class PageStyle:
    """Resolved colors, fonts, logo and version for one page.

    Attributes
    ----------
    bar_color, title_color, heading_color : str
        W3.CSS classes for the top bar, the page title and headings.
    font_body, font_headings : str or None
        CSS font-family values; ``None`` keeps the stylesheet default.
    logo : LogoModel or None
        Logo image, or ``None`` for a plain Home link.
    version : str or None
        Version text shown under the title.
    """

    bar_color: str = DEFAULT_BAR_COLOR
    title_color: str = DEFAULT_TITLE_COLOR
    heading_color: str = DEFAULT_HEADING_COLOR
    font_body: str | None = None
    font_headings: str | None = None
    logo: LogoModel | None = None
    version: str | None = None


def _logo(markdown_image: str | None) -> LogoModel | None:
    if not markdown_image:
        return None
    found = IMAGE_PATTERN.match(markdown_image)
    if found is None:
        return None
    return LogoModel(
        src=found.group("link"), alt=found.group("alt"), title=found.group("title")
    )


def resolve_style(section: Section, mainpage: MainPage | None = None) -> PageStyle:
    """Resolve ``section`` styles, falling back to the mainpage then defaults.

    Examples
    --------
    >>> from keydoc.model import MainPage, Section
    >>> main = MainPage(Section("Home", bar_color="w3-red"))
    >>> resolve_style(Section("io"), main).bar_color
    'w3-red'
    >>> resolve_style(Section("io")).heading_color
    'w3-text-blue'
    """
    fallback = mainpage.section if mainpage is not None else None

    def pick(name: str) -> typ.Any:
        value = getattr(section, name)
        if value is None and fallback is not None:
            value = getattr(fallback, name)
        return value

    defaults = PageStyle()
    return PageStyle(
        bar_color=pick("bar_color") or defaults.bar_color,
        title_color=pick("title_color") or defaults.title_color,
        heading_color=pick("heading_color") or defaults.heading_color,
        font_body=pick("font_body"),
        font_headings=pick("font_headings"),
        logo=_logo(pick("logo")),
        version=pick("version"),
    )


__all__ = ["LogoModel", "PageStyle", "resolve_style"]
