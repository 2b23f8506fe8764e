"""Turn keydoc prose and prototypes into highlighted HTML fragments.

Prose arrives with its keyword lines already rewritten by
:func:`keydoc.generator.prose.render_prose`, so it goes straight through
Python-Markdown. Prototypes never pass through markdown; they are
highlighted on their own and tagged with the language they were read in.
"""

from __future__ import annotations

import typing as typ
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from .anchors import HeadingAnchorExtension

if typ.TYPE_CHECKING:
    from pygments.lexer import Lexer

CODE_CSS_CLASS = "codehilite"
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")


def _lexer(language: str | None) -> tuple[Lexer, str]:
    """Return a Pygments lexer for ``language`` and the name it was found under.

    Examples
    --------
    >>> _lexer("klingon")[1]
    'text'
    """
    if language:
        try:
            return get_lexer_by_name(language), language
        except ClassNotFound:
            pass
    return TextLexer(), "text"


class HtmlContentRenderer:
    """Render page prose and function prototypes with one Pygments style."""

    def __init__(self, pygments_style: str = "default") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CODE_CSS_CLASS)

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for every highlighted block."""
        return self._formatter.get_style_defs(f".{CODE_CSS_CLASS}")

    def markdown(self, text: str, heading_class: str | None = None) -> str:
        """Convert prepared prose to HTML.

        Parameters
        ----------
        text : str
            Prose with keyword lines already rewritten.
        heading_class : str or None, optional
            W3.CSS color class added to every heading, which also gets an
            ``id`` slug.

        Returns
        -------
        str
            The HTML fragment, or an empty string for blank prose.
        """
        if not text.strip():
            return ""
        md = Markdown(
            extensions=[*MARKDOWN_EXTENSIONS, HeadingAnchorExtension(heading_class)],
            extension_configs={
                "codehilite": {
                    "guess_lang": False,
                    "css_class": CODE_CSS_CLASS,
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)

    def prototype(self, code: str, language: str | None = None) -> str:
        """Highlight a function prototype and tag it with ``data-language``."""
        lexer, name = _lexer(language)
        html = highlight(code, lexer, self._formatter)
        opening = f'<div class="{CODE_CSS_CLASS}">'
        tagged = f'<div class="{CODE_CSS_CLASS}" data-language="{escape(name)}">'
        return html.replace(opening, tagged, 1)


__all__ = ["HtmlContentRenderer"]
