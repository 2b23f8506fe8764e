"""Prepare stored section prose for rendering.

Stored prose keeps ``@example`` and unknown keyword lines, and markdown
documents keep every keyword line verbatim. Renderers want neither: example
lines become headings or bold labels, other keyword lines are dropped, and
code blocks pass through untouched.

Examples
--------
>>> text = "Intro.\\n@example Add\\n```c\\nadd(1, 2);\\n```\\n@version 2"
>>> print(render_prose(text, example_format="##### Example: {title}"))
Intro.
##### Example: Add
<BLANKLINE>
```c
add(1, 2);
```
"""

from __future__ import annotations

from ..keywords import Keyword, match_keyword
from ..markdown_parser import code_block_end, is_blank, parse_heading

HTML_EXAMPLE_FORMAT = "##### Example: {title}"
MARKDOWN_EXAMPLE_FORMAT = "**Example: {title}**"


def render_prose(text: str | None, *, example_format: str, shift: int = 0) -> str:
    """Return ``text`` with keyword lines rewritten for output.

    Parameters
    ----------
    text : str or None
        Stored prose; ``None`` yields an empty string.
    example_format : str
        Format string applied to ``@example`` titles; ``{title}`` is replaced.
    shift : int, optional
        Levels added to every heading outside code blocks, capped at 6.
    """
    if not text:
        return ""
    lines = text.splitlines()
    output: list[str] = []
    cursor = 0
    after_blank = True
    while cursor < len(lines):
        block_end = code_block_end(lines, cursor, indented=after_blank)
        if block_end is not None:
            output.extend(lines[cursor:block_end])
            cursor = block_end
            after_blank = False
            continue
        line = lines[cursor]
        found = match_keyword(line)
        after_blank = is_blank(line)
        cursor += 1
        if found is not None:
            if found.keyword is Keyword.EXAMPLE and found.argument:
                output.extend([example_format.format(title=found.argument), ""])
                while cursor < len(lines) and is_blank(lines[cursor]):
                    cursor += 1
                after_blank = True
            continue
        heading = parse_heading(line) if shift else None
        if heading is not None:
            level, title = heading
            output.append(f"{'#' * min(level + shift, 6)} {title}")
        else:
            output.append(line)
    while output and is_blank(output[-1]):
        output.pop()
    return "\n".join(output)


__all__ = ["HTML_EXAMPLE_FORMAT", "MARKDOWN_EXAMPLE_FORMAT", "render_prose"]
