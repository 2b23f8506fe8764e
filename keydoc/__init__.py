"""Extract documentation from keyword-annotated comments and markdown files.

Source files carry ``/*! ... */``, ``//!``, ``#!`` or ``\"\"\"!`` comment
headers using a small keyword vocabulary (``@defgroup``, ``@fn``,
``@example`` and friends). keydoc assembles them into a document model and
renders it as an HTML site or a combined markdown file.

Exports
-------
- ``app``: Cyclopts application with the ``build`` and ``slug`` commands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from keydoc import main
>>> main()  # doctest: +SKIP
>>> from keydoc import app
>>> app.name[0]
'keydoc'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
