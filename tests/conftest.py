"""Shared fixtures: a small annotated project and a builder run over it."""

from __future__ import annotations

import typing as typ

import pytest

from keydoc.builder import DocumentBuilder

if typ.TYPE_CHECKING:
    from pathlib import Path

MAIN_C = """\
/*!
  @mainpage Widgets
  @color w3-teal
  @logo ![Widgets](logo.png)

  Widget toolkit.

  Start with the io module.
*/
"""

IO_C = """\
/*!
  @defgroup io  Input and output

  Byte level access.

  @example Read one byte

  ```c
  int b = read_byte();
  ```
*/

/*!
  Reads a byte.

  Blocks until data arrives.
*/
int read_byte(void);
"""

SHAPE_PY = '''\
#! @class Shape  Geometry base

def area(self):
    """!
    Return the area.
    """
'''

GUIDE_MD = """\
# Guide

## Setup

Run it.
"""


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Write ``files`` (relative name to content) under ``root``."""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def widgets_src(tmp_path: Path) -> Path:
    """Create a project with a mainpage, a module, a class and a document."""
    return write_tree(
        tmp_path / "src",
        {
            "main.c": MAIN_C,
            "io.c": IO_C,
            "shape.py": SHAPE_PY,
            "guide.md": GUIDE_MD,
            "logo.png": b"\x89PNG",
        },
    )


@pytest.fixture
def widgets(widgets_src: Path) -> DocumentBuilder:
    """Return a builder that has already run over ``widgets_src``."""
    builder = DocumentBuilder()
    builder.run([widgets_src])
    return builder


@pytest.fixture
def io_src(tmp_path: Path) -> Path:
    """Create a project holding a single documented module."""
    return write_tree(tmp_path / "src", {"io.c": IO_C})
