"""Common literal values used across keydoc.

These constants keep file extensions, language tags and default page colours
centralized so the parsers, renderers and tests can import the same values
without drifting. Intended for internal use within the keydoc package.

Examples
--------
>>> from keydoc import _constants
>>> _constants.LANGUAGE_BY_EXT[".py"]
'python'
>>> ".md" in _constants.MARKDOWN_EXTS
True
"""

DEFAULT_SOURCE_EXTS = ".c.c++.cc.cpp.cxx.cs.go.java.js.py.rs.swift.ts"
MARKDOWN_EXTS = (".md", ".mdown", ".markdown", ".mkd")
IMAGE_EXTS = (".jpg", ".jpeg", ".png", ".gif")
MAX_FOLDER_DEPTH = 3
MAX_PROTOTYPE_LINES = 20

LANGUAGE_BY_EXT: dict[str, str] = {
    ".c": "c",
    ".h": "c",
    ".c++": "cpp",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".java": "java",
    ".js": "javascript",
    ".py": "python",
    ".rs": "rust",
    ".swift": "swift",
    ".ts": "typescript",
}

DEFAULT_BAR_COLOR = "w3-blue"
DEFAULT_TITLE_COLOR = "w3-black"
DEFAULT_HEADING_COLOR = "w3-text-blue"
W3_CSS_URL = "https://www.w3schools.com/w3css/4/w3.css"

INDEX_TITLE = "index"
TABLE_OF_CONTENTS = "Table of Contents"
EXAMPLE_PREFIX = "Example: "
