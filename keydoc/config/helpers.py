"""Utility helpers shared by the keydoc configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import BuildConfigError


def parse_extensions(value: str | typ.Iterable[object]) -> tuple[str, ...]:
    """Normalize ``.c.py`` style strings or lists into lowercase dotted suffixes.

    Examples
    --------
    >>> parse_extensions(".c.c++.PY")
    ('.c', '.c++', '.py')
    >>> parse_extensions(["rs", ".go"])
    ('.rs', '.go')
    """
    if isinstance(value, str):
        parts: list[str] = value.split(".")
    else:
        parts = [str(item).strip().lstrip(".") for item in value]
    exts = tuple(f".{part.lower()}" for part in parts if part.strip())
    if not exts:
        msg = "At least one source extension is required."
        raise BuildConfigError(msg)
    return exts


def _optional_path(value: object | None) -> Path | None:
    """Return a ``Path`` for non-empty values, otherwise ``None``."""
    if value is None:
        return None
    text = str(value).strip()
    return Path(text) if text else None


def _path_list(value: object | None) -> list[Path]:
    """Return ``value`` as a list of paths; a single string becomes one entry."""
    match value:
        case None:
            return []
        case str() as text:
            return [Path(text)] if text.strip() else []
        case list() as items:
            return [Path(str(item)) for item in items if str(item).strip()]
        case _:
            msg = f"Expected a path or list of paths, got {type(value).__name__}."
            raise BuildConfigError(msg)


def _require_bool(payload: typ.Mapping[str, typ.Any], key: str, default: bool) -> bool:
    """Return ``payload[key]`` checked to be a boolean, or ``default``."""
    value = payload.get(key, default)
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false."
        raise BuildConfigError(msg)
    return value


__all__ = [
    "_optional_path",
    "_path_list",
    "_require_bool",
    "parse_extensions",
]
