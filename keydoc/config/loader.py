"""Load ``keydoc.yaml`` into a :class:`~keydoc.config.models.BuildConfig`."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _optional_path, _path_list, _require_bool, parse_extensions
from .models import BuildConfig, BuildConfigError

DEFAULT_CONFIG = Path("keydoc.yaml")
KNOWN_KEYS = frozenset(
    {
        "inputs",
        "output_dir",
        "exts",
        "sort",
        "markdown",
        "no_index",
        "no_build",
        "pygments_style",
    }
)


def load_build_config(path: Path | None = None) -> BuildConfig:
    """Load build options from YAML.

    Parameters
    ----------
    path : Path, optional
        Configuration file to read. When ``None``, ``keydoc.yaml`` in the
        working directory is used if present, otherwise defaults apply.

    Returns
    -------
    BuildConfig
        Options read from the file, with defaults for missing keys.

    Raises
    ------
    FileNotFoundError
        If ``path`` was given explicitly and does not exist.
    BuildConfigError
        If the file is not a mapping, names unknown keys, or holds values of
        the wrong type.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_build_config(Path("keydoc.yaml"))  # doctest: +SKIP
    >>> config.exts  # doctest: +SKIP
    ('.c', '.py')
    """
    if path is None:
        if not DEFAULT_CONFIG.exists():
            return BuildConfig()
        path = DEFAULT_CONFIG
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise BuildConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    unknown = sorted(set(raw) - KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}."
        raise BuildConfigError(msg)

    defaults = BuildConfig()
    exts = raw.get("exts")
    return BuildConfig(
        inputs=_path_list(raw.get("inputs")),
        output_dir=_optional_path(raw.get("output_dir")),
        exts=parse_extensions(exts) if exts else defaults.exts,
        sort=_require_bool(raw, "sort", defaults.sort),
        markdown=_require_bool(raw, "markdown", defaults.markdown),
        no_index=_require_bool(raw, "no_index", defaults.no_index),
        no_build=_require_bool(raw, "no_build", defaults.no_build),
        pygments_style=str(raw.get("pygments_style") or defaults.pygments_style),
    )


def merge_overrides(config: BuildConfig, **overrides: object) -> BuildConfig:
    """Return ``config`` with every override that is not ``None`` applied.

    An empty ``inputs`` sequence keeps the configured inputs, and ``exts``
    accepts the same forms as the YAML key.

    Examples
    --------
    >>> merged = merge_overrides(BuildConfig(), sort=False, output_dir=None)
    >>> merged.sort, merged.output_dir is None
    (False, True)
    """
    changes: dict[str, typ.Any] = {}
    for key, value in overrides.items():
        if value is None:
            continue
        match key:
            case "inputs":
                paths = [Path(str(item)) for item in typ.cast("typ.Iterable", value)]
                if paths:
                    changes[key] = paths
            case "exts":
                changes[key] = parse_extensions(typ.cast("str", value))
            case "output_dir":
                changes[key] = Path(str(value))
            case _ if key in KNOWN_KEYS:
                changes[key] = value
            case _:
                msg = f"Unknown build option '{key}'."
                raise BuildConfigError(msg)
    return dc.replace(config, **changes)


__all__ = ["DEFAULT_CONFIG", "load_build_config", "merge_overrides"]
