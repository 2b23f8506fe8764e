"""Load and validate keydoc build configuration.

Options come from an optional ``keydoc.yaml`` read by
:func:`load_build_config`; command-line values are layered on top with
:func:`merge_overrides`. The result is a :class:`BuildConfig` consumed by the
builder and the writers.

Examples
--------
>>> from keydoc.config import BuildConfig, merge_overrides
>>> merge_overrides(BuildConfig(), exts=".c.py").exts
('.c', '.py')
"""

from .helpers import parse_extensions
from .loader import DEFAULT_CONFIG, load_build_config, merge_overrides
from .models import BuildConfig, BuildConfigError

__all__ = [
    "DEFAULT_CONFIG",
    "BuildConfig",
    "BuildConfigError",
    "load_build_config",
    "merge_overrides",
    "parse_extensions",
]
