"""Path resolution against nested input records.

Paths are dot-separated key sequences with an optional ``$.`` prefix, e.g.
``$.product.category`` or ``product.category``. Resolution never raises: a
missing key, or a non-mapping value where more segments remain, means the
path has no value.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

PATH_PREFIX = "$."


def split_path(path: str) -> list[str]:
    """Split a path into its key segments.

    >>> split_path("$.product.category")
    ['product', 'category']
    >>> split_path("$.")
    ['']
    """
    if path.startswith(PATH_PREFIX):
        path = path[len(PATH_PREFIX):]
    return path.split(".")


def lookup(path: str, data: Mapping[str, Any]) -> Any | None:
    """Return the raw value stored at ``path``, or None if there is none."""
    current: Any = data
    for key in split_path(path):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def to_canonical_string(value: Any) -> str | None:
    """Render a scalar the way comparisons see it.

    Booleans become ``"true"``/``"false"``, numbers their natural text form.
    Anything that is not a scalar (None, mappings, sequences) has no string
    form and yields None.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return repr(float(value))
    return None


def resolve(path: str, data: Mapping[str, Any]) -> str | None:
    """Resolve ``path`` against ``data`` to its canonical string, if any."""
    return to_canonical_string(lookup(path, data))
