"""
Dotted path helpers for nested character records.

Records are plain JSON documents (dicts, lists and scalars), so an
attribute such as ``powerstats.power`` is reached by walking one key
per segment. Reads drive filtering and sorting; writes drive output
projection.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

# ASCII list indexes only; other Unicode digits are plain keys.
_INDEX = re.compile(r"^[0-9]+$")


def _split(path: Optional[str]) -> List[str]:
    if path is None:
        return []
    return str(path).split(".")


def get_by_path(record: Any, path: Optional[str]) -> Any:
    """Return the value stored at ``path`` inside ``record``.

    Parameters
    ----------
    record : Any
        The document to read from, usually a character dict.
    path : Optional[str]
        Dot separated attribute path, e.g. ``"appearance.race"``. Numeric
        segments index into lists (``"appearance.height.0"``).

    Returns
    -------
    Any
        The resolved value, or ``None`` when the path is empty or any
        segment along the way is missing.
    """
    segments = _split(path)
    if not path:
        return None
    node = record
    for seg in segments:
        if isinstance(node, dict):
            if seg not in node:
                return None
            node = node[seg]
        elif isinstance(node, list) and _INDEX.match(seg):
            idx = int(seg)
            if idx >= len(node):
                return None
            node = node[idx]
        else:
            return None
    return node


def set_by_path(target: Dict[str, Any], path: str, value: Any) -> Dict[str, Any]:
    """Write ``value`` at ``path`` inside ``target`` and return ``target``.

    Missing intermediate groups are created as plain dicts; a non-dict
    value found on the way is replaced by a fresh dict.
    """
    segments = _split(path)
    node = target
    for seg in segments[:-1]:
        child = node.get(seg)
        if not isinstance(child, dict):
            child = {}
            node[seg] = child
        node = child
    if segments:
        node[segments[-1]] = value
    return target
