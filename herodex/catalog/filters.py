"""
Predicate construction for character list queries.

A list request combines up to three independent layers, joined by AND:
a free-text search over a few identity fields, a category (race)
filter over the ``/`` separated ``appearance.race`` attribute, and
generic ``path=value`` equality filters built from every non-reserved
query parameter.
"""

from __future__ import annotations

import math
import re
import unicodedata
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from .paths import get_by_path

if TYPE_CHECKING:
    from .schemas import QuerySpec

Record = Mapping[str, Any]
Predicate = Callable[[Record], bool]

CATEGORY_PATH = "appearance.race"
CATEGORY_SEPARATOR = "/"
SEARCH_FIELDS = ("name", "slug", "biography.fullName", "biography.publisher")

_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def as_text(value: Any) -> str:
    """Text form of a record value, close to what a JSON client would print."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(as_text(v) for v in value)
    return str(value)


def as_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` if it is not numeric.

    Booleans and blank strings are not numbers here, so ``""`` never
    compares equal to ``0``.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER.match(text):
            return None
        number = float(text)
    else:
        return None
    return number if math.isfinite(number) else None


def normalize(value: Any) -> str:
    """Case and compatibility normalized text used for matching."""
    return unicodedata.normalize("NFKC", as_text(value)).casefold()


def parse_categories(raw: Optional[str]) -> List[str]:
    """Split a comma separated category list, lower-casing and dropping blanks."""
    if not raw:
        return []
    return [token for token in (normalize(part).strip() for part in raw.split(",")) if token]


def category_tokens(value: Any) -> List[str]:
    """Individual trimmed tokens of a multi-value category string."""
    if value is None:
        return []
    return [part.strip() for part in as_text(value).split(CATEGORY_SEPARATOR) if part.strip()]


def _search_layer(term: Optional[str]) -> Optional[Predicate]:
    needle = normalize(term).strip()
    if not needle:
        return None

    def _matches(record: Record) -> bool:
        return any(needle in normalize(get_by_path(record, path)) for path in SEARCH_FIELDS)

    return _matches


def _category_layer(wanted: List[str]) -> Optional[Predicate]:
    wanted_set = {normalize(w).strip() for w in wanted if w and w.strip()}
    if not wanted_set:
        return None

    def _matches(record: Record) -> bool:
        value = get_by_path(record, CATEGORY_PATH)
        if value is None:
            return False
        return any(normalize(token) in wanted_set for token in category_tokens(value))

    return _matches


def value_matches(actual: Any, expected: str) -> bool:
    """Compare a resolved record value with the expected text of a filter.

    Lists match when any element's text equals ``expected``; numbers
    compare numerically when both sides parse; anything else falls
    back to case-insensitive substring containment. An unresolved
    value never matches.
    """
    if actual is None:
        return False
    if isinstance(actual, (list, tuple)):
        return expected in [as_text(item) for item in actual]
    expected_num = as_number(expected)
    actual_num = as_number(actual)
    if expected_num is not None and actual_num is not None:
        return expected_num == actual_num
    return normalize(expected) in normalize(actual)


def _field_layer(filters: Dict[str, str]) -> Optional[Predicate]:
    if not filters:
        return None
    items = list(filters.items())

    def _matches(record: Record) -> bool:
        return all(value_matches(get_by_path(record, path), expected) for path, expected in items)

    return _matches


def build_predicate(spec: "QuerySpec") -> Predicate:
    """Combine the search, category and field layers of ``spec`` into one predicate."""
    layers = [
        layer
        for layer in (
            _search_layer(spec.q),
            _category_layer(spec.categories),
            _field_layer(spec.filters),
        )
        if layer is not None
    ]

    def _predicate(record: Record) -> bool:
        return all(layer(record) for layer in layers)

    return _predicate
