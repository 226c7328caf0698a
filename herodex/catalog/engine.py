"""
Query engine for the character catalogue.

``CharacterCatalog`` wraps an immutable snapshot of the collection
loaded at startup. Each request is a pure read over that snapshot:
filter, optional sort, pagination and projection. Nothing here
mutates the records, so one catalog can serve concurrent requests,
and tests can build isolated catalogs from small fixtures.
"""

from __future__ import annotations

import copy
import functools
import logging
import unicodedata
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .filters import (
    CATEGORY_PATH,
    as_number,
    as_text,
    build_predicate,
    category_tokens,
)
from .paths import get_by_path, set_by_path
from .schemas import CharacterPage, PageMeta, QuerySpec

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]

WILDCARD = "*"
PLACEHOLDER_CATEGORIES = {"-", "null", "n/a"}


def collation_key(value: Any) -> str:
    """Accent and case folded text, so ``"Élan"`` sorts next to ``"elan"``."""
    decomposed = unicodedata.normalize("NFKD", as_text(value))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison of two record values.

    A missing value (``None``) is smaller than any present one. Two
    numeric values compare as numbers, anything else compares as
    folded text.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    an, bn = as_number(a), as_number(b)
    if an is not None and bn is not None:
        return (an > bn) - (an < bn)
    ak, bk = collation_key(a), collation_key(b)
    return (ak > bk) - (ak < bk)


def sort_records(records: Sequence[Record], path: str, order: str = "asc") -> List[Record]:
    """Stable sort of ``records`` by the value at ``path``.

    Ascending puts records missing the key first; descending puts them
    last. Ties keep their incoming order in both directions.
    """
    sign = -1 if order == "desc" else 1

    def _cmp(left: Record, right: Record) -> int:
        return sign * compare_values(get_by_path(left, path), get_by_path(right, path))

    return sorted(records, key=functools.cmp_to_key(_cmp))


def paginate(total: int, page: int, limit: int) -> Tuple[int, int, int, int]:
    """Resolve pagination for ``total`` items.

    Returns
    -------
    Tuple[int, int, int, int]
        ``(page, pages, start, end)`` where ``page`` is clamped to
        ``[1, pages]`` and ``pages`` is at least 1.
    """
    limit = max(1, int(limit))
    pages = max(1, -(-total // limit))
    current = min(max(1, int(page)), pages)
    start = (current - 1) * limit
    return current, pages, start, start + limit


def project(record: Optional[Record], fields: Iterable[str]) -> Any:
    """Rebuild ``record`` keeping only ``fields``.

    A ``"*"`` entry returns the original record untouched. Otherwise values
    are copied, so the result shares nothing with ``record``. Paths that do
    not resolve are left out of the result.
    """
    if record is None:
        return record
    if isinstance(fields, str):
        fields = [fields]
    wanted = [str(f).strip() for f in fields if f and str(f).strip()]
    if WILDCARD in wanted:
        return record
    out: Dict[str, Any] = {}
    for path in wanted:
        value = get_by_path(record, path)
        if value is not None:
            set_by_path(out, path, copy.deepcopy(value))
    return out


class CharacterCatalog:
    """Read-only query engine over a fixed collection of characters."""

    def __init__(self, records: Iterable[Record] = ()):
        self._records: Tuple[Record, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def filter(self, spec: QuerySpec) -> List[Record]:
        predicate = build_predicate(spec)
        return [r for r in self._records if predicate(r)]

    def query(self, spec: QuerySpec) -> CharacterPage:
        """Run a list query and return one page of projected characters."""
        items = self.filter(spec)
        if spec.sort:
            items = sort_records(items, spec.sort, spec.order)

        total = len(items)
        page, pages, start, end = paginate(total, spec.page, spec.limit)
        data = [project(r, spec.fields) for r in items[start:end]]
        logger.debug(
            "query matched %d of %d characters (page %d/%d)",
            total,
            len(self._records),
            page,
            pages,
        )
        return CharacterPage(
            data=data,
            meta=PageMeta(total=total, page=page, limit=spec.limit, pages=pages),
        )

    def get(self, character_id: Any) -> Optional[Record]:
        """Return the full record whose ``id`` matches ``character_id`` as text."""
        wanted = as_text(character_id)
        for record in self._records:
            if as_text(record.get("id")) == wanted:
                return record
        return None

    def categories(self) -> List[str]:
        """Distinct race tokens across the collection, sorted for display."""
        seen = set()
        for record in self._records:
            value = get_by_path(record, CATEGORY_PATH)
            if as_text(value).strip().lower() in PLACEHOLDER_CATEGORIES:
                continue
            for token in category_tokens(value):
                if token.lower() in PLACEHOLDER_CATEGORIES:
                    continue
                seen.add(token)
        return sorted(seen, key=lambda t: (collation_key(t), t))
