"""
Pydantic schema definitions for the character catalogue.

``QuerySpec`` is the parsed form of a list request. Every query
parameter arrives as text, so ``QuerySpec.from_params`` performs its
own coercion and never raises: unparsable numbers fall back to their
defaults. ``CharacterPage`` bundles a page of projected characters
with pagination metadata so that clients know how many pages exist.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field
from typing_extensions import Literal

from .filters import parse_categories

DEFAULT_LIMIT = 20

# Fields returned by the list view. Detail lookups return the full record.
LIST_FIELDS: List[str] = ["id", "name", "images", "appearance.race"]

PAGE_KEYS = ("page", "_page")
LIMIT_KEYS = ("limit", "_limit")
SEARCH_KEYS = ("q", "search")
CATEGORY_KEYS = ("race", "category")
SORT_KEYS = ("sort", "_sort")
ORDER_KEYS = ("order", "_order")
FIELDS_KEY = "fields"

# Parameters that are never treated as generic path filters.
RESERVED_PARAMS = frozenset(
    PAGE_KEYS + LIMIT_KEYS + SEARCH_KEYS + CATEGORY_KEYS + SORT_KEYS + ORDER_KEYS + (FIELDS_KEY,)
)

SortOrder = Literal["asc", "desc"]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _first(params: Mapping[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = params.get(key)
        if value is not None and str(value) != "":
            return str(value)
    return None


def _parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse the leading integer of ``raw``; ``None`` when there is none or it is zero."""
    if raw is None:
        return None
    m = _LEADING_INT.match(raw)
    if not m:
        return None
    value = int(m.group(1))
    return value or None


def _parse_fields(raw: Optional[str]) -> List[str]:
    if raw is None:
        return list(LIST_FIELDS)
    return [f.strip() for f in raw.split(",") if f.strip()]


class QuerySpec(BaseModel):
    """A parsed list request."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    q: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    sort: Optional[str] = None
    order: SortOrder = "asc"
    fields: List[str] = Field(default_factory=lambda: list(LIST_FIELDS))
    filters: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Mapping[str, Any], default_limit: int = DEFAULT_LIMIT) -> "QuerySpec":
        """Build a spec from raw, text valued query parameters.

        Parameters
        ----------
        params : Mapping[str, Any]
            Query parameters by name. Values are converted to text.
        default_limit : int
            Page size used when ``limit`` is absent or unparsable.

        Returns
        -------
        QuerySpec
            The parsed request. Parameters outside ``RESERVED_PARAMS``
            become ``filters``.
        """
        page = _parse_int(_first(params, PAGE_KEYS)) or 1
        limit = _parse_int(_first(params, LIMIT_KEYS)) or default_limit
        q = (_first(params, SEARCH_KEYS) or "").strip() or None
        order_raw = (_first(params, ORDER_KEYS) or "").strip().lower()
        sort = (_first(params, SORT_KEYS) or "").strip() or None
        filters = {
            str(key): str(value)
            for key, value in params.items()
            if key not in RESERVED_PARAMS and value is not None
        }
        return cls(
            page=max(1, page),
            limit=max(1, limit),
            q=q,
            categories=parse_categories(_first(params, CATEGORY_KEYS)),
            sort=sort,
            order="desc" if order_raw == "desc" else "asc",
            fields=_parse_fields(_first(params, (FIELDS_KEY,))),
            filters=filters,
        )


class PageMeta(BaseModel):
    """Pagination metadata returned alongside a page of characters."""

    total: int
    page: int
    limit: int
    pages: int


class CharacterPage(BaseModel):
    """A wrapper for paginated results returned from ``/characters``."""

    data: List[Dict[str, Any]]
    meta: PageMeta


class HealthStatus(BaseModel):
    status: str = "ok"
