"""
Route definitions for the character catalogue.

Endpoints (mounted at ``/`` and again under ``/api``):
- GET  /characters                  : paginated list with search, filters and sort
- GET  /characters/{character_id}   : full record for one character
- GET  /races                       : distinct race values for filter menus
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from .engine import CharacterCatalog
from .schemas import DEFAULT_LIMIT, CharacterPage, QuerySpec

logger = logging.getLogger(__name__)

router = APIRouter(tags=["characters"])


def get_catalog(request: Request) -> CharacterCatalog:
    return request.app.state.catalog


def _default_limit(request: Request) -> int:
    settings = getattr(request.app.state, "settings", None)
    return getattr(settings, "default_limit", DEFAULT_LIMIT)


@router.get("/characters", response_model=CharacterPage)
def list_characters(
    request: Request,
    response: Response,
    catalog: CharacterCatalog = Depends(get_catalog),
) -> CharacterPage:
    """
    Returns a page of characters.

    All query parameters are read as text:
    - page, limit (aliases _page, _limit): pagination, clamped to the valid range
    - q (alias search): case-insensitive search on name, slug, full name, publisher
    - race (alias category): comma separated races, any match wins
    - sort, order (aliases _sort, _order): dotted path and asc/desc
    - fields: comma separated output paths, or * for full records
    - anything else: dotted path equality filter, e.g. powerstats.strength=100
    """
    spec = QuerySpec.from_params(request.query_params, default_limit=_default_limit(request))
    page = catalog.query(spec)

    response.headers["X-Total-Count"] = str(page.meta.total)
    response.headers["Access-Control-Expose-Headers"] = "X-Total-Count"
    return page


@router.get("/characters/{character_id}")
def get_character(
    character_id: str,
    catalog: CharacterCatalog = Depends(get_catalog),
) -> Dict[str, Any]:
    character = catalog.get(character_id)
    if character is None:
        logger.info("Character %s not found", character_id)
        raise HTTPException(status_code=404, detail="Character not found")
    return dict(character)


@router.get("/races", response_model=List[str])
def list_races(catalog: CharacterCatalog = Depends(get_catalog)) -> List[str]:
    """Unique race values, split on ``/`` and sorted."""
    return catalog.categories()
