"""
Catalog package for the character browsing API.

This package contains the query engine and the route definitions that
expose a read-only REST API over a collection of characters. The list
endpoint supports free-text search, race filtering, arbitrary dotted
path filters, sorting and pagination; the detail endpoint returns a
full record. The collection is loaded once at startup (see
``store.py``) and is never modified afterwards.
"""

from .engine import CharacterCatalog  # noqa: F401
from .router import router as catalog_router  # noqa: F401
from .schemas import CharacterPage, PageMeta, QuerySpec  # noqa: F401
