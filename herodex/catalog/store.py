"""
Data loading for the character catalogue.

The collection is read once from a JSON file at startup and handed to
a ``CharacterCatalog``. The file is either a plain array of character
objects or an object with a ``characters`` array. If you wish to load
from a database instead, replace ``load_characters`` and keep the
return type.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .engine import CharacterCatalog

logger = logging.getLogger(__name__)


def _extract_entries(raw: Any) -> List[Any]:
    if isinstance(raw, dict):
        raw = raw.get("characters")
    if not isinstance(raw, list):
        raise ValueError("expected a JSON array of characters")
    return raw


def load_characters(path: Union[str, Path]) -> Tuple[Dict[str, Any], ...]:
    """Load characters from ``path``.

    Parameters
    ----------
    path : Union[str, Path]
        Location of the JSON dataset.

    Returns
    -------
    Tuple[Dict[str, Any], ...]
        The character records in file order. An unreadable or malformed
        file is logged and yields an empty tuple so the service can still
        start; entries that are not JSON objects are skipped.
    """
    data_file = Path(path)
    try:
        with data_file.open("r", encoding="utf-8") as f:
            entries = _extract_entries(json.load(f))
    except (OSError, ValueError) as exc:
        logger.error("Could not load characters from %s: %s", data_file, exc)
        return ()

    records = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skipping entry %d in %s: not an object", index, data_file)
            continue
        records.append(entry)
    logger.info("Loaded %d characters from %s", len(records), data_file)
    return tuple(records)


def load_catalog(path: Union[str, Path]) -> CharacterCatalog:
    """Build a ``CharacterCatalog`` from the dataset at ``path``."""
    return CharacterCatalog(load_characters(path))
