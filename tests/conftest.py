"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from herodex.catalog.engine import CharacterCatalog
from herodex.config import Settings
from herodex.main import create_app


def make_character(id, name, race="Human", **extra):
    """Build a character record shaped like the bundled dataset."""
    record = {
        "id": id,
        "name": name,
        "slug": f"{id}-{name.lower().replace(' ', '-')}",
        "powerstats": {"strength": 50, "power": 50},
        "appearance": {"gender": "Male", "height": ["6'0", "183 cm"]},
        "biography": {"fullName": "", "publisher": "Marvel Comics"},
        "images": {"xs": f"xs/{id}.jpg", "lg": f"lg/{id}.jpg"},
    }
    if race is not None:
        record["appearance"]["race"] = race
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(record.get(key), dict):
            record[key].update(value)
        else:
            record[key] = value
    return record


@pytest.fixture
def characters():
    return [
        make_character(1, "A-Bomb", powerstats={"strength": 100, "power": 24}),
        make_character(
            2,
            "Spider-Man",
            powerstats={"strength": "55", "power": 74},
            biography={"fullName": "Peter Parker"},
        ),
        make_character(
            3,
            "Cyborg",
            race="Human / Cyborg",
            powerstats={"strength": "100"},
            biography={"fullName": "Victor Stone", "publisher": "DC Comics"},
        ),
        make_character(4, "Superman", race="Kryptonian", biography={"publisher": "DC Comics"}),
        make_character(5, "Drifter", race="-"),
        make_character(6, "Nobody", race=None),
    ]


@pytest.fixture
def catalog(characters):
    return CharacterCatalog(characters)


@pytest.fixture
def client(catalog):
    """A test client bound to an isolated catalog, without static files."""
    app = create_app(catalog=catalog, settings=Settings(static_dir=None))
    return TestClient(app)
