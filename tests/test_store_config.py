"""Tests for dataset loading and settings."""

import json
import logging
from pathlib import Path

from herodex.catalog.store import load_catalog, load_characters
from herodex.config import DEFAULT_DATA_FILE, DEFAULT_PORT, load_settings


def test_load_plain_array(tmp_path):
    path = tmp_path / "characters.json"
    path.write_text(json.dumps([{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]), encoding="utf-8")
    records = load_characters(path)
    assert isinstance(records, tuple)
    assert [r["id"] for r in records] == [1, 2]


def test_load_db_object_with_characters_key(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"characters": [{"id": 7, "name": "G"}]}), encoding="utf-8")
    assert len(load_catalog(path)) == 1


def test_non_object_entries_are_skipped(tmp_path, caplog):
    path = tmp_path / "characters.json"
    path.write_text(json.dumps([{"id": 1}, "oops", 3]), encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        records = load_characters(path)
    assert records == ({"id": 1},)
    assert "not an object" in caplog.text


def test_missing_or_malformed_file_yields_empty_collection(tmp_path, caplog):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        assert load_characters(bad) == ()
        assert load_characters(tmp_path / "missing.json") == ()
    assert "Could not load characters" in caplog.text


def test_bundled_dataset_loads():
    catalog = load_catalog(DEFAULT_DATA_FILE)
    assert len(catalog) > 0
    assert "Cyborg" in catalog.categories()
    assert "-" not in catalog.categories()


def test_settings_defaults():
    settings = load_settings({})
    assert settings.data_file == DEFAULT_DATA_FILE
    assert settings.port == DEFAULT_PORT
    assert settings.default_limit == 20
    assert settings.static_dir == Path("public")


def test_settings_from_environment():
    settings = load_settings(
        {
            "HERODEX_DATA_FILE": "/tmp/db.json",
            "HERODEX_STATIC_DIR": "",
            "HERODEX_DEFAULT_LIMIT": "12",
            "PORT": "8080",
            "HERODEX_LOG_LEVEL": "debug",
        }
    )
    assert settings.data_file == Path("/tmp/db.json")
    assert settings.static_dir is None
    assert settings.default_limit == 12
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"


def test_invalid_numbers_in_environment_use_defaults():
    settings = load_settings({"PORT": "eighty", "HERODEX_DEFAULT_LIMIT": "0"})
    assert settings.port == DEFAULT_PORT
    assert settings.default_limit == 20
