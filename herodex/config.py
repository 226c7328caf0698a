"""
Runtime settings for the herodex service.

Values come from environment variables with defaults that work from a
source checkout: the bundled dataset next to this package and a
``public`` directory in the working directory for the front-end.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .catalog.schemas import DEFAULT_LIMIT

DEFAULT_DATA_FILE = Path(__file__).resolve().parent / "data" / "characters.json"
DEFAULT_STATIC_DIR = Path("public")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        value = int(env.get(name, ""))
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    data_file: Path = DEFAULT_DATA_FILE
    static_dir: Optional[Path] = DEFAULT_STATIC_DIR
    default_limit: int = DEFAULT_LIMIT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from ``env`` (``os.environ`` by default)."""
    env = os.environ if env is None else env
    static = env.get("HERODEX_STATIC_DIR")
    return Settings(
        data_file=Path(env.get("HERODEX_DATA_FILE") or DEFAULT_DATA_FILE),
        # An empty HERODEX_STATIC_DIR disables static serving.
        static_dir=DEFAULT_STATIC_DIR if static is None else (Path(static) if static else None),
        default_limit=_int_env(env, "HERODEX_DEFAULT_LIMIT", DEFAULT_LIMIT),
        host=env.get("HOST") or DEFAULT_HOST,
        port=_int_env(env, "PORT", DEFAULT_PORT),
        log_level=(env.get("HERODEX_LOG_LEVEL") or "INFO").upper(),
    )
