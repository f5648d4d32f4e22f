"""Application configuration model and helpers.

The DB (``appconfig`` table) is always the source of truth.

On every ``load_config()`` call the file is checked:
  - If a JSON config file exists *and* its contents differ from the DB,
    the DB is updated to match the file.
  - If the DB is empty and no file exists, built-in defaults are seeded.

This means:
  * No config file required, the CLI always boots.
  * Editing the JSON file and rerunning picks up the changes.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

from peewee import CharField, IntegerField, Model, TextField

from .db import db
from .user_context import get_user_id

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: dict[str, Any] = {
    "home_timezone": "UTC",
    "debug": False,
    # 0 = Monday ... 6 = Sunday
    "week_start_day": 0,
    "providers": {
        "export": {
            # None keeps every activity type; a name or list of names restricts
            "category_filter": None,
            # Overrides for the column table, e.g. {"distance": {"index": 17}}
            "columns": {},
        },
        "file": {
            "activity_type": "Run",
        },
    },
}

# Candidate JSON config file locations (searched in order)
_FILE_PATHS: list[Path] = [
    Path("stridekit_config.json"),
    Path("../stridekit_config.json"),
]


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class AppConfig(Model):
    """Key-value store for application configuration.

    Each top-level key from the config dict (e.g. ``home_timezone``,
    ``providers``) is stored as one row with the value JSON-encoded.
    """

    key = CharField(max_length=128)
    value = TextField()  # JSON-encoded value
    user_id = IntegerField(default=0)

    class Meta:
        database = db
        table_name = "appconfig"
        indexes = ((("key", "user_id"), True),)  # unique together


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_from_db() -> dict[str, Any] | None:
    """Return config dict from DB rows, or ``None`` if the table is empty."""
    rows = list(AppConfig.select().where(AppConfig.user_id == get_user_id()))
    if not rows:
        return None
    return {r.key: json.loads(r.value) for r in rows}


def _load_from_file() -> dict[str, Any] | None:
    """Try each candidate path; return parsed JSON or ``None``."""
    for path in _FILE_PATHS:
        if path.exists():
            with open(path) as f:
                return json.load(f)
    return None


def _with_defaults(config: dict[str, Any]) -> dict[str, Any]:
    """Fill keys missing from *config* (including per-provider keys) from the defaults."""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in config.items():
        if key == "providers" and isinstance(value, dict):
            for name, provider_cfg in value.items():
                merged["providers"][name] = {**merged["providers"].get(name, {}), **provider_cfg}
        else:
            merged[key] = value
    return merged


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config() -> dict[str, Any]:
    """Return the current configuration, always using the DB as source of truth.

    On every call:
      1. If a JSON config file exists and its top-level keys differ from what
         is stored in the DB, the DB is updated to match the file.
      2. If the DB is empty (first run, no file), built-in defaults are seeded.
      3. The DB contents, completed with defaults, are returned.

    If the DB is not yet configured the function falls back to the JSON file
    or built-in defaults without persisting.
    """
    try:
        from .db import get_db

        get_db()  # raises RuntimeError if not yet configured
    except RuntimeError:
        return _with_defaults(_load_from_file() or {})

    file_cfg = _load_from_file()
    db_cfg = _load_from_db()

    if db_cfg is None:
        # First run, seed from file or defaults
        source = file_cfg if file_cfg is not None else copy.deepcopy(DEFAULT_CONFIG)
        save_config(source)
        return _with_defaults(source)

    if file_cfg is not None and file_cfg != db_cfg:
        # Key-level merge so keys only present in the DB are kept
        merged = {**db_cfg, **file_cfg}
        save_config(merged)
        return _with_defaults(merged)

    return _with_defaults(db_cfg)


def save_config(config: dict[str, Any]) -> None:
    """Persist every top-level key of *config* to the DB as JSON values.

    Uses upsert semantics so it is safe to call repeatedly.
    """
    uid = get_user_id()
    for key, value in config.items():
        (
            AppConfig.insert(key=key, value=json.dumps(value), user_id=uid)
            .on_conflict(
                conflict_target=[AppConfig.key, AppConfig.user_id],
                update={AppConfig.value: json.dumps(value)},
            )
            .execute()
        )


def get_db_path_from_env() -> str:
    """Return the SQLite path to use when no DATABASE_URL is set.

    Checks the ``STRIDEKIT_DB`` environment variable first, then falls back
    to ``stridekit.sqlite3`` in the current working directory.
    """
    return os.environ.get("STRIDEKIT_DB", "stridekit.sqlite3")
