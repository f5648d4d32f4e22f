from peewee import Model

from .activity_store import StoredActivity
from .appconfig import AppConfig
from .db import get_db


def get_all_models() -> list[type[Model]]:
    return [StoredActivity, AppConfig]


def migrate_tables(models: list[type[Model]]) -> None:
    """Create any missing tables. Safe to run on every start."""
    db = get_db()
    db.connect(reuse_if_open=True)
    db.create_tables(models, safe=True)
