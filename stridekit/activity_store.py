"""Owner-scoped activity working set and its database storage.

``merge_activities`` maintains the in-memory invariant (ids unique, dates
ascending). ``StoredActivity`` persists activities keyed by
``(user_id, activity_id)`` so re-importing the same export or track file
updates rows instead of duplicating them.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from peewee import (
    SQL,
    CharField,
    DateTimeField,
    FloatField,
    IntegerField,
    Model,
    chunked,
)

from stridekit.activity import Activity
from stridekit.date_range import end_bound, start_bound
from stridekit.db import db
from stridekit.user_context import get_user_id


def merge_activities(existing: Iterable[Activity], incoming: Iterable[Activity]) -> list[Activity]:
    """Union two activity collections by ``id``; incoming records win.

    The result is sorted ascending by date.
    """
    by_id: dict[str, Activity] = {a.id: a for a in existing}
    for activity in incoming:
        by_id[activity.id] = activity
    return sorted(by_id.values(), key=lambda a: a.date)


class StoredActivity(Model):
    """A persisted activity owned by one user."""

    activity_id = CharField(max_length=255)  # Activity.id
    activity_date = DateTimeField(index=True)
    name = CharField(max_length=255)
    activity_type = CharField(max_length=50)
    distance_km = FloatField()
    elapsed_time = IntegerField()
    moving_time = IntegerField()
    elevation_gain = FloatField(default=0)
    avg_heart_rate = IntegerField(null=True)
    max_heart_rate = IntegerField(null=True)

    created_at = DateTimeField(constraints=[SQL("DEFAULT CURRENT_TIMESTAMP")])

    # 0 = CLI/unscoped
    user_id = IntegerField(default=0, index=True)

    class Meta:
        database = db
        table_name = "activities"
        indexes = ((("user_id", "activity_id"), True),)  # unique together

    def to_activity(self) -> Activity:
        return Activity(
            id=self.activity_id,
            date=self.activity_date,
            name=self.name,
            type=self.activity_type,
            distance_km=self.distance_km,
            elapsed_time=self.elapsed_time,
            moving_time=self.moving_time,
            elevation_gain=self.elevation_gain or 0.0,
            avg_heart_rate=self.avg_heart_rate,
            max_heart_rate=self.max_heart_rate,
        )

    @staticmethod
    def row_for(activity: Activity, user_id: int) -> dict:
        return {
            "activity_id": activity.id,
            "activity_date": activity.date,
            "name": activity.name,
            "activity_type": activity.type,
            "distance_km": activity.distance_km,
            "elapsed_time": activity.elapsed_time,
            "moving_time": activity.moving_time,
            "elevation_gain": activity.elevation_gain,
            "avg_heart_rate": activity.avg_heart_rate,
            "max_heart_rate": activity.max_heart_rate,
            "user_id": user_id,
        }


_UPDATABLE = [
    StoredActivity.activity_date,
    StoredActivity.name,
    StoredActivity.activity_type,
    StoredActivity.distance_km,
    StoredActivity.elapsed_time,
    StoredActivity.moving_time,
    StoredActivity.elevation_gain,
    StoredActivity.avg_heart_rate,
    StoredActivity.max_heart_rate,
]


def save_activities(activities: Iterable[Activity]) -> int:
    """Upsert activities for the current user. Returns the number written."""
    uid = get_user_id()
    rows = [StoredActivity.row_for(a, uid) for a in activities]
    with db.atomic():
        for batch in chunked(rows, 100):
            (
                StoredActivity.insert_many(batch)
                .on_conflict(
                    conflict_target=[StoredActivity.user_id, StoredActivity.activity_id],
                    preserve=_UPDATABLE,
                )
                .execute()
            )
    return len(rows)


def load_activities(
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> list[Activity]:
    """Return the current user's activities sorted ascending by date.

    *start* and *end* bound the range inclusively, *end* to the end of its day.
    """
    query = StoredActivity.select().where(StoredActivity.user_id == get_user_id())
    if start is not None:
        query = query.where(StoredActivity.activity_date >= start_bound(start))
    if end is not None:
        query = query.where(StoredActivity.activity_date <= end_bound(end))
    query = query.order_by(StoredActivity.activity_date, StoredActivity.id)
    return [row.to_activity() for row in query]


def delete_activities() -> int:
    """Delete all of the current user's activities. Returns the row count."""
    return StoredActivity.delete().where(StoredActivity.user_id == get_user_id()).execute()
