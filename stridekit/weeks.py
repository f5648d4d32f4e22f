"""Week bucketing for activity totals.

Pure functions over activity sequences; nothing here touches the database.
Buckets are rebuilt from scratch on every call, which is fine for a personal
activity history.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from stridekit.activity import Activity

MONDAY = 0
SUNDAY = 6

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@dataclass
class WeekBucket:
    """All activities whose date falls in one seven-day span."""

    week_start: datetime
    week_end: datetime
    week_label: str
    total_km: float = 0.0
    activities: list[Activity] = field(default_factory=list)
    activity_count: int = 0

    def add(self, activity: Activity) -> None:
        self.total_km += activity.distance_km
        self.activities.append(activity)
        self.activity_count += 1


def _check_weekday(week_start_day: int) -> None:
    if not MONDAY <= week_start_day <= SUNDAY:
        raise ValueError(f"week_start_day must be 0 (Monday) to 6 (Sunday), got {week_start_day}")


def week_start_for(date: datetime, week_start_day: int = MONDAY) -> datetime:
    """Return midnight of the first day of the week containing *date*."""
    _check_weekday(week_start_day)
    days_back = (date.weekday() - week_start_day) % 7
    start = date - timedelta(days=days_back)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def week_end_for(week_start: datetime) -> datetime:
    """Last millisecond of the week beginning at *week_start*."""
    return week_start + timedelta(days=7) - timedelta(milliseconds=1)


def _day_month(date: datetime) -> str:
    return f"{date.day} {MONTH_ABBR[date.month - 1]}"


def format_week_label(week_start: datetime) -> str:
    """Label such as ``1 Jan - 7 Jan '24`` (year of the first day)."""
    last_day = week_start + timedelta(days=6)
    return f"{_day_month(week_start)} - {_day_month(last_day)} '{week_start.year % 100:02d}"


def group_by_week(activities: Iterable[Activity], week_start_day: int = MONDAY) -> list[WeekBucket]:
    """Bucket activities into calendar weeks.

    Input order does not matter. Each bucket keeps its activities in the
    order they were encountered. Only weeks with at least one activity are
    returned, ascending by ``week_start``.
    """
    _check_weekday(week_start_day)
    buckets: dict[datetime, WeekBucket] = {}

    for activity in activities:
        start = week_start_for(activity.date, week_start_day)
        bucket = buckets.get(start)
        if bucket is None:
            bucket = WeekBucket(
                week_start=start,
                week_end=week_end_for(start),
                week_label=format_week_label(start),
            )
            buckets[start] = bucket
        bucket.add(activity)

    return sorted(buckets.values(), key=lambda w: w.week_start)
