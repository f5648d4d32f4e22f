"""Month bucketing for activity totals."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from stridekit.activity import Activity
from stridekit.weeks import MONTH_ABBR


@dataclass
class MonthBucket:
    year_month: str  # YYYY-MM
    month_label: str  # "Jan '24"
    total_km: float = 0.0
    activity_count: int = 0


def group_by_month(activities: Iterable[Activity]) -> list[MonthBucket]:
    """Sum distance per calendar month, ascending by ``year_month``.

    Months without activities are not included.
    """
    months: dict[str, MonthBucket] = {}
    for activity in activities:
        year, month = activity.date.year, activity.date.month
        key = f"{year:04d}-{month:02d}"
        bucket = months.get(key)
        if bucket is None:
            bucket = MonthBucket(year_month=key, month_label=f"{MONTH_ABBR[month - 1]} '{year % 100:02d}")
            months[key] = bucket
        bucket.total_km += activity.distance_km
        bucket.activity_count += 1

    return sorted(months.values(), key=lambda m: m.year_month)
