"""Date range filtering and the named range presets."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time

from dateutil.relativedelta import relativedelta

from stridekit.activity import Activity

PRESETS = ("3m", "6m", "ytd", "1y", "all")


def start_bound(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def end_bound(value: date | datetime) -> datetime:
    # The end day is included in full
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.max)


def filter_by_date_range(
    activities: Iterable[Activity],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> list[Activity]:
    """Keep activities dated between *start* and the end of *end*'s day.

    Either bound may be ``None``. Order of the input is preserved.
    """
    lower = start_bound(start) if start is not None else None
    upper = end_bound(end) if end is not None else None
    return [
        activity
        for activity in activities
        if (lower is None or activity.date >= lower) and (upper is None or activity.date <= upper)
    ]


def preset_range(preset: str, now: datetime | None = None) -> tuple[datetime | None, datetime | None]:
    """Return ``(start, end)`` for a named preset relative to *now*.

    ``all`` returns ``(None, None)``.
    """
    now = now or datetime.now()
    if preset == "3m":
        return now - relativedelta(months=3), now
    if preset == "6m":
        return now - relativedelta(months=6), now
    if preset == "ytd":
        return datetime(now.year, 1, 1), now
    if preset == "1y":
        return now - relativedelta(months=12), now
    if preset == "all":
        return None, None
    raise ValueError(f"Unknown date range preset: {preset} (expected one of {', '.join(PRESETS)})")
