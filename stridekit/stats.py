"""Summary statistics over a set of activities and their week buckets.

These functions are free of database and CLI dependencies. Results are
derived on every query and never persisted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from stridekit.activity import Activity
from stridekit.weeks import WeekBucket


@dataclass
class StatsSummary:
    total_km: float = 0.0
    total_activities: int = 0
    avg_per_week: float = 0.0
    avg_per_activity: float = 0.0
    week_count: int = 0
    max_week: WeekBucket | None = None
    # activity type -> km, in first-encounter order
    type_breakdown: dict[str, float] = field(default_factory=dict)

    def sorted_type_breakdown(self) -> list[tuple[str, float, float]]:
        """Return ``(type, km, percent_of_total)`` rows, largest distance first."""
        total = sum(self.type_breakdown.values())
        rows = sorted(self.type_breakdown.items(), key=lambda item: item[1], reverse=True)
        return [(name, km, (km / total * 100) if total > 0 else 0.0) for name, km in rows]


@dataclass(frozen=True)
class WeekChange:
    week: WeekBucket
    change_km: float
    change_percent: float


def calculate_stats(activities: Sequence[Activity], weeks: Sequence[WeekBucket]) -> StatsSummary:
    """Reduce activities and their week buckets into a ``StatsSummary``.

    ``max_week`` is the first week (in the given ascending order) with the
    greatest distance, or ``None`` when there are no weeks.
    """
    total_km = 0.0
    type_breakdown: dict[str, float] = {}
    for activity in activities:
        total_km += activity.distance_km
        type_breakdown[activity.type] = type_breakdown.get(activity.type, 0.0) + activity.distance_km

    max_week = None
    for week in weeks:
        if max_week is None or week.total_km > max_week.total_km:
            max_week = week

    total_activities = len(activities)
    week_count = len(weeks)
    return StatsSummary(
        total_km=total_km,
        total_activities=total_activities,
        avg_per_week=total_km / week_count if week_count else 0.0,
        avg_per_activity=total_km / total_activities if total_activities else 0.0,
        week_count=week_count,
        max_week=max_week,
        type_breakdown=type_breakdown,
    )


def week_over_week(weeks: Sequence[WeekBucket], count: int = 8) -> list[WeekChange]:
    """Most recent *count* weeks, newest first, with change versus the week listed after it.

    The oldest listed week has no predecessor and reports no change; a
    predecessor with zero distance reports a 0% change.
    """
    recent = list(weeks[-count:])[::-1] if count > 0 else []
    changes = []
    for i, week in enumerate(recent):
        previous = recent[i + 1] if i + 1 < len(recent) else None
        change = week.total_km - previous.total_km if previous else 0.0
        percent = change / previous.total_km * 100 if previous and previous.total_km > 0 else 0.0
        changes.append(WeekChange(week=week, change_km=change, change_percent=percent))
    return changes
