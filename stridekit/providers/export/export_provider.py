"""Export provider for stridekit.

This module turns a bulk activity export (``activities.csv``) into canonical
activities. Parsing is best-effort: export files routinely contain trailer
rows, non-activity rows and schema drift, so any row that does not look like
an activity is skipped rather than failing the whole import.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import dateparser

from stridekit.activity import DEFAULT_ACTIVITY_NAME, Activity
from stridekit.providers.base_provider import ActivityProvider

from .columns import ColumnSpec, build_columns, resolve_columns
from .records import split_records

logger = logging.getLogger(__name__)

# "27 Oct 2019, 11:02:43" and "3 Sept 2023, 7:05"
DATE_PATTERN = re.compile(r"(\d+)\s+(\w+)\s+(\d{4}),?\s*(\d{1,2}):(\d{2}):?(\d{2})?")
ACTIVITY_ID_PATTERN = re.compile(r"[0-9]+")

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

CategoryFilter = str | Iterable[str] | None


def _normalize_categories(category_filter: CategoryFilter) -> frozenset[str] | None:
    if category_filter is None:
        return None
    if isinstance(category_filter, str):
        return frozenset([category_filter])
    return frozenset(category_filter)


def _field(values: Sequence[str], index: int | None) -> str:
    if index is None or index >= len(values):
        return ""
    return values[index]


def _parse_float(value: str) -> float | None:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_seconds(value: str) -> int:
    number = _parse_float(value)
    if number is None or number <= 0:
        return 0
    return int(round(number))


def _parse_heart_rate(value: str) -> int | None:
    number = _parse_float(value)
    if number is None or number <= 0:
        return None
    return int(round(number))


def parse_export_date(value: str) -> datetime | None:
    """Parse an export timestamp such as ``27 Oct 2019, 11:02:43``.

    Falls back to ``dateparser`` for anything that does not match the export
    pattern. Returns a naive datetime, or ``None`` if nothing could parse it.
    """
    if not value:
        return None

    match = DATE_PATTERN.search(value)
    if match:
        day, month_str, year, hours, minutes, seconds = match.groups()
        month = MONTHS.get(month_str[:3].lower())
        if month is not None:
            try:
                return datetime(int(year), month, int(day), int(hours), int(minutes), int(seconds or 0))
            except ValueError:
                pass

    try:
        parsed = dateparser.parse(value, settings={"RETURN_AS_TIMEZONE_AWARE": False})
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is not None and parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None)
    return parsed


def parse_tabular(
    text: str,
    category_filter: CategoryFilter,
    columns: Mapping[str, ColumnSpec] | None = None,
) -> list[Activity]:
    """Parse export text into activities sorted ascending by date.

    Args:
        text: Raw CSV text, first record is the header.
        category_filter: ``None`` to keep every activity type, or a type
            name (or collection of names) that rows must match exactly.
        columns: Column resolution table, defaults to ``DEFAULT_COLUMNS``.

    Returns:
        The surviving activities. Header-only or empty input gives ``[]``.
    """
    records = split_records(text)
    if not records:
        return []

    categories = _normalize_categories(category_filter)
    positions = resolve_columns(records[0], columns or build_columns())

    activities: list[Activity] = []
    for row_number, values in enumerate(records[1:], start=2):
        activity_id = _field(values, positions["id"])
        if not ACTIVITY_ID_PATTERN.fullmatch(activity_id):
            logger.debug("Skipping record %d: no activity id", row_number)
            continue

        activity_type = _field(values, positions["type"])
        if categories is not None and activity_type not in categories:
            continue

        distance_m = _parse_float(_field(values, positions["distance"]))
        if distance_m is None or distance_m <= 0:
            logger.debug("Skipping activity %s: no distance", activity_id)
            continue

        date = parse_export_date(_field(values, positions["date"]))
        if date is None:
            logger.debug("Skipping activity %s: unparseable date", activity_id)
            continue

        elevation = _parse_float(_field(values, positions["elevation_gain"]))
        activities.append(
            Activity(
                id=activity_id,
                date=date,
                name=_field(values, positions["name"]) or DEFAULT_ACTIVITY_NAME,
                type=activity_type,
                distance_km=distance_m / 1000,
                elapsed_time=_parse_seconds(_field(values, positions["elapsed_time"])),
                moving_time=_parse_seconds(_field(values, positions["moving_time"])),
                elevation_gain=max(elevation or 0.0, 0.0),
                avg_heart_rate=_parse_heart_rate(_field(values, positions["avg_heart_rate"])),
                max_heart_rate=_parse_heart_rate(_field(values, positions["max_heart_rate"])),
            )
        )

    return sorted(activities, key=lambda a: a.date)


class ExportProvider(ActivityProvider):
    """Provider for bulk CSV activity exports."""

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize with the ``export`` section of the configuration.

        Recognised keys: ``category_filter`` (``None``, a type name or a list
        of names) and ``columns`` (overrides for the column table).
        """
        super().__init__(config)
        self.category_filter = self.config.get("category_filter")
        self.columns = build_columns(self.config.get("columns"))

    @property
    def provider_name(self) -> str:
        """Return the name of this provider."""
        return "export"

    def parse(self, text: str) -> list[Activity]:
        """Parse export text using this provider's filter and column table."""
        return parse_tabular(text, self.category_filter, self.columns)

    def pull_activities(self, path: str) -> list[Activity]:
        """Read and parse one export file."""
        text = Path(path).read_text(encoding="utf-8-sig")
        activities = self.parse(text)
        logger.info("Parsed %d activities from %s", len(activities), path)
        return activities
