"""Core stridekit functionality: provider management and the query pipeline."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .activity import Activity
from .activity_store import delete_activities, load_activities, merge_activities, save_activities
from .appconfig import get_db_path_from_env, load_config
from .calendar import MonthBucket, group_by_month
from .database import get_all_models, migrate_tables
from .date_range import filter_by_date_range
from .db import configure_db, get_db
from .providers.base_provider import ActivityProvider
from .providers.export.export_provider import ExportProvider
from .providers.file.file_provider import FileProvider
from .stats import StatsSummary, calculate_stats
from .weeks import WeekBucket, group_by_week

logger = logging.getLogger(__name__)


@dataclass
class Report:
    """Everything derived from one date-range query."""

    activities: list[Activity]
    weeks: list[WeekBucket]
    months: list[MonthBucket]
    stats: StatsSummary


def build_report(
    activities: list[Activity],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    week_start_day: int = 0,
) -> Report:
    """Filter a working set to the inclusive range and aggregate it into weeks, months and stats."""
    activities = filter_by_date_range(activities, start, end)
    weeks = group_by_week(activities, week_start_day)
    return Report(
        activities=activities,
        weeks=weeks,
        months=group_by_month(activities),
        stats=calculate_stats(activities, weeks),
    )


class Stridekit:
    """Main stridekit class that handles configuration, providers and storage."""

    def __init__(self, config: dict[str, Any] | None = None):
        # Configure database
        configure_db(get_db_path_from_env())
        db = get_db()
        db.connect(reuse_if_open=True)

        # Always migrate tables on startup
        migrate_tables(get_all_models())

        self.config = config if config is not None else load_config()
        self.week_start_day = int(self.config.get("week_start_day", 0))

        self._export: ExportProvider | None = None
        self._file: FileProvider | None = None

    def _provider_config(self, provider_name: str) -> dict[str, Any]:
        provider_config = dict(self.config.get("providers", {}).get(provider_name, {}))
        provider_config["home_timezone"] = self.config.get("home_timezone", "UTC")
        provider_config["debug"] = self.config.get("debug", False)
        return provider_config

    @property
    def export(self) -> ExportProvider:
        """Get the export (CSV) provider, initializing it if needed."""
        if not self._export:
            self._export = ExportProvider(config=self._provider_config("export"))
        return self._export

    @property
    def file(self) -> FileProvider:
        """Get the track file provider, initializing it if needed."""
        if not self._file:
            self._file = FileProvider(config=self._provider_config("file"))
        return self._file

    def provider_for(self, path: str) -> ActivityProvider:
        """Pick the provider that understands *path*."""
        if os.path.isdir(path):
            return self.file
        lower = path.lower()
        if lower.endswith(".csv"):
            return self.export
        if lower.endswith((".gpx", ".gpx.gz")):
            return self.file
        raise ValueError(f"Unknown file format: {path}")

    def import_paths(self, paths: list[str]) -> dict[str, int]:
        """Parse each path with its provider and upsert the results.

        Returns ``{path: activities_imported}``. A path that cannot be read
        is reported with ``-1`` and does not stop the remaining imports.
        """
        counts: dict[str, int] = {}
        parsed: list[Activity] = []
        for path in paths:
            try:
                provider = self.provider_for(path)
                activities = provider.pull_activities(path)
            except (OSError, ValueError) as e:
                print(f"Error importing {path}: {e}")
                counts[path] = -1
                continue
            counts[path] = len(activities)
            parsed = merge_activities(parsed, activities)

        if parsed:
            save_activities(parsed)
            print(f"Saved {len(parsed)} activities")
        return counts

    def activities(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> list[Activity]:
        """Stored activities for the current user within the inclusive range."""
        return load_activities(start, end)

    def report(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> Report:
        """Aggregate the stored working set over a date range."""
        return build_report(self.activities(), start, end, self.week_start_day)

    def reset(self) -> int:
        """Delete every stored activity for the current user."""
        return delete_activities()

    def cleanup(self):
        """Clean up resources, close connections etc."""
        try:
            db = get_db()
            if not db.is_closed():
                db.close()
        except RuntimeError:
            # Database not configured, nothing to clean up
            pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.cleanup()
