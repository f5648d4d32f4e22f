"""This is the init module for stridekit"""

from .activity import Activity
from .calendar import MonthBucket, group_by_month
from .date_range import filter_by_date_range, preset_range
from .providers.export.export_provider import ExportProvider, parse_tabular
from .providers.file.file_provider import FileProvider
from .providers.file.formats.gpx import TrackParseError, TrackParseResult, parse_track_file
from .stats import StatsSummary, calculate_stats
from .weeks import WeekBucket, group_by_week

__version__ = "0.1.0"
__all__ = [
    "Activity",
    "ExportProvider",
    "FileProvider",
    "MonthBucket",
    "StatsSummary",
    "TrackParseError",
    "TrackParseResult",
    "WeekBucket",
    "calculate_stats",
    "filter_by_date_range",
    "group_by_month",
    "group_by_week",
    "parse_tabular",
    "parse_track_file",
    "preset_range",
]
