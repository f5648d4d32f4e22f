"""Shared --preset / --start / --end handling for the report commands."""

import argparse
from datetime import date, datetime

from stridekit.date_range import PRESETS, preset_range


def add_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset",
        choices=PRESETS,
        default="all",
        help="Named date range (default: all)",
    )
    parser.add_argument("--start", type=date.fromisoformat, help="First day to include (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, help="Last day to include (YYYY-MM-DD)")


def resolve_range(parsed: argparse.Namespace, now: datetime | None = None) -> tuple:
    """Explicit --start/--end win over the preset."""
    if parsed.start or parsed.end:
        return parsed.start, parsed.end
    return preset_range(parsed.preset, now)
