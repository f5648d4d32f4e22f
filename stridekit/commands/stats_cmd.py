"""CLI command "stats": summary statistics for a date range."""

import argparse

from tabulate import tabulate

from stridekit.commands.range_args import add_range_arguments, resolve_range
from stridekit.core import Stridekit


def run(args=None) -> None:
    """Print totals, averages, best week and the per-type breakdown."""
    if args is None:
        args = []

    parser = argparse.ArgumentParser(description="Show summary statistics")
    add_range_arguments(parser)
    parsed = parser.parse_args(args)
    start, end = resolve_range(parsed)

    with Stridekit() as sk:
        stats = sk.report(start, end).stats

    if not stats.total_activities:
        print("No activities in range.")
        return

    best = stats.max_week
    rows = [
        ["Total distance", f"{stats.total_km:.1f} km"],
        ["Activities", stats.total_activities],
        ["Weeks", stats.week_count],
        ["Avg per week", f"{stats.avg_per_week:.1f} km"],
        ["Avg per activity", f"{stats.avg_per_activity:.1f} km"],
        ["Best week", f"{best.week_label} ({best.total_km:.1f} km)" if best else "-"],
    ]
    print(tabulate(rows, tablefmt="simple"))

    breakdown = [[name, f"{km:.1f}", f"{pct:.0f}%"] for name, km, pct in stats.sorted_type_breakdown()]
    print()
    print(tabulate(breakdown, headers=["Type", "Km", "Share"], tablefmt="simple"))
