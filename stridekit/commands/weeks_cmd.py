"""CLI command "weeks": weekly distance totals."""

import argparse

from tabulate import tabulate

from stridekit.commands.range_args import add_range_arguments, resolve_range
from stridekit.core import Stridekit
from stridekit.stats import week_over_week


def run(args=None) -> None:
    """Print one row per week, newest first, with the change from the week before."""
    if args is None:
        args = []

    parser = argparse.ArgumentParser(description="Show weekly totals")
    add_range_arguments(parser)
    parser.add_argument(
        "--weeks",
        type=int,
        default=8,
        help="Limit to the most recent N weeks (default: 8)",
    )
    parsed = parser.parse_args(args)
    start, end = resolve_range(parsed)

    with Stridekit() as sk:
        report = sk.report(start, end)

    if not report.weeks:
        print("No activities in range. Run 'import' to load activities first.")
        return

    rows = []
    for change in week_over_week(report.weeks, parsed.weeks):
        week = change.week
        rows.append(
            [
                week.week_label,
                week.activity_count,
                f"{week.total_km:.1f}",
                f"{change.change_percent:+.0f}%",
            ]
        )

    print(tabulate(rows, headers=["Week", "Activities", "Km", "Change"], tablefmt="simple"))
