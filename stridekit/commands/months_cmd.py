"""CLI command "months": monthly distance totals."""

import argparse

from tabulate import tabulate

from stridekit.commands.range_args import add_range_arguments, resolve_range
from stridekit.core import Stridekit


def run(args=None) -> None:
    """Print monthly totals as a text table."""
    if args is None:
        args = []

    parser = argparse.ArgumentParser(description="Show monthly totals")
    add_range_arguments(parser)
    parsed = parser.parse_args(args)
    start, end = resolve_range(parsed)

    with Stridekit() as sk:
        report = sk.report(start, end)

    if not report.months:
        print("No activities in range. Run 'import' to load activities first.")
        return

    rows = [[m.month_label, m.activity_count, f"{m.total_km:.1f}"] for m in report.months]
    print(tabulate(rows, headers=["Month", "Activities", "Km"], tablefmt="simple"))
