# pylint: disable=import-outside-toplevel
"""Main entry point for the stridekit CLI.

This module provides the command-line interface for stridekit: importing
activity exports and GPX files, and showing weekly, monthly and summary
statistics over a date range.
"""

import argparse

from dotenv import load_dotenv

load_dotenv()

HELP_TEXT = """
stridekit - Import activity exports and GPX tracks, see where the kilometers went.

Usage:
    python -m stridekit <command>

Commands:
    import PATH...  Import CSV exports, GPX files or folders of GPX files
    weeks           Weekly totals, newest first, with week-over-week change
    months          Monthly totals
    stats           Totals, averages, best week and per-type breakdown
    reset           Delete all stored activities
    help            Show this help and usage documentation

Report commands accept --preset {3m,6m,ytd,1y,all} or --start/--end YYYY-MM-DD.

Configuration is read from stridekit_config.json if present (see README.md).
"""


def main(argv=None):
    """Main function for the stridekit CLI."""
    parser = argparse.ArgumentParser(description="stridekit CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Import activity files")
    import_parser.add_argument("paths", nargs="+", help="CSV exports, GPX files or folders")

    # Report commands parse their own range arguments
    for name, help_text in (
        ("weeks", "Show weekly totals"),
        ("months", "Show monthly totals"),
        ("stats", "Show summary statistics"),
    ):
        subparsers.add_parser(name, help=help_text, add_help=False)

    subparsers.add_parser("reset", help="Delete all stored activities")
    subparsers.add_parser("help", help="Show usage and documentation")

    args, extra = parser.parse_known_args(argv)

    if args.command == "import":
        from stridekit.commands.import_cmd import run

        run(args.paths + extra)
    elif args.command == "weeks":
        from stridekit.commands.weeks_cmd import run

        run(extra)
    elif args.command == "months":
        from stridekit.commands.months_cmd import run

        run(extra)
    elif args.command == "stats":
        from stridekit.commands.stats_cmd import run

        run(extra)
    elif args.command == "reset":
        from stridekit.commands.reset import run

        run()
    elif args.command == "help":
        print(HELP_TEXT)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
