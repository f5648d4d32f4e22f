"""CLI command "import": parse export and track files into the store."""

import argparse

from stridekit.core import Stridekit


def run(args=None) -> None:
    """Import every given CSV export, GPX file or folder of GPX files."""
    if args is None:
        args = []

    parser = argparse.ArgumentParser(description="Import activities")
    parser.add_argument("paths", nargs="+", help="CSV exports, GPX files or folders")
    parsed = parser.parse_args(args)

    with Stridekit() as sk:
        counts = sk.import_paths(parsed.paths)

    for path, count in counts.items():
        if count < 0:
            print(f"{path}: failed")
        else:
            print(f"{path}: {count} activities")
