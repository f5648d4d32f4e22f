"""CLI command "reset": delete stored activities."""

from stridekit.core import Stridekit


def run() -> None:
    with Stridekit() as sk:
        deleted = sk.reset()
    print(f"Deleted {deleted} activities")
