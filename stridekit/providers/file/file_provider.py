"""File provider for stridekit.
This module defines the FileProvider class, which turns GPX track files on
disk into activities.

Point it at a single file or a folder; every supported file found anywhere
under the folder (.gpx, .gpx.gz) is parsed. A file that fails to parse is
reported and skipped so one bad upload never stops a batch import.
"""

import glob
import gzip
import logging
import os
from typing import Any

from stridekit.activity import Activity
from stridekit.providers.base_provider import ActivityProvider

from .formats.gpx import DEFAULT_TRACK_TYPE, TrackParseResult, parse_track_file, resolve_timezone

logger = logging.getLogger(__name__)


class FileProvider(ActivityProvider):
    """File provider for processing track files from the filesystem."""

    # All file extensions the provider recognises
    SUPPORTED_EXTENSIONS = (".gpx", ".gpx.gz")

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize with the ``file`` section of the configuration.

        Recognised keys: ``home_timezone`` (zone activity dates are expressed
        in) and ``activity_type`` (type used when a track declares none).
        Raises ``ValueError`` for an unknown ``home_timezone``.
        """
        super().__init__(config)
        self.home_timezone = self.config.get("home_timezone", "UTC")
        resolve_timezone(self.home_timezone)
        self.activity_type = self.config.get("activity_type", DEFAULT_TRACK_TYPE)

    @property
    def provider_name(self) -> str:
        """Return the name of this provider."""
        return "file"

    @staticmethod
    def _determine_file_format(file_path: str) -> tuple[str, bool]:
        file_lower = file_path.lower()

        if file_lower.endswith(".gpx.gz"):
            return "gpx", True
        if file_lower.endswith(".gpx"):
            return "gpx", False
        raise ValueError(f"Unknown file format: {file_path}")

    @staticmethod
    def _read_file(file_path: str) -> str:
        _, is_gzipped = FileProvider._determine_file_format(file_path)
        if is_gzipped:
            with gzip.open(file_path, "rb") as f:
                data = f.read()
        else:
            with open(file_path, "rb") as f:
                data = f.read()
        # XML declarations must come first; some exporters pad the start
        return data.decode("utf-8-sig").lstrip()

    def _collect_file_paths(self, folder: str) -> list[str]:
        """Return all supported track files found under *folder*."""
        found: set[str] = set()
        for ext in self.SUPPORTED_EXTENSIONS:
            pattern = os.path.join(folder, "**", f"*{ext}")
            found.update(glob.glob(pattern, recursive=True))
        return sorted(found)

    def parse(self, text: str, file_name: str) -> TrackParseResult:
        """Parse GPX text with this provider's timezone and default type."""
        return parse_track_file(
            text,
            file_name,
            home_timezone=self.home_timezone,
            default_type=self.activity_type,
        )

    def process_single_file(self, file_path: str) -> dict:
        """Parse one track file.

        Returns a status dict::

            {"status": "ok", "file": <basename>, "activity": Activity}
            {"status": "error", "file": <basename>, "reason": str}
        """
        basename = os.path.basename(file_path)
        try:
            text = self._read_file(file_path)
        except (OSError, ValueError, EOFError) as exc:
            return {"status": "error", "file": basename, "reason": str(exc)}

        result = self.parse(text, basename)
        if not result.ok:
            logger.warning("Skipping %s: %s", basename, result.error.message)
            return {"status": "error", "file": basename, "reason": result.error.message}

        logger.debug("Processed file: %s", basename)
        return {"status": "ok", "file": basename, "activity": result.activity}

    def pull_activities(self, path: str) -> list[Activity]:
        """Parse a track file, or every track file under a folder."""
        file_paths = self._collect_file_paths(path) if os.path.isdir(path) else [path]
        logger.info("Found %d track files in: %s", len(file_paths), path)

        activities = []
        for file_path in file_paths:
            result = self.process_single_file(file_path)
            if result["status"] == "ok":
                activities.append(result["activity"])

        logger.info("Processed %d track activities", len(activities))
        return self._sort_by_date(activities)
