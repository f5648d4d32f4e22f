"""Base provider interface for activity data sources.

This module defines the abstract base class that all provider implementations
should inherit from, ensuring a consistent interface across the different
export formats stridekit can ingest.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from stridekit.activity import Activity


class ActivityProvider(ABC):
    """Abstract base class for activity data providers.

    A provider turns raw source text into canonical activities. Providers
    never touch the database; merging and persistence belong to the caller.
    """

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize the provider with configuration."""
        self.config = config or {}
        self.debug = self.config.get("debug", False)
        if self.debug:
            logging.basicConfig(level=logging.DEBUG)

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""

    @abstractmethod
    def pull_activities(self, path: str) -> list[Activity]:
        """
        Read activities from a file or folder on disk.
        Returns canonical activities sorted ascending by date.
        Malformed content is skipped, never raised.
        """

    @staticmethod
    def _sort_by_date(activities: list[Activity]) -> list[Activity]:
        return sorted(activities, key=lambda a: a.date)
