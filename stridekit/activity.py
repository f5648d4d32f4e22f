"""Core Activity model for stridekit."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any

DEFAULT_ACTIVITY_NAME = "Unknown Activity"


@dataclass(frozen=True)
class Activity:
    """
    Canonical representation of a single activity.

    Every parser converges on this record regardless of the source format.
    Instances are never mutated once created; re-filtering always derives
    fresh week/month buckets and stats from a sequence of these.
    """

    # Natural key - source identifier or synthesized from the track file
    id: str
    date: datetime  # naive local start time
    name: str
    type: str

    distance_km: float
    elapsed_time: int  # seconds
    moving_time: int  # seconds
    elevation_gain: float = 0.0  # meters

    avg_heart_rate: int | None = None
    max_heart_rate: int | None = None

    @property
    def duration_hms(self) -> str:
        """Moving time formatted as H:MM:SS."""
        return str(timedelta(seconds=self.moving_time))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Activity:
        date_val = data["date"]
        if isinstance(date_val, str):
            date_val = datetime.fromisoformat(date_val)
        return cls(
            id=str(data["id"]),
            date=date_val,
            name=data.get("name") or DEFAULT_ACTIVITY_NAME,
            type=data.get("type") or "",
            distance_km=float(data.get("distance_km") or 0),
            elapsed_time=int(data.get("elapsed_time") or 0),
            moving_time=int(data.get("moving_time") or 0),
            elevation_gain=float(data.get("elevation_gain") or 0),
            avg_heart_rate=data.get("avg_heart_rate"),
            max_heart_rate=data.get("max_heart_rate"),
        )

    def __str__(self) -> str:
        return f"Activity({self.id}: {self.name} {self.distance_km:.2f} km)"
