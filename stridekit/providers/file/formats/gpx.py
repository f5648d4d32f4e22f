"""GPX file format parser for stridekit.

This module parses a GPX (GPS Exchange Format) document with gpxpy and derives
a single activity from its first track: distance and elevation gain are
accumulated point by point, duration comes from the first and last timestamps.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import gpxpy
from gpxpy.gpx import GPXException, GPXTrack, GPXTrackPoint, GPXXMLSyntaxException

from stridekit.activity import Activity

logger = logging.getLogger(__name__)

DEFAULT_TRACK_NAME = "GPX Run"
DEFAULT_TRACK_TYPE = "Run"

EARTH_RADIUS_M = 6371000.0

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_EXTENSION = re.compile(r"\.gpx(\.gz)?$", re.IGNORECASE)
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


class TrackParseError(enum.Enum):
    """Reasons a track file cannot produce an activity."""

    NO_TRACKS_FOUND = "No tracks found in GPX file"
    INSUFFICIENT_POINTS = "Track has insufficient points"
    INVALID_FORMAT = "Invalid GPX file format"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrackParseResult:
    """Either an activity or an error, never both and never neither."""

    activity: Activity | None = None
    error: TrackParseError | None = None

    def __post_init__(self):
        if (self.activity is None) == (self.error is None):
            raise ValueError("TrackParseResult needs exactly one of activity or error")

    @property
    def ok(self) -> bool:
        return self.activity is not None

    @classmethod
    def success(cls, activity: Activity) -> TrackParseResult:
        return cls(activity=activity)

    @classmethod
    def failure(cls, error: TrackParseError) -> TrackParseResult:
        return cls(error=error)


def resolve_timezone(name: str) -> ZoneInfo:
    """Return the IANA zone *name*, raising ``ValueError`` if it does not exist."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name!r}") from e


def read_tracks(text: str) -> list[GPXTrack]:
    """Return the tracks of a GPX document.

    Raises ``GPXException`` (or ``ValueError`` for bad numbers) on malformed
    markup.
    """
    return gpxpy.parse(text).tracks


def track_points(track: GPXTrack) -> list[GPXTrackPoint]:
    """Points of every segment of *track*, in order."""
    return [point for segment in track.segments for point in segment.points]


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two WGS84 points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def track_distance_m(points: list[GPXTrackPoint]) -> float:
    """Sum of great-circle distances between consecutive points, in meters."""
    return sum(haversine_m(a.latitude, a.longitude, b.latitude, b.longitude) for a, b in zip(points, points[1:]))


def track_elevation_gain(points: list[GPXTrackPoint]) -> float:
    """Sum of positive elevation deltas; points without elevation are ignored."""
    gain = 0.0
    for previous, point in zip(points, points[1:]):
        if previous.elevation is None or point.elevation is None:
            continue
        delta = point.elevation - previous.elevation
        if delta > 0:
            gain += delta
    return gain


def _as_utc(dt: datetime | None) -> datetime | None:
    # GPX times without an offset are UTC
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=UTC)


def _epoch_millis(dt: datetime) -> int:
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def activity_name(track_name: str | None, file_name: str) -> str:
    if track_name:
        return track_name
    return _EXTENSION.sub("", file_name) or DEFAULT_TRACK_NAME


def parse_track_file(
    text: str,
    file_name: str,
    home_timezone: str = "UTC",
    default_type: str = DEFAULT_TRACK_TYPE,
) -> TrackParseResult:
    """Parse GPX text into one activity built from its first track.

    Args:
        text: Raw GPX document.
        file_name: Name of the uploaded file, used for the id and as a
            fallback name.
        home_timezone: IANA zone the activity date is expressed in.
        default_type: Activity type when the track does not declare one.

    Returns:
        A ``TrackParseResult`` holding the activity or the reason there is
        none. Malformed input never raises; an unknown *home_timezone* is a
        configuration error and raises ``ValueError``.
    """
    zone = resolve_timezone(home_timezone)

    try:
        tracks = read_tracks(text)
    except (GPXXMLSyntaxException, GPXException, ValueError) as e:
        logger.warning("GPX parsing error in %s: %s", file_name, e)
        return TrackParseResult.failure(TrackParseError.INVALID_FORMAT)

    if not tracks:
        return TrackParseResult.failure(TrackParseError.NO_TRACKS_FOUND)

    track = tracks[0]
    points = track_points(track)
    if len(points) < 2:
        return TrackParseResult.failure(TrackParseError.INSUFFICIENT_POINTS)

    # Missing timestamps fall back to "now" so an untimed route still imports
    start = _as_utc(points[0].time) or datetime.now(UTC)
    end = _as_utc(points[-1].time) or start
    elapsed = max(int(round((end - start).total_seconds())), 0)

    activity = Activity(
        id=f"gpx-{_epoch_millis(start)}-{_NON_ALNUM.sub('', file_name)}",
        date=start.astimezone(zone).replace(tzinfo=None),
        name=activity_name(track.name, file_name),
        type=track.type or default_type,
        distance_km=track_distance_m(points) / 1000,
        elapsed_time=elapsed,
        moving_time=elapsed,
        elevation_gain=track_elevation_gain(points),
    )
    return TrackParseResult.success(activity)
