"""File format handlers for track files."""

from .gpx import TrackParseError, TrackParseResult, parse_track_file

__all__ = ["TrackParseError", "TrackParseResult", "parse_track_file"]
