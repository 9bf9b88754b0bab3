"""
Route Store
Immutable timestamped waypoints and the ordered route replayed by the engine.
Parses raw {latitude, longitude, timestamp} records and rejects malformed ones.
"""

import math
import numbers
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from config import MIN_LATITUDE, MAX_LATITUDE, MIN_LONGITUDE, MAX_LONGITUDE
from core.geo import leg_distances


class MalformedWaypoint(ValueError):
    """A route record with an unparsable timestamp or out-of-range coordinates."""

    def __init__(self, index, reason):
        self.index = index
        self.reason = reason
        super().__init__(f"Waypoint {index}: {reason}")


@dataclass(frozen=True)
class Waypoint:
    """Single recorded sample: position in degrees and an aware UTC-comparable timestamp."""
    latitude: float
    longitude: float
    timestamp: datetime

    @property
    def position(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def timestamp_iso(self) -> str:
        """ISO-8601 timestamp, UTC rendered with a trailing Z."""
        text = self.timestamp.isoformat()
        if text.endswith('+00:00'):
            text = text[:-6] + 'Z'
        return text


class PathPrefix(Sequence):
    """
    Read-only view of the first waypoint positions of a route.

    Building one is constant time; positions are produced on access.
    """

    def __init__(self, waypoints: Tuple[Waypoint, ...], length: int):
        self._waypoints = waypoints
        self._length = max(0, min(length, len(waypoints)))

    def __len__(self):
        return self._length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self[i] for i in range(*index.indices(self._length)))
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("path index out of range")
        return self._waypoints[index].position

    def __eq__(self, other):
        if isinstance(other, PathPrefix) and self._waypoints is other._waypoints:
            return self._length == other._length
        if isinstance(other, (PathPrefix, tuple)):
            return tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        return f"PathPrefix({tuple(self)!r})"


class Route:
    """
    Ordered, immutable sequence of waypoints.

    Timestamps are assumed to be non-decreasing; they are not re-validated.
    """

    def __init__(self, waypoints: Iterable[Waypoint] = ()):
        self._waypoints: Tuple[Waypoint, ...] = tuple(waypoints)

    @classmethod
    def from_records(cls, records) -> 'Route':
        """
        Build a route from raw records.

        Args:
            records: Sequence of mappings with 'latitude', 'longitude' and 'timestamp'

        Returns:
            Route instance

        Raises:
            MalformedWaypoint: if any record is invalid (the whole route is rejected)
        """
        if isinstance(records, (str, bytes, dict)) or not hasattr(records, '__iter__'):
            raise MalformedWaypoint(0, f"expected a list of records, got {type(records).__name__}")

        return cls(parse_waypoint(record, index) for index, record in enumerate(records))

    def __len__(self):
        return len(self._waypoints)

    def __getitem__(self, index):
        return self._waypoints[index]

    def __iter__(self):
        return iter(self._waypoints)

    def __bool__(self):
        return bool(self._waypoints)

    @property
    def waypoints(self) -> Tuple[Waypoint, ...]:
        return self._waypoints

    def next_after(self, index) -> Optional[Waypoint]:
        """Waypoint following index, or None at the last waypoint."""
        if index + 1 < len(self._waypoints):
            return self._waypoints[index + 1]
        return None

    def segment_duration(self, index) -> float:
        """
        Recorded duration of the segment starting at index.

        Returns:
            Seconds between waypoint index and index + 1 (may be <= 0 for
            duplicate or out-of-order timestamps), 0.0 at the last waypoint
        """
        following = self.next_after(index)
        if following is None:
            return 0.0
        return (following.timestamp - self._waypoints[index].timestamp).total_seconds()

    def total_duration(self) -> float:
        """Seconds between the first and last recorded samples."""
        if len(self._waypoints) < 2:
            return 0.0
        return (self._waypoints[-1].timestamp - self._waypoints[0].timestamp).total_seconds()

    def total_distance_m(self) -> float:
        """Great-circle length of the whole route in meters."""
        lats = [wp.latitude for wp in self._waypoints]
        lons = [wp.longitude for wp in self._waypoints]
        return float(leg_distances(lats, lons).sum())

    def path(self, upto_index) -> PathPrefix:
        """(lat, lng) of every waypoint from the start up to and including upto_index."""
        return PathPrefix(self._waypoints, upto_index + 1)

    def __repr__(self):
        return f"Route(waypoints={len(self._waypoints)}, duration={self.total_duration():.0f}s)"


# ==================== Record Parsing ====================

def parse_timestamp(value) -> datetime:
    """
    Parse an absolute timestamp.

    Accepts ISO-8601 strings (a trailing 'Z' is UTC), datetime instances and
    epoch seconds. Naive values are taken as UTC.

    Raises:
        ValueError: if the value cannot be interpreted as an instant
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise ValueError(f"Could not parse timestamp: {value!r}")
    elif isinstance(value, numbers.Real):
        if not math.isfinite(value):
            raise ValueError(f"Could not parse timestamp: {value!r}")
        parsed = datetime.fromtimestamp(float(value), tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z') or text.endswith('z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Could not parse timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_coordinate(record, key, lower, upper, index) -> float:
    if key not in record:
        raise MalformedWaypoint(index, f"missing '{key}'")

    value = record[key]
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MalformedWaypoint(index, f"'{key}' is not a number: {value!r}")

    value = float(value)
    if not math.isfinite(value) or not lower <= value <= upper:
        raise MalformedWaypoint(index, f"'{key}' {value} outside [{lower}, {upper}]")
    return value


def parse_waypoint(record, index=0) -> Waypoint:
    """
    Validate one raw record and convert it into a Waypoint.

    Args:
        record: Mapping with 'latitude', 'longitude', 'timestamp'
        index: Position of the record in the route (for error messages)

    Raises:
        MalformedWaypoint: on a missing field, bad coordinate or bad timestamp
    """
    if not isinstance(record, dict):
        raise MalformedWaypoint(index, f"expected an object, got {type(record).__name__}")

    latitude = _parse_coordinate(record, 'latitude', MIN_LATITUDE, MAX_LATITUDE, index)
    longitude = _parse_coordinate(record, 'longitude', MIN_LONGITUDE, MAX_LONGITUDE, index)

    if 'timestamp' not in record:
        raise MalformedWaypoint(index, "missing 'timestamp'")
    try:
        timestamp = parse_timestamp(record['timestamp'])
    except (ValueError, TypeError, OverflowError, OSError) as e:
        raise MalformedWaypoint(index, str(e)) from e

    return Waypoint(latitude, longitude, timestamp)


def route_from_points(points: List[Tuple[float, float, object]]) -> Route:
    """Convenience builder from (lat, lng, timestamp) tuples."""
    return Route.from_records(
        {'latitude': lat, 'longitude': lng, 'timestamp': ts} for lat, lng, ts in points
    )
