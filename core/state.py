"""
Playback State
Mutable session state owned by the engine and the read-only snapshot it publishes.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from core.route import Route


@dataclass
class PlaybackState:
    """Complete playback session at the current tick."""
    route: Route = field(default_factory=Route)
    current_segment_index: int = 0
    segment_progress: float = 0.0  # 0.0 - 1.0 within the current segment
    playing: bool = False
    complete: bool = False  # Natural end of route reached
    playback_rate: float = 1.0  # Route seconds per wall-clock second

    # Wall-clock bookkeeping (monotonic seconds)
    segment_wall_clock_origin: Optional[float] = None
    last_sample_position: Optional[Tuple[float, float]] = None
    last_sample_wall_clock: Optional[float] = None

    # Telemetry
    elapsed_time: float = 0.0  # seconds of wall-clock playback
    distance_travelled: float = 0.0  # meters
    speed: float = 0.0  # meters per second

    def reset(self) -> None:
        """Return every field except route and playback_rate to its initial value."""
        self.current_segment_index = 0
        self.segment_progress = 0.0
        self.playing = False
        self.complete = False
        self.clear_samples()
        self.elapsed_time = 0.0
        self.distance_travelled = 0.0
        self.speed = 0.0

    def clear_samples(self) -> None:
        """Forget wall-clock anchors so the next tick re-synchronizes."""
        self.segment_wall_clock_origin = None
        self.last_sample_position = None
        self.last_sample_wall_clock = None

    @property
    def is_terminal(self) -> bool:
        """True when there is no segment left to animate."""
        return self.current_segment_index >= len(self.route) - 1


@dataclass(frozen=True)
class Snapshot:
    """Read-only position and telemetry handed to renderers after every tick or command."""
    current_position: Optional[Tuple[float, float]]
    current_waypoint_timestamp: Optional[str]
    elapsed_time_seconds: float
    distance_travelled_meters: float
    speed_meters_per_second: float
    playing: bool
    traveled_path_prefix: Sequence[Tuple[float, float]]  # waypoints 0..segment_index
    segment_index: int = 0
    segment_progress: float = 0.0
    complete: bool = False
    playback_rate: float = 1.0

    def to_dict(self):
        """
        Get snapshot as a JSON-ready dictionary.

        Returns:
            Dictionary keyed the way browser-side consumers expect
        """
        position = None
        if self.current_position is not None:
            position = {'lat': self.current_position[0], 'lng': self.current_position[1]}

        return {
            'currentPosition': position,
            'currentWaypointTimestamp': self.current_waypoint_timestamp,
            'elapsedTimeSeconds': self.elapsed_time_seconds,
            'distanceTravelledMeters': self.distance_travelled_meters,
            'speedMetersPerSecond': self.speed_meters_per_second,
            'playing': self.playing,
            'traveledPathPrefix': [{'lat': lat, 'lng': lng} for lat, lng in self.traveled_path_prefix],
            'segmentIndex': self.segment_index,
            'segmentProgress': self.segment_progress,
            'complete': self.complete,
            'playbackRate': self.playback_rate,
        }
