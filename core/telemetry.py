"""
Telemetry Accumulator
Derives cumulative distance and instantaneous speed from successive replay positions.
Distances are great-circle meters, not degree-space interpolation lengths.
"""

from core.geo import haversine_distance_between
from core.state import PlaybackState


class TelemetryAccumulator:
    """Integrates distance and speed over the positions sampled each tick."""

    def __init__(self, state: PlaybackState):
        self.state = state

    def record(self, position, now):
        """
        Feed the position sampled at wall-clock instant now.

        The first sample of a playing session only initializes the last-sample
        fields. Speed keeps its previous value when no wall-clock time has
        passed since the last sample.

        Args:
            position: (lat, lng) tuple in degrees
            now: Wall-clock instant in seconds

        Returns:
            Distance covered since the previous sample in meters
        """
        state = self.state
        delta = 0.0

        if state.last_sample_position is not None and state.last_sample_wall_clock is not None:
            delta = haversine_distance_between(state.last_sample_position, position)
            state.distance_travelled += delta

            seconds_since_last = now - state.last_sample_wall_clock
            if seconds_since_last > 0:
                state.speed = delta / seconds_since_last

        state.last_sample_position = position
        state.last_sample_wall_clock = now

        return delta
