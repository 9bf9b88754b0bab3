"""
Playback Engine
Replays a recorded route as a wall-clock-synchronized animation.
Owns the route, the playback clock, the interpolator and the telemetry accumulator.
"""

import math
import numbers

from config import DEBUG_MODE
from core.clock import PlaybackClock
from core.geo import interpolate_position
from core.route import Route
from core.state import PlaybackState, Snapshot
from core.telemetry import TelemetryAccumulator


def position_on_segment(route, index, progress):
    """
    Interpolated position within the segment starting at waypoint index.

    Args:
        route: Route being replayed
        index: Current segment index
        progress: Fraction of the segment covered, 0.0 - 1.0

    Returns:
        (lat, lng) tuple, or None for an empty route
    """
    if not route:
        return None

    current = route[index]
    following = route.next_after(index)
    if following is None:
        return current.position

    return interpolate_position(current.latitude, current.longitude,
                                following.latitude, following.longitude,
                                progress)


class PlaybackEngine:
    """
    Idle/Playing state machine driven by an external frame tick.

    Every command and every tick returns a fresh Snapshot. The engine never
    schedules work itself; a driver calls tick(now) while it is playing.
    """

    def __init__(self, route=None, playback_rate=1.0):
        """
        Args:
            route: Optional Route (or list of raw records) to load
            playback_rate: Route seconds replayed per wall-clock second
        """
        self.state = PlaybackState()
        self.clock = PlaybackClock(self.state)
        self.telemetry = TelemetryAccumulator(self.state)
        self.set_playback_rate(playback_rate)

        if route is not None:
            self.load_route(route)

    # ==================== Commands ====================

    def load_route(self, route):
        """
        Replace the route wholesale and return to a zeroed Idle state.

        Args:
            route: Route instance or sequence of raw {latitude, longitude, timestamp} records

        Raises:
            MalformedWaypoint: if raw records fail validation (current route is kept)
        """
        if not isinstance(route, Route):
            route = Route.from_records(route)

        self.state.route = route
        self.state.reset()

        if route:
            print(f"Route loaded: {len(route)} waypoints, "
                  f"{route.total_distance_m():.0f} m over {route.total_duration():.0f} s")
        else:
            print("Route loaded: no waypoints")

        return self.snapshot()

    def play(self):
        """
        Start or resume playback.

        Ignored when the route has fewer than two waypoints, when the route
        is already complete, or when already playing.
        """
        state = self.state

        if len(state.route) < 2:
            print("Cannot play: route needs at least 2 waypoints")
            return self.snapshot()

        if state.playing or state.is_terminal:
            return self.snapshot()

        state.playing = True
        state.clear_samples()
        return self.snapshot()

    def pause(self):
        """Freeze playback, keeping position and telemetry."""
        state = self.state
        if state.playing:
            state.playing = False
            state.segment_wall_clock_origin = None
        return self.snapshot()

    def toggle(self):
        """Pause when playing, play otherwise."""
        if self.state.playing:
            return self.pause()
        return self.play()

    def reset(self):
        """Return to the start of the route with telemetry zeroed."""
        self.state.reset()
        return self.snapshot()

    def set_playback_rate(self, rate):
        """
        Change how many route seconds are replayed per wall-clock second.

        Args:
            rate: Positive multiplier (1.0 = real time)

        Raises:
            ValueError: if rate is not a positive finite number
        """
        if isinstance(rate, bool) or not isinstance(rate, numbers.Real) \
                or not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Playback rate must be a positive number, got {rate!r}")

        self.state.playback_rate = float(rate)
        self.clock.reanchor()
        return self.snapshot()

    # ==================== Frame Tick ====================

    def tick(self, now):
        """
        Advance playback to wall-clock instant now.

        Stale ticks (earlier than the previous sample) and non-finite
        instants are ignored.

        Args:
            now: Wall-clock instant in seconds

        Returns:
            Snapshot after the tick
        """
        state = self.state

        if not state.playing:
            return self.snapshot()

        if isinstance(now, bool) or not isinstance(now, numbers.Real) or not math.isfinite(now):
            return self.snapshot()
        now = float(now)

        if state.last_sample_wall_clock is not None and now < state.last_sample_wall_clock:
            return self.snapshot()

        progress = self.clock.on_tick(now)
        position = position_on_segment(state.route, state.current_segment_index, progress)
        delta = self.telemetry.record(position, now)

        if DEBUG_MODE:
            print(f"tick {now:.3f}: segment {state.current_segment_index} "
                  f"progress {progress:.3f} delta {delta:.2f} m")

        if progress >= 1.0 and self.clock.advance_segment(now):
            self._complete()

        return self.snapshot()

    def _complete(self):
        state = self.state
        state.playing = False
        state.complete = True
        print(f"*** Route complete! Time: {state.elapsed_time:.0f}s, "
              f"Distance: {state.distance_travelled:.2f} m ***")

    # ==================== Snapshot ====================

    def snapshot(self):
        """Build the read-only Snapshot of the current state."""
        state = self.state
        route = state.route
        index = state.current_segment_index

        timestamp = route[index].timestamp_iso() if route else None

        return Snapshot(
            current_position=position_on_segment(route, index, state.segment_progress),
            current_waypoint_timestamp=timestamp,
            elapsed_time_seconds=state.elapsed_time,
            distance_travelled_meters=state.distance_travelled,
            speed_meters_per_second=state.speed,
            playing=state.playing,
            traveled_path_prefix=route.path(index),
            segment_index=index,
            segment_progress=state.segment_progress,
            complete=state.complete,
            playback_rate=state.playback_rate,
        )

    @property
    def playing(self):
        return self.state.playing

    def __repr__(self):
        state = self.state
        return (f"PlaybackEngine(segment={state.current_segment_index}/{max(len(state.route) - 1, 0)}, "
                f"progress={state.segment_progress:.2f}, playing={state.playing})")
