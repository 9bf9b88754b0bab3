"""
Playback Clock
Converts wall-clock frame ticks into progress through the current route segment.
Re-synchronizes at every waypoint so timing drift cannot build up over long replays.
"""

from core.geo import clamp
from core.state import PlaybackState


class PlaybackClock:
    """
    Tracks the wall-clock origin of the current segment.

    Segment progress is the wall-clock time spent in the segment (scaled by
    the playback rate) divided by the recorded duration of the segment.
    """

    def __init__(self, state: PlaybackState):
        """
        Args:
            state: Shared PlaybackState (mutated in place)
        """
        self.state = state

    def segment_duration(self):
        """Recorded duration of the current segment in seconds (<= 0 when degenerate)."""
        return self.state.route.segment_duration(self.state.current_segment_index)

    def anchor(self, now):
        """
        Start the current segment's wall-clock window at now.

        When resuming part-way through a segment the origin is back-dated so
        progress continues from where it was frozen.
        """
        state = self.state
        duration = self.segment_duration()

        if duration > 0 and state.segment_progress > 0:
            state.segment_wall_clock_origin = now - state.segment_progress * duration / state.playback_rate
        else:
            state.segment_wall_clock_origin = now

    def reanchor(self):
        """Recompute the origin after a playback rate change, keeping progress continuous."""
        state = self.state
        if state.segment_wall_clock_origin is None or state.last_sample_wall_clock is None:
            state.segment_wall_clock_origin = None
            return

        duration = self.segment_duration()
        if duration > 0:
            state.segment_wall_clock_origin = (
                state.last_sample_wall_clock - state.segment_progress * duration / state.playback_rate
            )

    def on_tick(self, now):
        """
        Advance session time and segment progress to wall-clock instant now.

        Args:
            now: Wall-clock instant in seconds (non-decreasing between calls)

        Returns:
            Segment progress in [0, 1]
        """
        state = self.state

        if state.segment_wall_clock_origin is None:
            self.anchor(now)

        # Session elapsed time is real playback time, not route time
        if state.last_sample_wall_clock is not None:
            tick_seconds = now - state.last_sample_wall_clock
            if tick_seconds > 0:
                state.elapsed_time += tick_seconds

        duration = self.segment_duration()
        if duration <= 0:
            # Degenerate segment (duplicate timestamps): snap to the next waypoint
            state.segment_progress = 1.0
        else:
            elapsed_in_segment = (now - state.segment_wall_clock_origin) * state.playback_rate
            state.segment_progress = clamp(elapsed_in_segment / duration, 0.0, 1.0)

        return state.segment_progress

    def advance_segment(self, now):
        """
        Move to the next segment after progress reached 1.

        Args:
            now: Wall-clock instant of the tick that finished the segment

        Returns:
            True if the new waypoint is the last one (route complete)
        """
        state = self.state
        last_index = max(len(state.route) - 1, 0)

        state.current_segment_index = min(state.current_segment_index + 1, last_index)
        state.segment_progress = 0.0
        state.segment_wall_clock_origin = now

        return state.is_terminal
