import pytest

from core.clock import PlaybackClock
from core.state import PlaybackState
from core.route import route_from_points


def make_clock(route, **state_fields):
    state = PlaybackState(route=route, playing=True, **state_fields)
    return PlaybackClock(state), state


def test_first_tick_anchors_segment(kilometer_route):
    clock, state = make_clock(kilometer_route)

    assert clock.on_tick(50.0) == 0.0
    assert state.segment_wall_clock_origin == 50.0
    assert state.elapsed_time == 0.0


def test_progress_tracks_wall_clock(kilometer_route):
    clock, state = make_clock(kilometer_route)
    clock.on_tick(50.0)
    state.last_sample_wall_clock = 50.0

    assert clock.on_tick(53.0) == pytest.approx(0.3)
    assert state.elapsed_time == pytest.approx(3.0)


def test_progress_is_clamped(kilometer_route):
    clock, state = make_clock(kilometer_route)
    clock.on_tick(0.0)

    assert clock.on_tick(25.0) == 1.0


def test_degenerate_segment_snaps_to_end():
    route = route_from_points([
        (0.0, 0.0, "2024-01-01T00:00:00Z"),
        (0.0, 0.001, "2024-01-01T00:00:00Z"),
    ])
    clock, state = make_clock(route)

    assert clock.segment_duration() == 0.0
    assert clock.on_tick(3.0) == 1.0


def test_anchor_backdates_partial_progress(kilometer_route):
    clock, state = make_clock(kilometer_route, segment_progress=0.4)

    clock.anchor(100.0)

    assert state.segment_wall_clock_origin == pytest.approx(96.0)
    assert clock.on_tick(100.0) == pytest.approx(0.4)


def test_playback_rate_scales_progress(kilometer_route):
    clock, state = make_clock(kilometer_route, playback_rate=2.0)
    clock.on_tick(0.0)

    assert clock.on_tick(2.5) == pytest.approx(0.5)


def test_reanchor_keeps_progress_continuous(kilometer_route):
    clock, state = make_clock(kilometer_route)
    clock.on_tick(0.0)
    state.segment_progress = clock.on_tick(2.0)
    state.last_sample_wall_clock = 2.0

    state.playback_rate = 4.0
    clock.reanchor()

    assert clock.on_tick(2.0) == pytest.approx(0.2)
    assert clock.on_tick(3.0) == pytest.approx(0.6)


def test_reanchor_without_samples_clears_origin(kilometer_route):
    clock, state = make_clock(kilometer_route)
    state.segment_wall_clock_origin = 5.0

    clock.reanchor()

    assert state.segment_wall_clock_origin is None


def test_advance_segment(three_point_route):
    clock, state = make_clock(three_point_route, segment_progress=1.0)

    assert clock.advance_segment(10.0) is False
    assert state.current_segment_index == 1
    assert state.segment_progress == 0.0
    assert state.segment_wall_clock_origin == 10.0

    assert clock.advance_segment(20.0) is True
    assert state.current_segment_index == 2

    # Clamped at the last waypoint
    assert clock.advance_segment(30.0) is True
    assert state.current_segment_index == 2
