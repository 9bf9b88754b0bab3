import pytest

from core.state import PlaybackState
from core.telemetry import TelemetryAccumulator


@pytest.fixture
def accumulator():
    return TelemetryAccumulator(PlaybackState())


def test_first_sample_only_initializes(accumulator):
    delta = accumulator.record((0.0, 0.0), 10.0)
    state = accumulator.state

    assert delta == 0.0
    assert state.distance_travelled == 0.0
    assert state.speed == 0.0
    assert state.last_sample_position == (0.0, 0.0)
    assert state.last_sample_wall_clock == 10.0


def test_distance_and_speed(accumulator):
    accumulator.record((0.0, 0.0), 10.0)
    delta = accumulator.record((0.0, 0.008993), 20.0)
    state = accumulator.state

    assert delta == pytest.approx(1000.0, rel=1e-3)
    assert state.distance_travelled == pytest.approx(1000.0, rel=1e-3)
    assert state.speed == pytest.approx(100.0, rel=1e-3)


def test_duplicate_tick_keeps_previous_speed(accumulator):
    accumulator.record((0.0, 0.0), 0.0)
    accumulator.record((0.0, 0.0008993), 1.0)
    speed = accumulator.state.speed

    accumulator.record((0.0, 0.0008993), 1.0)

    assert accumulator.state.speed == speed
    assert accumulator.state.distance_travelled == pytest.approx(100.0, rel=1e-3)


def test_stationary_samples_report_zero_speed(accumulator):
    accumulator.record((37.0, -122.0), 0.0)
    accumulator.record((37.0, -122.0), 2.0)

    assert accumulator.state.speed == 0.0
    assert accumulator.state.distance_travelled == 0.0


def test_distance_is_accumulated(accumulator):
    positions = [(0.0, 0.0), (0.0, 0.001), (0.001, 0.001), (0.001, 0.0)]
    for t, position in enumerate(positions):
        accumulator.record(position, float(t))

    assert accumulator.state.distance_travelled == pytest.approx(3 * 111.19, rel=1e-3)
