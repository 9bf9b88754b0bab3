import pygame
import pytest

from config import SPEED_MULTIPLIERS, DEFAULT_SPEED_INDEX
from core.engine import PlaybackEngine
from ui.controls import ControlHandler


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.fixture
def controls(engine):
    return ControlHandler(engine)


def test_starts_paused_at_default_rate(controls):
    assert controls.paused
    assert controls.get_playback_rate() == SPEED_MULTIPLIERS[DEFAULT_SPEED_INDEX]
    assert controls.engine.state.playback_rate == SPEED_MULTIPLIERS[DEFAULT_SPEED_INDEX]


def test_space_toggles_playback(controls):
    controls.handle_event(key(pygame.K_SPACE))
    assert not controls.paused

    controls.handle_event(key(pygame.K_SPACE))
    assert controls.paused


def test_space_restarts_finished_route(controls):
    engine = controls.engine
    engine.play()
    engine.tick(0.0)
    engine.tick(10.0)
    assert engine.state.complete

    controls.handle_event(key(pygame.K_SPACE))

    assert engine.playing
    assert engine.state.distance_travelled == 0.0
    assert engine.state.current_segment_index == 0


def test_r_resets(controls):
    engine = controls.engine
    engine.play()
    engine.tick(0.0)
    engine.tick(4.0)

    controls.handle_event(key(pygame.K_r))

    assert controls.paused
    assert engine.state.segment_progress == 0.0
    assert engine.state.distance_travelled == 0.0


def test_speed_keys_step_through_multipliers(controls):
    controls.handle_event(key(pygame.K_EQUALS))
    assert controls.engine.state.playback_rate == SPEED_MULTIPLIERS[DEFAULT_SPEED_INDEX + 1]

    controls.handle_event(key(pygame.K_MINUS))
    controls.handle_event(key(pygame.K_MINUS))
    assert controls.engine.state.playback_rate == SPEED_MULTIPLIERS[DEFAULT_SPEED_INDEX - 1]


def test_speed_is_bounded(controls):
    for _ in range(len(SPEED_MULTIPLIERS) + 2):
        controls.slow_down()
    assert controls.get_playback_rate() == SPEED_MULTIPLIERS[0]

    for _ in range(len(SPEED_MULTIPLIERS) + 2):
        controls.speed_up()
    assert controls.get_playback_rate() == SPEED_MULTIPLIERS[-1]


def test_initial_speed_index_is_clamped(kilometer_route):
    controls = ControlHandler(PlaybackEngine(kilometer_route), speed_index=99)
    assert controls.get_playback_rate() == SPEED_MULTIPLIERS[-1]


def test_help_toggle(controls):
    controls.handle_event(key(pygame.K_h))
    assert controls.show_help


def test_quit_events(controls):
    assert controls.handle_event(key(pygame.K_ESCAPE)) == 'quit'
    assert controls.handle_event(pygame.event.Event(pygame.QUIT)) == 'quit'
    assert controls.handle_event(key(pygame.K_x)) is None
