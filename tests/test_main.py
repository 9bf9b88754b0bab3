import os

import pytest

import main
from config import HEADLESS_FPS, ROUTE_PATH, SPEED_MULTIPLIERS
from core.engine import PlaybackEngine
from core.route import route_from_points


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self, start=1000.0):
        self.t = start

    def now(self):
        return self.t

    def sleep(self, seconds):
        self.t += seconds


def test_parse_args_defaults():
    args = main.parse_args([])

    assert args.route == ROUTE_PATH
    assert args.rate == 1.0
    assert args.fps is None
    assert args.headless is False


def test_parse_args_options():
    args = main.parse_args(['--route', 'https://example.com/r.json', '--rate', '5', '--fps', '10', '--headless'])

    assert args.route == 'https://example.com/r.json'
    assert args.rate == 5.0
    assert args.fps == 10.0
    assert args.headless is True


@pytest.mark.parametrize("rate,expected", [(1.0, 1.0), (3.0, 2.0), (4.0, 5.0), (1000.0, 100.0), (0.0, 0.25)])
def test_closest_speed_index(rate, expected):
    assert SPEED_MULTIPLIERS[main.closest_speed_index(rate)] == expected


def test_run_headless_completes_route(kilometer_route, capsys):
    clock = FakeClock()
    engine = PlaybackEngine(kilometer_route, playback_rate=2.0)

    final = main.run_headless(engine, fps=10, report_interval=1.0, now=clock.now, sleep=clock.sleep)

    assert final.complete
    assert not final.playing
    assert final.distance_travelled_meters == pytest.approx(1000.0, rel=0.01)
    assert final.elapsed_time_seconds == pytest.approx(5.0, abs=0.2)
    assert "sec" in capsys.readouterr().out


def test_run_headless_single_waypoint_returns_immediately(capsys):
    engine = PlaybackEngine(route_from_points([(1.0, 2.0, "2024-01-01T00:00:00Z")]))

    def fail_sleep(seconds):
        raise AssertionError("should not sleep")

    final = main.run_headless(engine, now=lambda: 0.0, sleep=fail_sleep)

    assert not final.playing
    assert final.current_position == (1.0, 2.0)
    assert "1.000000, 2.000000" in capsys.readouterr().out


def test_main_headless(sample_route_path, monkeypatch, capsys):
    captured = {}

    def fake_run_headless(engine, fps=HEADLESS_FPS):
        captured['engine'] = engine
        captured['fps'] = fps

    monkeypatch.setattr(main, 'run_headless', fake_run_headless)

    main.main(['--route', str(sample_route_path), '--headless', '--rate', '25'])

    engine = captured['engine']
    assert len(engine.state.route) == 12
    assert engine.state.playback_rate == 25.0
    assert captured['fps'] == HEADLESS_FPS
    assert "Replay closed" in capsys.readouterr().out


def test_default_route_path_does_not_depend_on_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert os.path.isabs(ROUTE_PATH)
    assert os.path.exists(main.parse_args([]).route)


def test_run_exits_cleanly_on_interrupt(monkeypatch, capsys):
    def interrupted(argv=None):
        raise KeyboardInterrupt

    monkeypatch.setattr(main, 'main', interrupted)

    with pytest.raises(SystemExit) as excinfo:
        main.run([])

    assert excinfo.value.code == 0
    assert "Interrupted by user" in capsys.readouterr().out


def test_run_reports_fatal_errors(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main.run(['--route', str(tmp_path / 'missing.json'), '--headless'])

    assert excinfo.value.code == 1
    assert "Fatal error" in capsys.readouterr().out
