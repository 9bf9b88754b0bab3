import os
from pathlib import Path

# pygame must not open a real window during tests
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pytest

from core.engine import PlaybackEngine
from core.route import route_from_points

REPO_ROOT = Path(__file__).resolve().parent.parent
SAMPLE_ROUTE_PATH = REPO_ROOT / 'assets' / 'routes' / 'dummy-route.json'

# 0.008993 degrees of longitude at the equator is ~1000 m
EQUATOR_KM_LNG = 0.008993


@pytest.fixture
def kilometer_route():
    """Two waypoints ~1000 m apart, recorded 10 seconds apart."""
    return route_from_points([
        (0.0, 0.0, "2024-01-01T00:00:00Z"),
        (0.0, EQUATOR_KM_LNG, "2024-01-01T00:00:10Z"),
    ])


@pytest.fixture
def three_point_route():
    """Two 10-second segments heading east then north."""
    return route_from_points([
        (0.0, 0.0, "2024-01-01T00:00:00Z"),
        (0.0, 0.001, "2024-01-01T00:00:10Z"),
        (0.001, 0.001, "2024-01-01T00:00:20Z"),
    ])


@pytest.fixture
def engine(kilometer_route):
    return PlaybackEngine(kilometer_route)


@pytest.fixture
def sample_route_path():
    return SAMPLE_ROUTE_PATH
