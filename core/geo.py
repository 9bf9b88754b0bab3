"""
Core Geodesy Functions for Route Replay
Pure functions for great-circle distance, linear interpolation and unit conversion.
No state - all functions are side-effect free.
"""

import math
import numpy as np
from config import EARTH_RADIUS_M, MS_TO_KMH


# ==================== Clamping ====================

def clamp(value, lower, upper):
    """
    Clamp value into the closed range [lower, upper].

    Args:
        value: Value to clamp
        lower: Lower bound
        upper: Upper bound

    Returns:
        Clamped float
    """
    return float(np.clip(value, lower, upper))


# ==================== Distance ====================

def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate great-circle distance between two points using Haversine formula.

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Distance in meters
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)

    # Haversine formula
    dlat = lat2_rad - lat1_rad
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2)

    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def haversine_distance_between(point_a, point_b):
    """Haversine distance in meters between two (lat, lng) tuples."""
    return haversine_distance(point_a[0], point_a[1], point_b[0], point_b[1])


def leg_distances(lats, lons):
    """
    Great-circle length of every leg of a polyline (vectorized).

    Args:
        lats: Sequence of latitudes in degrees
        lons: Sequence of longitudes in degrees (same length as lats)

    Returns:
        numpy array of len(lats) - 1 leg lengths in meters
    """
    lat_rad = np.radians(np.asarray(lats, dtype=float))
    lon_rad = np.radians(np.asarray(lons, dtype=float))

    if lat_rad.size < 2:
        return np.zeros(0)

    dlat = np.diff(lat_rad)
    dlon = np.diff(lon_rad)

    a = (np.sin(dlat / 2) ** 2 +
         np.cos(lat_rad[:-1]) * np.cos(lat_rad[1:]) * np.sin(dlon / 2) ** 2)

    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return EARTH_RADIUS_M * c


# ==================== Interpolation ====================

def interpolate_position(lat0, lon0, lat1, lon1, progress):
    """
    Linearly interpolate between two positions in degree space.

    Latitude and longitude are interpolated independently. No spherical
    correction is applied; segments between recorded samples are short.

    Args:
        lat0, lon0: Segment start in degrees
        lat1, lon1: Segment end in degrees
        progress: Fraction of the segment covered, 0.0 - 1.0

    Returns:
        (lat, lng) tuple
    """
    lat = lat0 + (lat1 - lat0) * progress
    lng = lon0 + (lon1 - lon0) * progress
    return (lat, lng)


# ==================== Unit Conversions ====================

def ms_to_kmh(ms):
    """Convert meters per second to kilometers per hour."""
    return ms * MS_TO_KMH
