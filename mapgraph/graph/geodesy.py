"""
Great-circle math on a spherical Earth.

All functions take coordinates in decimal degrees. Distances are in miles.
See https://www.movable-type.co.uk/scripts/latlong.html for the formulas.
"""

import math

import numpy as np

EARTH_RADIUS_MILES = 3963.0


def haversine_miles(lon_v: float, lat_v: float, lon_w: float, lat_w: float) -> float:
    """
    Great-circle distance between two points using the haversine formula.

    Args:
        lon_v, lat_v: First point
        lon_w, lat_w: Second point

    Returns:
        Distance in miles. Exactly symmetric in its two points.
    """
    phi1 = math.radians(lat_v)
    phi2 = math.radians(lat_w)
    dphi = math.radians(lat_w - lat_v)
    dlambda = math.radians(lon_w - lon_v)

    a = math.sin(dphi / 2.0) ** 2
    a += math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def haversine_miles_many(lon: float, lat: float, lons: np.ndarray, lats: np.ndarray) -> np.ndarray:
    """Vectorised haversine from one point to arrays of points (miles)"""
    phi1 = np.radians(lat)
    phi2 = np.radians(lats)
    dphi = np.radians(lats - lat)
    dlambda = np.radians(lons - lon)

    a = np.sin(dphi / 2.0) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2.0) ** 2
    # Rounding can push a a hair past 1 for antipodal points
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def initial_bearing_deg(lon_v: float, lat_v: float, lon_w: float, lat_w: float) -> float:
    """
    Initial bearing of the great-circle path from v to w.

    Returns:
        Degrees clockwise from north, in (-180, 180].
    """
    phi1 = math.radians(lat_v)
    phi2 = math.radians(lat_w)
    dlambda = math.radians(lon_w - lon_v)

    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)
    bearing = math.degrees(math.atan2(y, x))
    if bearing <= -180.0:
        bearing = 180.0
    return bearing
