"""
Shared calculations module.

Spherical-earth geometry and angle helpers used by every stage of the route
analysis: distances, bearings, compass labels, relative wind angles and
circular averaging.
"""

import math
import numpy as np
from geopy.distance import great_circle
from typing import Sequence, List
import logging

from core.constants import (
    EARTH_RADIUS_KM, FULL_CIRCLE_DEGREES, ANGLE_WRAP_BOUNDARY_DEGREES, REVERSE_OFFSET_DEGREES,
    COMPASS_SECTOR_DEGREES, COMPASS_16_POINTS, COMPASS_8_OCTANTS
)
from core.models.segment import Point

logger = logging.getLogger(__name__)


# =============================================================================
# BASIC GEOMETRIC CALCULATIONS
# =============================================================================

def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the initial bearing between two points in degrees (0-360)."""
    # Convert to radians
    lat1 = math.radians(lat1)
    lon1 = math.radians(lon1)
    lat2 = math.radians(lat2)
    lon2 = math.radians(lon2)

    # Calculate bearing
    x = math.sin(lon2 - lon1) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    initial_bearing = math.atan2(x, y)

    # Convert to degrees
    initial_bearing = math.degrees(initial_bearing)
    compass_bearing = (initial_bearing + FULL_CIRCLE_DEGREES) % FULL_CIRCLE_DEGREES

    # -0.0 % 360 can come back as 360.0 after float rounding
    if compass_bearing >= FULL_CIRCLE_DEGREES:
        compass_bearing = 0.0

    return compass_bearing


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate great-circle distance between two points in kilometers."""
    return great_circle((lat1, lon1), (lat2, lon2), radius=EARTH_RADIUS_KM).km


def point_distance(a: Point, b: Point) -> float:
    """Great-circle distance between two points in kilometers."""
    return calculate_distance(a.lat, a.lon, b.lat, b.lon)


def point_bearing(a: Point, b: Point) -> float:
    """Initial bearing from a toward b in degrees."""
    return calculate_bearing(a.lat, a.lon, b.lat, b.lon)


# =============================================================================
# COMPASS LABELS
# =============================================================================

def bearing_to_compass16(bearing: float) -> str:
    """
    Map a bearing to the nearest of 16 compass points (22.5 degree sectors).

    Halfway values round up, so 11.25 is NNE.
    """
    index = int(math.floor(bearing / COMPASS_SECTOR_DEGREES + 0.5)) % len(COMPASS_16_POINTS)
    return COMPASS_16_POINTS[index]


def bearing_to_compass8(bearing: float) -> str:
    """Map a bearing to one of 8 named octants ('North', 'North-East', ...)."""
    bearing = bearing % FULL_CIRCLE_DEGREES
    for name, start, end in COMPASS_8_OCTANTS:
        if start > end:
            # Range wraps through 0 (North)
            if bearing >= start or bearing < end:
                return name
        elif start <= bearing < end:
            return name
    return COMPASS_8_OCTANTS[0][0]


# =============================================================================
# WIND ANGLES
# =============================================================================

def relative_wind_angle(bearing: float, wind_direction: float) -> float:
    """
    Calculate the angle between the direction of travel and the wind origin.

    Parameters:
    - bearing: The direction we're traveling (0-359 degrees)
    - wind_direction: The direction the wind is coming from (0-359 degrees)

    Returns:
    - The relative angle (0-180 degrees)
      - 0° means riding straight INTO the wind (headwind)
      - 90° means wind from the side
      - 180° means wind from behind (tailwind)
    """
    diff = abs(bearing - wind_direction)
    if diff > ANGLE_WRAP_BOUNDARY_DEGREES:
        diff = FULL_CIRCLE_DEGREES - diff
    return diff


def reverse_bearing(bearing: float) -> float:
    """Bearing of the same segment traversed backwards."""
    return (bearing + REVERSE_OFFSET_DEGREES) % FULL_CIRCLE_DEGREES


def circular_mean(angles: Sequence[float]) -> float:
    """
    Average a set of directions as unit vectors.

    Unlike an arithmetic mean this handles the 0/360 wrap: the mean of 350°
    and 10° is 0°, not 180°.

    Args:
        angles: Directions in degrees

    Returns:
        float: Mean direction in degrees (0-360)

    Raises:
        ValueError: If no angles are given
    """
    if len(angles) == 0:
        raise ValueError("circular_mean requires at least one angle")

    radians = np.radians(np.asarray(angles, dtype=float))
    sin_mean = np.mean(np.sin(radians))
    cos_mean = np.mean(np.cos(radians))

    if math.isclose(sin_mean, 0.0, abs_tol=1e-12) and math.isclose(cos_mean, 0.0, abs_tol=1e-12):
        logger.warning(f"Directions {list(angles)} cancel out, mean direction is undefined")

    mean = math.degrees(math.atan2(sin_mean, cos_mean)) % FULL_CIRCLE_DEGREES
    # Snap values like 359.9999999 back onto the circle start
    if math.isclose(mean, FULL_CIRCLE_DEGREES, abs_tol=1e-9):
        mean = 0.0
    return float(mean)


# =============================================================================
# ROUTE HELPERS
# =============================================================================

def calculate_route_center(start_points: List[Point]) -> Point:
    """
    Average the given points into a single center position.

    Args:
        start_points: Segment start points of the route

    Returns:
        Point: Mean latitude/longitude

    Raises:
        ValueError: If the list is empty
    """
    if not start_points:
        raise ValueError("Cannot compute the center of an empty route")

    lat = sum(p.lat for p in start_points) / len(start_points)
    lon = sum(p.lon for p in start_points) / len(start_points)
    return Point(lat=lat, lon=lon)
