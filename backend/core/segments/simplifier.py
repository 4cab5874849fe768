"""
Route simplification.

Long GPS recordings carry thousands of points a few meters apart. Scoring
every one against the forecast is wasteful, so the route is decimated to a
manageable size before segments are built.
"""

import logging
from typing import List

from core.constants import DEFAULT_MAX_ROUTE_POINTS, DEFAULT_MIN_POINT_SPACING_KM
from core.calculations import point_distance
from core.models.segment import Point

logger = logging.getLogger(__name__)


def simplify_route(points: List[Point],
                   max_points: int = DEFAULT_MAX_ROUTE_POINTS,
                   min_distance_km: float = DEFAULT_MIN_POINT_SPACING_KM) -> List[Point]:
    """
    Decimate a point list while keeping its first and last points.

    Candidates are taken every ``step = max(1, n // max_points)`` points and
    kept only if they are at least ``min_distance_km`` away from the last
    kept point, so dense clusters collapse while sparse stretches keep every
    stride point. The result is not strictly bounded by ``max_points``.

    Args:
        points: Ordered route points
        max_points: Size above which simplification is applied
        min_distance_km: Minimum spacing between consecutive kept points

    Returns:
        List of points, unchanged when ``len(points) <= max_points``
    """
    if len(points) <= max_points:
        return points

    simplified = [points[0]]
    step = max(1, len(points) // max_points)

    for i in range(step, len(points) - 1, step):
        if point_distance(simplified[-1], points[i]) >= min_distance_km:
            simplified.append(points[i])

    simplified.append(points[-1])

    logger.info(f"Simplification: {len(points)} -> {len(simplified)} points")
    return simplified
