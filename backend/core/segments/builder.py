"""
Segment building.

This module turns an ordered point list into directed segments carrying
distance and bearing, and classifies the overall shape of the route.
"""

import logging
from typing import List

from core.constants import (
    FULL_CIRCLE_DEGREES, LOOP_DETECTION_THRESHOLD_KM, SEGMENT_DISTANCE_DECIMALS,
    SEGMENT_BEARING_DECIMALS
)
from core.calculations import (
    point_distance, point_bearing, bearing_to_compass16, bearing_to_compass8
)
from core.models.segment import Point, Segment, RouteInfo

logger = logging.getLogger(__name__)

ROUTE_TYPE_LOOP = 'loop'
ROUTE_TYPE_LINEAR = 'linear'
ROUTE_TYPE_UNKNOWN = 'unknown'


def build_segment(segment_id: int, start: Point, end: Point) -> Segment:
    """Build one directed segment between two points."""
    bearing = point_bearing(start, end)
    return Segment(
        id=segment_id,
        start=start,
        end=end,
        distance_km=round(point_distance(start, end), SEGMENT_DISTANCE_DECIMALS),
        bearing=round(bearing, SEGMENT_BEARING_DECIMALS) % FULL_CIRCLE_DEGREES,
        bearing_text=bearing_to_compass16(bearing),
    )


def build_segments(points: List[Point]) -> List[Segment]:
    """
    Build one segment per consecutive pair of points.

    Args:
        points: Ordered route points

    Returns:
        List of segments, ``len(points) - 1`` long (empty for fewer than 2 points)
    """
    segments = [
        build_segment(i, points[i], points[i + 1])
        for i in range(len(points) - 1)
    ]
    logger.debug(f"Built {len(segments)} segments from {len(points)} points")
    return segments


def total_distance(segments: List[Segment]) -> float:
    """Sum of segment distances in kilometers."""
    return sum(segment.distance_km for segment in segments)


def analyze_route_direction(segments: List[Segment]) -> RouteInfo:
    """
    Classify the route as a loop or a linear route.

    A route whose start and end are less than 0.5 km apart is a loop, where
    both directions are equally meaningful. Otherwise it is linear and
    labeled with the octant from start to end.

    Args:
        segments: Route segments in order

    Returns:
        RouteInfo describing the route shape
    """
    if not segments:
        return RouteInfo(type=ROUTE_TYPE_UNKNOWN, description='Undetermined route')

    start_point = segments[0].start
    end_point = segments[-1].end

    if point_distance(start_point, end_point) < LOOP_DETECTION_THRESHOLD_KM:
        return RouteInfo(
            type=ROUTE_TYPE_LOOP,
            description='Loop route - both directions are worth comparing',
            is_loop=True,
        )

    bearing = point_bearing(start_point, end_point)
    direction = bearing_to_compass8(bearing)

    return RouteInfo(
        type=ROUTE_TYPE_LINEAR,
        description=f'Linear route heading {direction}',
        is_loop=False,
        direction=direction,
        bearing=round(bearing, SEGMENT_BEARING_DECIMALS) % FULL_CIRCLE_DEGREES,
    )
