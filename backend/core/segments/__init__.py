"""
Segments package.

This package contains route simplification and segment building.
Clean, focused interface with no circular dependencies.
"""

from .simplifier import simplify_route
from .builder import (
    build_segment,
    build_segments,
    total_distance,
    analyze_route_direction,
)

# Segment models
from core.models.segment import Point, Segment, RouteInfo

__all__ = [
    'simplify_route',
    'build_segment',
    'build_segments',
    'total_distance',
    'analyze_route_direction',

    # Models
    'Point',
    'Segment',
    'RouteInfo',
]
