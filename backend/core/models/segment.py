"""
Route geometry data models.

This module defines the data structures for points and directed segments
extracted from GPX tracks.
"""

from dataclasses import dataclass
from typing import Optional, List, Dict, Any


@dataclass(frozen=True)
class Point:
    """A geographic position in decimal degrees."""
    lat: float
    lon: float

    def to_dict(self) -> Dict[str, float]:
        return {'lat': self.lat, 'lon': self.lon}


@dataclass(frozen=True)
class Segment:
    """
    Represents a directed leg between two consecutive route points.

    Distance and bearing are stored already rounded (3 and 1 decimals),
    which is what gets sent to and received back from the frontend.
    """
    id: int
    start: Point
    end: Point
    distance_km: float  # Great-circle distance in kilometers
    bearing: float  # Initial bearing in degrees (0-360)
    bearing_text: str  # 16-point compass label

    def to_dict(self) -> Dict[str, Any]:
        """Convert segment to its wire representation."""
        return {
            'id': self.id,
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'distance': self.distance_km,
            'bearing': self.bearing,
            'bearing_text': self.bearing_text,
        }


@dataclass(frozen=True)
class RouteInfo:
    """Overall shape of a route: loop, linear or unknown."""
    type: str
    description: str
    is_loop: Optional[bool] = None
    direction: Optional[str] = None
    bearing: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'type': self.type, 'description': self.description}
        if self.is_loop is not None:
            data['is_loop'] = self.is_loop
        if self.direction is not None:
            data['direction'] = self.direction
            data['bearing'] = self.bearing
        return data


def points_to_dicts(points: List[Point]) -> List[Dict[str, float]]:
    return [point.to_dict() for point in points]


def segments_to_dicts(segments: List[Segment]) -> List[Dict[str, Any]]:
    return [segment.to_dict() for segment in segments]
