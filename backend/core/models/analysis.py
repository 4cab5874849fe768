"""
Wind analysis data models.

Per-segment analysis results and the route-level summary produced from them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from core.constants import SUMMARY_DECIMALS, TIME_DECIMALS
from core.calculations import bearing_to_compass16
from core.models.segment import Segment
from core.wind.models import ImpactResult

NORMAL_DIRECTION = 'normal'
REVERSE_DIRECTION = 'reverse'


@dataclass(frozen=True)
class SegmentAnalysis:
    """
    A segment scored against the wind forecast for its projected arrival time.

    The same wind observation is used for both directions of travel; only the
    bearing differs (reverse = bearing + 180).
    """
    segment: Segment
    segment_datetime: datetime  # Projected arrival on this segment
    cumulative_time: float  # Minutes since ride start at arrival
    wind_speed: float  # km/h
    wind_direction: float  # Degrees, direction the wind blows from
    temperature: Optional[float]
    normal: ImpactResult
    reverse: ImpactResult
    base_time_minutes: float  # Travel time without wind
    estimated_time_minutes: float
    estimated_time_reverse_minutes: float

    @property
    def distance_km(self) -> float:
        return self.segment.distance_km

    def to_dict(self) -> Dict[str, Any]:
        """Segment wire representation extended with the wind analysis."""
        data = self.segment.to_dict()
        data.update({
            'segment_datetime': self.segment_datetime.strftime('%Y-%m-%dT%H:%M'),
            'cumulative_time': round(self.cumulative_time, TIME_DECIMALS),
            'wind_speed': round(self.wind_speed, 1),
            'wind_direction': round(self.wind_direction) % 360,
            'wind_direction_text': bearing_to_compass16(self.wind_direction),
            'temperature': None if self.temperature is None else round(self.temperature, 1),
            'wind_impact': self.normal.impact.value,
            'wind_impact_value': self.normal.to_dict()['factor'],
            'wind_impact_reverse': self.reverse.impact.value,
            'wind_impact_value_reverse': self.reverse.to_dict()['factor'],
            'estimated_time_minutes': round(self.estimated_time_minutes, TIME_DECIMALS),
            'estimated_time_reverse_minutes': round(self.estimated_time_reverse_minutes, TIME_DECIMALS),
            'base_time_minutes': round(self.base_time_minutes, TIME_DECIMALS),
        })
        return data


@dataclass(frozen=True)
class RouteSummary:
    """Round-trip totals and the better-direction decision for a route."""
    total_time_normal: float = 0.0
    total_time_reverse: float = 0.0
    headwind_distance_normal: float = 0.0
    headwind_distance_reverse: float = 0.0
    favorable_segments_normal: int = 0
    favorable_segments_reverse: int = 0
    total_distance: float = 0.0

    @property
    def best_direction(self) -> str:
        """Normal wins ties."""
        if self.total_time_normal <= self.total_time_reverse:
            return NORMAL_DIRECTION
        return REVERSE_DIRECTION

    @property
    def time_saved_minutes(self) -> float:
        return abs(self.total_time_normal - self.total_time_reverse)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_time_normal': round(self.total_time_normal, SUMMARY_DECIMALS),
            'total_time_reverse': round(self.total_time_reverse, SUMMARY_DECIMALS),
            'headwind_distance_normal': round(self.headwind_distance_normal, SUMMARY_DECIMALS),
            'headwind_distance_reverse': round(self.headwind_distance_reverse, SUMMARY_DECIMALS),
            'favorable_segments_normal': self.favorable_segments_normal,
            'favorable_segments_reverse': self.favorable_segments_reverse,
            'total_distance': round(self.total_distance, SUMMARY_DECIMALS),
            'best_direction': self.best_direction,
            'time_saved_minutes': round(self.time_saved_minutes, SUMMARY_DECIMALS),
        }
