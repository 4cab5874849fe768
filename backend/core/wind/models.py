"""
Wind data models.

Classification of wind relative to the direction of travel, the per-direction
impact result, and the representative wind vector for a ride.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any

from core.constants import WIND_IMPACT_DECIMALS


class WindImpact(str, Enum):
    """Wind classification relative to the direction of travel."""
    UNFAVORABLE = "unfavorable"  # Headwind dominated, <= 60 degrees off the nose
    CROSSWIND = "crosswind"      # 60-120 degrees
    FAVORABLE = "favorable"      # Tailwind dominated, > 120 degrees


@dataclass(frozen=True)
class ImpactResult:
    """Impact of one wind observation on one direction of travel."""
    impact: WindImpact
    factor: float  # Signed time factor, positive lengthens travel time

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.impact.value,
            'factor': round(self.factor, WIND_IMPACT_DECIMALS),
        }


@dataclass(frozen=True)
class DominantWind:
    """Single representative wind vector for the whole ride window."""
    speed_kmh: float
    direction_deg: float
    direction_text: str
    start: datetime
    end: datetime
    duration_minutes: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'speed': round(self.speed_kmh, 1),
            'direction': round(self.direction_deg) % 360,
            'direction_text': self.direction_text,
            'time_span': {
                'start': self.start.strftime('%Y-%m-%dT%H:%M'),
                'end': self.end.strftime('%Y-%m-%dT%H:%M'),
                'duration_minutes': round(self.duration_minutes, 1),
            },
        }
