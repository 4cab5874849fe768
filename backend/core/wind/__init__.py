"""
Wind module.

Wind classification relative to the direction of travel, the impact model,
and the dominant wind estimate for a ride.
"""

# Import models first (no dependencies)
from .models import WindImpact, ImpactResult, DominantWind
from .impact import (
    calculate_wind_impact,
    calculate_wind_impact_both_ways,
    calculate_base_time,
    estimate_segment_time,
)
from .dominant import calculate_dominant_wind

__all__ = [
    'WindImpact',
    'ImpactResult',
    'DominantWind',
    'calculate_wind_impact',
    'calculate_wind_impact_both_ways',
    'calculate_base_time',
    'estimate_segment_time',
    'calculate_dominant_wind',
]
