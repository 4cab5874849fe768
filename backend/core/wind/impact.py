"""
Wind impact model.

Heuristic model of how much a wind observation lengthens or shortens the
time needed to ride a segment, depending on the angle between the direction
of travel and the direction the wind blows from.
"""

import logging
from typing import Tuple

from core.constants import (
    MINUTES_PER_HOUR, WIND_IMPACT_SPEED_DIVISOR, MAX_BASE_IMPACT, MIN_IMPACT,
    HEADWIND_MAX_ANGLE, QUARTER_HEADWIND_MAX_ANGLE, CROSSWIND_MAX_ANGLE,
    QUARTER_TAILWIND_MAX_ANGLE, QUARTER_HEADWIND_FACTOR, CROSSWIND_FACTOR,
    CROSSWIND_MIN_FACTOR, QUARTER_TAILWIND_FACTOR, TAILWIND_FACTOR, TAILWIND_MIN_FACTOR
)
from core.calculations import relative_wind_angle, reverse_bearing
from core.wind.models import WindImpact, ImpactResult

logger = logging.getLogger(__name__)


def calculate_wind_impact(segment_bearing: float, wind_direction: float, wind_speed: float) -> ImpactResult:
    """
    Classify the wind for one direction of travel and compute its time factor.

    The base impact grows with wind speed (speed / 20) and is capped at 40%.
    Headwinds within 30° apply it fully, 30-60° at 70%, crosswinds at 30%,
    and tailwinds shorten the time by 50% (120-150°) or 80% (beyond 150°)
    of it. Every band has a floor so light winds still register.

    Args:
        segment_bearing: Direction of travel in degrees
        wind_direction: Direction the wind blows from in degrees
        wind_speed: Wind speed in km/h

    Returns:
        ImpactResult: Classification and signed factor
            (positive = slower, negative = faster)
    """
    relative = relative_wind_angle(segment_bearing, wind_direction)

    base_impact = min(wind_speed / WIND_IMPACT_SPEED_DIVISOR, MAX_BASE_IMPACT)

    if relative <= HEADWIND_MAX_ANGLE:
        return ImpactResult(WindImpact.UNFAVORABLE, max(base_impact, MIN_IMPACT))
    elif relative <= QUARTER_HEADWIND_MAX_ANGLE:
        return ImpactResult(WindImpact.UNFAVORABLE, max(base_impact * QUARTER_HEADWIND_FACTOR, MIN_IMPACT))
    elif relative <= CROSSWIND_MAX_ANGLE:
        return ImpactResult(WindImpact.CROSSWIND,
                            max(base_impact * CROSSWIND_FACTOR, MIN_IMPACT * CROSSWIND_MIN_FACTOR))
    elif relative <= QUARTER_TAILWIND_MAX_ANGLE:
        return ImpactResult(WindImpact.FAVORABLE, -max(base_impact * QUARTER_TAILWIND_FACTOR, MIN_IMPACT))
    else:
        return ImpactResult(WindImpact.FAVORABLE,
                            -max(base_impact * TAILWIND_FACTOR, MIN_IMPACT * TAILWIND_MIN_FACTOR))


def calculate_wind_impact_both_ways(segment_bearing: float,
                                    wind_direction: float,
                                    wind_speed: float) -> Tuple[ImpactResult, ImpactResult]:
    """Impact for the segment as drawn and traversed backwards, under the same wind."""
    normal = calculate_wind_impact(segment_bearing, wind_direction, wind_speed)
    reverse = calculate_wind_impact(reverse_bearing(segment_bearing), wind_direction, wind_speed)
    return normal, reverse


def calculate_base_time(distance_km: float, rider_speed: float) -> float:
    """Travel time in minutes without any wind."""
    return distance_km / rider_speed * MINUTES_PER_HOUR


def estimate_segment_time(base_time: float, factor: float) -> float:
    """Travel time in minutes once the wind factor is applied."""
    return base_time * (1 + factor)
