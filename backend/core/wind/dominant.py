"""
Dominant wind estimation.

Summarizes the forecast over the ride's time window into one representative
wind vector for display.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Tuple

import numpy as np

from core.constants import (
    SECONDS_PER_MINUTE, DEFAULT_WIND_SPEED_KMH, DEFAULT_WIND_DIRECTION_DEGREES
)
from core.calculations import circular_mean, bearing_to_compass16
from core.weather.series import WeatherSeries, find_weather_index
from core.wind.models import DominantWind

logger = logging.getLogger(__name__)


def ride_end_time(ride_start: datetime, total_minutes: float) -> datetime:
    """Start time shifted by the ride duration, to the nearest second."""
    return ride_start + timedelta(seconds=round(total_minutes * SECONDS_PER_MINUTE))


def calculate_dominant_wind(series: WeatherSeries,
                            ride_start: datetime,
                            total_minutes: float) -> DominantWind:
    """
    Average the forecast between ride start and projected ride end.

    Both ends are aligned to forecast samples; the end index is clamped to
    the series and never placed before the start index. Speeds are averaged
    arithmetically, directions as unit vectors so that winds around north
    do not average to south.

    Args:
        series: Forecast series
        ride_start: Local ride start
        total_minutes: Total forward riding time in minutes

    Returns:
        DominantWind: Representative wind, defaults (15 km/h from 180°) when
            the forecast has no usable values
    """
    ride_end = ride_end_time(ride_start, total_minutes)

    start_index = max(0, find_weather_index(series, ride_start))
    end_index = min(find_weather_index(series, ride_end), len(series) - 1)
    end_index = max(start_index, end_index)

    speeds, directions = series.wind_values(start_index, end_index)

    if not speeds or not directions:
        speeds, directions = _fallback_values(series)

    avg_speed = float(np.mean(speeds))
    avg_direction = circular_mean(directions)

    logger.info(
        f"Dominant wind: {ride_start:%Y-%m-%dT%H:%M} to {ride_end:%Y-%m-%dT%H:%M}, "
        f"indices {start_index}-{end_index}, direction {avg_direction:.1f}° "
        f"({bearing_to_compass16(avg_direction)}), speed {avg_speed:.1f} km/h"
    )

    return DominantWind(
        speed_kmh=avg_speed,
        direction_deg=avg_direction,
        direction_text=bearing_to_compass16(avg_direction),
        start=ride_start,
        end=ride_end,
        duration_minutes=total_minutes,
    )


def _fallback_values(series: WeatherSeries) -> Tuple[List[float], List[float]]:
    speeds, directions = series.wind_values(0, 0)
    if speeds and directions:
        logger.warning("No usable wind values in ride window, using first forecast sample")
        return speeds, directions

    logger.warning("No usable wind values in forecast, using default wind")
    return [DEFAULT_WIND_SPEED_KMH], [DEFAULT_WIND_DIRECTION_DEGREES]
