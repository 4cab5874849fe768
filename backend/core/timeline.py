"""
Temporal evolution of the wind along a ride.

Each segment is scored against the forecast for the time the rider actually
reaches it, not the ride's start time. The arrival time of segment *i* is
the ride start plus the wind-free travel time of segments ``0..i-1``, so
cursors are computed up front as a prefix sum and every segment can then be
scored independently.

The reverse direction is scored on the same per-segment wind samples as the
forward pass: it does not walk its own reversed timeline.
"""

import logging
from datetime import datetime, timedelta
from itertools import accumulate
from typing import List, Tuple

from core.constants import SECONDS_PER_MINUTE
from core.models.segment import Segment
from core.models.analysis import SegmentAnalysis
from core.weather.series import WeatherSeries, find_weather_index
from core.wind.impact import (
    calculate_wind_impact_both_ways, calculate_base_time, estimate_segment_time
)

logger = logging.getLogger(__name__)


def calculate_segment_datetime(ride_start: datetime, cumulative_minutes: float) -> datetime:
    """Projected arrival time, to the nearest second."""
    return ride_start + timedelta(seconds=round(cumulative_minutes * SECONDS_PER_MINUTE))


def compute_time_cursors(base_times: List[float]) -> List[float]:
    """
    Elapsed minutes at the start of each segment.

    Exclusive prefix sum of the base times: the first segment starts at 0.
    """
    return list(accumulate(base_times[:-1], initial=0.0)) if base_times else []


def analyze_segment(segment: Segment,
                    series: WeatherSeries,
                    rider_speed: float,
                    ride_start: datetime,
                    cumulative_time: float) -> SegmentAnalysis:
    """
    Score one segment in both directions against the wind at its arrival time.

    Args:
        segment: Segment to score
        series: Forecast series
        rider_speed: Rider speed in km/h
        ride_start: Local ride start
        cumulative_time: Minutes elapsed when the rider reaches this segment

    Returns:
        SegmentAnalysis for the segment
    """
    segment_datetime = calculate_segment_datetime(ride_start, cumulative_time)
    weather = series.sample(find_weather_index(series, segment_datetime))

    normal, reverse = calculate_wind_impact_both_ways(
        segment.bearing, weather.wind_direction_deg, weather.wind_speed_kmh
    )

    base_time = calculate_base_time(segment.distance_km, rider_speed)

    logger.debug(
        f"Segment {segment.id}: arrival {segment_datetime:%H:%M}, wind {weather.wind_speed_kmh:.1f} km/h "
        f"from {weather.wind_direction_deg:.0f}°, {normal.impact.value}/{reverse.impact.value}"
    )

    return SegmentAnalysis(
        segment=segment,
        segment_datetime=segment_datetime,
        cumulative_time=cumulative_time,
        wind_speed=weather.wind_speed_kmh,
        wind_direction=weather.wind_direction_deg,
        temperature=weather.temperature_c,
        normal=normal,
        reverse=reverse,
        base_time_minutes=base_time,
        estimated_time_minutes=estimate_segment_time(base_time, normal.factor),
        estimated_time_reverse_minutes=estimate_segment_time(base_time, reverse.factor),
    )


def analyze_segments(segments: List[Segment],
                     series: WeatherSeries,
                     rider_speed: float,
                     ride_start: datetime) -> Tuple[List[SegmentAnalysis], float]:
    """
    Score every segment against the wind forecast for its arrival time.

    Args:
        segments: Route segments in riding order
        series: Forecast series
        rider_speed: Rider speed in km/h
        ride_start: Local ride start

    Returns:
        tuple: (list of SegmentAnalysis, total forward wind-free time in minutes)
    """
    base_times = [calculate_base_time(segment.distance_km, rider_speed) for segment in segments]
    cursors = compute_time_cursors(base_times)

    analyses = [
        analyze_segment(segment, series, rider_speed, ride_start, cursor)
        for segment, cursor in zip(segments, cursors)
    ]

    total_time = sum(base_times)
    logger.info(f"Analyzed {len(analyses)} segments over {total_time:.1f} minutes of riding")
    return analyses, total_time
