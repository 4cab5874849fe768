"""
Shared route analysis service.

This module provides the two pipelines used by the API: parsing an uploaded
GPX route into segments, and scoring those segments against the wind
forecast for a given ride start and rider speed.
"""

import logging
from datetime import datetime
from typing import Dict, Any, List, Optional, Union

from core.gpx import parse_gpx
from core.segments import simplify_route, build_segments, total_distance, analyze_route_direction
from core.calculations import calculate_route_center
from core.models.segment import Point, Segment, RouteInfo, points_to_dicts, segments_to_dicts
from core.models.analysis import SegmentAnalysis, RouteSummary
from core.timeline import analyze_segments
from core.summary import summarize_route
from core.weather.series import WeatherSeries
from core.wind.models import DominantWind
from core.wind.dominant import calculate_dominant_wind
from core.validation import (
    validate_rider_speed, parse_ride_datetime, validate_ride_window, validate_segments_payload
)
from services.weather_service import WeatherService, get_weather_service
from config.settings import (
    DEFAULT_MAX_POINTS, DEFAULT_MIN_DISTANCE_KM, RIDE_WINDOW_PAST_DAYS, RIDE_WINDOW_FUTURE_DAYS
)

logger = logging.getLogger(__name__)


class RouteParseResult:
    """Container for a parsed and simplified route."""

    def __init__(self,
                 name: Optional[str],
                 points: List[Point],
                 segments: List[Segment],
                 metadata: Dict[str, Any]):
        self.name = name
        self.points = points
        self.segments = segments
        self.metadata = metadata
        self.route_info: RouteInfo = analyze_route_direction(segments)
        self.total_distance = total_distance(segments)

    @property
    def total_points(self) -> int:
        return len(self.points)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'points': points_to_dicts(self.points),
            'segments': segments_to_dicts(self.segments),
            'total_distance': round(self.total_distance, 2),
            'total_points': self.total_points,
            'route_info': self.route_info.to_dict(),
            'source': self.metadata.get('source'),
            'description': self.metadata.get('description'),
        }


class WindAnalysisResult:
    """Container for wind analysis results."""

    def __init__(self,
                 segments: List[SegmentAnalysis],
                 center_point: Point,
                 dominant_wind: DominantWind,
                 summary: RouteSummary):
        self.segments = segments
        self.center_point = center_point
        self.dominant_wind = dominant_wind
        self.summary = summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            'segments': [analysis.to_dict() for analysis in self.segments],
            'center_point': self.center_point.to_dict(),
            'dominant_wind': self.dominant_wind.to_dict(),
            'summary': self.summary.to_dict(),
        }


def parse_route(content: Union[str, bytes],
                filename: Optional[str] = None,
                max_points: int = DEFAULT_MAX_POINTS,
                min_distance_km: float = DEFAULT_MIN_DISTANCE_KM) -> RouteParseResult:
    """
    Parse GPX content into a simplified route with segments.

    Args:
        content: Raw GPX document
        filename: Name of the uploaded file, used as route name
        max_points: Simplification threshold
        min_distance_km: Minimum spacing between kept points

    Returns:
        RouteParseResult: Points, segments, distance and route shape

    Raises:
        InvalidInputError: If the document is not valid GPX
        InsufficientDataError: If it holds fewer than 2 usable points
    """
    points, metadata = parse_gpx(content, filename)
    logger.info(f"Loaded {filename or metadata.get('name')} with {len(points)} points")

    points = simplify_route(points, max_points, min_distance_km)
    segments = build_segments(points)

    result = RouteParseResult(
        name=filename or metadata.get('name'),
        points=points,
        segments=segments,
        metadata=metadata
    )
    logger.info(
        f"Parsed route: {result.total_points} points, {len(segments)} segments, "
        f"{result.total_distance:.2f} km, {result.route_info.type}"
    )
    return result


def analyze_wind_impact(segments: List[Segment],
                        series: WeatherSeries,
                        rider_speed: float,
                        ride_start: datetime) -> WindAnalysisResult:
    """
    Score a route against a forecast series.

    Pure function of its inputs: no I/O, deterministic output.

    Args:
        segments: Route segments in riding order (at least one)
        series: Forecast series around the ride
        rider_speed: Rider speed in km/h
        ride_start: Local ride start

    Returns:
        WindAnalysisResult: Per-segment analyses, dominant wind and summary
    """
    analyses, total_time = analyze_segments(segments, series, rider_speed, ride_start)
    summary = summarize_route(analyses)
    dominant_wind = calculate_dominant_wind(series, ride_start, total_time)

    return WindAnalysisResult(
        segments=analyses,
        center_point=calculate_route_center([segment.start for segment in segments]),
        dominant_wind=dominant_wind,
        summary=summary
    )


def analyze_route_wind(segments: Any,
                       ride_datetime: Any,
                       rider_speed: Any,
                       weather_service: Optional[WeatherService] = None,
                       now: Optional[datetime] = None) -> WindAnalysisResult:
    """
    Validate an analysis request, fetch the forecast and score the route.

    Args:
        segments: Segment payload as returned by the parse step
        ride_datetime: Local ride start, 'YYYY-MM-DDTHH:MM'
        rider_speed: Rider speed in km/h
        weather_service: Forecast service, defaults to get_weather_service()
        now: Reference time for the accepted date window

    Returns:
        WindAnalysisResult: Complete analysis results

    Raises:
        InvalidInputError: If a request field is missing or malformed
        OutOfRangeDateTimeError: If the ride start is outside the forecast window
        ExternalServiceError: If the forecast cannot be retrieved
    """
    route_segments = validate_segments_payload(segments)
    speed = validate_rider_speed(rider_speed)
    ride_start = parse_ride_datetime(ride_datetime)
    validate_ride_window(ride_start, RIDE_WINDOW_PAST_DAYS, RIDE_WINDOW_FUTURE_DAYS, now=now)

    if weather_service is None:
        weather_service = get_weather_service()

    center = calculate_route_center([segment.start for segment in route_segments])

    series = weather_service.fetch_forecast(center, ride_start)
    result = analyze_wind_impact(route_segments, series, speed, ride_start)

    logger.info(
        f"Wind analysis done: best direction {result.summary.best_direction}, "
        f"{result.summary.time_saved_minutes:.1f} min saved"
    )
    return result
