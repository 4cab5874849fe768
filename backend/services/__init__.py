"""
Services package.

Provides business logic layer between API and core algorithms.

Modules:
    route_analysis_service: GPX parsing and wind analysis pipelines
    weather_service: Hourly forecast retrieval
"""

from services.route_analysis_service import (
    parse_route,
    analyze_route_wind,
    analyze_wind_impact,
    RouteParseResult,
    WindAnalysisResult,
)
from services.weather_service import WeatherService, ExternalServiceError, get_weather_service

__all__ = [
    'parse_route',
    'analyze_route_wind',
    'analyze_wind_impact',
    'RouteParseResult',
    'WindAnalysisResult',
    'WeatherService',
    'ExternalServiceError',
    'get_weather_service',
]
