"""
Application settings and configuration.

This module contains application-specific configuration and defaults.
For algorithmic constants, see core.constants module.
"""

import os
import logging
from typing import Dict, Any, List

# Import algorithmic constants from core module
from core.constants import (
    DEFAULT_MAX_ROUTE_POINTS,
    DEFAULT_MIN_POINT_SPACING_KM,
    LOOP_DETECTION_THRESHOLD_KM,
    DEFAULT_WIND_SPEED_KMH,
    DEFAULT_WIND_DIRECTION_DEGREES
)

# App information
APP_NAME = "RideFlow"
APP_VERSION = "2.1.0"
APP_DESCRIPTION = "Pick the riding direction of a GPX route that fights the wind the least"

# Development server
API_HOST = os.getenv("RIDEFLOW_HOST", "0.0.0.0")
API_PORT = int(os.getenv("RIDEFLOW_PORT", "8000"))
API_RELOAD = os.getenv("RIDEFLOW_RELOAD", "1").lower() in ("1", "true", "yes")

# Rider defaults
DEFAULT_RIDER_SPEED = 25.0  # km/h - UI default
MIN_RIDER_SPEED = 5.0  # km/h - UI slider bounds
MAX_RIDER_SPEED = 60.0

# Route simplification (reference core constants)
DEFAULT_MAX_POINTS = DEFAULT_MAX_ROUTE_POINTS
DEFAULT_MIN_DISTANCE_KM = DEFAULT_MIN_POINT_SPACING_KM
LOOP_THRESHOLD_KM = LOOP_DETECTION_THRESHOLD_KM

# Forecast provider
FORECAST_API_URL = os.getenv("RIDEFLOW_FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
FORECAST_TIMEZONE = os.getenv("RIDEFLOW_TIMEZONE", "Europe/Paris")
FORECAST_TIMEOUT_SECONDS = float(os.getenv("RIDEFLOW_FORECAST_TIMEOUT", "15"))
FORECAST_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"
FORECAST_HOURLY_VARIABLES = ["wind_speed_10m", "wind_direction_10m", "temperature_2m"]
FORECAST_DAYS_AROUND_RIDE = 1  # Fetch one day before and after the ride date
COORDINATE_DECIMALS = 4  # Rounding of the forecast location

# Accepted ride date window, relative to now
RIDE_WINDOW_PAST_DAYS = 1
RIDE_WINDOW_FUTURE_DAYS = 7

# Upload limits
MAX_UPLOAD_SIZE_BYTES = 50 * 1024 * 1024  # 50MB

# CORS
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv(
        "RIDEFLOW_CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://localhost:8080"
    ).split(",")
    if origin.strip()
]

# Logging configuration
LOGGING_CONFIG = {
    "level": getattr(logging, os.getenv("RIDEFLOW_LOG_LEVEL", "INFO").upper(), logging.INFO),
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


# =============== Configuration Classes ===============
# These classes provide typed access to configuration sections

class RouteConfig:
    """Configuration parameters for route parsing and simplification."""
    MAX_POINTS = DEFAULT_MAX_POINTS
    MIN_DISTANCE_KM = DEFAULT_MIN_DISTANCE_KM
    LOOP_THRESHOLD_KM = LOOP_THRESHOLD_KM
    MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_BYTES

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get route configuration as a dictionary."""
        return {
            'max_points': cls.MAX_POINTS,
            'min_distance_km': cls.MIN_DISTANCE_KM,
            'loop_threshold_km': cls.LOOP_THRESHOLD_KM,
            'max_upload_size_bytes': cls.MAX_UPLOAD_SIZE_BYTES,
        }


class WeatherConfig:
    """Configuration parameters for forecast retrieval and wind analysis."""
    API_URL = FORECAST_API_URL
    TIMEZONE = FORECAST_TIMEZONE
    TIMEOUT_SECONDS = FORECAST_TIMEOUT_SECONDS
    USER_AGENT = FORECAST_USER_AGENT
    HOURLY_VARIABLES = FORECAST_HOURLY_VARIABLES
    DAYS_AROUND_RIDE = FORECAST_DAYS_AROUND_RIDE
    PAST_DAYS = RIDE_WINDOW_PAST_DAYS
    FUTURE_DAYS = RIDE_WINDOW_FUTURE_DAYS
    DEFAULT_WIND_SPEED = DEFAULT_WIND_SPEED_KMH
    DEFAULT_WIND_DIRECTION = DEFAULT_WIND_DIRECTION_DEGREES

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get weather configuration as a dictionary."""
        return {
            'timezone': cls.TIMEZONE,
            'timeout_seconds': cls.TIMEOUT_SECONDS,
            'hourly_variables': list(cls.HOURLY_VARIABLES),
            'ride_window_past_days': cls.PAST_DAYS,
            'ride_window_future_days': cls.FUTURE_DAYS,
            'default_wind_speed': cls.DEFAULT_WIND_SPEED,
            'default_wind_direction': cls.DEFAULT_WIND_DIRECTION,
        }
