"""
Weather forecast service.

This module retrieves the hourly wind forecast for a route from the
Open-Meteo API and turns it into a WeatherSeries for the analysis pipeline.
"""

import logging
import requests
from datetime import datetime, timedelta
from typing import Dict, Any, Optional

from core.models.segment import Point
from core.weather.series import WeatherSeries
from config.settings import (
    FORECAST_API_URL,
    FORECAST_TIMEZONE,
    FORECAST_TIMEOUT_SECONDS,
    FORECAST_USER_AGENT,
    FORECAST_HOURLY_VARIABLES,
    FORECAST_DAYS_AROUND_RIDE,
    COORDINATE_DECIMALS
)

logger = logging.getLogger(__name__)


class ExternalServiceError(Exception):
    """The forecast provider timed out, failed, or returned an unusable payload."""
    pass


class WeatherService:
    """
    Service for forecast retrieval.

    One blocking HTTP call per analysis. Failures are raised as
    ExternalServiceError and never retried.
    """

    def __init__(self,
                 session: Optional[requests.Session] = None,
                 api_url: str = FORECAST_API_URL,
                 timezone: str = FORECAST_TIMEZONE,
                 timeout: float = FORECAST_TIMEOUT_SECONDS):
        self.session = session or requests.Session()
        self.api_url = api_url
        self.timezone = timezone
        self.timeout = timeout

    def build_params(self, center: Point, ride_start: datetime) -> Dict[str, Any]:
        """
        Query parameters for the forecast around a ride.

        Args:
            center: Location to fetch the forecast for
            ride_start: Local ride start

        Returns:
            dict of query parameters spanning one day before to one day after
        """
        margin = timedelta(days=FORECAST_DAYS_AROUND_RIDE)
        return {
            'latitude': round(center.lat, COORDINATE_DECIMALS),
            'longitude': round(center.lon, COORDINATE_DECIMALS),
            'hourly': ','.join(FORECAST_HOURLY_VARIABLES),
            'timezone': self.timezone,
            'start_date': (ride_start - margin).strftime('%Y-%m-%d'),
            'end_date': (ride_start + margin).strftime('%Y-%m-%d'),
        }

    def fetch_hourly(self, center: Point, ride_start: datetime) -> Dict[str, Any]:
        """
        Fetch the raw ``hourly`` block of the forecast.

        Raises:
            ExternalServiceError: On timeout, connection failure, non-200
                status or a payload without hourly data
        """
        params = self.build_params(center, ride_start)
        logger.info(
            f"Fetching forecast for ({params['latitude']}, {params['longitude']}) "
            f"{params['start_date']} to {params['end_date']}"
        )

        try:
            response = self.session.get(
                self.api_url,
                params=params,
                headers={'User-Agent': FORECAST_USER_AGENT},
                timeout=self.timeout
            )
        except requests.Timeout as e:
            raise ExternalServiceError(f"Forecast API timed out after {self.timeout:.0f}s") from e
        except requests.RequestException as e:
            raise ExternalServiceError(f"Forecast API error: {str(e)}") from e

        if response.status_code != 200:
            raise ExternalServiceError(f"Forecast API error: HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalServiceError("Invalid forecast data: response is not JSON") from e

        if not isinstance(data, dict) or not isinstance(data.get('hourly'), dict):
            raise ExternalServiceError("Invalid forecast data: missing hourly block")

        return data['hourly']

    def fetch_forecast(self, center: Point, ride_start: datetime) -> WeatherSeries:
        """
        Fetch the forecast around a ride as a WeatherSeries.

        Args:
            center: Location to fetch the forecast for
            ride_start: Local ride start

        Returns:
            WeatherSeries: Hourly wind forecast

        Raises:
            ExternalServiceError: If the forecast cannot be fetched or its
                hourly values cannot be read
        """
        hourly = self.fetch_hourly(center, ride_start)

        try:
            series = WeatherSeries.from_hourly(hourly)
        except (ValueError, TypeError) as e:
            raise ExternalServiceError(f"Invalid forecast data: {str(e)}") from e

        logger.info(f"Received {len(series)} forecast samples")
        return series


def get_weather_service() -> WeatherService:
    """
    Get a WeatherService instance.

    Returns:
        WeatherService instance
    """
    return WeatherService()
