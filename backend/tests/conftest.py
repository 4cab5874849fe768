"""
Shared fixtures for the route analysis tests.
"""

import pytest
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from core.weather.series import WeatherSeries
from services.weather_service import WeatherService

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="rideflow-tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
)
GPX_FOOTER = '</gpx>\n'

Coords = Sequence[Tuple[float, float]]


def _points(tag: str, coords: Coords) -> str:
    return ''.join(f'<{tag} lat="{lat}" lon="{lon}"></{tag}>\n' for lat, lon in coords)


def build_gpx(tracks: Optional[List[List[Coords]]] = None,
              routes: Optional[List[Coords]] = None,
              waypoints: Optional[Coords] = None,
              track_name: Optional[str] = None) -> str:
    """Assemble a GPX 1.1 document from coordinate lists."""
    body = ''
    if waypoints:
        body += _points('wpt', waypoints)
    for route in routes or []:
        body += '<rte>\n' + _points('rtept', route) + '</rte>\n'
    for track in tracks or []:
        body += '<trk>\n'
        if track_name:
            body += f'<name>{track_name}</name>\n'
        for segment in track:
            body += '<trkseg>\n' + _points('trkpt', segment) + '</trkseg>\n'
        body += '</trk>\n'
    return GPX_HEADER + body + GPX_FOOTER


def build_hourly(start: datetime,
                 speeds: Sequence[Optional[float]],
                 directions: Sequence[Optional[float]],
                 temperatures: Optional[Sequence[Optional[float]]] = None,
                 with_time: bool = True) -> dict:
    """Open-Meteo style hourly block with one sample per hour from start."""
    hourly = {
        'wind_speed_10m': list(speeds),
        'wind_direction_10m': list(directions),
        'temperature_2m': list(temperatures) if temperatures is not None else [12.0] * len(speeds),
    }
    if with_time:
        hourly['time'] = [
            (start + timedelta(hours=i)).strftime('%Y-%m-%dT%H:%M') for i in range(len(speeds))
        ]
    return hourly


class FakeWeatherService(WeatherService):
    """WeatherService returning a canned series, or raising a canned error."""

    def __init__(self, series: Optional[WeatherSeries] = None, error: Optional[Exception] = None):
        super().__init__(session=object())
        self.series = series
        self.error = error
        self.calls = []

    def fetch_forecast(self, center, ride_start):
        self.calls.append((center, ride_start))
        if self.error is not None:
            raise self.error
        return self.series


@pytest.fixture
def gpx_factory():
    return build_gpx


@pytest.fixture
def hourly_factory():
    return build_hourly


@pytest.fixture
def series_factory():
    def _factory(start: datetime, speeds, directions, **kwargs) -> WeatherSeries:
        return WeatherSeries.from_hourly(build_hourly(start, speeds, directions, **kwargs))
    return _factory


@pytest.fixture
def fake_weather_service():
    return FakeWeatherService


@pytest.fixture
def ride_start():
    return datetime(2024, 5, 1, 10, 0)


@pytest.fixture
def constant_north_wind(ride_start):
    """48 hours of 10 km/h wind from due north, starting a day before the ride."""
    start = ride_start - timedelta(hours=24)
    return WeatherSeries.from_hourly(build_hourly(start, [10.0] * 48, [0.0] * 48))
