"""
Weather package.

Forecast series handling and alignment of ride times to forecast samples.
"""

from .series import WeatherSeries, WeatherSample, find_weather_index

__all__ = [
    'WeatherSeries',
    'WeatherSample',
    'find_weather_index',
]
