"""
Hourly forecast series and time alignment.

The forecast arrives as parallel arrays (timestamps, wind speed, wind
direction, temperature). This module wraps them in a pandas frame and maps
wall-clock times to the closest sample.
"""

import math
import logging
import pandas as pd
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, List, Optional, Tuple

from core.constants import (
    WEATHER_MATCH_TOLERANCE_SECONDS, DEFAULT_WIND_SPEED_KMH, DEFAULT_WIND_DIRECTION_DEGREES
)

logger = logging.getLogger(__name__)

# Keys of the Open-Meteo "hourly" block
TIME_KEY = 'time'
WIND_SPEED_KEY = 'wind_speed_10m'
WIND_DIRECTION_KEY = 'wind_direction_10m'
TEMPERATURE_KEY = 'temperature_2m'


@dataclass(frozen=True)
class WeatherSample:
    """One forecast sample, with defaults substituted for missing wind values."""
    timestamp: Optional[datetime]
    wind_speed_kmh: float
    wind_direction_deg: float
    temperature_c: Optional[float] = None


class WeatherSeries:
    """
    Ordered hourly forecast for one location.

    Columns: ``time`` (NaT where missing or unparsable), ``wind_speed``,
    ``wind_direction`` and ``temperature`` (NaN where missing).
    """

    def __init__(self, frame: pd.DataFrame, has_timestamps: bool):
        self.frame = frame
        self.has_timestamps = has_timestamps
        self._times = frame['time'].tolist() if has_timestamps else []

    @classmethod
    def from_hourly(cls, hourly: Dict[str, Any]) -> 'WeatherSeries':
        """
        Build a series from an Open-Meteo style ``hourly`` block.

        Arrays of different lengths are padded with missing values.
        """
        columns = {
            'wind_speed': pd.Series(hourly.get(WIND_SPEED_KEY) or [], dtype='float64'),
            'wind_direction': pd.Series(hourly.get(WIND_DIRECTION_KEY) or [], dtype='float64'),
            'temperature': pd.Series(hourly.get(TEMPERATURE_KEY) or [], dtype='float64'),
        }

        raw_times = hourly.get(TIME_KEY) or []
        has_timestamps = len(raw_times) > 0
        times = pd.to_datetime(pd.Series(raw_times, dtype='object'), errors='coerce', format='ISO8601')
        if getattr(times.dt, 'tz', None) is not None:
            # Keep the wall-clock reading, ride times are local
            times = times.dt.tz_localize(None)
        columns['time'] = times

        frame = pd.DataFrame(columns)[['time', 'wind_speed', 'wind_direction', 'temperature']]

        if not has_timestamps:
            logger.warning("Forecast has no timestamps, falling back to hour-of-day indexing")

        return cls(frame, has_timestamps)

    def __len__(self) -> int:
        return len(self.frame)

    def find_index(self, target: datetime) -> int:
        """
        Index of the sample closest in time to ``target``.

        Scans linearly and stops at the first sample less than 30 minutes
        away. Without timestamps the hour of day is used as index, clamped to
        the series length. Never fails.
        """
        if not self.has_timestamps:
            return max(0, min(target.hour, len(self) - 1))

        best_index = 0
        min_diff = math.inf

        for index, timestamp in enumerate(self._times):
            if pd.isna(timestamp):
                continue

            diff = abs((timestamp - target).total_seconds())

            if diff < min_diff:
                min_diff = diff
                best_index = index

            if diff < WEATHER_MATCH_TOLERANCE_SECONDS:
                break

        return best_index

    def sample(self, index: int) -> WeatherSample:
        """Sample at ``index`` with default wind values where data is missing."""
        if not 0 <= index < len(self):
            logger.warning(f"Weather index {index} outside series of {len(self)} samples, using defaults")
            return WeatherSample(None, DEFAULT_WIND_SPEED_KMH, DEFAULT_WIND_DIRECTION_DEGREES)

        row = self.frame.iloc[index]
        speed = row['wind_speed']
        direction = row['wind_direction']
        temperature = row['temperature']

        if pd.isna(speed) or pd.isna(direction):
            logger.warning(f"Missing wind values at weather index {index}, using defaults")

        return WeatherSample(
            timestamp=None if pd.isna(row['time']) else row['time'].to_pydatetime(),
            wind_speed_kmh=DEFAULT_WIND_SPEED_KMH if pd.isna(speed) else float(speed),
            wind_direction_deg=DEFAULT_WIND_DIRECTION_DEGREES if pd.isna(direction) else float(direction),
            temperature_c=None if pd.isna(temperature) else float(temperature),
        )

    def wind_values(self, start_index: int, end_index: int) -> Tuple[List[float], List[float]]:
        """
        Non-missing wind speeds and directions over an inclusive index range.

        Missing values are dropped per column, so the two lists may differ
        in length.
        """
        window = self.frame.iloc[start_index:end_index + 1]
        speeds = window['wind_speed'].dropna().astype(float).tolist()
        directions = window['wind_direction'].dropna().astype(float).tolist()
        return speeds, directions


def find_weather_index(series: WeatherSeries, target: datetime) -> int:
    """Forecast index for a wall-clock time, used by the timeline and dominant wind."""
    return series.find_index(target)
