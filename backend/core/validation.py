"""
Input validation utilities for core functions.

This module provides the validation exceptions raised by the analysis
pipeline and the validators for uploads, coordinates, ride parameters and
segment payloads.
"""

import math
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Any
from pathlib import Path

from core.constants import (
    MIN_LATITUDE, MAX_LATITUDE, MIN_LONGITUDE, MAX_LONGITUDE, FULL_CIRCLE_DEGREES
)
from core.calculations import bearing_to_compass16
from core.models.segment import Point, Segment

logger = logging.getLogger(__name__)

RIDE_DATETIME_FORMAT = '%Y-%m-%dT%H:%M'
MAX_RIDER_SPEED_KMH = 100.0


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class InsufficientDataError(ValidationError):
    """A track decodes to fewer than 2 usable points."""
    pass


class InvalidInputError(ValidationError):
    """Missing or malformed request fields."""
    pass


class OutOfRangeDateTimeError(ValidationError):
    """Ride time outside the accepted forecast window."""
    pass


class FileTooLargeError(InvalidInputError):
    """Uploaded file exceeds the size limit."""
    pass


def validate_point(lat: Any, lon: Any, context: str = "Point") -> Point:
    """
    Validate a coordinate pair and build a Point.

    Args:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        context: Context description for error messages

    Returns:
        Validated Point

    Raises:
        InvalidInputError: If a coordinate is missing, non-numeric or out of range
    """
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"{context}: Cannot convert coordinates to float: ({lat}, {lon})") from e

    if not (math.isfinite(lat_f) and math.isfinite(lon_f)):
        raise InvalidInputError(f"{context}: Non-finite coordinates ({lat_f}, {lon_f})")

    if not MIN_LATITUDE <= lat_f <= MAX_LATITUDE:
        raise InvalidInputError(f"{context}: Invalid latitude {lat_f} (must be -90 to 90)")

    if not MIN_LONGITUDE <= lon_f <= MAX_LONGITUDE:
        raise InvalidInputError(f"{context}: Invalid longitude {lon_f} (must be -180 to 180)")

    return Point(lat=lat_f, lon=lon_f)


def validate_route_points(points: List[Point], context: str = "Route") -> List[Point]:
    """
    Ensure a route has enough points to form at least one segment.

    Raises:
        InsufficientDataError: If fewer than 2 points are given
    """
    if len(points) < 2:
        raise InsufficientDataError(
            f"{context}: Need at least 2 points to build a route, got {len(points)}"
        )

    logger.debug(f"{context}: Validation passed for {len(points)} points")
    return points


def validate_rider_speed(rider_speed: Any) -> float:
    """
    Validate the rider's average speed.

    Args:
        rider_speed: Speed in km/h

    Returns:
        Speed as float

    Raises:
        InvalidInputError: If the speed is missing, non-numeric, or not in (0, 100]
    """
    if rider_speed is None or isinstance(rider_speed, bool):
        raise InvalidInputError(f"Rider speed is required, got {rider_speed!r}")

    try:
        speed = float(rider_speed)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Rider speed: Cannot convert to float: {rider_speed!r}") from e

    if not math.isfinite(speed) or speed <= 0:
        raise InvalidInputError(f"Rider speed must be a positive number, got {rider_speed!r}")

    if speed > MAX_RIDER_SPEED_KMH:
        raise InvalidInputError(f"Rider speed must be at most {MAX_RIDER_SPEED_KMH:.0f} km/h, got {speed}")

    return speed


def parse_ride_datetime(value: Any) -> datetime:
    """
    Parse a local ride start such as '2024-05-01T09:30'.

    Seconds are accepted. Timezone offsets are rejected because forecast
    timestamps are local wall-clock times.

    Raises:
        InvalidInputError: If the value is missing or unparsable
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError("Ride date/time is required")

    text = value.strip()
    try:
        parsed = datetime.strptime(text, RIDE_DATETIME_FORMAT)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidInputError(f"Invalid date/time format: {value!r} (expected YYYY-MM-DDTHH:MM)") from e

    if parsed.tzinfo is not None:
        raise InvalidInputError(f"Ride date/time must be local time without offset, got {value!r}")

    return parsed


def validate_ride_window(ride_start: datetime,
                         past_days: int,
                         future_days: int,
                         now: Optional[datetime] = None) -> datetime:
    """
    Check that the ride start falls inside the forecast window.

    Args:
        ride_start: Parsed local ride start
        past_days: How many days before now are accepted
        future_days: How many days after now are accepted
        now: Reference time, defaults to the current local time

    Returns:
        The unchanged ride start

    Raises:
        OutOfRangeDateTimeError: If the ride start is outside the window
    """
    if now is None:
        now = datetime.now()

    min_date = now - timedelta(days=past_days)
    max_date = now + timedelta(days=future_days)

    if ride_start < min_date or ride_start > max_date:
        raise OutOfRangeDateTimeError(
            f"Ride date {ride_start:%Y-%m-%d %H:%M} is out of range "
            f"({past_days} day(s) before to {future_days} day(s) after now)"
        )

    return ride_start


def validate_segments_payload(segments: Any) -> List[Segment]:
    """
    Validate the segments sent back by the frontend and rebuild Segment objects.

    Each entry needs 'start' and 'end' points, a non-negative 'distance' (km)
    and a 'bearing' in degrees. 'id' defaults to the list position and
    'bearing_text' is recomputed when missing.

    Raises:
        InvalidInputError: If the payload is malformed
    """
    if not isinstance(segments, list) or not segments:
        raise InvalidInputError("Segments must be a non-empty list")

    result = []
    for position, raw in enumerate(segments):
        context = f"Segment {position}"
        if not isinstance(raw, dict):
            raise InvalidInputError(f"{context}: Expected an object, got {type(raw).__name__}")

        missing = [key for key in ('start', 'end', 'distance', 'bearing') if key not in raw]
        if missing:
            raise InvalidInputError(f"{context}: Missing required fields: {missing}")

        start = _payload_point(raw['start'], f"{context} start")
        end = _payload_point(raw['end'], f"{context} end")

        try:
            segment_id = int(raw.get('id', position))
            distance = float(raw['distance'])
            bearing = float(raw['bearing'])
        except (ValueError, TypeError) as e:
            raise InvalidInputError(f"{context}: Id, distance and bearing must be numbers") from e

        if not math.isfinite(distance) or distance < 0:
            raise InvalidInputError(f"{context}: Invalid distance {raw['distance']!r}")

        if not math.isfinite(bearing) or not 0 <= bearing <= FULL_CIRCLE_DEGREES:
            raise InvalidInputError(f"{context}: Invalid bearing {raw['bearing']!r} (must be 0-360)")

        bearing = bearing % FULL_CIRCLE_DEGREES
        result.append(Segment(
            id=segment_id,
            start=start,
            end=end,
            distance_km=distance,
            bearing=bearing,
            bearing_text=raw.get('bearing_text') or bearing_to_compass16(bearing),
        ))

    logger.debug(f"Segments payload: Validation passed for {len(result)} segments")
    return result


def _payload_point(raw: Any, context: str) -> Point:
    if not isinstance(raw, dict) or 'lat' not in raw or 'lon' not in raw:
        raise InvalidInputError(f"{context}: Expected an object with 'lat' and 'lon'")
    return validate_point(raw['lat'], raw['lon'], context)


def validate_file_upload(filename: Optional[str], size: int, max_size: int) -> None:
    """
    Validate uploaded file before processing.

    Args:
        filename: Name of the uploaded file
        size: Size of the content in bytes
        max_size: Maximum accepted size in bytes

    Raises:
        InvalidInputError: If the file is missing, empty, or not a .gpx file
        FileTooLargeError: If the file exceeds max_size
    """
    if not filename:
        raise InvalidInputError("No file uploaded")

    file_path = Path(filename)
    if file_path.suffix.lower() != '.gpx':
        raise InvalidInputError(f"Invalid file type: {file_path.suffix or '(none)'} (expected .gpx)")

    if size == 0:
        raise InvalidInputError("File appears to be empty")

    if size > max_size:
        raise FileTooLargeError(
            f"File too large: {size / 1024 / 1024:.1f}MB (max {max_size / 1024 / 1024:.0f}MB)"
        )

    logger.debug(f"File validation passed: {filename}")

