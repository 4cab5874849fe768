"""
Tests for request and upload validation.
"""

import math
import pytest
from datetime import datetime

from core.validation import (
    ValidationError,
    InvalidInputError,
    InsufficientDataError,
    OutOfRangeDateTimeError,
    FileTooLargeError,
    validate_point,
    validate_route_points,
    validate_rider_speed,
    parse_ride_datetime,
    validate_ride_window,
    validate_segments_payload,
    validate_file_upload,
)
from core.models.segment import Point


def segment_payload(**overrides):
    payload = {
        'id': 0,
        'start': {'lat': 45.0, 'lon': 6.0},
        'end': {'lat': 45.1, 'lon': 6.0},
        'distance': 11.119,
        'bearing': 0.0,
        'bearing_text': 'N',
    }
    payload.update(overrides)
    return payload


class TestExceptionHierarchy:
    """All request problems share one base class."""

    def test_subclasses(self):
        """Every validation error derives from ValidationError."""
        for error in (InvalidInputError, InsufficientDataError, OutOfRangeDateTimeError, FileTooLargeError):
            assert issubclass(error, ValidationError)
        assert issubclass(FileTooLargeError, InvalidInputError)


class TestPoints:
    """Tests for coordinate validation."""

    def test_valid_point(self):
        """Numeric strings are converted to floats."""
        assert validate_point("45.5", 6) == Point(45.5, 6.0)

    @pytest.mark.parametrize("lat,lon", [
        (91, 0), (-91, 0), (0, 181), (0, -181), (math.nan, 0), ("north", 0), (None, 0),
    ])
    def test_invalid_point(self, lat, lon):
        """Out-of-range, non-finite and non-numeric coordinates are rejected."""
        with pytest.raises(InvalidInputError):
            validate_point(lat, lon)

    def test_route_needs_two_points(self):
        """A route needs at least one segment."""
        with pytest.raises(InsufficientDataError):
            validate_route_points([Point(45, 6)])
        assert len(validate_route_points([Point(45, 6), Point(45.1, 6)])) == 2


class TestRiderSpeed:
    """Tests for rider speed validation."""

    @pytest.mark.parametrize("value,expected", [(25, 25.0), ("18.5", 18.5), (100, 100.0)])
    def test_valid(self, value, expected):
        """Positive speeds up to 100 km/h are accepted."""
        assert validate_rider_speed(value) == expected

    @pytest.mark.parametrize("value", [None, 0, -5, "fast", math.nan, math.inf, True, 150])
    def test_invalid(self, value):
        """Missing, non-positive, non-finite and absurd speeds are rejected."""
        with pytest.raises(InvalidInputError):
            validate_rider_speed(value)


class TestRideDatetime:
    """Tests for ride start parsing and the accepted window."""

    def test_minutes_format(self):
        """The datetime-local format is accepted."""
        assert parse_ride_datetime('2024-05-01T09:30') == datetime(2024, 5, 1, 9, 30)

    def test_seconds_accepted(self):
        """Seconds are tolerated."""
        assert parse_ride_datetime('2024-05-01T09:30:15') == datetime(2024, 5, 1, 9, 30, 15)

    @pytest.mark.parametrize("value", ['', '   ', None, 42, '01/05/2024 09:30', 'tomorrow'])
    def test_invalid(self, value):
        """Empty and non-ISO values are rejected."""
        with pytest.raises(InvalidInputError):
            parse_ride_datetime(value)

    def test_offset_rejected(self):
        """Forecast times are local, so offsets are refused."""
        with pytest.raises(InvalidInputError):
            parse_ride_datetime('2024-05-01T09:30:00+02:00')

    def test_window(self):
        """Window bounds are inclusive."""
        now = datetime(2024, 5, 1, 12, 0)
        assert validate_ride_window(datetime(2024, 5, 1, 8, 0), 1, 7, now=now) == datetime(2024, 5, 1, 8, 0)
        assert validate_ride_window(datetime(2024, 5, 8, 12, 0), 1, 7, now=now)

    @pytest.mark.parametrize("ride_start", [datetime(2024, 4, 29, 12, 0), datetime(2024, 5, 9, 12, 0)])
    def test_outside_window(self, ride_start):
        """More than a day back or a week ahead is rejected."""
        with pytest.raises(OutOfRangeDateTimeError):
            validate_ride_window(ride_start, 1, 7, now=datetime(2024, 5, 1, 12, 0))


class TestSegmentsPayload:
    """Tests for rebuilding segments sent back by the client."""

    def test_valid_payload(self):
        """Well-formed segments are rebuilt as Segment objects."""
        segments = validate_segments_payload([segment_payload(), segment_payload(id=1, bearing=90)])
        assert [s.id for s in segments] == [0, 1]
        assert segments[0].distance_km == 11.119
        assert segments[1].bearing == 90.0

    def test_bearing_text_recomputed(self):
        """A missing compass label is derived from the bearing."""
        payload = segment_payload(bearing=180)
        del payload['bearing_text']
        assert validate_segments_payload([payload])[0].bearing_text == 'S'

    def test_id_defaults_to_position(self):
        """A missing id falls back to the list position."""
        payload = segment_payload()
        del payload['id']
        assert validate_segments_payload([segment_payload(), payload])[1].id == 1

    def test_full_circle_bearing_wraps(self):
        """360 degrees is stored as 0."""
        assert validate_segments_payload([segment_payload(bearing=360)])[0].bearing == 0.0

    @pytest.mark.parametrize("segments", [None, [], {}, "segments", [42]])
    def test_not_a_list_of_objects(self, segments):
        """Segments must be a non-empty list of objects."""
        with pytest.raises(InvalidInputError):
            validate_segments_payload(segments)

    @pytest.mark.parametrize("overrides", [
        {'distance': -1},
        {'distance': 'far'},
        {'bearing': 400},
        {'bearing': -10},
        {'bearing': None},
        {'start': {'lat': 45.0}},
        {'end': {'lat': 95.0, 'lon': 6.0}},
        {'id': 'first'},
    ])
    def test_invalid_fields(self, overrides):
        """Malformed segment fields are rejected."""
        with pytest.raises(InvalidInputError):
            validate_segments_payload([segment_payload(**overrides)])

    def test_missing_fields(self):
        """The error names the missing field."""
        payload = segment_payload()
        del payload['distance']
        with pytest.raises(InvalidInputError, match="distance"):
            validate_segments_payload([payload])


class TestFileUpload:
    """Tests for upload checks."""

    def test_valid(self):
        """A .gpx file of acceptable size passes, extension case ignored."""
        validate_file_upload("ride.GPX", 1024, 10 * 1024)

    @pytest.mark.parametrize("filename,size", [(None, 10), ("", 10), ("ride.kml", 10), ("ride", 10), ("ride.gpx", 0)])
    def test_invalid(self, filename, size):
        """Missing names, wrong extensions and empty files are rejected."""
        with pytest.raises(InvalidInputError):
            validate_file_upload(filename, size, 1024)

    def test_too_large(self):
        """Oversized files raise FileTooLargeError."""
        with pytest.raises(FileTooLargeError):
            validate_file_upload("ride.gpx", 2 * 1024 * 1024, 1024 * 1024)
