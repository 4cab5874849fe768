"""
Tests for the parse and analysis pipelines.
"""

import logging
import pytest
from datetime import datetime, timedelta

from core.validation import InvalidInputError, InsufficientDataError, OutOfRangeDateTimeError
from services.route_analysis_service import parse_route, analyze_route_wind, analyze_wind_impact
from services.weather_service import ExternalServiceError

NOW = datetime(2024, 5, 1, 8, 0)
NORTHBOUND = [(45.0, 6.0), (45.05, 6.0), (45.1, 6.0)]


@pytest.fixture
def northbound_gpx(gpx_factory):
    return gpx_factory(tracks=[[NORTHBOUND]], track_name="Northbound")


class TestParseRoute:
    """Tests for GPX to segments."""

    def test_parse(self, northbound_gpx):
        """Parsing yields points, segments, distance and route shape."""
        result = parse_route(northbound_gpx, "northbound.gpx")
        data = result.to_dict()

        assert data['name'] == "northbound.gpx"
        assert data['total_points'] == 3
        assert len(data['segments']) == 2
        assert data['total_distance'] == pytest.approx(11.12, abs=0.01)
        assert data['route_info']['type'] == 'linear'
        assert data['route_info']['direction'] == 'North'

    def test_source_and_description_exposed(self, gpx_factory):
        """The parse response names the GPX category used and carries its description."""
        content = gpx_factory(routes=[NORTHBOUND]).replace(
            'creator="rideflow-tests" xmlns="http://www.topografix.com/GPX/1/1">\n',
            'creator="rideflow-tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
            '<metadata><desc>Sunday loop</desc></metadata>\n'
        )
        data = parse_route(content, "sunday.gpx").to_dict()
        assert data['source'] == 'routes'
        assert data['description'] == "Sunday loop"

    def test_name_from_metadata_without_filename(self, northbound_gpx):
        """Without a filename the GPX track name is used."""
        assert parse_route(northbound_gpx).name == "Northbound"

    def test_simplifies_long_tracks(self, gpx_factory):
        """Long tracks are decimated before segments are built."""
        coords = [(45.0 + i * 0.01, 6.0) for i in range(500)]
        result = parse_route(gpx_factory(tracks=[[coords]]), "long.gpx", max_points=100)
        assert result.total_points < 500
        assert len(result.segments) == result.total_points - 1

    def test_invalid_gpx(self):
        """Unparsable content raises InvalidInputError."""
        with pytest.raises(InvalidInputError):
            parse_route("<gpx", "broken.gpx")

    def test_single_point(self, gpx_factory):
        """A single point raises InsufficientDataError."""
        with pytest.raises(InsufficientDataError):
            parse_route(gpx_factory(waypoints=[(45.0, 6.0)]), "dot.gpx")


class TestAnalyzeRouteWind:
    """Tests for request validation and scoring with a canned forecast."""

    @pytest.fixture
    def segments_payload(self, northbound_gpx):
        return parse_route(northbound_gpx, "northbound.gpx").to_dict()['segments']

    @pytest.fixture
    def north_wind_service(self, fake_weather_service, series_factory, ride_start):
        series = series_factory(ride_start - timedelta(hours=24), [12.0] * 72, [0.0] * 72)
        return fake_weather_service(series)

    def test_analysis(self, segments_payload, north_wind_service):
        """A northbound route into a north wind is better ridden reversed."""
        result = analyze_route_wind(segments_payload, '2024-05-01T10:00', 20, north_wind_service, now=NOW)
        data = result.to_dict()

        assert len(data['segments']) == 2
        assert data['segments'][0]['wind_impact'] == 'unfavorable'
        assert data['summary']['best_direction'] == 'reverse'
        assert data['dominant_wind']['direction_text'] == 'N'
        assert data['center_point']['lat'] == pytest.approx(45.025)

    def test_forecast_requested_at_route_center(self, segments_payload, north_wind_service):
        """The forecast is fetched once, at the mean of segment starts."""
        analyze_route_wind(segments_payload, '2024-05-01T10:00', 20, north_wind_service, now=NOW)
        center, ride_start = north_wind_service.calls[0]
        assert center.lat == pytest.approx(45.025)
        assert center.lon == pytest.approx(6.0)
        assert ride_start == datetime(2024, 5, 1, 10, 0)

    def test_invalid_speed_before_fetch(self, segments_payload, north_wind_service):
        """Invalid requests never reach the forecast provider."""
        with pytest.raises(InvalidInputError):
            analyze_route_wind(segments_payload, '2024-05-01T10:00', 0, north_wind_service, now=NOW)
        assert north_wind_service.calls == []

    def test_missing_segments(self, north_wind_service):
        """Segments are required."""
        with pytest.raises(InvalidInputError):
            analyze_route_wind(None, '2024-05-01T10:00', 20, north_wind_service, now=NOW)

    def test_date_out_of_range(self, segments_payload, north_wind_service):
        """Rides a month ahead are outside the forecast window."""
        with pytest.raises(OutOfRangeDateTimeError):
            analyze_route_wind(segments_payload, '2024-06-01T10:00', 20, north_wind_service, now=NOW)

    def test_forecast_failure_propagates(self, segments_payload, fake_weather_service):
        """Provider errors are not swallowed."""
        service = fake_weather_service(error=ExternalServiceError("Forecast API error: HTTP 500"))
        with pytest.raises(ExternalServiceError):
            analyze_route_wind(segments_payload, '2024-05-01T10:00', 20, service, now=NOW)

    def test_failure_not_logged_by_service(self, segments_payload, fake_weather_service, caplog):
        """Failures are left to the caller to log."""
        service = fake_weather_service(error=ExternalServiceError("Forecast API error: HTTP 500"))
        with caplog.at_level(logging.ERROR, logger="services.route_analysis_service"):
            with pytest.raises(ExternalServiceError):
                analyze_route_wind(segments_payload, '2024-05-01T10:00', 20, service, now=NOW)
        assert not [r for r in caplog.records if r.name == "services.route_analysis_service"]

    def test_pure_analysis_is_repeatable(self, northbound_gpx, constant_north_wind, ride_start):
        """Scoring against a fixed forecast is deterministic."""
        segments = parse_route(northbound_gpx).segments
        first = analyze_wind_impact(segments, constant_north_wind, 25.0, ride_start).to_dict()
        second = analyze_wind_impact(segments, constant_north_wind, 25.0, ride_start).to_dict()
        assert first == second
