"""
Tests for GPX point extraction.
"""

import pytest

from core.gpx import parse_gpx, load_gpx_from_path, SOURCE_TRACKS, SOURCE_ROUTES, SOURCE_WAYPOINTS
from core.models.segment import Point
from core.validation import InsufficientDataError, InvalidInputError

TRACK = [(45.0, 6.0), (45.01, 6.0), (45.02, 6.01)]
ROUTE = [(46.0, 7.0), (46.1, 7.1)]
WAYPOINTS = [(47.0, 8.0), (47.1, 8.1), (47.2, 8.2), (47.3, 8.3)]


class TestSourcePriority:
    """Tracks win over routes, routes win over waypoints."""

    def test_tracks_preferred(self, gpx_factory):
        """Track points are used when the file has tracks."""
        content = gpx_factory(tracks=[[TRACK]], routes=[ROUTE], waypoints=WAYPOINTS)
        points, metadata = parse_gpx(content)
        assert points == [Point(lat, lon) for lat, lon in TRACK]
        assert metadata['source'] == SOURCE_TRACKS

    def test_routes_when_no_tracks(self, gpx_factory):
        """Route points are used when there are no tracks."""
        content = gpx_factory(routes=[ROUTE], waypoints=WAYPOINTS)
        points, metadata = parse_gpx(content)
        assert points == [Point(lat, lon) for lat, lon in ROUTE]
        assert metadata['source'] == SOURCE_ROUTES

    def test_waypoints_as_last_resort(self, gpx_factory):
        """Waypoints are used when there are no tracks or routes."""
        content = gpx_factory(waypoints=WAYPOINTS)
        points, metadata = parse_gpx(content)
        assert len(points) == 4
        assert metadata['source'] == SOURCE_WAYPOINTS

    def test_categories_never_merged(self, gpx_factory):
        """A single-point track is still the chosen source, so the route is too short."""
        content = gpx_factory(tracks=[[[(45.0, 6.0)]]], routes=[ROUTE])
        with pytest.raises(InsufficientDataError):
            parse_gpx(content)

    def test_multiple_tracks_and_segments_concatenated(self, gpx_factory):
        """All track segments are joined in document order."""
        content = gpx_factory(tracks=[[TRACK[:2], TRACK[2:]], [ROUTE]])
        points, _ = parse_gpx(content)
        assert len(points) == 5
        assert points[0] == Point(45.0, 6.0)
        assert points[-1] == Point(46.1, 7.1)


class TestParseErrors:
    """Tests for invalid and insufficient input."""

    def test_empty_document(self, gpx_factory):
        """A GPX file without points is rejected."""
        with pytest.raises(InsufficientDataError):
            parse_gpx(gpx_factory())

    def test_single_waypoint(self, gpx_factory):
        """One point is not enough for a route."""
        with pytest.raises(InsufficientDataError):
            parse_gpx(gpx_factory(waypoints=[(45.0, 6.0)]))

    def test_not_xml(self):
        """Non-XML content is reported as invalid input."""
        with pytest.raises(InvalidInputError):
            parse_gpx("this is not a gpx file")

    def test_out_of_range_coordinates(self, gpx_factory):
        """Latitudes beyond 90 degrees are rejected."""
        with pytest.raises(InvalidInputError):
            parse_gpx(gpx_factory(waypoints=[(45.0, 6.0), (95.0, 6.0)]))


class TestMetadata:
    """Tests for route naming and loading from disk."""

    def test_name_from_track(self, gpx_factory):
        """The first track name becomes the route name."""
        _, metadata = parse_gpx(gpx_factory(tracks=[[TRACK]], track_name="Col du Galibier"))
        assert metadata['name'] == "Col du Galibier"

    def test_name_falls_back_to_filename(self, gpx_factory):
        """Without a name in the file, the filename stem is used."""
        _, metadata = parse_gpx(gpx_factory(tracks=[[TRACK]]), filename="/tmp/sunday_ride.gpx")
        assert metadata['name'] == "sunday_ride"

    def test_bytes_content(self, gpx_factory):
        """Raw uploaded bytes are decoded before parsing."""
        points, _ = parse_gpx(gpx_factory(tracks=[[TRACK]]).encode('utf-8'))
        assert len(points) == 3

    def test_load_from_path(self, tmp_path, gpx_factory):
        """Files on disk are loaded and named after the file."""
        path = tmp_path / "loop.gpx"
        path.write_text(gpx_factory(routes=[ROUTE]), encoding='utf-8')
        points, metadata = load_gpx_from_path(str(path))
        assert len(points) == 2
        assert metadata['name'] == "loop"

    def test_missing_file(self, tmp_path):
        """A missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_gpx_from_path(str(tmp_path / "missing.gpx"))
