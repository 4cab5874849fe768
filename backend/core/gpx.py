"""
GPX file parsing and handling.

This module contains functions for loading GPX files and extracting the
ordered list of route points, following the source priority
tracks > routes > waypoints.
"""

import os
import gpxpy
import gpxpy.gpx
import logging
from typing import Tuple, Dict, List, Optional, Any, Union, Callable

from core.models.segment import Point
from core.validation import (
    validate_point, validate_route_points, InvalidInputError, ValidationError
)

logger = logging.getLogger(__name__)

SOURCE_TRACKS = 'tracks'
SOURCE_ROUTES = 'routes'
SOURCE_WAYPOINTS = 'waypoints'


def extract_track_points(gpx: gpxpy.gpx.GPX) -> List[Point]:
    """Points of every track segment, in document order."""
    points = []
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                points.append(validate_point(point.latitude, point.longitude, "Track point"))
    return points


def extract_route_points(gpx: gpxpy.gpx.GPX) -> List[Point]:
    """Points of every route, in document order."""
    points = []
    for route in gpx.routes:
        for point in route.points:
            points.append(validate_point(point.latitude, point.longitude, "Route point"))
    return points


def extract_waypoints(gpx: gpxpy.gpx.GPX) -> List[Point]:
    """Flat list of waypoints."""
    return [validate_point(point.latitude, point.longitude, "Waypoint") for point in gpx.waypoints]


# Priority order: the first extractor yielding points wins, categories are never merged
EXTRACTORS: List[Tuple[str, Callable[[gpxpy.gpx.GPX], List[Point]]]] = [
    (SOURCE_TRACKS, extract_track_points),
    (SOURCE_ROUTES, extract_route_points),
    (SOURCE_WAYPOINTS, extract_waypoints),
]


def extract_points(gpx: gpxpy.gpx.GPX) -> Tuple[List[Point], Optional[str]]:
    """
    Extract route points from a parsed GPX document.

    Args:
        gpx: Parsed GPX document

    Returns:
        tuple: (list of points, name of the source category or None)

    Raises:
        InsufficientDataError: If fewer than 2 points could be extracted
    """
    points: List[Point] = []
    source = None

    for name, extractor in EXTRACTORS:
        points = extractor(gpx)
        if points:
            source = name
            break

    validate_route_points(points, "GPX file")
    return points, source


def parse_gpx(content: Union[str, bytes], filename: Optional[str] = None) -> Tuple[List[Point], Dict[str, Any]]:
    """
    Parse GPX content into route points and metadata.

    Args:
        content: Raw GPX document
        filename: Optional uploaded filename, used as fallback name

    Returns:
        tuple: (list of points, dict with metadata)

    Raises:
        InvalidInputError: If the document is not valid GPX
        InsufficientDataError: If it holds fewer than 2 usable points
    """
    try:
        if isinstance(content, bytes):
            content = content.decode('utf-8-sig')
        gpx = gpxpy.parse(content)
    except gpxpy.gpx.GPXException as e:
        raise InvalidInputError(f"Invalid GPX file format: {str(e)}") from e
    except Exception as e:
        if isinstance(e, ValidationError):
            raise
        raise InvalidInputError(f"Failed to parse GPX file: {str(e)}") from e

    points, source = extract_points(gpx)

    # Extract metadata
    metadata: Dict[str, Any] = {
        'name': None,
        'description': gpx.description,
        'time': gpx.time,
        'author': gpx.author_name,
        'source': source,
    }

    # Try to get the route name from GPX data
    if gpx.tracks and gpx.tracks[0].name:
        metadata['name'] = gpx.tracks[0].name
    elif gpx.routes and gpx.routes[0].name:
        metadata['name'] = gpx.routes[0].name
    elif gpx.name:
        metadata['name'] = gpx.name
    elif filename:
        metadata['name'] = os.path.splitext(os.path.basename(filename))[0]

    logger.info(f"Successfully loaded GPX file with {len(points)} points from {source}")
    return points, metadata


def load_gpx_file(gpx_file, filename: Optional[str] = None) -> Tuple[List[Point], Dict[str, Any]]:
    """
    Load and parse a GPX file-like object.

    Args:
        gpx_file: A file-like object containing GPX data
        filename: Optional filename, defaults to the object's name attribute

    Returns:
        tuple: (list of points, dict with metadata)
    """
    if filename is None:
        filename = getattr(gpx_file, 'name', None)
    return parse_gpx(gpx_file.read(), filename)


def load_gpx_from_path(file_path: str) -> Tuple[List[Point], Dict[str, Any]]:
    """
    Load a GPX file from disk path.

    Args:
        file_path: Path to the GPX file

    Returns:
        tuple: (list of points, dict with metadata)

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"GPX file not found: {file_path}")

    with open(file_path, 'rb') as f:
        return load_gpx_file(f, file_path)
