"""
Constants for the RideFlow route analyzer.

This module contains all the mathematical, algorithmic, and domain-specific
constants used throughout the codebase. Constants are grouped by their purpose
and documented with their units where applicable.
"""

# =============================================================================
# CONVERSION FACTORS
# =============================================================================

MINUTES_PER_HOUR = 60
SECONDS_PER_MINUTE = 60

# =============================================================================
# EARTH GEOMETRY
# =============================================================================

EARTH_RADIUS_KM = 6371  # Mean radius used for haversine distances

# Coordinate bounds (degrees)
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# =============================================================================
# ANGLE CONSTANTS (all in degrees)
# =============================================================================

FULL_CIRCLE_DEGREES = 360
ANGLE_WRAP_BOUNDARY_DEGREES = 180  # Used for angle wrapping calculations
REVERSE_OFFSET_DEGREES = 180  # Bearing offset for traversing a segment backwards

# 16-point compass rose, 22.5 degrees per sector, starting at North
COMPASS_SECTOR_DEGREES = 22.5
COMPASS_16_POINTS = [
    'N', 'NNE', 'NE', 'ENE', 'E', 'ESE', 'SE', 'SSE',
    'S', 'SSW', 'SW', 'WSW', 'W', 'WNW', 'NW', 'NNW',
]

# 8 named octants as [start, end) ranges. North wraps around 0.
COMPASS_8_OCTANTS = [
    ('North', 337.5, 22.5),
    ('North-East', 22.5, 67.5),
    ('East', 67.5, 112.5),
    ('South-East', 112.5, 157.5),
    ('South', 157.5, 202.5),
    ('South-West', 202.5, 247.5),
    ('West', 247.5, 292.5),
    ('North-West', 292.5, 337.5),
]

# =============================================================================
# ROUTE GEOMETRY
# =============================================================================

DEFAULT_MAX_ROUTE_POINTS = 200  # Simplification kicks in above this count
DEFAULT_MIN_POINT_SPACING_KM = 0.1  # Minimum spacing between kept points
LOOP_DETECTION_THRESHOLD_KM = 0.5  # Start/end closer than this = loop

SEGMENT_DISTANCE_DECIMALS = 3
SEGMENT_BEARING_DECIMALS = 1

# =============================================================================
# WIND IMPACT MODEL
# =============================================================================

# Wind speed (km/h) that maps to a 100% base impact before capping
WIND_IMPACT_SPEED_DIVISOR = 20.0
MAX_BASE_IMPACT = 0.40  # Cap on the base impact magnitude
MIN_IMPACT = 0.05  # Floor applied to every classification

# Relative angle thresholds (degrees between travel bearing and wind origin)
HEADWIND_MAX_ANGLE = 30
QUARTER_HEADWIND_MAX_ANGLE = 60
CROSSWIND_MAX_ANGLE = 120
QUARTER_TAILWIND_MAX_ANGLE = 150

# Multipliers applied to the base impact / minimum impact per band
QUARTER_HEADWIND_FACTOR = 0.7
CROSSWIND_FACTOR = 0.3
CROSSWIND_MIN_FACTOR = 0.5
QUARTER_TAILWIND_FACTOR = 0.5
TAILWIND_FACTOR = 0.8
TAILWIND_MIN_FACTOR = 1.5

# =============================================================================
# WEATHER ALIGNMENT
# =============================================================================

# Forecast resolution is hourly, anything closer than this is good enough
WEATHER_MATCH_TOLERANCE_SECONDS = 30 * 60

# Values used when the forecast has no usable sample
DEFAULT_WIND_SPEED_KMH = 15.0
DEFAULT_WIND_DIRECTION_DEGREES = 180.0

# =============================================================================
# PRESENTATION
# =============================================================================

SUMMARY_DECIMALS = 2
TIME_DECIMALS = 2
WIND_IMPACT_DECIMALS = 3

# =============================================================================
# VALIDATION
# =============================================================================

assert len(COMPASS_16_POINTS) * COMPASS_SECTOR_DEGREES == FULL_CIRCLE_DEGREES, \
    "Compass sectors must cover the full circle"
