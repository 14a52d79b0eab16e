"""Geodesy helpers (great-circle bearing and distance).

Spherical-earth formulas on a mean radius of 6371 km. Accurate to a few
tenths of a percent, which is well inside what the link estimate needs.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .errors import OutOfRange

EARTH_RADIUS_KM = 6371.0

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


@dataclass(frozen=True)
class GeoPoint:
    """WGS-84 position in degrees, optionally labelled (e.g. from a place search)."""
    latitude: float
    longitude: float
    name: Optional[str] = None

    def __post_init__(self):
        lat = float(self.latitude)
        lon = float(self.longitude)
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise OutOfRange(f"non-finite coordinate: ({self.latitude}, {self.longitude})")
        if not -90.0 <= lat <= 90.0:
            raise OutOfRange(f"latitude {lat} outside [-90, 90]")
        if not -180.0 <= lon <= 180.0:
            raise OutOfRange(f"longitude {lon} outside [-180, 180]")
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)

    def same_position(self, other: "GeoPoint") -> bool:
        """True when both points share coordinates (names are ignored)."""
        return self.latitude == other.latitude and self.longitude == other.longitude


def bearing_deg(origin: GeoPoint, target: GeoPoint) -> float:
    """Initial great-circle bearing from origin to target (degrees 0..360).

    Identical points have no defined heading; 0.0 is returned for them.
    """
    if origin.same_position(target):
        return 0.0
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    dlon = math.radians(target.longitude - origin.longitude)
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    brng = (math.degrees(math.atan2(y, x)) + 360.0) % 360.0
    # (-tiny + 360) % 360 can come out as exactly 360.0
    return 0.0 if brng >= 360.0 else brng


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine great-circle distance in kilometres.

    Args:
        a, b: end points
    Returns:
        distance in km (0 for identical points)
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    # rounding can push h slightly outside [0, 1] near antipodes
    h = min(1.0, max(0.0, h))
    c = 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
    return EARTH_RADIUS_KM * c


def compass_direction(bearing: float) -> str:
    """16-point compass label for a bearing in degrees.

    Buckets are 22.5 deg wide and centred on each label; halves round up.
    """
    index = int(math.floor(bearing / 22.5 + 0.5)) % 16
    return COMPASS_POINTS[index]


def format_coordinate(value: float, axis: str) -> str:
    """Degrees and decimal minutes with hemisphere, e.g. ``40° 42.768' N``."""
    if axis not in ("lat", "lon"):
        raise ValueError("axis must be 'lat' or 'lon'")
    magnitude = abs(value)
    degrees = int(math.floor(magnitude))
    minutes = (magnitude - degrees) * 60.0
    if axis == "lat":
        hemisphere = "N" if value >= 0 else "S"
    else:
        hemisphere = "E" if value >= 0 else "W"
    return f"{degrees}° {minutes:.3f}' {hemisphere}"
