"""Maidenhead locator encoding/decoding (6 characters, subsquare precision).

Layout of a locator such as ``FN20xr``:
- field (A..R): 20 deg of longitude, 10 deg of latitude
- square (0..9): 2 deg of longitude, 1 deg of latitude
- subsquare (a..x): 5' of longitude, 2.5' of latitude

Longitude is handled in units of 1/12 deg and latitude in units of 1/24 deg,
i.e. one subsquare per unit. There are 18*10*24 = 4320 units along each axis.
"""

import logging
import math
import re

from .errors import InvalidFormat, OutOfRange
from .geodesy import GeoPoint, distance_km

logger = logging.getLogger(__name__)

LOCATOR_LENGTH = 6
_LOCATOR_RE = re.compile(r"[A-R]{2}[0-9]{2}[a-x]{2}")

_SUBSQUARES = 24
_SQUARES = 10
_UNITS_PER_FIELD = _SQUARES * _SUBSQUARES  # 240
_UNITS_PER_AXIS = 18 * _UNITS_PER_FIELD  # 4320

# floor() tolerance so a decoded corner re-encodes into its own cell
_EPS = 1e-9


def _axis_units(offset_deg: float, units_per_deg: int) -> int:
    """Whole subsquare units east (or north) of the grid origin.

    The floor is taken after adding _EPS (1e-9 unit, under 1e-10 deg), so a
    point that close to the west or south of a cell edge encodes into the
    cell beyond that edge. Decoded corners carry float error of that order
    and must land back in their own cell.
    """
    units = int(math.floor(offset_deg * units_per_deg + _EPS))
    if units >= _UNITS_PER_AXIS:
        # upper edge (lon = 180 or lat = 90) belongs to the last cell
        logger.debug("clamping %.6f deg onto the last subsquare", offset_deg)
        units = _UNITS_PER_AXIS - 1
    return max(0, units)


def _split_units(units: int):
    field, rest = divmod(units, _UNITS_PER_FIELD)
    square, subsquare = divmod(rest, _SUBSQUARES)
    return field, square, subsquare


def encode_grid(point: GeoPoint) -> str:
    """Encode a point into a 6-character Maidenhead locator."""
    lat = point.latitude
    lon = point.longitude
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise OutOfRange(f"cannot encode ({lat}, {lon})")
    f1, s1, ss1 = _split_units(_axis_units(lon + 180.0, 12))
    f2, s2, ss2 = _split_units(_axis_units(lat + 90.0, 24))
    return (
        chr(ord("A") + f1)
        + chr(ord("A") + f2)
        + str(s1)
        + str(s2)
        + chr(ord("a") + ss1)
        + chr(ord("a") + ss2)
    )


def is_valid_locator(text: str) -> bool:
    """True for a well-formed 6-character locator (case-sensitive)."""
    return isinstance(text, str) and _LOCATOR_RE.fullmatch(text) is not None


def _indices(locator: str):
    if not isinstance(locator, str) or len(locator) != LOCATOR_LENGTH:
        raise InvalidFormat(f"locator must be exactly {LOCATOR_LENGTH} characters: {locator!r}")
    if not _LOCATOR_RE.fullmatch(locator):
        raise InvalidFormat(f"malformed locator: {locator!r}")
    f1 = ord(locator[0]) - ord("A")
    f2 = ord(locator[1]) - ord("A")
    s1 = int(locator[2])
    s2 = int(locator[3])
    ss1 = ord(locator[4]) - ord("a")
    ss2 = ord(locator[5]) - ord("a")
    return f1, f2, s1, s2, ss1, ss2


def decode_grid(locator: str) -> GeoPoint:
    """Decode a locator to the lower-left (south-west) corner of its subsquare.

    Raises:
        InvalidFormat: wrong length or a character out of its positional range
    """
    f1, f2, s1, s2, ss1, ss2 = _indices(locator)
    lon = f1 * 20 + s1 * 2 + ss1 / 12.0 - 180.0
    lat = f2 * 10 + s2 + ss2 / 24.0 - 90.0
    return GeoPoint(latitude=lat, longitude=lon)


def grid_center(locator: str) -> GeoPoint:
    """Centroid of the subsquare named by ``locator``."""
    corner = decode_grid(locator)
    return GeoPoint(
        latitude=corner.latitude + 0.5 / 24.0,
        longitude=corner.longitude + 0.5 / 12.0,
    )


def grid_distance_km(locator1: str, locator2: str) -> float:
    """Approximate distance between two locators (corner to corner, km).

    This is the distance between the decoded subsquare corners, not between
    the stations that produced the locators.
    """
    return distance_km(decode_grid(locator1), decode_grid(locator2))
