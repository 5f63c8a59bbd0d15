# ABOUTME: Coordinate parsing for free-text location phrases
# ABOUTME: Recognizes decimal "lat, lon" pairs and degrees-minutes-seconds notation

import re

from location_scout.core.models import Coordinates

DECIMAL_PATTERN = re.compile(r"(-?\d{1,3}\.\d+)\s*[,\s]\s*(-?\d{1,3}\.\d+)")

_MINUTE = "['′’]"
_SECOND = "[\"″”]"
_DMS_PART = r"(\d{{1,3}})[°\s]+(\d{{1,2}}){minute}\s*(\d{{1,2}}(?:\.\d+)?)?{second}?\s*"
DMS_PATTERN = re.compile(
    _DMS_PART.format(minute=_MINUTE, second=_SECOND)
    + r"([NnSs])\s*,?\s*"
    + _DMS_PART.format(minute=_MINUTE, second=_SECOND)
    + r"([EeWw])"
)


def dms_to_decimal(degrees: str, minutes: str | None, seconds: str | None, hemisphere: str) -> float:
    """Convert one DMS component to decimal degrees, negative for S and W."""
    value = float(degrees) + float(minutes or 0) / 60 + float(seconds or 0) / 3600
    return -value if hemisphere.upper() in ("S", "W") else value


def _parse_decimal(text: str) -> Coordinates | None:
    match = DECIMAL_PATTERN.search(text)
    if not match:
        return None
    return Coordinates(latitude=float(match.group(1)), longitude=float(match.group(2)))


def _parse_dms(text: str) -> Coordinates | None:
    match = DMS_PATTERN.search(text)
    if not match:
        return None
    lat_deg, lat_min, lat_sec, lat_hem, lon_deg, lon_min, lon_sec, lon_hem = match.groups()
    return Coordinates(
        latitude=dms_to_decimal(lat_deg, lat_min, lat_sec, lat_hem),
        longitude=dms_to_decimal(lon_deg, lon_min, lon_sec, lon_hem),
    )


def parse_coordinates(text: str | None, validate: bool = False) -> Coordinates | None:
    """Extract the first latitude/longitude pair found in ``text``.

    Decimal pairs are tried before DMS notation. Most phrases carry no
    coordinates, so ``None`` is the normal result rather than an error.

    Args:
        text: Arbitrary text fragment
        validate: Discard matches outside [-90, 90] / [-180, 180]

    Returns:
        Parsed coordinates or None
    """
    if not text:
        return None

    for parser in (_parse_decimal, _parse_dms):
        coordinates = parser(text)
        if coordinates is None:
            continue
        if validate and not coordinates.is_plausible:
            continue
        return coordinates

    return None
