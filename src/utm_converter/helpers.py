"""
UTM Converter — Projection Helpers
===================================
Stateless building blocks for the forward and inverse UTM conversions.

Scalar helpers:
    degrees_to_radians, radians_to_degrees, is_valid_geographic,
    is_valid_utm, utm_zone_for_longitude, central_meridian,
    central_longitude_for_zone

Series helpers:
    meridian_arc, footprint_latitude, northing_from_terms,
    easting_from_terms, latitude_from_footprint, longitude_from_footprint

Angles passed to the series helpers are in radians; everything that
faces the caller is in decimal degrees or metres.
"""

from __future__ import annotations

import math

from shared.python.exceptions import InvalidInputError
from shared.python.validators import Validators
from src.utm_converter.ellipsoid import WGS84, Ellipsoid

FALSE_EASTING = 500_000.0
FALSE_NORTHING_SOUTH = 10_000_000.0


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------


def second_eccentricity_squared(ellipsoid: Ellipsoid = WGS84) -> float:
    """Return ``e² / (1 - e²)`` for *ellipsoid*."""
    return ellipsoid.second_eccentricity_squared


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def radians_to_degrees(radians: float) -> float:
    return radians * 180 / math.pi


def is_valid_geographic(latitude: object, longitude: object) -> bool:
    """Return ``True`` when *latitude*/*longitude* are numbers on the globe.

    Non-numeric values (``None``, NaN, strings, booleans) are invalid.
    """
    try:
        Validators.assert_geographic_valid(latitude, longitude)
    except InvalidInputError:
        return False
    return True


def is_valid_utm(easting: object, northing: object, zone: object) -> bool:
    """Return ``True`` when the triple lies inside the accepted UTM envelope.

    Easting must be within [100000, 900000] m, northing within
    [-10002000, 10002000] m and zone an integer within [1, 60].
    """
    try:
        Validators.assert_utm_valid(easting, northing, zone)
    except InvalidInputError:
        return False
    return True


def utm_zone_for_longitude(longitude: float) -> int:
    """Return the UTM zone number containing *longitude*.

    Zones are 6° wide starting at 180°W.  ``longitude = 180`` maps to
    zone 61, which no inverse conversion accepts; pass an explicit zone
    for points on the antimeridian.
    """
    if longitude < 0:
        return math.floor((longitude + 180) / 6) + 1
    return math.floor(longitude / 6) + 31


def central_meridian(zone: int) -> float:
    """Central meridian of *zone* in degrees."""
    return 6 * zone - 183


def central_longitude_for_zone(zone: int) -> float:
    """Central longitude used by the inverse conversion.

    Same as :func:`central_meridian` for positive zones.  Non-positive
    zones fall back to 3°.
    """
    if zone > 0:
        return 6 * zone - 183
    return 3


# ---------------------------------------------------------------------------
# Series helpers
# ---------------------------------------------------------------------------


def meridian_arc(latitude: float, ellipsoid: Ellipsoid = WGS84) -> float:
    """Meridional arc length in metres from the equator to *latitude*.

    Args:
        latitude: Latitude in radians.
        ellipsoid: Reference ellipsoid.

    Returns:
        Distance along the meridian; negative south of the equator.
    """
    a = ellipsoid.semi_major
    n = ellipsoid.third_flattening

    a0 = a * (1 - n + (5 * n ** 2 / 4) * (1 - n) + (81 * n ** 4 / 64) * (1 - n))
    b0 = (3 * a * n / 2) * (1 - n - (7 * n ** 2 / 8) * (1 - n) + 55 * n ** 4 / 64)
    c0 = (15 * a * n ** 2 / 16) * (1 - n + (3 * n ** 2 / 4) * (1 - n))
    d0 = (35 * a * n ** 3 / 48) * (1 - n + 11 * n ** 2 / 16)
    # 51 rather than 512: kept so outputs match existing data (< 1 mm).
    e0 = (315 * a * n ** 4 / 51) * (1 - n)

    return (
        a0 * latitude
        - b0 * math.sin(2 * latitude)
        + c0 * math.sin(4 * latitude)
        - d0 * math.sin(6 * latitude)
        + e0 * math.sin(8 * latitude)
    )


def footprint_latitude(northing: float, ellipsoid: Ellipsoid = WGS84) -> float:
    """Latitude (radians) on the central meridian whose arc length matches *northing*.

    The northing is scaled back to an arc length, turned into the
    rectifying latitude ``mu`` and corrected with a fourth-order series
    in ``e1``.
    """
    e = ellipsoid.eccentricity
    arc = northing / ellipsoid.scale_factor
    mu = arc / (ellipsoid.semi_major * (1 - e ** 2 / 4 - 3 * e ** 4 / 64 - 5 * e ** 6 / 256))

    e1 = ellipsoid.footprint_e1
    ca = 3 * e1 / 2 - 7 * e1 ** 3 / 32
    cb = 21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32
    cc = 151 * e1 ** 3 / 96
    cd = 1097 * e1 ** 4 / 512

    return (
        mu
        + ca * math.sin(2 * mu)
        + cb * math.sin(4 * mu)
        + cc * math.sin(6 * mu)
        + cd * math.sin(8 * mu)
    )


def northing_from_terms(latitude: float, p: float, k1: float, k2: float, k3: float) -> float:
    """Assemble the northing from the forward coefficients.

    A 10,000,000 m false northing is added when *latitude* (radians) is
    south of the equator.
    """
    northing = k1 + k2 * p * p + k3 * p ** 4
    if latitude < 0.0:
        northing = FALSE_NORTHING_SOUTH + northing
    return northing


def easting_from_terms(p: float, k4: float, k5: float) -> float:
    return FALSE_EASTING + (k4 * p + k5 * p ** 3)


def latitude_from_footprint(
    footprint: float, k1: float, k2: float, k3: float, k4: float
) -> float:
    """Latitude in degrees from the footprint latitude and its corrections."""
    return 180 * (footprint - k1 * (k2 + k3 + k4)) / math.pi


def longitude_from_footprint(
    central_longitude: float, footprint: float, k1: float, k2: float, k3: float
) -> float:
    """Longitude in degrees from the zone's central longitude and the corrections.

    Divides by ``cos(footprint)``; callers decide what happens at the poles.
    """
    return central_longitude - ((k1 - k2 + k3) / math.cos(footprint)) * 180 / math.pi
