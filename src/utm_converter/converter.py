"""
UTM Converter — Core Module
============================
Converts between geographic coordinates (latitude/longitude in decimal
degrees) and Universal Transverse Mercator coordinates (easting,
northing, zone) on the WGS84 ellipsoid.

Classes:
    GeographicCoordinate   Immutable latitude/longitude pair.
    UTMCoordinate          Immutable easting/northing/zone/hemisphere.
    ConversionEvent        Trace record handed to an observer.
    UTMConverter           Converter bound to an ellipsoid and options.

Typical usage::

    from src.utm_converter.converter import (
        GeographicCoordinate,
        geographic_to_utm,
        utm_to_geographic,
    )

    utm = geographic_to_utm(GeographicCoordinate(51.5074, -0.1278))
    # UTMCoordinate(easting=699316.4..., northing=5710164..., zone=30, hemisphere='N')
    point = utm_to_geographic(utm)

Southern hemisphere:
    The forward conversion adds a 10,000,000 m false northing south of the
    equator and marks the result ``hemisphere="S"``; the inverse removes
    it again.  Coordinates built with the default ``hemisphere="N"``
    express southern points with a negative northing instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Literal, Mapping, Optional

from shared.python.exceptions import InvalidInputError, SingularityError
from shared.python.validators import Validators
from src.utm_converter.ellipsoid import WGS84, Ellipsoid
from src.utm_converter.helpers import (
    FALSE_EASTING,
    FALSE_NORTHING_SOUTH,
    central_longitude_for_zone,
    central_meridian,
    degrees_to_radians,
    easting_from_terms,
    footprint_latitude,
    latitude_from_footprint,
    longitude_from_footprint,
    meridian_arc,
    northing_from_terms,
    second_eccentricity_squared,
    utm_zone_for_longitude,
)

logger = logging.getLogger("geoutm.utm_converter")

Hemisphere = Literal["N", "S"]

# Footprints within this many radians of ±90° are treated as a pole.
POLE_TOLERANCE = 1e-9


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeographicCoordinate:
    """A point on the ellipsoid in decimal degrees.

    Attributes:
        latitude: Degrees north, within [-90, 90].
        longitude: Degrees east, within [-180, 180].
    """

    latitude: float
    longitude: float


@dataclass(frozen=True)
class UTMCoordinate:
    """A projected UTM position.

    Attributes:
        easting: Metres, false easting 500000 on the central meridian.
        northing: Metres north of the equator.  With ``hemisphere="S"``
                  it carries the 10,000,000 m southern false northing.
        zone: UTM zone number, 1–60.
        hemisphere: ``"N"`` or ``"S"``; selects the northing convention.
    """

    easting: float
    northing: float
    zone: int
    hemisphere: Hemisphere = "N"


@dataclass(frozen=True)
class ConversionEvent:
    """Trace record emitted at the start and end of every conversion.

    Attributes:
        operation: ``"geographic_to_utm"`` or ``"utm_to_geographic"``.
        stage: ``"start"`` or ``"end"``.
        values: Inputs on ``"start"``; intermediate terms and the result
                on ``"end"``.
    """

    operation: str
    stage: Literal["start", "end"]
    values: Mapping[str, object] = field(default_factory=dict)


ConversionObserver = Callable[[ConversionEvent], None]


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------


class UTMConverter:
    """Bidirectional geographic ⇄ UTM converter.

    Instances hold no mutable state and may be shared between threads.

    Args:
        ellipsoid: Reference ellipsoid constants.  Defaults to
                   :data:`~src.utm_converter.ellipsoid.WGS84`.
        strict: When ``True`` (default) the inverse conversion raises
                :class:`~shared.python.exceptions.SingularityError` when the
                footprint latitude is at or beyond a pole or the series
                diverges off the ellipsoid.  When ``False`` the
                resulting non-finite or out-of-range values are returned
                unchanged.
        observer: Optional callable receiving a :class:`ConversionEvent`
                  at the start and end of each conversion.

    Example::

        events = []
        converter = UTMConverter(observer=events.append)
        converter.geographic_to_utm(GeographicCoordinate(0.0, 3.0))
        events[-1].values["K4"]
    """

    def __init__(
        self,
        ellipsoid: Ellipsoid = WGS84,
        *,
        strict: bool = True,
        observer: Optional[ConversionObserver] = None,
    ) -> None:
        self.ellipsoid: Ellipsoid = ellipsoid
        self.strict: bool = strict
        self.observer: Optional[ConversionObserver] = observer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def geographic_to_utm(
        self,
        coordinate: GeographicCoordinate,
        zone: Optional[int] = None,
    ) -> UTMCoordinate:
        """Project a geographic coordinate onto UTM.

        Args:
            coordinate: Latitude/longitude in decimal degrees.
            zone: Optional zone override (1–60).  When omitted the zone
                  is derived from the longitude.

        Returns:
            The projected :class:`UTMCoordinate`, unrounded.

        Raises:
            InvalidInputError: If the coordinate is non-numeric or out of
                range, or the zone override is not an integer in 1–60.
        """
        lat_deg = coordinate.latitude
        lon_deg = coordinate.longitude
        self._emit(
            "geographic_to_utm", "start",
            {"latitude": lat_deg, "longitude": lon_deg, "zone": zone},
        )

        Validators.assert_geographic_valid(lat_deg, lon_deg)
        if zone is None:
            zone = utm_zone_for_longitude(lon_deg)
        else:
            Validators.assert_zone_valid(zone)
            zone = int(zone)

        ell = self.ellipsoid
        a = ell.semi_major
        e = ell.eccentricity
        k0 = ell.scale_factor
        e1sq = second_eccentricity_squared(ell)

        lat = degrees_to_radians(lat_deg)
        zone_cm = central_meridian(zone)

        sin_lat = math.sin(lat)
        cos_lat = math.cos(lat)
        tan_lat = math.tan(lat)
        curvature = 1 - (e * sin_lat) ** 2
        rho = a * (1 - e * e) / curvature ** (3 / 2)
        nu = a / curvature ** (1 / 2)

        s = meridian_arc(lat, ell)
        p = degrees_to_radians(lon_deg - zone_cm)

        k1 = s * k0
        k2 = nu * sin_lat * cos_lat * k0 / 2
        k3 = (
            (nu * sin_lat * cos_lat ** 3 / 24)
            * (5 - tan_lat ** 2 + 9 * e1sq * cos_lat ** 2 + 4 * e1sq ** 2 * cos_lat ** 4)
            * k0
        )
        k4 = nu * cos_lat * k0
        k5 = cos_lat ** 3 * (nu / 6) * (1 - tan_lat ** 2 + e1sq * cos_lat ** 2) * k0

        result = UTMCoordinate(
            easting=easting_from_terms(p, k4, k5),
            northing=northing_from_terms(lat, p, k1, k2, k3),
            zone=zone,
            hemisphere="S" if lat < 0 else "N",
        )

        self._emit(
            "geographic_to_utm", "end",
            {
                "rho": rho, "nu": nu, "S": s, "p": p,
                "K1": k1, "K2": k2, "K3": k3, "K4": k4, "K5": k5,
                "easting": result.easting,
                "northing": result.northing,
                "zone": result.zone,
                "hemisphere": result.hemisphere,
            },
        )
        return result

    def utm_to_geographic(self, coordinate: UTMCoordinate) -> GeographicCoordinate:
        """Recover the geographic coordinate of a UTM position.

        Args:
            coordinate: Easting/northing/zone, plus the hemisphere that
                        tells whether the southern false northing applies.

        Returns:
            The :class:`GeographicCoordinate` in decimal degrees.

        Raises:
            InvalidInputError: If the easting, northing or zone is
                non-numeric or out of range, or the hemisphere is unknown.
            SingularityError: If the converter is strict and the footprint
                latitude is at or beyond a pole, or the series yields a
                latitude outside ±90° or a non-finite longitude.
        """
        easting = coordinate.easting
        northing = coordinate.northing
        zone = coordinate.zone
        hemisphere = coordinate.hemisphere
        self._emit(
            "utm_to_geographic", "start",
            {"easting": easting, "northing": northing, "zone": zone, "hemisphere": hemisphere},
        )

        Validators.assert_utm_valid(easting, northing, zone)
        values = {"easting": easting, "northing": northing, "zone": zone, "hemisphere": hemisphere}
        if hemisphere not in ("N", "S"):
            raise InvalidInputError(values, "hemisphere must be 'N' or 'S'")
        if hemisphere == "S":
            if northing < 0:
                raise InvalidInputError(
                    values, "southern-hemisphere northing must not be negative"
                )
            northing = northing - FALSE_NORTHING_SOUTH

        ell = self.ellipsoid
        a = ell.semi_major
        e = ell.eccentricity
        k0 = ell.scale_factor
        e1sq = second_eccentricity_squared(ell)

        footprint = footprint_latitude(northing, ell)
        if self.strict and abs(footprint) >= math.pi / 2 - POLE_TOLERANCE:
            raise SingularityError(footprint, coordinate.northing)

        cos_fp = math.cos(footprint)

        sin_fp = math.sin(footprint)
        tan_fp = math.tan(footprint)
        curvature = 1 - (e * sin_fp) ** 2
        n0 = a / curvature ** (1 / 2)
        r0 = a * (1 - e * e) / curvature ** (3 / 2)
        d0 = (FALSE_EASTING - easting) / (n0 * k0)
        q0 = e1sq * cos_fp ** 2
        t0 = tan_fp ** 2

        lat_k1 = n0 * tan_fp / r0
        lat_k2 = d0 * d0 / 2
        lat_k3 = (5 + 3 * t0 + 10 * q0 - 4 * q0 * q0 - 9 * e1sq) * d0 ** 4 / 24
        lat_k4 = (
            (61 + 90 * t0 + 298 * q0 + 45 * t0 * t0 - 252 * e1sq - 3 * q0 * q0)
            * d0 ** 6 / 720
        )

        zone_cl = central_longitude_for_zone(int(zone))

        lon_k1 = d0
        lon_k2 = (1 + 2 * t0 + q0) * d0 ** 3 / 6
        lon_k3 = (
            (5 - 2 * q0 + 28 * t0 - 3 * q0 ** 2 + 8 * e1sq + 24 * t0 ** 2)
            * d0 ** 5 / 120
        )

        result = GeographicCoordinate(
            latitude=latitude_from_footprint(footprint, lat_k1, lat_k2, lat_k3, lat_k4),
            longitude=longitude_from_footprint(zone_cl, footprint, lon_k1, lon_k2, lon_k3),
        )
        if self.strict and not (
            -90.0 <= result.latitude <= 90.0 and math.isfinite(result.longitude)
        ):
            raise SingularityError(footprint, coordinate.northing)

        self._emit(
            "utm_to_geographic", "end",
            {
                "footprint": footprint,
                "n0": n0, "r0": r0, "d0": d0, "q0": q0, "t0": t0,
                "latK1": lat_k1, "latK2": lat_k2, "latK3": lat_k3, "latK4": lat_k4,
                "lonK1": lon_k1, "lonK2": lon_k2, "lonK3": lon_k3,
                "latitude": result.latitude,
                "longitude": result.longitude,
            },
        )
        return result

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _emit(self, operation: str, stage: str, values: dict[str, object]) -> None:
        logger.debug("%s %s: %s", operation, stage, values)
        if self.observer is not None:
            self.observer(ConversionEvent(operation, stage, values))  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(ellipsoid={self.ellipsoid!r}, strict={self.strict!r})"


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------

_DEFAULT_CONVERTER = UTMConverter()


def geographic_to_utm(
    coordinate: GeographicCoordinate, zone: Optional[int] = None
) -> UTMCoordinate:
    """Project *coordinate* to UTM with the default WGS84 converter.

    See :meth:`UTMConverter.geographic_to_utm`.
    """
    return _DEFAULT_CONVERTER.geographic_to_utm(coordinate, zone)


def utm_to_geographic(coordinate: UTMCoordinate) -> GeographicCoordinate:
    """Invert *coordinate* to latitude/longitude with the default WGS84 converter.

    See :meth:`UTMConverter.utm_to_geographic`.
    """
    return _DEFAULT_CONVERTER.utm_to_geographic(coordinate)
