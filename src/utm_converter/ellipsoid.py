"""
UTM Converter — Ellipsoid Constants
====================================
Immutable reference-ellipsoid parameters used by every projection
formula in this package.

Only the WGS84-derived :data:`WGS84` instance is provided; the
:class:`Ellipsoid` value is passed into the helpers and the converter
rather than read from module globals.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Ellipsoid:
    """Reference ellipsoid and UTM scale factor.

    Attributes:
        semi_major: Equatorial radius ``a`` in metres.
        semi_minor: Polar radius ``b`` in metres.
        eccentricity: First eccentricity ``e``.
        scale_factor: Scale factor ``k0`` on the central meridian.
    """

    semi_major: float
    semi_minor: float
    eccentricity: float
    scale_factor: float

    @property
    def e_squared(self) -> float:
        return self.eccentricity * self.eccentricity

    @property
    def second_eccentricity_squared(self) -> float:
        """``e'² = e² / (1 - e²)``."""
        return self.e_squared / (1 - self.e_squared)

    @property
    def third_flattening(self) -> float:
        """``n = (a - b) / (a + b)``, the expansion parameter of the arc series."""
        return (self.semi_major - self.semi_minor) / (self.semi_major + self.semi_minor)

    @property
    def footprint_e1(self) -> float:
        """``e1 = (1 - √(1 - e²)) / (1 + √(1 - e²))`` for the footprint series."""
        root = math.sqrt(1 - self.e_squared)
        return (1 - root) / (1 + root)


WGS84 = Ellipsoid(
    semi_major=6378137.0,
    semi_minor=6356752.314,
    eccentricity=0.081819190842622,
    scale_factor=0.9996,
)
