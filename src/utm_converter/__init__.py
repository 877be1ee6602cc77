"""
UTM Converter
=============
Bidirectional conversion between WGS84 latitude/longitude and Universal
Transverse Mercator coordinates, with a cell-grid generator and a batch
CSV tool built on top.

Public API::

    from src.utm_converter import (
        GeographicCoordinate,
        UTMCoordinate,
        geographic_to_utm,
        utm_to_geographic,
    )
"""

from src.utm_converter.converter import (
    ConversionEvent,
    GeographicCoordinate,
    UTMConverter,
    UTMCoordinate,
    geographic_to_utm,
    utm_to_geographic,
)
from src.utm_converter.ellipsoid import WGS84, Ellipsoid

__all__ = [
    "ConversionEvent",
    "Ellipsoid",
    "GeographicCoordinate",
    "UTMConverter",
    "UTMCoordinate",
    "WGS84",
    "geographic_to_utm",
    "utm_to_geographic",
]
__version__ = "1.0.0"
