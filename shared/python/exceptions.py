"""
GeoUTM — Custom Exception Hierarchy
====================================
Every GeoUTM module raises exceptions from this module so callers can
catch them at the right level of granularity.

Hierarchy::

    GeoUTMError                          ← catch-all base
    ├── InputValidationError             ← bad files, missing columns, etc.
    │   ├── ColumnNotFoundError          ← CSV/table column missing
    │   └── InvalidInputError            ← coordinate outside its valid envelope
    ├── SingularityError                 ← inverse projection hit a pole
    └── OutputWriteError                 ← cannot write to output path

Usage::

    from shared.python.exceptions import InvalidInputError

    raise InvalidInputError({"latitude": 91.0, "longitude": 0.0}, "latitude out of range")
"""

from __future__ import annotations

from typing import Mapping


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class GeoUTMError(Exception):
    """Base exception for all GeoUTM errors.

    Catch this to handle any library-specific error without caring about
    the exact subtype.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InputValidationError(GeoUTMError):
    """Raised when inputs fail pre-processing validation.

    This is the parent class for more specific input problems.
    """


class ColumnNotFoundError(InputValidationError):
    """Raised when an expected column is absent from a tabular dataset.

    Args:
        column: The name of the missing column.
        available: List of column names that ARE present, used to
                   generate a helpful error message.

    Example::

        raise ColumnNotFoundError("latitude", df.columns.tolist())
    """

    def __init__(self, column: str, available: list[str]) -> None:
        available_str = ", ".join(f"'{c}'" for c in available)
        super().__init__(
            f"Column '{column}' not found. Available columns: {available_str}"
        )
        self.column: str = column
        self.available: list[str] = available


class InvalidInputError(InputValidationError):
    """Raised when a coordinate falls outside the envelope a conversion accepts.

    Args:
        values: Mapping of field name to the value supplied by the caller
                (e.g. ``{"latitude": 91.0, "longitude": 0.0}``).
        reason: Short explanation of which check failed.

    Example::

        raise InvalidInputError(
            {"easting": 50_000.0, "northing": 0.0, "zone": 31},
            "easting must be within [100000, 900000]",
        )
    """

    def __init__(self, values: Mapping[str, object], reason: str) -> None:
        rendered = ", ".join(f"{k}={v!r}" for k, v in values.items())
        super().__init__(f"Invalid coordinate ({rendered}): {reason}")
        self.values: dict[str, object] = dict(values)
        self.reason: str = reason


# ---------------------------------------------------------------------------
# Numerics
# ---------------------------------------------------------------------------


class SingularityError(GeoUTMError):
    """Raised when the inverse projection is evaluated at or near a pole.

    The inverse series divides by ``cos(footprint)``, which vanishes as the
    footprint latitude reaches ±90°; close to it the series yields
    latitudes beyond ±90° or non-finite longitudes.

    Args:
        footprint: Footprint latitude in radians.
        northing: The northing that produced it.
    """

    def __init__(self, footprint: float, northing: float) -> None:
        super().__init__(
            f"Footprint latitude {footprint!r} rad for northing {northing!r} "
            "is at or beyond a pole; the inverse series diverges."
        )
        self.footprint: float = footprint
        self.northing: float = northing


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputWriteError(GeoUTMError):
    """Raised when a tool cannot write its output to disk.

    Args:
        output_path: String representation of the path that failed.
        reason: Underlying OS or library error message.

    Example::

        raise OutputWriteError("/read-only/dir/grid.html", "Permission denied")
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write output to '{output_path}': {reason}"
        )
        self.output_path: str = output_path
        self.reason: str = reason
