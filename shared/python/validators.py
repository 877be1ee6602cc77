"""
GeoUTM — Shared Input Validators
=================================
Static utility methods used across GeoUTM to validate common
preconditions before processing begins.

All methods raise an appropriate exception from
:mod:`shared.python.exceptions` rather than returning booleans — this
keeps conversion code and ``validate_inputs`` implementations simple
and readable::

    class MyTool(GeoTool):
        def validate_inputs(self) -> None:
            Validators.assert_file_exists(self.input_path)
            Validators.assert_supported_extension(self.input_path, [".csv"])
"""

from __future__ import annotations

import math
import numbers
from pathlib import Path
from typing import Sequence

# Lazy imports for heavy libraries so modules that do not use them avoid
# the import cost at startup.
#   pandas → assert_columns_exist

from shared.python.exceptions import (
    ColumnNotFoundError,
    InputValidationError,
    InvalidInputError,
    OutputWriteError,
)

# ---------------------------------------------------------------------------
# Coordinate envelopes
# ---------------------------------------------------------------------------
LATITUDE_RANGE: tuple[float, float] = (-90.0, 90.0)
LONGITUDE_RANGE: tuple[float, float] = (-180.0, 180.0)
EASTING_RANGE: tuple[float, float] = (100_000.0, 900_000.0)
NORTHING_RANGE: tuple[float, float] = (-10_002_000.0, 10_002_000.0)
ZONE_RANGE: tuple[int, int] = (1, 60)


def _is_number(value: object) -> bool:
    """Return ``True`` for real, non-NaN numbers (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def _is_integral(value: object) -> bool:
    if not _is_number(value):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return math.isfinite(value) and float(value).is_integer()  # type: ignore[arg-type]


class Validators:
    """Collection of static precondition checks shared across GeoUTM.

    All methods are ``@staticmethod`` — this class is never instantiated.
    It exists purely as a logical namespace.
    """

    # ------------------------------------------------------------------
    # File-system checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_file_exists(path: Path) -> None:
        """Assert that *path* points to an existing regular file.

        Args:
            path: Path object to check.

        Raises:
            InputValidationError: If *path* does not exist or is a
                directory rather than a file.

        Example::

            Validators.assert_file_exists(Path("data/points.csv"))
        """
        path = Path(path)
        if not path.exists():
            raise InputValidationError(
                f"Input file not found: '{path}'. "
                "Check that the path is correct and the file exists."
            )
        if path.is_dir():
            raise InputValidationError(
                f"Expected a file but got a directory: '{path}'."
            )

    @staticmethod
    def assert_output_dir_writable(output_path: Path) -> None:
        """Assert that the parent directory of *output_path* is writable.

        Creates the parent directory (and any missing parents) if it does
        not yet exist, so callers never have to pre-create output dirs.

        Args:
            output_path: Intended output file path.  The parent directory
                         is created if absent.

        Raises:
            OutputWriteError: If the parent directory cannot be created
                or is not writable.
        """
        parent = Path(output_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

    @staticmethod
    def assert_supported_extension(path: Path, extensions: Sequence[str]) -> None:
        """Assert that *path* has one of the allowed file extensions.

        Args:
            path: File path to check.
            extensions: Sequence of allowed extensions, each starting with
                        a dot (e.g. ``[".csv"]``).

        Raises:
            InputValidationError: If the file extension is not in
                *extensions*.

        Example::

            Validators.assert_supported_extension(
                Path("output/grid.html"),
                [".html", ".geojson", ".json"],
            )
        """
        path = Path(path)
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in extensions]
        if suffix not in allowed:
            raise InputValidationError(
                f"Unsupported file extension '{suffix}' for '{path.name}'. "
                f"Accepted extensions: {', '.join(allowed)}"
            )

    # ------------------------------------------------------------------
    # Coordinate checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_geographic_valid(latitude: object, longitude: object) -> None:
        """Assert that a latitude/longitude pair lies on the globe.

        Args:
            latitude: Latitude in decimal degrees, within [-90, 90].
            longitude: Longitude in decimal degrees, within [-180, 180].

        Raises:
            InvalidInputError: If either value is not a number (NaN,
                ``None``, strings and booleans all fail) or is out of
                range.

        Example::

            Validators.assert_geographic_valid(51.5074, -0.1278)
        """
        values = {"latitude": latitude, "longitude": longitude}
        lo, hi = LATITUDE_RANGE
        if not _is_number(latitude) or not lo <= latitude <= hi:  # type: ignore[operator]
            raise InvalidInputError(values, f"latitude must be a number within [{lo:g}, {hi:g}]")
        lo, hi = LONGITUDE_RANGE
        if not _is_number(longitude) or not lo <= longitude <= hi:  # type: ignore[operator]
            raise InvalidInputError(values, f"longitude must be a number within [{lo:g}, {hi:g}]")

    @staticmethod
    def assert_utm_valid(easting: object, northing: object, zone: object) -> None:
        """Assert that an easting/northing/zone triple is a usable UTM position.

        Args:
            easting: Easting in metres, within [100000, 900000].
            northing: Northing in metres, within [-10002000, 10002000].
            zone: Integral UTM zone number, within [1, 60].

        Raises:
            InvalidInputError: On the first value that is not a number or
                falls outside its range.

        Example::

            Validators.assert_utm_valid(699_316.0, 5_710_164.0, 30)
        """
        values = {"easting": easting, "northing": northing, "zone": zone}
        lo, hi = EASTING_RANGE
        if not _is_number(easting) or not lo <= easting <= hi:  # type: ignore[operator]
            raise InvalidInputError(values, f"easting must be a number within [{lo:.0f}, {hi:.0f}]")
        lo, hi = NORTHING_RANGE
        if not _is_number(northing) or not lo <= northing <= hi:  # type: ignore[operator]
            raise InvalidInputError(values, f"northing must be a number within [{lo:.0f}, {hi:.0f}]")
        Validators.assert_zone_valid(zone, values)

    @staticmethod
    def assert_zone_valid(zone: object, values: dict[str, object] | None = None) -> None:
        """Assert that *zone* is an integral UTM zone number in [1, 60].

        Args:
            zone: Candidate zone number.
            values: Optional mapping of the full coordinate, reported in
                    the error message instead of the bare zone.

        Raises:
            InvalidInputError: If *zone* is not integral or out of range.
        """
        lo, hi = ZONE_RANGE
        if not _is_integral(zone) or not lo <= zone <= hi:  # type: ignore[operator]
            raise InvalidInputError(
                values or {"zone": zone},
                f"zone must be an integer within [{lo}, {hi}]",
            )

    @staticmethod
    def assert_positive(value: object, label: str) -> None:
        """Assert that *value* is a finite number greater than zero.

        Args:
            value: The number to check.
            label: Human-readable name used in the error message.

        Raises:
            InputValidationError: If *value* is not a positive finite number.
        """
        if not _is_number(value) or not math.isfinite(value) or value <= 0:  # type: ignore[arg-type,operator]
            raise InputValidationError(
                f"{label} must be a positive number, got {value!r}."
            )

    # ------------------------------------------------------------------
    # Tabular data checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_columns_exist(
        df: object,  # pandas DataFrame
        required_columns: Sequence[str],
    ) -> None:
        """Assert that all *required_columns* are present in *df*.

        Args:
            df: A ``pandas.DataFrame`` (typed as ``object`` here to avoid
                importing pandas at module load time).
            required_columns: List of column names that must be present.

        Raises:
            ColumnNotFoundError: On the first missing column found.

        Example::

            Validators.assert_columns_exist(df, ["latitude", "longitude"])
        """
        available = list(df.columns)  # type: ignore[union-attr]
        for col in required_columns:
            if col not in available:
                raise ColumnNotFoundError(col, available)
