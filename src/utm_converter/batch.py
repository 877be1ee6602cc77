"""
UTM Converter — Batch CSV Tool
===============================
Provides the :class:`BatchUTMConverter` class, which reads a CSV file of
coordinates, converts every row between latitude/longitude and UTM, and
writes the result to a new CSV or GeoJSON file.

Classes:
    BatchUTMConverter   Primary tool class (inherits GeoTool).

Typical usage::

    from pathlib import Path
    from src.utm_converter.batch import BatchConfig, BatchUTMConverter

    tool = BatchUTMConverter(
        input_path=Path("data/stations.csv"),
        output_path=Path("output/stations_utm.csv"),
        config=BatchConfig(direction="to_utm"),
    )
    tool.run()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

import pandas as pd

from shared.python.base_tool import GeoTool
from shared.python.exceptions import (
    InputValidationError,
    InvalidInputError,
    OutputWriteError,
    SingularityError,
)
from shared.python.validators import Validators
from src.utm_converter.converter import (
    GeographicCoordinate,
    UTMConverter,
    UTMCoordinate,
)

logger = logging.getLogger("geoutm.utm_converter.batch")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BatchResult:
    """Immutable container for a completed batch run.

    Attributes:
        rows_processed: Number of rows converted and written.
        rows_skipped: Rows dropped because a coordinate was null,
                      non-numeric, or rejected by the converter.
        direction: ``"to_utm"`` or ``"to_geographic"``.
        output_path: Path where the converted file was written.
    """

    rows_processed: int
    rows_skipped: int
    direction: str
    output_path: Path

    def summary(self) -> str:
        """Return a human-readable summary string for logging or display."""
        return (
            f"Converted {self.rows_processed} rows "
            f"({self.rows_skipped} skipped) | "
            f"{self.direction} | "
            f"Output: {self.output_path}"
        )


@dataclass
class BatchConfig:
    """Configuration bundle for :class:`BatchUTMConverter`.

    Attributes:
        direction: ``"to_utm"`` reads latitude/longitude and appends
                   easting/northing/zone/hemisphere; ``"to_geographic"``
                   reads easting/northing/zone and appends
                   latitude/longitude.
        lat_col: Latitude column name (read for ``to_utm``, written for
                 ``to_geographic``).
        lon_col: Longitude column name.
        easting_col: Easting column name.
        northing_col: Northing column name.
        zone_col: Zone column name.
        hemisphere_col: Optional hemisphere column (``"N"``/``"S"``) read
                        by ``to_geographic``; rows default to ``"N"`` when
                        the column is absent.
        zone: Zone override applied to every row for ``to_utm``.
        output_format: Output file format.  One of ``"csv"`` or ``"geojson"``.
    """

    direction: Literal["to_utm", "to_geographic"] = "to_utm"
    lat_col: str = "latitude"
    lon_col: str = "longitude"
    easting_col: str = "easting"
    northing_col: str = "northing"
    zone_col: str = "zone"
    hemisphere_col: str = "hemisphere"
    zone: Optional[int] = None
    output_format: Literal["csv", "geojson"] = "csv"

    @property
    def source_columns(self) -> list[str]:
        if self.direction == "to_utm":
            return [self.lat_col, self.lon_col]
        return [self.easting_col, self.northing_col, self.zone_col]


# ---------------------------------------------------------------------------
# Main tool class
# ---------------------------------------------------------------------------


class BatchUTMConverter(GeoTool):
    """Convert every coordinate row of a CSV between lat/lon and UTM.

    Inherits the Template Method pipeline from :class:`~shared.python.GeoTool`:
    ``validate_inputs`` → ``process`` → ``_report_success``.

    Args:
        input_path: Path to the input CSV file.
        output_path: Path where the converted output will be written.
        config: A :class:`BatchConfig` with the direction, column names
                and output format.
        converter: Converter used for every row; a default WGS84
                   :class:`UTMConverter` when omitted.
        verbose: Enable DEBUG-level logging.  Defaults to ``False``.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        config: BatchConfig,
        *,
        converter: Optional[UTMConverter] = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, output_path, verbose=verbose)
        self.config: BatchConfig = config
        self.converter: UTMConverter = converter or UTMConverter()

        # Populated in process()
        self._result: BatchResult | None = None

    # ------------------------------------------------------------------
    # GeoTool abstract method implementations
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Validate the input file and configuration before processing.

        Checks:
        - Input file exists and has a ``.csv`` extension.
        - The direction and output format are known.
        - A zone override, if given, is an integer in 1–60.
        - Output directory is writable (created if absent).
        - The direction's source columns are present in the CSV header.

        Raises:
            InputValidationError: On any precondition failure.
            ColumnNotFoundError: If a source column is missing.
            OutputWriteError: If the output directory cannot be created.
        """
        Validators.assert_file_exists(self.input_path)
        Validators.assert_supported_extension(self.input_path, [".csv"])
        if self.config.direction not in ("to_utm", "to_geographic"):
            raise InputValidationError(
                f"Unknown direction '{self.config.direction}'. "
                "Use 'to_utm' or 'to_geographic'."
            )
        if self.config.output_format not in ("csv", "geojson"):
            raise InputValidationError(
                f"Unknown output format '{self.config.output_format}'. "
                "Use 'csv' or 'geojson'."
            )
        if self.config.zone is not None:
            Validators.assert_zone_valid(self.config.zone)
        Validators.assert_output_dir_writable(self.output_path)

        # Peek at the header row to confirm coordinate columns exist
        df_peek = pd.read_csv(self.input_path, nrows=0)
        Validators.assert_columns_exist(df_peek, self.config.source_columns)

        logger.debug("Inputs validated successfully.")

    def process(self) -> None:
        """Read the CSV, convert every row, and write the output file.

        Rows with null or non-numeric source values are dropped first;
        rows the converter rejects are dropped next.  Both are counted
        in :attr:`result`.

        Raises:
            OutputWriteError: If writing the output file fails.
        """
        df = pd.read_csv(self.input_path)
        original_len = len(df)

        df = self._drop_invalid_rows(df)
        if len(df) < original_len:
            logger.warning(
                "Dropped %d row(s) with null or non-numeric coordinate values.",
                original_len - len(df),
            )

        if self.config.direction == "to_utm":
            df, rejected = self._convert_to_utm(df)
        else:
            df, rejected = self._convert_to_geographic(df)
        if rejected:
            logger.warning(
                "Dropped %d row(s) rejected by the converter.", rejected
            )

        try:
            if self.config.output_format == "geojson":
                self._write_geojson(df)
            else:
                df.to_csv(self.output_path, index=False)
        except OSError as exc:
            raise OutputWriteError(str(self.output_path), str(exc)) from exc

        self._result = BatchResult(
            rows_processed=len(df),
            rows_skipped=original_len - len(df),
            direction=self.config.direction,
            output_path=self.output_path,
        )
        logger.info(self._result.summary())

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _drop_invalid_rows(self, df: pd.DataFrame) -> pd.DataFrame:
        """Drop rows where any source column is null or non-numeric."""
        mask = pd.Series(True, index=df.index)
        for col in self.config.source_columns:
            numeric = pd.to_numeric(df[col], errors="coerce")
            df[col] = numeric
            mask &= numeric.notna()
        return df[mask].copy()

    def _convert_to_utm(self, df: pd.DataFrame) -> tuple[pd.DataFrame, int]:
        cfg = self.config
        keep: list[bool] = []
        eastings: list[float] = []
        northings: list[float] = []
        zones: list[int] = []
        hemispheres: list[str] = []

        for lat, lon in zip(df[cfg.lat_col], df[cfg.lon_col]):
            try:
                utm = self.converter.geographic_to_utm(
                    GeographicCoordinate(float(lat), float(lon)), cfg.zone
                )
            except InvalidInputError as exc:
                logger.debug("Skipping row: %s", exc.message)
                keep.append(False)
                continue
            keep.append(True)
            eastings.append(utm.easting)
            northings.append(utm.northing)
            zones.append(utm.zone)
            hemispheres.append(utm.hemisphere)

        out = df.loc[keep].copy()
        out[cfg.easting_col] = eastings
        out[cfg.northing_col] = northings
        out[cfg.zone_col] = zones
        out[cfg.hemisphere_col] = hemispheres
        return out, keep.count(False)

    def _convert_to_geographic(self, df: pd.DataFrame) -> tuple[pd.DataFrame, int]:
        cfg = self.config
        if cfg.hemisphere_col in df.columns:
            hemis = df[cfg.hemisphere_col].fillna("N").astype(str).str.upper()
        else:
            hemis = pd.Series("N", index=df.index)

        keep: list[bool] = []
        lats: list[float] = []
        lons: list[float] = []

        rows = zip(df[cfg.easting_col], df[cfg.northing_col], df[cfg.zone_col], hemis)
        for easting, northing, zone, hemi in rows:
            try:
                point = self.converter.utm_to_geographic(
                    UTMCoordinate(float(easting), float(northing), zone, hemi)  # type: ignore[arg-type]
                )
            except (InvalidInputError, SingularityError) as exc:
                logger.debug("Skipping row: %s", exc.message)
                keep.append(False)
                continue
            keep.append(True)
            lats.append(point.latitude)
            lons.append(point.longitude)

        out = df.loc[keep].copy()
        out[cfg.lat_col] = lats
        out[cfg.lon_col] = lons
        return out, keep.count(False)

    def _write_geojson(self, df: pd.DataFrame) -> None:
        """Serialise the DataFrame as a GeoJSON FeatureCollection.

        Latitude/longitude become the Point ``geometry`` of each Feature.
        All remaining columns are stored in the ``properties`` dict.

        Args:
            df: DataFrame with converted coordinate values.
        """
        lon_col = self.config.lon_col
        lat_col = self.config.lat_col
        prop_cols = [c for c in df.columns if c not in (lon_col, lat_col)]

        features = []
        for _, row in df.iterrows():
            feature = {
                "type": "Feature",
                "geometry": {
                    "type": "Point",
                    "coordinates": [row[lon_col], row[lat_col]],
                },
                "properties": {c: row[c] for c in prop_cols},
            }
            features.append(feature)

        geojson = {"type": "FeatureCollection", "features": features}

        with open(self.output_path, "w", encoding="utf-8") as fh:
            json.dump(geojson, fh, indent=2, default=str)

    @property
    def result(self) -> BatchResult | None:
        """The :class:`BatchResult` from the last :meth:`run` call.

        Returns ``None`` if :meth:`run` has not been called yet.
        """
        return self._result
