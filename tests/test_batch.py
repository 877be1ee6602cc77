"""
Tests — Batch UTM Converter
============================
Unit tests for :class:`~src.utm_converter.batch.BatchUTMConverter`.

Test strategy:
- Build minimal in-memory CSV inputs using ``tmp_path`` fixtures.
- Assert converted values and skipped-row counts.
- Assert that validation errors are raised for bad inputs.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from src.utm_converter.batch import BatchConfig, BatchResult, BatchUTMConverter
from shared.python.exceptions import (
    ColumnNotFoundError,
    InputValidationError,
    InvalidInputError,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def latlon_csv(tmp_path: Path) -> Path:
    """Write a small CSV of city coordinates and return the path."""
    csv_path = tmp_path / "cities.csv"
    df = pd.DataFrame(
        {
            "latitude": [51.5074, 40.7128, -33.8688],
            "longitude": [-0.1278, -74.0060, 151.2093],
            "name": ["London", "New York", "Sydney"],
        }
    )
    df.to_csv(csv_path, index=False)
    return csv_path


@pytest.fixture()
def utm_csv(tmp_path: Path) -> Path:
    """Write a small CSV of UTM positions in zone 31 and return the path."""
    csv_path = tmp_path / "positions.csv"
    df = pd.DataFrame(
        {
            "easting": [500_000.0, 450_000.0, 550_000.0],
            "northing": [4_649_776.0, 5_000_000.0, 8_000_000.0],
            "zone": [31, 31, 31],
            "hemisphere": ["N", "N", "S"],
        }
    )
    df.to_csv(csv_path, index=False)
    return csv_path


# ---------------------------------------------------------------------------
# to_utm
# ---------------------------------------------------------------------------


class TestBatchToUTM:
    def test_csv_output_created(self, tmp_path: Path, latlon_csv: Path) -> None:
        output = tmp_path / "out" / "cities_utm.csv"
        BatchUTMConverter(latlon_csv, output, BatchConfig()).run()
        assert output.exists(), "Output CSV was not created."

    def test_columns_appended(self, tmp_path: Path, latlon_csv: Path) -> None:
        output = tmp_path / "cities_utm.csv"
        BatchUTMConverter(latlon_csv, output, BatchConfig()).run()
        df = pd.read_csv(output)
        assert {"easting", "northing", "zone", "hemisphere", "name"} <= set(df.columns)
        assert df["zone"].tolist() == [30, 18, 56]
        assert df["hemisphere"].tolist() == ["N", "N", "S"]

    def test_london_values(self, tmp_path: Path, latlon_csv: Path) -> None:
        output = tmp_path / "cities_utm.csv"
        BatchUTMConverter(latlon_csv, output, BatchConfig()).run()
        london = pd.read_csv(output).iloc[0]
        assert london["easting"] == pytest.approx(699_316.4, abs=2.0)
        assert london["northing"] == pytest.approx(5_710_164.0, abs=3.0)

    def test_zone_override(self, tmp_path: Path, latlon_csv: Path) -> None:
        output = tmp_path / "cities_utm.csv"
        BatchUTMConverter(latlon_csv, output, BatchConfig(zone=31)).run()
        assert set(pd.read_csv(output)["zone"]) == {31}

    def test_result_object_populated(self, tmp_path: Path, latlon_csv: Path) -> None:
        output = tmp_path / "cities_utm.csv"
        tool = BatchUTMConverter(latlon_csv, output, BatchConfig())
        assert tool.result is None  # not yet run
        tool.run()
        assert isinstance(tool.result, BatchResult)
        assert tool.result.rows_processed == 3
        assert tool.result.rows_skipped == 0
        assert "to_utm" in tool.result.summary()

    def test_null_and_invalid_rows_skipped(self, tmp_path: Path) -> None:
        """Null, non-numeric and out-of-range rows are skipped, not fatal."""
        csv_path = tmp_path / "messy.csv"
        pd.DataFrame(
            {
                "latitude": ["10.0", None, "abc", "95.0", "-20.0"],
                "longitude": ["20.0", "20.0", "20.0", "20.0", "30.0"],
            }
        ).to_csv(csv_path, index=False)

        output = tmp_path / "messy_utm.csv"
        tool = BatchUTMConverter(csv_path, output, BatchConfig())
        tool.run()

        assert tool.result is not None
        assert tool.result.rows_processed == 2
        assert tool.result.rows_skipped == 3
        assert len(pd.read_csv(output)) == 2

    def test_geojson_output(self, tmp_path: Path, latlon_csv: Path) -> None:
        output = tmp_path / "cities.geojson"
        BatchUTMConverter(latlon_csv, output, BatchConfig(output_format="geojson")).run()

        with open(output) as fh:
            geo = json.load(fh)

        assert geo["type"] == "FeatureCollection"
        assert len(geo["features"]) == 3
        first = geo["features"][0]
        assert first["geometry"]["coordinates"] == pytest.approx([-0.1278, 51.5074])
        assert first["properties"]["name"] == "London"
        assert "easting" in first["properties"]


# ---------------------------------------------------------------------------
# to_geographic
# ---------------------------------------------------------------------------


class TestBatchToGeographic:
    def test_latitude_longitude_appended(self, tmp_path: Path, utm_csv: Path) -> None:
        output = tmp_path / "positions_ll.csv"
        cfg = BatchConfig(direction="to_geographic")
        BatchUTMConverter(utm_csv, output, cfg).run()

        df = pd.read_csv(output)
        assert len(df) == 3
        assert df.loc[0, "longitude"] == pytest.approx(3.0, abs=1e-9)
        assert 41.9 < df.loc[0, "latitude"] < 42.1
        assert df.loc[1, "longitude"] < 3.0
        assert df.loc[2, "latitude"] < 0.0

    def test_round_trip_through_files(self, tmp_path: Path, latlon_csv: Path) -> None:
        utm_out = tmp_path / "utm.csv"
        BatchUTMConverter(latlon_csv, utm_out, BatchConfig()).run()

        # Drop the original coordinates so they are rebuilt from UTM
        pd.read_csv(utm_out).drop(columns=["latitude", "longitude"]).to_csv(utm_out, index=False)

        back = tmp_path / "back.csv"
        BatchUTMConverter(utm_out, back, BatchConfig(direction="to_geographic")).run()

        df = pd.read_csv(back)
        assert df["latitude"].tolist() == pytest.approx([51.5074, 40.7128, -33.8688], abs=1e-6)
        assert df["longitude"].tolist() == pytest.approx([-0.1278, -74.0060, 151.2093], abs=1e-6)

    def test_missing_hemisphere_column_defaults_north(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "no_hemi.csv"
        pd.DataFrame({"easting": [500_000.0], "northing": [0.0], "zone": [31]}).to_csv(
            csv_path, index=False
        )
        output = tmp_path / "no_hemi_ll.csv"
        BatchUTMConverter(csv_path, output, BatchConfig(direction="to_geographic")).run()
        row = pd.read_csv(output).iloc[0]
        assert row["latitude"] == pytest.approx(0.0, abs=1e-12)

    def test_out_of_envelope_rows_skipped(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "bad_utm.csv"
        pd.DataFrame(
            {"easting": [500_000.0, 50_000.0], "northing": [0.0, 0.0], "zone": [31, 31]}
        ).to_csv(csv_path, index=False)

        tool = BatchUTMConverter(
            csv_path, tmp_path / "bad_ll.csv", BatchConfig(direction="to_geographic")
        )
        tool.run()
        assert tool.result is not None
        assert tool.result.rows_processed == 1
        assert tool.result.rows_skipped == 1

    def test_polar_rows_skipped(self, tmp_path: Path) -> None:
        csv_path = tmp_path / "polar.csv"
        pd.DataFrame(
            {"easting": [500_000.0, 600_000.0], "northing": [0.0, 9_997_964.9], "zone": [31, 31]}
        ).to_csv(csv_path, index=False)

        tool = BatchUTMConverter(
            csv_path, tmp_path / "polar_ll.csv", BatchConfig(direction="to_geographic")
        )
        tool.run()
        assert tool.result is not None
        assert tool.result.rows_processed == 1
        assert tool.result.rows_skipped == 1


# ---------------------------------------------------------------------------
# Validation error tests
# ---------------------------------------------------------------------------


class TestBatchValidation:
    def test_missing_input_file_raises(self, tmp_path: Path) -> None:
        tool = BatchUTMConverter(
            tmp_path / "does_not_exist.csv", tmp_path / "out.csv", BatchConfig()
        )
        with pytest.raises(InputValidationError):
            tool.run()

    def test_wrong_extension_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "points.txt"
        path.write_text("latitude,longitude\n1,2\n")
        with pytest.raises(InputValidationError):
            BatchUTMConverter(path, tmp_path / "out.csv", BatchConfig()).run()

    def test_missing_coordinate_column_raises(self, tmp_path: Path, latlon_csv: Path) -> None:
        cfg = BatchConfig(lat_col="lat")  # ← column does not exist in latlon_csv
        with pytest.raises(ColumnNotFoundError):
            BatchUTMConverter(latlon_csv, tmp_path / "out.csv", cfg).run()

    def test_missing_zone_column_raises(self, tmp_path: Path, latlon_csv: Path) -> None:
        cfg = BatchConfig(direction="to_geographic")
        with pytest.raises(ColumnNotFoundError):
            BatchUTMConverter(latlon_csv, tmp_path / "out.csv", cfg).run()

    def test_invalid_zone_override_raises(self, tmp_path: Path, latlon_csv: Path) -> None:
        with pytest.raises(InvalidInputError):
            BatchUTMConverter(latlon_csv, tmp_path / "out.csv", BatchConfig(zone=99)).run()

    def test_unknown_direction_raises(self, tmp_path: Path, latlon_csv: Path) -> None:
        cfg = BatchConfig(direction="sideways")  # type: ignore[arg-type]
        with pytest.raises(InputValidationError):
            BatchUTMConverter(latlon_csv, tmp_path / "out.csv", cfg).run()
