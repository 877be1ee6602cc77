"""
Tests — utm-convert CLI
========================
Exercises the Click commands through :class:`click.testing.CliRunner`.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
from click.testing import CliRunner

from src.utm_converter.cli import main


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


class TestPointCommands:
    def test_to_utm(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["to-utm", "--lat", "51.5074", "--lon=-0.1278"])
        assert result.exit_code == 0, result.output
        zone, easting, northing = result.output.split()
        assert zone == "30N"
        assert float(easting) == pytest.approx(699_316.4, abs=2.0)
        assert float(northing) == pytest.approx(5_710_164.0, abs=3.0)

    def test_to_utm_zone_override(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main, ["to-utm", "--lat", "51.5074", "--lon=-0.1278", "--zone", "31"]
        )
        assert result.exit_code == 0, result.output
        assert result.output.split()[0] == "31N"

    def test_to_utm_southern(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["to-utm", "--lat=-33.8688", "--lon", "151.2093"])
        assert result.exit_code == 0, result.output
        assert result.output.split()[0] == "56S"

    def test_to_utm_invalid_latitude(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["to-utm", "--lat", "91", "--lon", "0"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_to_geographic(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main, ["to-geographic", "--easting", "500000", "--northing", "0", "--zone", "31"]
        )
        assert result.exit_code == 0, result.output
        lat, lon = (float(v) for v in result.output.split())
        assert lat == pytest.approx(0.0, abs=1e-8)
        assert lon == pytest.approx(3.0, abs=1e-8)

    def test_to_geographic_south(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main,
            ["to-geographic", "--easting", "334000", "--northing", "6251000",
             "--zone", "56", "--south"],
        )
        assert result.exit_code == 0, result.output
        lat, _ = (float(v) for v in result.output.split())
        assert -34.5 < lat < -33.5

    def test_to_geographic_invalid_easting(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main, ["to-geographic", "--easting", "50000", "--northing", "0", "--zone", "31"]
        )
        assert result.exit_code == 1
        assert "easting" in result.output


class TestBatchCommand:
    def test_batch_to_utm(self, runner: CliRunner, tmp_path: Path) -> None:
        src_csv = tmp_path / "in.csv"
        pd.DataFrame({"latitude": [51.5074], "longitude": [-0.1278]}).to_csv(src_csv, index=False)
        out = tmp_path / "out.csv"

        result = runner.invoke(main, ["batch", "-i", str(src_csv), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "Converted 1 rows" in result.output
        assert pd.read_csv(out)["zone"].tolist() == [30]

    def test_batch_missing_column(self, runner: CliRunner, tmp_path: Path) -> None:
        src_csv = tmp_path / "in.csv"
        pd.DataFrame({"lat": [1.0], "lon": [2.0]}).to_csv(src_csv, index=False)

        result = runner.invoke(
            main, ["batch", "-i", str(src_csv), "-o", str(tmp_path / "out.csv")]
        )

        assert result.exit_code == 1
        assert "Column 'latitude' not found" in result.output


class TestGridCommand:
    def test_grid_geojson(self, runner: CliRunner, tmp_path: Path) -> None:
        out = tmp_path / "grid.geojson"
        result = runner.invoke(
            main,
            ["grid", "--easting", "485000", "--northing", "4649000", "--zone", "31",
             "--size", "1000", "--cols", "2", "--rows", "3", "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        with open(out) as fh:
            assert len(json.load(fh)["features"]) == 6

    def test_grid_bad_size(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            main,
            ["grid", "--easting", "485000", "--northing", "4649000", "--zone", "31",
             "--size", "0", "--cols", "2", "--rows", "3", "-o", str(tmp_path / "g.html")],
        )
        assert result.exit_code == 1
        assert "cell_size" in result.output
