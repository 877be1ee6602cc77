"""
UTM Converter — CLI Entry Point
================================
Command-line interface built with Click.  Installed as the ``utm-convert``
command via ``pyproject.toml``.

Usage:
    utm-convert to-utm --lat 51.5074 --lon -0.1278
    utm-convert to-geographic --easting 699316 --northing 5710164 --zone 30
    utm-convert batch --input data/points.csv --output out/points_utm.csv
    utm-convert grid --easting 500000 --northing 4649776 --zone 31 \\
                     --size 1000 --cols 5 --rows 5 --output out/grid.html

Run ``utm-convert --help`` for a full list of commands.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, TypeVar

import click

from shared.python.base_tool import configure_logging
from shared.python.exceptions import GeoUTMError
from src.utm_converter.batch import BatchConfig, BatchUTMConverter
from src.utm_converter.converter import (
    GeographicCoordinate,
    UTMCoordinate,
    geographic_to_utm,
    utm_to_geographic,
)
from src.utm_converter.grid import GridStyle, UTMGrid

T = TypeVar("T")


def _run_or_exit(action: Callable[[], T]) -> T:
    """Run *action*; user-facing errors print a clean message, no stack trace."""
    try:
        return action()
    except GeoUTMError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)


_verbose_option = click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug-level logging output.",
)


@click.group(
    name="utm-convert",
    help="Convert coordinates between WGS84 latitude/longitude and UTM.",
)
def main() -> None:
    """CLI entry point — groups the conversion commands."""


# ---------------------------------------------------------------------------
# Single-point conversions
# ---------------------------------------------------------------------------


@main.command("to-utm", help="Project one latitude/longitude pair to UTM.")
@click.option("--lat", "latitude", required=True, type=float, help="Latitude in decimal degrees.")
@click.option("--lon", "longitude", required=True, type=float, help="Longitude in decimal degrees.")
@click.option(
    "--zone",
    type=int,
    default=None,
    help="Force a UTM zone (1-60) instead of deriving it from the longitude.",
)
@_verbose_option
def to_utm(latitude: float, longitude: float, zone: int | None, verbose: bool) -> None:
    configure_logging(verbose)
    utm = _run_or_exit(
        lambda: geographic_to_utm(GeographicCoordinate(latitude, longitude), zone)
    )
    click.echo(f"{utm.zone}{utm.hemisphere} {utm.easting:.3f} {utm.northing:.3f}")


@main.command("to-geographic", help="Invert one UTM position to latitude/longitude.")
@click.option("--easting", required=True, type=float, help="Easting in metres.")
@click.option("--northing", required=True, type=float, help="Northing in metres.")
@click.option("--zone", required=True, type=int, help="UTM zone number (1-60).")
@click.option(
    "--south",
    is_flag=True,
    default=False,
    help="Northing carries the 10,000,000 m southern false northing.",
)
@_verbose_option
def to_geographic(
    easting: float, northing: float, zone: int, south: bool, verbose: bool
) -> None:
    configure_logging(verbose)
    coord = UTMCoordinate(easting, northing, zone, "S" if south else "N")
    point = _run_or_exit(lambda: utm_to_geographic(coord))
    click.echo(f"{point.latitude:.8f} {point.longitude:.8f}")


# ---------------------------------------------------------------------------
# Batch CSV
# ---------------------------------------------------------------------------


@main.command("batch", help="Convert every row of a CSV file.")
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Path to the input CSV file.",
)
@click.option(
    "--output", "-o",
    "output_path",
    required=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Path for the output file. Parent directories are created if absent.",
)
@click.option(
    "--direction",
    type=click.Choice(["to_utm", "to_geographic"], case_sensitive=False),
    default="to_utm",
    show_default=True,
    help="Conversion direction.",
)
@click.option("--lat-col", default="latitude", show_default=True, help="Latitude column.")
@click.option("--lon-col", default="longitude", show_default=True, help="Longitude column.")
@click.option("--easting-col", default="easting", show_default=True, help="Easting column.")
@click.option("--northing-col", default="northing", show_default=True, help="Northing column.")
@click.option("--zone-col", default="zone", show_default=True, help="Zone column.")
@click.option(
    "--zone",
    type=int,
    default=None,
    help="Force a UTM zone for every row (to_utm only).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["csv", "geojson"], case_sensitive=False),
    default="csv",
    show_default=True,
    help="Output file format.",
)
@_verbose_option
def batch(
    input_path: Path,
    output_path: Path,
    direction: str,
    lat_col: str,
    lon_col: str,
    easting_col: str,
    northing_col: str,
    zone_col: str,
    zone: int | None,
    output_format: str,
    verbose: bool,
) -> None:
    """Wires Click options into BatchUTMConverter."""
    config = BatchConfig(
        direction=direction.lower(),  # type: ignore[arg-type]
        lat_col=lat_col,
        lon_col=lon_col,
        easting_col=easting_col,
        northing_col=northing_col,
        zone_col=zone_col,
        zone=zone,
        output_format=output_format.lower(),  # type: ignore[arg-type]
    )
    tool = BatchUTMConverter(
        input_path=input_path,
        output_path=output_path,
        config=config,
        verbose=verbose,
    )
    _run_or_exit(tool.run)
    if tool.result is not None:
        click.echo(tool.result.summary())


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


@main.command("grid", help="Build a UTM cell grid and save it as an HTML map or GeoJSON.")
@click.option("--easting", required=True, type=float, help="Origin (south-west) easting.")
@click.option("--northing", required=True, type=float, help="Origin (south-west) northing.")
@click.option("--zone", required=True, type=int, help="UTM zone of the origin.")
@click.option("--south", is_flag=True, default=False, help="Origin northing uses the southern false northing.")
@click.option("--size", "cell_size", required=True, type=float, help="Cell size in metres.")
@click.option("--cols", required=True, type=int, help="Number of columns.")
@click.option("--rows", required=True, type=int, help="Number of rows.")
@click.option(
    "--output", "-o",
    "output_path",
    required=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Output file: .html for a folium map, .geojson/.json for GeoJSON.",
)
@click.option("--stroke-color", default="#000", show_default=True, help="Cell outline colour.")
@click.option("--fill-color", default="#FFF", show_default=True, help="Cell fill colour.")
@click.option("--stroke-opacity", default=0.8, show_default=True, type=float, help="Outline opacity.")
@click.option("--fill-opacity", default=0.2, show_default=True, type=float, help="Fill opacity.")
@_verbose_option
def grid(
    easting: float,
    northing: float,
    zone: int,
    south: bool,
    cell_size: float,
    cols: int,
    rows: int,
    output_path: Path,
    stroke_color: str,
    fill_color: str,
    stroke_opacity: float,
    fill_opacity: float,
    verbose: bool,
) -> None:
    configure_logging(verbose)
    style = GridStyle(
        stroke_color=stroke_color,
        stroke_opacity=stroke_opacity,
        fill_color=fill_color,
        fill_opacity=fill_opacity,
    )
    origin = UTMCoordinate(easting, northing, zone, "S" if south else "N")

    def _build_and_save() -> Path:
        return UTMGrid(origin, cell_size, cols, rows).save(output_path, style)

    saved = _run_or_exit(_build_and_save)
    click.echo(f"Wrote {cols}x{rows} grid to {saved}")


if __name__ == "__main__":
    main()
