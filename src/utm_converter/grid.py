"""
grid.py
=======
Rectangular UTM grids laid out in metres and drawn in latitude/longitude.

``UTMGrid`` starts at a south-west UTM origin and steps ``cell_size``
metres east per column and north per row.  Each cell's south-west and
north-east corners are inverted to geographic coordinates, so cells can
be exported as GeoJSON or drawn as rectangles on a folium map.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import folium

from shared.python.exceptions import OutputWriteError
from shared.python.validators import Validators
from src.utm_converter.converter import (
    GeographicCoordinate,
    UTMConverter,
    UTMCoordinate,
)

logger = logging.getLogger("geoutm.utm_converter.grid")


@dataclass
class GridStyle:
    """Stroke and fill options applied to every cell rectangle."""

    stroke_color: str = "#000"
    stroke_opacity: float = 0.8
    stroke_weight: float = 0.1
    fill_color: str = "#FFF"
    fill_opacity: float = 0.2


@dataclass(frozen=True)
class GridCell:
    """One grid cell, identified by its row and column from the origin."""

    row: int
    col: int
    south_west: GeographicCoordinate
    north_east: GeographicCoordinate

    @property
    def bounds(self) -> list[list[float]]:
        """``[[south, west], [north, east]]`` as Leaflet expects."""
        return [
            [self.south_west.latitude, self.south_west.longitude],
            [self.north_east.latitude, self.north_east.longitude],
        ]

    def to_geojson_feature(self) -> dict:
        sw, ne = self.south_west, self.north_east
        ring = [
            [sw.longitude, sw.latitude],
            [ne.longitude, sw.latitude],
            [ne.longitude, ne.latitude],
            [sw.longitude, ne.latitude],
            [sw.longitude, sw.latitude],
        ]
        return {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [ring]},
            "properties": {"row": self.row, "col": self.col},
        }


class UTMGrid:
    """A ``cols`` × ``rows`` grid of square UTM cells.

    Parameters
    ----------
    origin:
        South-west corner of the grid.  Its zone and hemisphere apply to
        every cell.
    cell_size:
        Cell edge length in metres.
    cols, rows:
        Number of cells eastwards and northwards.
    converter:
        Converter used to invert the corners; a default WGS84
        ``UTMConverter`` when omitted.
    """

    def __init__(
        self,
        origin: UTMCoordinate,
        cell_size: float,
        cols: int,
        rows: int,
        converter: Optional[UTMConverter] = None,
    ) -> None:
        Validators.assert_positive(cell_size, "cell_size")
        Validators.assert_positive(cols, "cols")
        Validators.assert_positive(rows, "rows")
        self.origin = origin
        self.cell_size = float(cell_size)
        self.cols = int(cols)
        self.rows = int(rows)
        self.converter = converter or UTMConverter()

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------

    def _corner(self, col: int, row: int) -> GeographicCoordinate:
        return self.converter.utm_to_geographic(
            UTMCoordinate(
                easting=self.origin.easting + self.cell_size * col,
                northing=self.origin.northing + self.cell_size * row,
                zone=self.origin.zone,
                hemisphere=self.origin.hemisphere,
            )
        )

    def cells(self) -> Iterator[GridCell]:
        """Yield every cell, row by row from the south, west to east.

        Raises
        ------
        InvalidInputError
            If a cell corner falls outside the valid UTM envelope.
        """
        for r in range(self.rows):
            for c in range(self.cols):
                yield GridCell(
                    row=r,
                    col=c,
                    south_west=self._corner(c, r),
                    north_east=self._corner(c + 1, r + 1),
                )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_geojson(self) -> dict:
        """Return the grid as a GeoJSON FeatureCollection of polygons."""
        features = [cell.to_geojson_feature() for cell in self.cells()]
        return {"type": "FeatureCollection", "features": features}

    def add_to_map(self, fmap: folium.Map, style: Optional[GridStyle] = None) -> int:
        """Draw every cell on *fmap* as a ``folium.Rectangle``.

        Returns the number of rectangles added.
        """
        style = style or GridStyle()
        count = 0
        for cell in self.cells():
            folium.Rectangle(
                bounds=cell.bounds,
                color=style.stroke_color,
                opacity=style.stroke_opacity,
                weight=style.stroke_weight,
                fill=True,
                fill_color=style.fill_color,
                fill_opacity=style.fill_opacity,
                tooltip=f"row {cell.row}, col {cell.col}",
            ).add_to(fmap)
            count += 1
        logger.debug("Added %d grid cell(s) to map.", count)
        return count

    def render(
        self,
        style: Optional[GridStyle] = None,
        tiles: str = "CartoDB positron",
    ) -> folium.Map:
        """Return a new Leaflet map fitted to the grid with all cells drawn."""
        sw = self._corner(0, 0)
        ne = self._corner(self.cols, self.rows)
        centre = [(sw.latitude + ne.latitude) / 2.0, (sw.longitude + ne.longitude) / 2.0]
        fmap = folium.Map(location=centre, tiles=tiles, zoom_start=13)
        self.add_to_map(fmap, style)
        fmap.fit_bounds([[sw.latitude, sw.longitude], [ne.latitude, ne.longitude]])
        return fmap

    def save(self, output_path: Path, style: Optional[GridStyle] = None) -> Path:
        """Write the grid to *output_path*.

        ``.html`` writes an interactive folium map; ``.geojson`` and
        ``.json`` write a FeatureCollection.

        Raises
        ------
        InputValidationError
            If the extension is not supported.
        OutputWriteError
            If the file cannot be written.
        """
        output_path = Path(output_path)
        Validators.assert_supported_extension(output_path, [".html", ".geojson", ".json"])
        Validators.assert_output_dir_writable(output_path)

        # Nothing is written unless every corner converts.
        if output_path.suffix.lower() == ".html":
            content = self.render(style).get_root().render()
        else:
            content = json.dumps(self.to_geojson(), indent=2)

        try:
            with open(output_path, "w", encoding="utf-8") as fh:
                fh.write(content)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

        logger.info(
            "Wrote %d×%d grid (%.0f m cells) → %s",
            self.cols, self.rows, self.cell_size, output_path,
        )
        return output_path

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(origin={self.origin!r}, "
            f"cell_size={self.cell_size!r}, cols={self.cols}, rows={self.rows})"
        )
