"""Folium graphic adapter (HTML).

Draws onto an interactive Leaflet map. Projected points are mapped back
to geographic coordinates; each page becomes a toggleable layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import folium

from ...domain.errors import RenderingError
from ...domain.geometry import Point, Rectangle, inverse_web_mercator
from ...domain.models import KIT_BLACK, Color

PX_PER_CM = 96 / 2.54
PX_PER_POINT = 96 / 72

Location = Tuple[float, float]


def _location(point: Point) -> Location:
    lat_lng = inverse_web_mercator(point)
    return (lat_lng.latitude, lat_lng.longitude)


@dataclass
class FoliumGraphic:
    """Interactive HTML map graphic.

    This adapter implements GraphicPort using Folium.

    Attributes:
        output_path: HTML file to write
        width_cm: Width of the map element
        height_cm: Height of the map element
        clip: Region of the projected plane the map is fitted to
        tiles: Background tiles; None for a blank background
    """

    output_path: Path
    width_cm: float
    height_cm: float
    clip: Rectangle
    tiles: Optional[str] = "cartodbpositron"

    page_count: int = field(default=0, init=False)
    _map: folium.Map = field(init=False, repr=False)
    _layer: Optional[folium.FeatureGroup] = field(default=None, init=False, repr=False)
    _color: Color = field(default=KIT_BLACK, init=False, repr=False)
    _line_width: float = field(default=1.0, init=False, repr=False)
    _pending: List[List[Location]] = field(default_factory=list, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.output_path = Path(self.output_path)
        if self.clip.is_empty:
            raise RenderingError(
                "Cannot draw into an empty clip region",
                output_path=str(self.output_path),
                renderer_type="folium",
            )

        south_west = _location(self.clip.south_west)
        north_east = _location(self.clip.north_east)
        center = (
            (south_west[0] + north_east[0]) / 2,
            (south_west[1] + north_east[1]) / 2,
        )
        self._map = folium.Map(
            location=center,
            tiles=self.tiles,
            width=round(self.width_cm * PX_PER_CM),
            height=round(self.height_cm * PX_PER_CM),
            control_scale=True,
        )
        self._map.fit_bounds([south_west, north_east])
        self._start_page()

    def _start_page(self) -> None:
        self.page_count += 1
        self._layer = folium.FeatureGroup(
            name=f"Page {self.page_count}",
            show=self.page_count == 1,
        )
        self._layer.add_to(self._map)

    def set_color(self, color: Color) -> None:
        if color != self._color:
            self._flush_lines()
            self._color = color

    def set_line_width(self, width: float) -> None:
        if width != self._line_width:
            self._flush_lines()
            self._line_width = width

    @property
    def _weight(self) -> float:
        return max(1.0, self._line_width * PX_PER_POINT)

    def draw_line(self, src: Point, dst: Point) -> None:
        self._pending.append([_location(src), _location(dst)])

    def draw_polygon(self, points: Sequence[Point]) -> None:
        self._flush_lines()
        assert self._layer is not None
        folium.Polygon(
            locations=[_location(p) for p in points],
            color=self._color.hex,
            opacity=self._color.opacity,
            weight=self._weight,
            fill=False,
        ).add_to(self._layer)

    def _flush_lines(self) -> None:
        if not self._pending:
            return
        assert self._layer is not None
        folium.PolyLine(
            locations=self._pending,
            color=self._color.hex,
            opacity=self._color.opacity,
            weight=self._weight,
        ).add_to(self._layer)
        self._pending = []

    def new_page(self) -> None:
        self._flush_lines()
        self._start_page()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._flush_lines()
        if self.page_count > 1:
            folium.LayerControl(collapsed=False).add_to(self._map)

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self._map.save(str(self.output_path))
        except OSError as e:
            self.output_path.unlink(missing_ok=True)
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(self.output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.info(
            "Map rendered successfully",
            extra={"output_path": str(self.output_path), "pages": self.page_count},
        )

    def abort(self) -> None:
        """Drop the map; nothing reaches the disk before close()."""
        if self._closed:
            return
        self._closed = True
        self._pending = []
        self._logger.info("Map discarded", extra={"output_path": str(self.output_path)})

    def __enter__(self) -> FoliumGraphic:
        return self

    def __exit__(self, exc_type: object, *exc_info: object) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()
