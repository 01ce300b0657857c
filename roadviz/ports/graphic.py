"""Graphic port - Abstraction over vector and raster output formats.

A graphic is created for one output file, with a physical size and the
clip rectangle (in projected coordinates) that maps onto the page. The
renderer owns it for the whole render pass and closes it at the end,
which flushes the output. A failed pass aborts it instead, so no
partial output is left behind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.geometry import Point
    from ..domain.models import Color


class GraphicPort(Protocol):
    """Port for drawing primitives.

    Implementations:
    - adapters/graphics/matplotlib_graphic.py (PDF, PNG, SVG)
    - adapters/graphics/folium_graphic.py (HTML)
    """

    def set_color(self, color: Color) -> None:
        """Set the color used by subsequent primitives."""
        ...

    def set_line_width(self, width: float) -> None:
        """Set the line width, in points, used by subsequent primitives."""
        ...

    def draw_line(self, src: Point, dst: Point) -> None:
        """Draw a straight line between two projected points."""
        ...

    def draw_polygon(self, points: Sequence[Point]) -> None:
        """Draw the outline of a closed polygon."""
        ...

    def new_page(self) -> None:
        """Finish the current page and start a new one."""
        ...

    def close(self) -> None:
        """Flush all pages to the output and release resources."""
        ...

    def abort(self) -> None:
        """Discard all pages and remove any output already written."""
        ...
