"""Area port - Abstraction over externally defined boundary polygons."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.geometry import Point, Rectangle


class AreaPort(Protocol):
    """Port for a region made of one or more closed rings.

    Coordinates are geographic: x is the longitude, y the latitude.
    Implementation: adapters/readers/osm_poly.py
    """

    def bounding_box(self) -> Rectangle:
        """Return the bounding box of all rings."""
        ...

    def rings(self) -> Sequence[Sequence[Point]]:
        """Return the rings, each a sequence of (longitude, latitude) points."""
        ...
