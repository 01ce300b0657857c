"""Geometric primitives: geographic coordinates, projected points and boxes.

Drawing happens in Web Mercator space. Vertices carry a LatLng, and
everything handed to a graphic backend is a projected Point.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

# Radius of the sphere used by the Web Mercator projection, in meters.
WEB_MERCATOR_RADIUS = 6378137.0

# Latitude at which Web Mercator maps the world onto a square.
MAX_MERCATOR_LATITUDE = 85.051128779806604


@dataclass(frozen=True, slots=True)
class Point:
    """A point in the (projected) plane."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True, slots=True)
class LatLng:
    """WGS 84 coordinates in degrees."""

    latitude: float = 0.0
    longitude: float = 0.0

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    @classmethod
    def unchecked(cls, latitude: float, longitude: float) -> LatLng:
        """Build a LatLng without range validation.

        Graph tables may carry coordinates in other reference systems;
        those are stored as read and projected as-is.
        """
        lat_lng = object.__new__(cls)
        object.__setattr__(lat_lng, "latitude", latitude)
        object.__setattr__(lat_lng, "longitude", longitude)
        return lat_lng

    def web_mercator_projection(self) -> Point:
        """Project onto the Web Mercator plane (EPSG:3857), in meters."""
        lat = max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, self.latitude))
        x = WEB_MERCATOR_RADIUS * math.radians(self.longitude)
        y = WEB_MERCATOR_RADIUS * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
        return Point(x, y)


def inverse_web_mercator(point: Point) -> LatLng:
    """Map a Web Mercator point back to geographic coordinates."""
    longitude = math.degrees(point.x / WEB_MERCATOR_RADIUS)
    latitude = math.degrees(2 * math.atan(math.exp(point.y / WEB_MERCATOR_RADIUS)) - math.pi / 2)
    return LatLng.unchecked(latitude, longitude)


@dataclass
class Rectangle:
    """An axis-aligned bounding box, empty until the first point is added."""

    _min: Optional[Point] = field(default=None, repr=False)
    _max: Optional[Point] = field(default=None, repr=False)

    @classmethod
    def around(cls, points: Iterable[Point]) -> Rectangle:
        box = cls()
        for p in points:
            box.extend(p)
        return box

    @property
    def is_empty(self) -> bool:
        return self._min is None

    @property
    def south_west(self) -> Point:
        if self._min is None:
            raise ValueError("empty rectangle has no corners")
        return self._min

    @property
    def north_east(self) -> Point:
        if self._max is None:
            raise ValueError("empty rectangle has no corners")
        return self._max

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.north_east.x - self.south_west.x

    @property
    def height(self) -> float:
        return 0.0 if self.is_empty else self.north_east.y - self.south_west.y

    def extend(self, point: Point) -> None:
        """Grow the box so that it contains the given point."""
        if self._min is None or self._max is None:
            self._min = point
            self._max = point
            return
        self._min = Point(min(self._min.x, point.x), min(self._min.y, point.y))
        self._max = Point(max(self._max.x, point.x), max(self._max.y, point.y))

    def contains(self, point: Point) -> bool:
        if self._min is None or self._max is None:
            return False
        return (
            self._min.x <= point.x <= self._max.x
            and self._min.y <= point.y <= self._max.y
        )
