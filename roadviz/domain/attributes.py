"""Typed vertex and edge attributes and the lookup protocol importers expose.

An Attribute describes one named, typed value attached to every vertex
or every edge, together with the default used when an import format
does not supply it. Importers publish the attributes they can compute
through an AttributeLookup; graph construction asks for any attribute
and silently receives the default for the ones a format lacks.

Example:
    lookup = AttributeLookup()
    lookup.provide(LENGTH, lambda: current_edge.length)
    lookup.value(LENGTH)     # the current edge's length
    lookup.value(NUM_LANES)  # 1, the declared default
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterator, List, Tuple

from .geometry import LatLng, Point

# A special value representing infinity.
INFTY = (2**31 - 1) // 2

# Special value representing an invalid vertex/edge ID.
INVALID_ID = -1


class AttributeScope(Enum):
    """Whether an attribute belongs to vertices or to edges."""

    VERTEX = auto()
    EDGE = auto()


@dataclass(frozen=True, slots=True)
class Attribute:
    """A named, typed per-vertex or per-edge value with a declared default.

    Attributes:
        name: Unique attribute name (e.g., 'length')
        scope: Whether the attribute is attached to vertices or edges
        value_type: Python type of the attribute's values
        default_factory: Builds the default value; called once per use so
            that mutable defaults are never shared between records
    """

    name: str
    scope: AttributeScope
    value_type: type
    default_factory: Callable[[], Any]

    def default(self) -> Any:
        """Return a fresh default value."""
        return self.default_factory()


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


VERTEX_ID = Attribute("vertex_id", AttributeScope.VERTEX, int, _constant(INVALID_ID))
LAT_LNG = Attribute("lat_lng", AttributeScope.VERTEX, LatLng, LatLng)
COORDINATE = Attribute("coordinate", AttributeScope.VERTEX, Point, Point)

LENGTH = Attribute("length", AttributeScope.EDGE, int, _constant(INFTY))
CAPACITY = Attribute("capacity", AttributeScope.EDGE, int, _constant(INFTY))
FREE_FLOW_SPEED = Attribute("free_flow_speed", AttributeScope.EDGE, int, _constant(INFTY))
TRAVEL_TIME = Attribute("travel_time", AttributeScope.EDGE, int, _constant(INFTY))
NUM_LANES = Attribute("num_lanes", AttributeScope.EDGE, int, _constant(1))
ROAD_GEOMETRY = Attribute("road_geometry", AttributeScope.EDGE, list, list)
EDGE_ID = Attribute("edge_id", AttributeScope.EDGE, int, _constant(INVALID_ID))

STANDARD_ATTRIBUTES: Tuple[Attribute, ...] = (
    VERTEX_ID,
    LAT_LNG,
    COORDINATE,
    LENGTH,
    CAPACITY,
    FREE_FLOW_SPEED,
    TRAVEL_TIME,
    NUM_LANES,
    ROAD_GEOMETRY,
    EDGE_ID,
)


@dataclass
class AttributeRegistry:
    """The set of attributes known to the application.

    New attributes are added with register(); everything that consumes
    attributes by name (graph construction, lookups) picks them up.
    """

    _attributes: Dict[str, Attribute] = field(default_factory=dict, repr=False)

    def register(self, attribute: Attribute) -> Attribute:
        if attribute.name in self._attributes:
            raise ValueError(f"Attribute already registered: {attribute.name!r}")
        self._attributes[attribute.name] = attribute
        return attribute

    def get(self, name: str) -> Attribute:
        try:
            return self._attributes[name]
        except KeyError:
            raise KeyError(f"Unknown attribute: {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._attributes.values())

    def __len__(self) -> int:
        return len(self._attributes)

    def vertex_attributes(self) -> List[Attribute]:
        return [a for a in self if a.scope is AttributeScope.VERTEX]

    def edge_attributes(self) -> List[Attribute]:
        return [a for a in self if a.scope is AttributeScope.EDGE]


def default_registry() -> AttributeRegistry:
    """Create a registry holding the standard attributes."""
    registry = AttributeRegistry()
    for attribute in STANDARD_ATTRIBUTES:
        registry.register(attribute)
    return registry


@dataclass
class AttributeLookup:
    """Maps attributes to accessors for the record an importer is positioned on.

    Attributes without a registered accessor resolve to their default.
    """

    _accessors: Dict[str, Callable[[], Any]] = field(default_factory=dict, repr=False)

    def provide(self, attribute: Attribute, accessor: Callable[[], Any]) -> None:
        self._accessors[attribute.name] = accessor

    def provides(self, attribute: Attribute) -> bool:
        return attribute.name in self._accessors

    def value(self, attribute: Attribute) -> Any:
        accessor = self._accessors.get(attribute.name)
        if accessor is None:
            return attribute.default()
        return accessor()
