"""Network renderer: draws a road network, its boundaries, travel demand
and flow patterns through a GraphicPort.

Two modes:

- static: every edge in a neutral color, optionally overlaid with
  boundary polygons and OD pairs;
- flow: one page per drawn iteration, edges colored by congestion band,
  lighter bands first so heavier congestion ends up on top.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..config import RenderConfig, get_config
from ..domain.attributes import CAPACITY, EDGE_ID, LAT_LNG, NUM_LANES, ROAD_GEOMETRY
from ..domain.errors import BoundaryFileError, ConfigurationError, FlowFileCorruptError
from ..domain.geometry import LatLng, Point, Rectangle
from ..domain.models import (
    KIT_BLACK,
    KIT_BLACK_15,
    KIT_GREEN,
    REDS_9CLASS,
    Color,
    FlowPatterns,
    ODPair,
    validate_od_pairs,
)
from ..domain.numbers import round_half_up
from ..network.graph import RoadNetwork
from ..ports.geometry import AreaPort
from ..ports.graphic import GraphicPort
from .congestion import CongestionClassifier

# The attributes a network must carry to be drawn.
RENDER_ATTRIBUTES = (LAT_LNG, CAPACITY, EDGE_ID, NUM_LANES, ROAD_GEOMETRY)

# Opacity of a single OD pair line; dense demand shows up as darker areas.
DEMAND_ALPHA = 3


def _project_lon_lat(point: Point) -> Point:
    return LatLng(point.y, point.x).web_mercator_projection()


@dataclass
class NetworkRenderer:
    """Draws networks and flow patterns onto a graphic.

    Attributes:
        config: Rendering configuration (line widths, period, pages)
        classifier: Congestion classifier; built from the config if omitted
        palette: Band j is drawn with palette[j + 1]
    """

    config: RenderConfig = field(default_factory=lambda: get_config().render)
    classifier: Optional[CongestionClassifier] = None
    palette: Sequence[Color] = REDS_9CLASS
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.classifier is None:
            self.classifier = CongestionClassifier(
                step_percent=self.config.band_step_percent,
                num_bands=len(self.palette) - 1,
            )
        if self.classifier.num_bands > len(self.palette) - 1:
            raise ConfigurationError(
                f"{self.classifier.num_bands} congestion bands need "
                f"{self.classifier.num_bands + 1} palette colors, got {len(self.palette)}",
                setting_name="palette",
            )

    @staticmethod
    def projected_coordinates(network: RoadNetwork) -> List[Point]:
        return [lat_lng.web_mercator_projection() for lat_lng in network.values(LAT_LNG)]

    def compute_viewport(
        self, network: RoadNetwork, clip_area: Optional[AreaPort] = None
    ) -> Rectangle:
        """Return the projected region the graphic is clipped to.

        Without a clip area this is the bounding box of all vertices;
        otherwise the projected bounding box of the area.
        """
        if clip_area is None:
            return Rectangle.around(self.projected_coordinates(network))

        box = clip_area.bounding_box()
        try:
            return Rectangle.around(
                [_project_lon_lat(box.south_west), _project_lon_lat(box.north_east)]
            )
        except ValueError as e:
            raise BoundaryFileError("clip region has invalid coordinates", cause=e)

    def draw_edge(
        self,
        graphic: GraphicPort,
        network: RoadNetwork,
        coordinates: Sequence[Point],
        edge: int,
        width: float,
    ) -> None:
        """Draw an edge along its road geometry, or straight if it has none."""
        graphic.set_line_width(network.value(NUM_LANES, edge) * width)
        src = coordinates[network.tails[edge]]
        dst = coordinates[network.heads[edge]]
        geometry = network.value(ROAD_GEOMETRY, edge)
        if not geometry:
            graphic.draw_line(src, dst)
            return
        points = [src] + [p.web_mercator_projection() for p in geometry] + [dst]
        for a, b in zip(points, points[1:]):
            graphic.draw_line(a, b)

    def draw_static(
        self,
        graphic: GraphicPort,
        network: RoadNetwork,
        boundary: Optional[AreaPort] = None,
        demand: Optional[Sequence[ODPair]] = None,
    ) -> None:
        """Draw the network, then optional boundaries and travel demand."""
        coordinates = self.projected_coordinates(network)

        self._logger.info("Drawing network", extra={"edges": network.num_edges})
        if boundary is not None or demand is not None:
            graphic.set_color(KIT_BLACK_15)
        for e in range(network.num_edges):
            self.draw_edge(graphic, network, coordinates, e, self.config.very_thin_line_width)
        graphic.set_line_width(self.config.thin_line_width)

        if boundary is not None:
            self._logger.info("Drawing boundaries")
            graphic.set_color(KIT_BLACK)
            try:
                polygons = [[_project_lon_lat(p) for p in ring] for ring in boundary.rings()]
            except ValueError as e:
                raise BoundaryFileError("boundary has invalid coordinates", cause=e)
            for polygon in polygons:
                graphic.draw_polygon(polygon)

        if demand is not None:
            self._logger.info("Drawing travel demand", extra={"od_pairs": len(demand)})
            validate_od_pairs(demand, network.num_vertices)
            graphic.set_color(KIT_GREEN.with_alpha(DEMAND_ALPHA))
            for pair in demand:
                graphic.draw_line(coordinates[pair.origin], coordinates[pair.destination])

    def scaled_capacities(self, network: RoadNetwork) -> List[int]:
        """Capacities over the analysis period, at least 1 vehicle."""
        return [
            max(round_half_up(self.config.period * capacity), 1)
            for capacity in network.values(CAPACITY)
        ]

    def iterations_to_draw(self, num_iterations: int) -> List[int]:
        return [
            i
            for i in range(1, num_iterations + 1)
            if self.config.draw_intermediates or i == 1 or i == num_iterations
        ]

    def draw_flows(
        self, graphic: GraphicPort, network: RoadNetwork, flows: FlowPatterns
    ) -> None:
        """Draw one page per selected iteration, edges colored by congestion."""
        assert self.classifier is not None
        edge_ids = network.values(EDGE_ID)
        for edge_id in edge_ids:
            if not 0 <= edge_id < flows.num_edges:
                raise FlowFileCorruptError(
                    f"flow file corrupt -- no flow for edge {edge_id}"
                )

        coordinates = self.projected_coordinates(network)
        capacities = self.scaled_capacities(network)
        iterations = self.iterations_to_draw(flows.num_iterations)

        for page, i in enumerate(iterations):
            self._logger.info(
                "Drawing flow pattern",
                extra={"iteration": i, "num_iterations": flows.num_iterations},
            )
            if page > 0:
                graphic.new_page()
            iteration_flows = flows.flows(i)
            edge_flows = [iteration_flows[edge_id] for edge_id in edge_ids]
            bands = self.classifier.classify_all(edge_flows, capacities)
            for j, edges in enumerate(bands):
                graphic.set_color(self.palette[j + 1])
                for e in edges:
                    self.draw_edge(graphic, network, coordinates, e, self.config.thin_line_width)

    def render(
        self,
        graphic: GraphicPort,
        network: RoadNetwork,
        *,
        boundary: Optional[AreaPort] = None,
        demand: Optional[Sequence[ODPair]] = None,
        flows: Optional[FlowPatterns] = None,
    ) -> None:
        if flows is None:
            self.draw_static(graphic, network, boundary=boundary, demand=demand)
        else:
            self.draw_flows(graphic, network, flows)
