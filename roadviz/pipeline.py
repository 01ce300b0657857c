"""High-level orchestration of a render run.

The pipeline is organized in several stages:

1. Network loading (CSV tables -> RoadNetwork, dense edge IDs).
2. Optional network fixup (outlier cut + largest SCC).
3. Reading and validating flow, demand and boundary inputs.
4. Viewport computation and graphic backend selection.
5. Drawing, then closing the backend (which writes the output). A
   failure while drawing aborts the backend, which removes anything
   already written.

All inputs are read and validated before the backend is created, so a
run that fails leaves no half-drawn output behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .adapters.graphics import create_graphic
from .adapters.importers import CsvGraphImporter
from .adapters.readers import OsmPolyArea, read_flow_patterns, read_od_pairs, validate_od_pairs
from .config import AppConfig, get_config
from .domain.errors import RoadVizError
from .domain.models import FlowPatterns, ODPair
from .network import NetworkFixup, RoadNetwork, apply_fixup, get_fixup, load_network
from .services.renderer import RENDER_ATTRIBUTES, NetworkRenderer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class RenderRequest:
    """Everything one render run needs.

    Unset options fall back to the application configuration.

    Attributes:
        output_path: Where the graphic is written
        graph_path: Directory holding the vertex and edge tables
        format: Graphic format selector (PDF, PNG, SVG, HTML)
        width_cm: Physical width of the graphic
        height_cm: Physical height of the graphic
        clip_path: OSM POLY file the graphic is clipped to
        boundary_path: OSM POLY file whose rings are drawn
        demand_path: CSV file of OD pairs to draw
        flow_path: CSV file of flow patterns to draw
        fixup: Network fixup to apply (a name from KNOWN_FIXUPS or a NetworkFixup)
        period: Analysis period in hours for flow drawing
        draw_intermediates: Draw every iteration instead of first and last
    """

    output_path: PathLike
    graph_path: PathLike
    format: Optional[str] = None
    width_cm: Optional[float] = None
    height_cm: Optional[float] = None
    clip_path: Optional[PathLike] = None
    boundary_path: Optional[PathLike] = None
    demand_path: Optional[PathLike] = None
    flow_path: Optional[PathLike] = None
    fixup: Union[str, NetworkFixup, None] = None
    period: Optional[float] = None
    draw_intermediates: Optional[bool] = None


def _load(request: RenderRequest, config: AppConfig) -> Tuple[RoadNetwork, int]:
    """Load the network and apply the fixup, if any.

    Returns the network and the number of edges read, which is what the
    flow table must cover: flow rows are indexed by the edge IDs
    assigned before the fixup removed anything.
    """
    importer = CsvGraphImporter(Path(request.graph_path), config=config.importer)
    network = load_network(importer, RENDER_ATTRIBUTES, name=str(request.graph_path))
    num_edges = network.num_edges
    if request.fixup is not None:
        fixup = get_fixup(request.fixup) if isinstance(request.fixup, str) else request.fixup
        network = apply_fixup(network, fixup)
    return network, num_edges


def draw_network(request: RenderRequest, config: Optional[AppConfig] = None) -> Path:
    """Run one render pass and return the path of the written graphic.

    Raises:
        RoadVizError: On any input, configuration or rendering failure.
            The error is logged before it propagates.
    """
    config = config or get_config()
    render_config = config.render.model_copy(
        update={
            key: value
            for key, value in (
                ("format", request.format),
                ("width_cm", request.width_cm),
                ("height_cm", request.height_cm),
                ("period", request.period),
                ("draw_intermediates", request.draw_intermediates),
            )
            if value is not None
        }
    )
    output_path = Path(request.output_path)

    try:
        network, num_edges = _load(request, config)

        flows: Optional[FlowPatterns] = None
        demand: Optional[List[ODPair]] = None
        boundary: Optional[OsmPolyArea] = None
        if request.flow_path is not None:
            flows = read_flow_patterns(request.flow_path, num_edges)
        else:
            if request.demand_path is not None:
                demand = read_od_pairs(request.demand_path)
                validate_od_pairs(demand, network.num_vertices)
            if request.boundary_path is not None:
                boundary = OsmPolyArea.from_file(request.boundary_path)

        clip_area = OsmPolyArea.from_file(request.clip_path) if request.clip_path else None
        renderer = NetworkRenderer(config=render_config)
        viewport = renderer.compute_viewport(network, clip_area)

        graphic = create_graphic(
            render_config.format,
            output_path,
            render_config.width_cm,
            render_config.height_cm,
            viewport,
            render_config.dpi,
        )
        try:
            renderer.render(graphic, network, boundary=boundary, demand=demand, flows=flows)
            graphic.close()
        except Exception:
            graphic.abort()
            raise
    except RoadVizError as e:
        logger.error(
            "Render run failed",
            extra={"error": str(e), "error_type": type(e).__name__},
        )
        raise

    logger.info("Render run complete", extra={"output_path": str(output_path)})
    return output_path
