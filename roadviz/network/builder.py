"""Format-agnostic graph construction.

build_network() drives any GraphImporterPort and asks it for every
requested attribute. Formats that lack an attribute answer with the
attribute's default, so the same routine serves every import format.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..domain.attributes import EDGE_ID, Attribute, AttributeScope
from ..domain.errors import UnresolvedEndpointError
from ..ports.importer import GraphImporterPort
from .graph import RoadNetwork

logger = logging.getLogger(__name__)


def build_network(
    importer: GraphImporterPort,
    attributes: Iterable[Attribute],
    assign_edge_ids: bool = True,
) -> RoadNetwork:
    """Read all vertices, then all edges, from an initialized importer.

    Args:
        importer: An importer on which init() has been called.
        attributes: The vertex and edge attributes to materialize.
        assign_edge_ids: Number the edges 0..m-1 in read order and store
            the numbers in the edge ID attribute.

    Returns:
        The materialized network.
    """
    attributes = list(attributes)
    vertex_attrs = [a for a in attributes if a.scope is AttributeScope.VERTEX]
    edge_attrs = [a for a in attributes if a.scope is AttributeScope.EDGE]
    if assign_edge_ids and EDGE_ID not in edge_attrs:
        edge_attrs.append(EDGE_ID)

    network = RoadNetwork(
        vertex_values={a.name: [] for a in vertex_attrs},
        edge_values={a.name: [] for a in edge_attrs},
    )

    while importer.next_vertex():
        if importer.vertex_id() != network.num_vertices:
            raise ValueError(
                f"importer produced vertex {importer.vertex_id()}, "
                f"expected {network.num_vertices}"
            )
        for attr in vertex_attrs:
            network.vertex_values[attr.name].append(importer.get_value(attr))
        network.num_vertices += 1

    while importer.next_edge():
        tail, head = importer.edge_tail(), importer.edge_head()
        for endpoint in (tail, head):
            if not 0 <= endpoint < network.num_vertices:
                raise UnresolvedEndpointError(
                    f"edge endpoint {endpoint} is not a vertex",
                    vertex_id=endpoint,
                )
        network.tails.append(tail)
        network.heads.append(head)
        for attr in edge_attrs:
            network.edge_values[attr.name].append(importer.get_value(attr))

    if assign_edge_ids:
        network.edge_values[EDGE_ID.name] = list(range(network.num_edges))

    logger.info(
        "Network built",
        extra={"vertices": network.num_vertices, "edges": network.num_edges},
    )
    return network


def load_network(
    importer: GraphImporterPort,
    attributes: Iterable[Attribute],
    assign_edge_ids: bool = True,
    name: Optional[str] = None,
) -> RoadNetwork:
    """Open the importer, build the network and close the importer again."""
    logger.info("Reading network", extra={"source": name or type(importer).__name__})
    importer.init()
    try:
        return build_network(importer, attributes, assign_edge_ids)
    finally:
        importer.close()
