"""Network-specific fixups and connectivity filtering.

A fixup removes known outlier vertices from one particular network and
keeps the largest strongly connected component of what remains. Since
the vertex IDs only make sense for that network, every fixup carries a
fingerprint (vertex and edge counts) that is checked before anything
is removed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List

import networkx as nx

from ..domain.errors import ConfigurationError, FingerprintMismatchError
from .graph import RoadNetwork

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NetworkFixup:
    """A named, versioned outlier cut for one specific network.

    Attributes:
        name: Name of the network the fixup is meant for
        version: Version of the fixup
        expected_vertices: Vertex count the network must have
        expected_edges: Edge count the network must have
        excluded_vertices: Internal IDs of the vertices to remove
    """

    name: str
    version: int
    expected_vertices: int
    expected_edges: int
    excluded_vertices: FrozenSet[int] = frozenset()

    def check_fingerprint(self, network: RoadNetwork) -> None:
        actual = (network.num_vertices, network.num_edges)
        expected = (self.expected_vertices, self.expected_edges)
        if actual != expected:
            raise FingerprintMismatchError(
                f"unrecognized {self.name} network",
                fixup_name=self.name,
                expected=expected,
                actual=actual,
            )


KNOWN_FIXUPS: Dict[str, NetworkFixup] = {
    # Cuts off the highways to Basle, Frankfurt, Zurich, Nuremberg and Munich.
    "stuttgart": NetworkFixup(
        name="stuttgart",
        version=1,
        expected_vertices=134663,
        expected_edges=307759,
        excluded_vertices=frozenset({121490, 121491, 121492, 121494, 121510}),
    ),
}


def get_fixup(name: str) -> NetworkFixup:
    try:
        return KNOWN_FIXUPS[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown network fixup -- '{name}'",
            setting_name="fixup",
            expected_type=" | ".join(sorted(KNOWN_FIXUPS)),
        ) from None


def largest_scc_mask(network: RoadNetwork) -> List[bool]:
    """Return a keep-mask selecting the largest strongly connected component."""
    if network.num_vertices == 0:
        return []
    component = max(nx.strongly_connected_components(network.to_networkx()), key=len)
    return [u in component for u in range(network.num_vertices)]


def apply_fixup(network: RoadNetwork, fixup: NetworkFixup) -> RoadNetwork:
    """Remove the fixup's outliers and keep the largest SCC of the rest.

    Raises:
        FingerprintMismatchError: If the network is not the one the fixup
            was made for.
    """
    fixup.check_fingerprint(network)

    keep = [u not in fixup.excluded_vertices for u in range(network.num_vertices)]
    network = network.extract_vertex_induced_subgraph(keep)
    network = network.extract_vertex_induced_subgraph(largest_scc_mask(network))

    logger.info(
        "Network fixup applied",
        extra={
            "fixup": fixup.name,
            "fixup_version": fixup.version,
            "vertices": network.num_vertices,
            "edges": network.num_edges,
        },
    )
    return network
