"""Importer port - Abstraction over graph import formats.

Graph construction drives an importer through two pull protocols (all
vertices first, then all edges) and fetches attribute values for the
record the importer is positioned on. It never needs to know which
attributes a particular format actually supplies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..domain.attributes import Attribute


class GraphImporterPort(Protocol):
    """Port for streaming a graph out of some file format.

    Implementation: adapters/importers/csv_importer.py
    """

    def init(self) -> None:
        """Open the input source(s) and validate their headers."""
        ...

    def num_vertices(self) -> int:
        """Return the number of vertices, or 0 if not known in advance."""
        ...

    def num_edges(self) -> int:
        """Return the number of edges, or 0 if not known in advance."""
        ...

    def next_vertex(self) -> bool:
        """Read the next vertex. Returns False when there are no more."""
        ...

    def vertex_id(self) -> int:
        """Return the internal (dense, 0-based) ID of the current vertex."""
        ...

    def next_edge(self) -> bool:
        """Read the next edge. Returns False when there are no more."""
        ...

    def edge_tail(self) -> int:
        """Return the internal tail vertex of the current edge."""
        ...

    def edge_head(self) -> int:
        """Return the internal head vertex of the current edge."""
        ...

    def get_value(self, attribute: Attribute) -> Any:
        """Return the attribute's value for the current vertex or edge.

        Args:
            attribute: The attribute to fetch.

        Returns:
            The value read or derived from the current record, or the
            attribute's default if the format does not supply it.
        """
        ...

    def close(self) -> None:
        """Release the input source(s)."""
        ...
