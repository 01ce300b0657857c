"""In-memory road network with per-vertex and per-edge attribute columns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Sequence, Tuple

import networkx as nx

from ..domain.attributes import Attribute, AttributeScope


@dataclass
class RoadNetwork:
    """A directed graph whose vertices are 0..n-1 and edges 0..m-1.

    Attribute values are stored column-wise: one list per attribute,
    indexed by vertex or edge.

    Attributes:
        tails: Tail vertex of every edge
        heads: Head vertex of every edge
        vertex_values: Attribute name -> per-vertex values
        edge_values: Attribute name -> per-edge values
    """

    num_vertices: int = 0
    tails: List[int] = field(default_factory=list)
    heads: List[int] = field(default_factory=list)
    vertex_values: Dict[str, List[Any]] = field(default_factory=dict)
    edge_values: Dict[str, List[Any]] = field(default_factory=dict)

    @property
    def num_edges(self) -> int:
        return len(self.tails)

    def _column(self, attribute: Attribute) -> List[Any]:
        columns = (
            self.vertex_values
            if attribute.scope is AttributeScope.VERTEX
            else self.edge_values
        )
        try:
            return columns[attribute.name]
        except KeyError:
            raise KeyError(f"Network has no attribute {attribute.name!r}") from None

    def has(self, attribute: Attribute) -> bool:
        columns = (
            self.vertex_values
            if attribute.scope is AttributeScope.VERTEX
            else self.edge_values
        )
        return attribute.name in columns

    def value(self, attribute: Attribute, index: int) -> Any:
        """Return the attribute's value for vertex or edge `index`."""
        return self._column(attribute)[index]

    def set_value(self, attribute: Attribute, index: int, value: Any) -> None:
        self._column(attribute)[index] = value

    def values(self, attribute: Attribute) -> Sequence[Any]:
        return self._column(attribute)

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Iterate over (edge, tail, head)."""
        for e, (u, v) in enumerate(zip(self.tails, self.heads)):
            yield e, u, v

    def extract_vertex_induced_subgraph(self, keep: Sequence[bool]) -> RoadNetwork:
        """Return the subgraph induced by the vertices whose mask entry is True.

        Kept vertices are renumbered densely in their original order; an
        edge survives when both its endpoints do, and keeps all its
        attribute values (including its edge ID).
        """
        if len(keep) != self.num_vertices:
            raise ValueError(
                f"mask has {len(keep)} entries, network has {self.num_vertices} vertices"
            )

        new_ids: List[int] = []
        next_id = 0
        for kept in keep:
            new_ids.append(next_id if kept else -1)
            next_id += 1 if kept else 0

        vertex_values = {
            name: [x for x, kept in zip(column, keep) if kept]
            for name, column in self.vertex_values.items()
        }
        kept_edges = [e for e, u, v in self.edges() if keep[u] and keep[v]]
        edge_values = {
            name: [column[e] for e in kept_edges]
            for name, column in self.edge_values.items()
        }
        return RoadNetwork(
            num_vertices=next_id,
            tails=[new_ids[self.tails[e]] for e in kept_edges],
            heads=[new_ids[self.heads[e]] for e in kept_edges],
            vertex_values=vertex_values,
            edge_values=edge_values,
        )

    def to_networkx(self) -> nx.DiGraph:
        """Return the topology as a networkx digraph (parallel edges merged)."""
        graph = nx.DiGraph()
        graph.add_nodes_from(range(self.num_vertices))
        graph.add_edges_from(zip(self.tails, self.heads))
        return graph
