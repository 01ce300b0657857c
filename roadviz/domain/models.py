"""Immutable domain models for roadviz.

Colors, travel-demand pairs and flow patterns. These models have no
external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .errors import DemandFileError


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA color with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channels must be in [0, 255], got {channel}")

    def with_alpha(self, alpha: int) -> Color:
        return Color(self.red, self.green, self.blue, alpha)

    @property
    def hex(self) -> str:
        """Return the color as '#rrggbb' (alpha dropped)."""
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    @property
    def opacity(self) -> float:
        return self.alpha / 255

    def to_rgba(self) -> Tuple[float, float, float, float]:
        """Return the color as floats in [0, 1]."""
        return (self.red / 255, self.green / 255, self.blue / 255, self.alpha / 255)


KIT_BLACK = Color(0, 0, 0)
KIT_BLACK_15 = Color(217, 217, 217)
KIT_GREEN = Color(0, 150, 130)

# ColorBrewer "Reds", 9 classes, from lightest to darkest.
REDS_9CLASS: Tuple[Color, ...] = (
    Color(255, 245, 240),
    Color(254, 224, 210),
    Color(252, 187, 161),
    Color(252, 146, 114),
    Color(251, 106, 74),
    Color(239, 59, 44),
    Color(203, 24, 29),
    Color(165, 15, 21),
    Color(103, 0, 13),
)


@dataclass(frozen=True, slots=True)
class ODPair:
    """An origin-destination pair of internal vertex IDs."""

    origin: int
    destination: int


def validate_od_pairs(pairs: Sequence[ODPair], num_vertices: int) -> None:
    """Check that every OD pair references a vertex of the network.

    Raises:
        DemandFileError: If an ID is outside [0, num_vertices).
    """
    for i, pair in enumerate(pairs):
        for vertex in (pair.origin, pair.destination):
            if not 0 <= vertex < num_vertices:
                raise DemandFileError(
                    f"OD pair {i} references vertex {vertex}, "
                    f"network has {num_vertices} vertices",
                )


@dataclass(frozen=True, slots=True)
class FlowPatterns:
    """Per-edge flows after each iteration of a traffic assignment.

    Flows are stored iteration by iteration; within an iteration the
    position is the edge ID.

    Attributes:
        num_edges: Number of edges each iteration covers
        values: All flows, iteration 1 first
    """

    num_edges: int
    values: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def num_iterations(self) -> int:
        if self.num_edges == 0:
            return 0
        return len(self.values) // self.num_edges

    def flows(self, iteration: int) -> Sequence[float]:
        """Return the flows after the given (1-based) iteration."""
        if not 1 <= iteration <= self.num_iterations:
            raise IndexError(f"No such iteration: {iteration}")
        first = (iteration - 1) * self.num_edges
        return self.values[first:first + self.num_edges]

    def flow(self, iteration: int, edge_id: int) -> float:
        return self.flows(iteration)[edge_id]
