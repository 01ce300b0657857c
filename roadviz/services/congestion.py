"""Congestion classification: flow/capacity ratio -> severity band."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..domain.models import REDS_9CLASS


@dataclass(frozen=True, slots=True)
class CongestionClassifier:
    """Buckets edges into ordered severity bands of fixed width.

    Band j covers ratios in [j * step, (j + 1) * step); the last band
    also takes every higher ratio. With the defaults (20% steps, 8
    bands) a saturated edge lands in band 5 and band 7 starts at 140%.

    Attributes:
        step_percent: Width of a band, in percent of capacity
        num_bands: Number of bands
    """

    step_percent: int = 20
    num_bands: int = len(REDS_9CLASS) - 1

    def __post_init__(self) -> None:
        if self.step_percent <= 0:
            raise ValueError(f"step_percent must be positive, got {self.step_percent}")
        if self.num_bands <= 0:
            raise ValueError(f"num_bands must be positive, got {self.num_bands}")

    def classify(self, flow: float, capacity: float) -> int:
        """Return the band of an edge carrying `flow` with the given capacity."""
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        if flow < 0:
            raise ValueError(f"flow must be non-negative, got {flow}")
        band = int(100 * flow / (self.step_percent * capacity))
        return min(band, self.num_bands - 1)

    def classify_all(
        self, flows: Sequence[float], capacities: Sequence[float]
    ) -> List[List[int]]:
        """Group edge indices by band; bands[j] lists the edges in band j."""
        if len(flows) != len(capacities):
            raise ValueError(
                f"{len(flows)} flows but {len(capacities)} capacities"
            )
        bands: List[List[int]] = [[] for _ in range(self.num_bands)]
        for e, (flow, capacity) in enumerate(zip(flows, capacities)):
            bands[self.classify(flow, capacity)].append(e)
        return bands
