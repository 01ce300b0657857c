"""Readers for the tabular and polygon inputs of a render run.

Available readers:
- CsvTable: header-checked CSV table shared by all tabular inputs
- read_flow_patterns: per-iteration edge flows
- read_od_pairs: travel demand
- OsmPolyArea: boundary and viewport polygons
"""

from .demand import read_od_pairs, validate_od_pairs
from .flow import read_flow_patterns
from .osm_poly import OsmPolyArea, Ring
from .tables import CsvTable

__all__ = [
    "CsvTable",
    "read_flow_patterns",
    "read_od_pairs",
    "validate_od_pairs",
    "OsmPolyArea",
    "Ring",
]
