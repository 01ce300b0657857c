"""CSV graph importer adapter.

Reads a road network from a directory holding two tables:

- vertices.csv: <vertex id column>, xcoord, ycoord
- edges.csv: edge_tail, edge_head, length, capacity, speed

Units: length in meters, capacity in vehicles per analysis period,
speed in km/h under free flow. Extra columns are ignored.

External vertex IDs need not be dense or zero-based; vertices get
sequential internal IDs in the order they are read, and edge endpoints
are translated through that mapping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ...config import ImportConfig, get_config
from ...domain.attributes import (
    CAPACITY,
    COORDINATE,
    FREE_FLOW_SPEED,
    INFTY,
    INVALID_ID,
    LAT_LNG,
    LENGTH,
    TRAVEL_TIME,
    VERTEX_ID,
    Attribute,
    AttributeLookup,
)
from ...domain.errors import (
    ConfigurationError,
    DuplicateVertexError,
    MalformedNumberError,
    NegativeFieldError,
    UnresolvedEndpointError,
)
from ...domain.geometry import LatLng, Point
from ...domain.numbers import round_half_up
from ..readers.tables import CsvTable

EDGE_COLUMNS = ("edge_tail", "edge_head", "length", "capacity", "speed")


@dataclass
class _VertexRecord:
    id: int = INVALID_ID
    coordinate: Point = field(default_factory=Point)
    lat_lng: LatLng = field(default_factory=LatLng)


@dataclass
class _EdgeRecord:
    tail: int = INVALID_ID
    head: int = INVALID_ID
    length: int = 0
    capacity: float = 0.0
    free_flow_speed: int = 0


@dataclass
class CsvGraphImporter:
    """Streams vertices and edges out of a pair of CSV tables.

    This adapter implements GraphImporterPort. Call init() (or use the
    importer as a context manager) before reading, then next_vertex()
    until it returns False, then next_edge() until it returns False.

    Attributes:
        directory: Directory containing the vertex and edge tables
        analysis_period: Analysis period in hours; capacities are divided
            by it. Defaults to the configured value.
        config: Import configuration (file and column names)
    """

    directory: Path
    analysis_period: Optional[float] = None
    config: ImportConfig = field(default_factory=lambda: get_config().importer)

    _vertices: CsvTable = field(init=False, repr=False)
    _edges: CsvTable = field(init=False, repr=False)
    _orig_to_new_ids: Dict[int, int] = field(default_factory=dict, init=False, repr=False)
    _next_vertex_id: int = field(default=0, init=False, repr=False)
    _vertex: _VertexRecord = field(default_factory=_VertexRecord, init=False, repr=False)
    _edge: _EdgeRecord = field(default_factory=_EdgeRecord, init=False, repr=False)
    _lookup: AttributeLookup = field(default_factory=AttributeLookup, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.directory = Path(self.directory)
        if self.analysis_period is None:
            self.analysis_period = self.config.analysis_period
        if self.analysis_period <= 0:
            raise ConfigurationError(
                f"analysis period must be positive, got {self.analysis_period}",
                setting_name="analysis_period",
                expected_type="float > 0",
            )

        self._vertices = CsvTable(
            self.directory / self.config.vertices_file,
            (self.config.vertex_id_column, "xcoord", "ycoord"),
        )
        self._edges = CsvTable(self.directory / self.config.edges_file, EDGE_COLUMNS)

        self._lookup.provide(VERTEX_ID, lambda: self._vertex.id)
        self._lookup.provide(LAT_LNG, lambda: self._vertex.lat_lng)
        self._lookup.provide(COORDINATE, lambda: self._vertex.coordinate)
        self._lookup.provide(LENGTH, lambda: self._edge.length)
        self._lookup.provide(FREE_FLOW_SPEED, lambda: self._edge.free_flow_speed)
        self._lookup.provide(CAPACITY, self._capacity)
        self._lookup.provide(TRAVEL_TIME, self._travel_time)

    def clone(self) -> CsvGraphImporter:
        """Return a fresh importer over the same files."""
        return CsvGraphImporter(self.directory, self.analysis_period, self.config)

    def init(self) -> None:
        """Open both tables and check their headers.

        Raises:
            InputFileNotFoundError: If a table does not exist.
            MalformedHeaderError: If a required column is missing.
        """
        self._logger.debug("Opening CSV network", extra={"directory": str(self.directory)})
        self._orig_to_new_ids = {}
        self._next_vertex_id = 0
        self._vertices.open()
        try:
            self._edges.open()
        except Exception:
            self._vertices.close()
            raise

    def close(self) -> None:
        self._vertices.close()
        self._edges.close()

    def __enter__(self) -> CsvGraphImporter:
        self.init()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def num_vertices(self) -> int:
        return 0

    def num_edges(self) -> int:
        return 0

    def next_vertex(self) -> bool:
        """Read the next vertex and assign it the next internal ID.

        Raises:
            MalformedNumberError: If the ID or a coordinate does not parse.
            DuplicateVertexError: If the external ID was already read.
        """
        table = self._vertices
        row = table.read_row()
        if row is None:
            return False

        vertex_id = table.parse_int(row, self.config.vertex_id_column)
        x = table.parse_float(row, "xcoord")
        y = table.parse_float(row, "ycoord")

        if vertex_id in self._orig_to_new_ids:
            raise DuplicateVertexError(
                f"duplicate vertex ID {vertex_id} in '{table.path}' line {table.line}",
                file_path=str(table.path),
                line=table.line,
                vertex_id=vertex_id,
            )

        # The format stores the latitude in xcoord and the longitude in ycoord.
        lat_lng = LatLng.unchecked(x, y)

        self._orig_to_new_ids[vertex_id] = self._next_vertex_id
        self._next_vertex_id += 1
        self._vertex = _VertexRecord(id=vertex_id, lat_lng=lat_lng)
        return True

    def vertex_id(self) -> int:
        return self._next_vertex_id - 1

    def next_edge(self) -> bool:
        """Read the next edge and translate its endpoints to internal IDs.

        Raises:
            MalformedNumberError: If a field does not parse.
            NegativeFieldError: If capacity, length or speed is negative.
            UnresolvedEndpointError: If an endpoint was never read as a vertex.
        """
        table = self._edges
        row = table.read_row()
        if row is None:
            return False

        tail = table.parse_int(row, "edge_tail")
        head = table.parse_int(row, "edge_head")
        length = table.parse_float(row, "length")
        capacity = table.parse_float(row, "capacity")
        speed = table.parse_float(row, "speed")

        for name, value in (("capacity", capacity), ("length", length), ("speed", speed)):
            if value < 0:
                raise NegativeFieldError(
                    f"negative {name} in '{table.path}' line {table.line}",
                    file_path=str(table.path),
                    line=table.line,
                    field_name=name,
                    value=value,
                )

        self._edge = _EdgeRecord(
            tail=self._resolve(tail),
            head=self._resolve(head),
            length=round_half_up(length),
            capacity=capacity,
            free_flow_speed=round_half_up(speed),
        )
        return True

    def _resolve(self, external_id: int) -> int:
        internal_id = self._orig_to_new_ids.get(external_id)
        if internal_id is None:
            raise UnresolvedEndpointError(
                f"edge references unknown vertex {external_id} in "
                f"'{self._edges.path}' line {self._edges.line}",
                file_path=str(self._edges.path),
                line=self._edges.line,
                vertex_id=external_id,
            )
        return internal_id

    def edge_tail(self) -> int:
        return self._edge.tail

    def edge_head(self) -> int:
        return self._edge.head

    def get_value(self, attribute: Attribute) -> Any:
        """Return the attribute for the current record, or its default."""
        return self._lookup.value(attribute)

    def _capacity(self) -> int:
        assert self.analysis_period is not None
        return round_half_up(self._edge.capacity / self.analysis_period)

    def _travel_time(self) -> int:
        # Free-flow traversal time; 36 turns m / (km/h) into tenths of a second.
        if self._edge.free_flow_speed == 0:
            return INFTY
        return round_half_up(36 * self._edge.length / self._edge.free_flow_speed)
