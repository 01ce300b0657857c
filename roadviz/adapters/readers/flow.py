"""Flow pattern reader.

A flow table holds the flow on every edge after every iteration of a
traffic assignment:

    iteration,edge_flow
    1,12.5
    1,0
    ...

Rows are grouped by iteration (1, 2, ... without gaps) and within an
iteration ordered by edge ID, so each iteration has exactly one row
per edge. Lines starting with '#' are comments.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from ...domain.errors import FlowFileCorruptError, MalformedNumberError
from ...domain.models import FlowPatterns
from .tables import CsvTable

logger = logging.getLogger(__name__)

FLOW_COLUMNS = ("iteration", "edge_flow")


def read_flow_patterns(path: Union[str, Path], num_edges: int) -> FlowPatterns:
    """Read and validate a flow table for a network with `num_edges` edges.

    Raises:
        InputFileNotFoundError: If the file does not exist.
        MalformedHeaderError: If a required column is missing.
        FlowFileCorruptError: If the table is inconsistent with the network.
    """
    table = CsvTable(Path(path), FLOW_COLUMNS, comment_prefix="#")
    values: List[float] = []
    iteration = 0

    def corrupt(reason: str) -> FlowFileCorruptError:
        return FlowFileCorruptError(
            f"flow file corrupt -- {reason}",
            file_path=str(table.path),
            line=table.line,
        )

    logger.info("Reading flow patterns", extra={"path": str(path)})
    with table:
        for _, row in table:
            try:
                current = table.parse_int(row, "iteration")
                flow = table.parse_float(row, "edge_flow")
            except MalformedNumberError as e:
                raise FlowFileCorruptError(
                    f"flow file corrupt -- {e.message}",
                    file_path=str(table.path),
                    line=table.line,
                    cause=e,
                )
            if current <= 0:
                raise corrupt(f"non-positive iteration {current}")
            if flow < 0:
                raise corrupt(f"negative flow {flow}")
            if current != iteration:
                if current != iteration + 1:
                    raise corrupt(f"iteration {current} follows iteration {iteration}")
                if len(values) != iteration * num_edges:
                    raise corrupt(
                        f"iteration {iteration} has {len(values) - (iteration - 1) * num_edges} "
                        f"rows, expected {num_edges}"
                    )
                iteration = current
            values.append(flow)

    if iteration == 0:
        raise corrupt("no flow rows")
    if len(values) != iteration * num_edges:
        raise corrupt(
            f"iteration {iteration} has {len(values) - (iteration - 1) * num_edges} "
            f"rows, expected {num_edges}"
        )

    patterns = FlowPatterns(num_edges=num_edges, values=tuple(values))
    logger.info(
        "Flow patterns read",
        extra={"iterations": patterns.num_iterations, "edges": num_edges},
    )
    return patterns
