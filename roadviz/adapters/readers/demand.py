"""Travel demand reader: one origin-destination pair per row.

    origin,destination
    0,17
    5,3

IDs are internal vertex IDs of the network being drawn.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from ...domain.errors import DemandFileError, MalformedNumberError
from ...domain.models import ODPair, validate_od_pairs
from .tables import CsvTable

logger = logging.getLogger(__name__)

DEMAND_COLUMNS = ("origin", "destination")

__all__ = ["DEMAND_COLUMNS", "read_od_pairs", "validate_od_pairs"]


def read_od_pairs(path: Union[str, Path]) -> List[ODPair]:
    """Read all OD pairs from a demand table.

    Raises:
        InputFileNotFoundError: If the file does not exist.
        MalformedHeaderError: If a required column is missing.
        DemandFileError: If a row holds something other than two vertex IDs.
    """
    table = CsvTable(Path(path), DEMAND_COLUMNS, comment_prefix="#")
    pairs: List[ODPair] = []
    with table:
        for line, row in table:
            try:
                origin = table.parse_int(row, "origin")
                destination = table.parse_int(row, "destination")
            except MalformedNumberError as e:
                raise DemandFileError(
                    f"malformed OD pair in '{table.path}' line {line}",
                    file_path=str(table.path),
                    line=line,
                    cause=e,
                )
            pairs.append(ODPair(origin, destination))

    logger.info("Travel demand read", extra={"path": str(path), "od_pairs": len(pairs)})
    return pairs

