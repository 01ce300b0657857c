"""Header-checked, line-by-line CSV tables.

All tabular inputs (vertices, edges, flows, demand) share the same
rules: a header row is required, the listed columns must be present,
extra columns are ignored, and surrounding whitespace is trimmed.
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Dict, Iterator, List, Optional, Sequence, Tuple

from ...domain.errors import (
    InputFileNotFoundError,
    MalformedHeaderError,
    MalformedNumberError,
)


@dataclass
class CsvTable:
    """A CSV file read one row at a time.

    Attributes:
        path: Path to the CSV file
        required_columns: Columns the header must contain
        comment_prefix: Lines starting with this prefix are skipped
    """

    path: Path
    required_columns: Sequence[str]
    comment_prefix: Optional[str] = None

    line: int = field(default=0, init=False)
    _file: Optional[IO[str]] = field(default=None, init=False, repr=False)
    _rows: Optional[Iterator[List[str]]] = field(default=None, init=False, repr=False)
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def open(self) -> None:
        """Open the file and validate the header.

        Raises:
            InputFileNotFoundError: If the file cannot be opened.
            MalformedHeaderError: If a required column is missing.
        """
        try:
            self._file = self.path.open(newline="", encoding="utf-8-sig")
        except OSError as e:
            raise InputFileNotFoundError(
                f"file not found -- '{self.path}'",
                file_path=str(self.path),
                cause=e,
            )

        self._rows = csv.reader(self._lines(self._file))
        header = next(self._rows, None)
        columns = [name.strip() for name in header] if header else []
        missing = tuple(c for c in self.required_columns if c not in columns)
        if missing:
            self.close()
            raise MalformedHeaderError(
                f"missing column(s) {', '.join(missing)} in '{self.path}'",
                file_path=str(self.path),
                line=1,
                missing_columns=missing,
            )
        self._index = {name: columns.index(name) for name in self.required_columns}
        self._logger.debug(
            "Opened table",
            extra={"path": str(self.path), "columns": columns},
        )

    def _lines(self, f: IO[str]) -> Iterator[str]:
        for number, text in enumerate(f, start=1):
            if not text.strip():
                continue
            if self.comment_prefix and text.lstrip().startswith(self.comment_prefix):
                continue
            self.line = number
            yield text

    def read_row(self) -> Optional[Dict[str, str]]:
        """Return the next row restricted to the required columns, or None at EOF."""
        if self._rows is None:
            raise RuntimeError(f"table not open: {self.path}")
        values = next(self._rows, None)
        if values is None:
            return None
        return {
            name: values[i].strip() if i < len(values) else ""
            for name, i in self._index.items()
        }

    def __iter__(self) -> Iterator[Tuple[int, Dict[str, str]]]:
        while True:
            row = self.read_row()
            if row is None:
                return
            yield self.line, row

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self._rows = None

    def __enter__(self) -> CsvTable:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def parse_int(self, row: Dict[str, str], column: str) -> int:
        raw = row[column]
        try:
            return int(raw)
        except ValueError as e:
            raise MalformedNumberError(
                f"malformed integer in column '{column}' of '{self.path}' line {self.line}",
                file_path=str(self.path),
                line=self.line,
                field_name=column,
                raw_value=raw,
                cause=e,
            )

    def parse_float(self, row: Dict[str, str], column: str) -> float:
        raw = row[column]
        try:
            value = float(raw)
        except ValueError as e:
            raise MalformedNumberError(
                f"malformed number in column '{column}' of '{self.path}' line {self.line}",
                file_path=str(self.path),
                line=self.line,
                field_name=column,
                raw_value=raw,
                cause=e,
            )
        if not math.isfinite(value):
            raise MalformedNumberError(
                f"non-finite number in column '{column}' of '{self.path}' line {self.line}",
                file_path=str(self.path),
                line=self.line,
                field_name=column,
                raw_value=raw,
            )
        return value
