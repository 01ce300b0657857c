"""Typed domain errors for roadviz.

Every failure while importing a network, reading flow or demand data,
or rendering a graphic is reported through one of these types. None of
them is recoverable: they propagate to the entry point, which logs the
message and re-raises.

All errors inherit from RoadVizError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class RoadVizError(Exception):
    """Base error for roadviz.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InputFileError(RoadVizError):
    """Common base for errors raised while reading an input table.

    Attributes:
        file_path: Path to the offending file
        line: 1-based line number of the offending row, if known
    """

    file_path: Optional[str] = None
    line: Optional[int] = None


@dataclass
class InputFileNotFoundError(InputFileError):
    """An input file does not exist or cannot be opened."""


@dataclass
class MalformedHeaderError(InputFileError):
    """A required column is missing from a table header.

    Attributes:
        missing_columns: The required columns that were not found
    """

    missing_columns: Tuple[str, ...] = ()


@dataclass
class DuplicateVertexError(InputFileError):
    """The same external vertex ID appears twice in the vertex table.

    Attributes:
        vertex_id: The external ID that was reused
    """

    vertex_id: Optional[int] = None


@dataclass
class UnresolvedEndpointError(InputFileError):
    """An edge references a vertex that was never read.

    Attributes:
        vertex_id: The external ID that could not be resolved
    """

    vertex_id: Optional[int] = None


@dataclass
class MalformedNumberError(InputFileError):
    """A numeric field could not be parsed.

    Attributes:
        field_name: Column name of the field
        raw_value: The text that failed to parse
    """

    field_name: str = ""
    raw_value: str = ""


@dataclass
class NegativeFieldError(InputFileError):
    """A field that must be non-negative holds a negative value.

    Attributes:
        field_name: Column name of the field
        value: The parsed value
    """

    field_name: str = ""
    value: float = 0.0


@dataclass
class FlowFileCorruptError(InputFileError):
    """The flow table is structurally inconsistent with the network."""


@dataclass
class DemandFileError(InputFileError):
    """The demand table is malformed or references unknown vertices."""


@dataclass
class BoundaryFileError(InputFileError):
    """An OSM POLY boundary file is malformed."""


@dataclass
class FingerprintMismatchError(RoadVizError):
    """A network fixup was applied to a network it was not made for.

    Attributes:
        fixup_name: Name of the fixup
        expected: Expected (vertices, edges) counts
        actual: Actual (vertices, edges) counts
    """

    fixup_name: str = ""
    expected: Tuple[int, int] = (0, 0)
    actual: Tuple[int, int] = (0, 0)


@dataclass
class UnrecognizedFormatError(RoadVizError):
    """No graphic backend exists for the requested format.

    Attributes:
        format_name: The format selector that was requested
    """

    format_name: str = ""


@dataclass
class ConfigurationError(RoadVizError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(RoadVizError):
    """A graphic backend failed to produce its output.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of backend that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
