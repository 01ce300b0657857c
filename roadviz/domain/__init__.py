"""Domain layer - Core models, attributes and errors.

This module contains the geometry and color models, the attribute
descriptors and the typed errors used throughout the application.
No external dependencies.
"""

from .attributes import (
    CAPACITY,
    COORDINATE,
    EDGE_ID,
    FREE_FLOW_SPEED,
    INFTY,
    INVALID_ID,
    LAT_LNG,
    LENGTH,
    NUM_LANES,
    ROAD_GEOMETRY,
    TRAVEL_TIME,
    VERTEX_ID,
    Attribute,
    AttributeLookup,
    AttributeRegistry,
    AttributeScope,
    default_registry,
)
from .errors import (
    BoundaryFileError,
    ConfigurationError,
    DemandFileError,
    DuplicateVertexError,
    FingerprintMismatchError,
    FlowFileCorruptError,
    InputFileError,
    InputFileNotFoundError,
    MalformedHeaderError,
    MalformedNumberError,
    NegativeFieldError,
    RenderingError,
    RoadVizError,
    UnrecognizedFormatError,
    UnresolvedEndpointError,
)
from .geometry import LatLng, Point, Rectangle, inverse_web_mercator
from .models import (
    KIT_BLACK,
    KIT_BLACK_15,
    KIT_GREEN,
    REDS_9CLASS,
    Color,
    FlowPatterns,
    ODPair,
    validate_od_pairs,
)

__all__ = [
    # Attributes
    "Attribute",
    "AttributeLookup",
    "AttributeRegistry",
    "AttributeScope",
    "default_registry",
    "INFTY",
    "INVALID_ID",
    "VERTEX_ID",
    "LAT_LNG",
    "COORDINATE",
    "LENGTH",
    "CAPACITY",
    "FREE_FLOW_SPEED",
    "TRAVEL_TIME",
    "NUM_LANES",
    "ROAD_GEOMETRY",
    "EDGE_ID",
    # Geometry
    "LatLng",
    "Point",
    "Rectangle",
    "inverse_web_mercator",
    # Models
    "Color",
    "KIT_BLACK",
    "KIT_BLACK_15",
    "KIT_GREEN",
    "REDS_9CLASS",
    "FlowPatterns",
    "ODPair",
    "validate_od_pairs",
    # Errors
    "RoadVizError",
    "InputFileError",
    "InputFileNotFoundError",
    "MalformedHeaderError",
    "DuplicateVertexError",
    "UnresolvedEndpointError",
    "MalformedNumberError",
    "NegativeFieldError",
    "FlowFileCorruptError",
    "DemandFileError",
    "BoundaryFileError",
    "FingerprintMismatchError",
    "UnrecognizedFormatError",
    "ConfigurationError",
    "RenderingError",
]
