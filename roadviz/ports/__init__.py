"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the rendering core and the external
collaborators it is driven by or drives: import formats, boundary
polygons and graphic backends.
"""

from .geometry import AreaPort
from .graphic import GraphicPort
from .importer import GraphImporterPort

__all__ = [
    "AreaPort",
    "GraphicPort",
    "GraphImporterPort",
]
