"""Graphic adapters - Implementations of GraphicPort.

Available implementations:
- MatplotlibGraphic: PDF (multi-page), PNG and SVG output
- FoliumGraphic: interactive HTML map output
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Union

from ...domain.errors import UnrecognizedFormatError
from ...domain.geometry import Rectangle
from ...ports.graphic import GraphicPort
from .folium_graphic import FoliumGraphic
from .matplotlib_graphic import MatplotlibGraphic

GraphicFactory = Callable[[Path, float, float, Rectangle, int], GraphicPort]

GRAPHIC_FORMATS: Dict[str, GraphicFactory] = {
    "PDF": lambda path, w, h, clip, dpi: MatplotlibGraphic(path, w, h, clip, "pdf", dpi),
    "PNG": lambda path, w, h, clip, dpi: MatplotlibGraphic(path, w, h, clip, "png", dpi),
    "SVG": lambda path, w, h, clip, dpi: MatplotlibGraphic(path, w, h, clip, "svg", dpi),
    "HTML": lambda path, w, h, clip, dpi: FoliumGraphic(path, w, h, clip),
}


def create_graphic(
    format_name: str,
    output_path: Union[str, Path],
    width_cm: float,
    height_cm: float,
    clip: Rectangle,
    dpi: int = 300,
) -> GraphicPort:
    """Create the graphic backend for a format selector (case-insensitive).

    Raises:
        UnrecognizedFormatError: If no backend handles the format.
    """
    factory = GRAPHIC_FORMATS.get(format_name.upper())
    if factory is None:
        raise UnrecognizedFormatError(
            f"unrecognized file format -- '{format_name}'",
            format_name=format_name,
        )
    return factory(Path(output_path), width_cm, height_cm, clip, dpi)


__all__ = [
    "FoliumGraphic",
    "MatplotlibGraphic",
    "GRAPHIC_FORMATS",
    "create_graphic",
]
