"""OSM POLY boundary files.

Format (https://wiki.openstreetmap.org/wiki/Osmosis/Polygon_Filter_File_Format):

    name
    1
       8.98 48.62
       9.32 48.62
       9.32 48.87
    END
    !2
       9.10 48.70
       ...
    END
    END

Each section is a ring of longitude/latitude pairs; sections whose name
starts with '!' are holes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from ...domain.errors import BoundaryFileError, InputFileNotFoundError
from ...domain.geometry import Point, Rectangle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Ring:
    """A closed ring of (longitude, latitude) points."""

    name: str
    points: Tuple[Point, ...]
    is_hole: bool = False


@dataclass
class OsmPolyArea:
    """A region read from an OSM POLY file.

    This adapter implements AreaPort.
    """

    name: str = ""
    faces: List[Ring] = field(default_factory=list)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> OsmPolyArea:
        """Parse an OSM POLY file.

        Raises:
            InputFileNotFoundError: If the file cannot be read.
            BoundaryFileError: If the file is malformed.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise InputFileNotFoundError(
                f"file not found -- '{path}'",
                file_path=str(path),
                cause=e,
            )
        area = cls.parse(text.splitlines(), str(path))
        logger.info(
            "Boundary read",
            extra={"path": str(path), "area": area.name, "num_rings": len(area.faces)},
        )
        return area

    @classmethod
    def parse(cls, lines: Sequence[str], source: str = "<string>") -> OsmPolyArea:
        numbered = [(i, s.strip()) for i, s in enumerate(lines, start=1) if s.strip()]

        def malformed(reason: str, line: int) -> BoundaryFileError:
            return BoundaryFileError(
                f"malformed POLY file '{source}' line {line} -- {reason}",
                file_path=source,
                line=line,
            )

        if not numbered:
            raise malformed("file is empty", 1)

        area = cls(name=numbered[0][1])
        pos = 1
        while True:
            if pos >= len(numbered):
                raise malformed("missing final END", numbered[-1][0])
            line, section = numbered[pos]
            pos += 1
            if section == "END":
                break

            points: List[Point] = []
            while True:
                if pos >= len(numbered):
                    raise malformed(f"section {section!r} lacks END", numbered[-1][0])
                line, text = numbered[pos]
                pos += 1
                if text == "END":
                    break
                parts = text.split()
                if len(parts) != 2:
                    raise malformed(f"expected 'lon lat', got {text!r}", line)
                try:
                    lon, lat = float(parts[0]), float(parts[1])
                except ValueError as e:
                    raise BoundaryFileError(
                        f"malformed POLY file '{source}' line {line} -- bad coordinate",
                        file_path=source,
                        line=line,
                        cause=e,
                    )
                if not (-180 <= lon <= 180 and -90 <= lat <= 90):
                    raise malformed(f"coordinate out of range: {text!r}", line)
                points.append(Point(lon, lat))

            if len(points) < 3:
                raise malformed(f"ring {section!r} has fewer than 3 points", line)
            area.faces.append(
                Ring(name=section.lstrip("!"), points=tuple(points), is_hole=section.startswith("!"))
            )

        if pos != len(numbered):
            raise malformed("content after final END", numbered[pos][0])
        if not area.faces:
            raise malformed("no rings", numbered[-1][0])
        return area

    def bounding_box(self) -> Rectangle:
        return Rectangle.around(p for ring in self.faces for p in ring.points)

    def rings(self) -> Sequence[Sequence[Point]]:
        return [ring.points for ring in self.faces]
