"""Matplotlib graphic adapter (PDF, PNG, SVG).

Each page is a figure of the requested physical size whose axes span
exactly the clip rectangle. Consecutive line segments sharing a color
and width are batched into one LineCollection, which keeps drawing
networks with hundreds of thousands of edges fast.

PDF output keeps every page in one file. PNG and SVG cannot hold more
than one page, so page k > 1 goes to '<stem>-<k><suffix>' next to the
requested output path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from matplotlib.axes import Axes
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.patches import Polygon as PolygonPatch

from ...domain.errors import RenderingError
from ...domain.geometry import Point, Rectangle
from ...domain.models import KIT_BLACK, Color

CM_PER_INCH = 2.54

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


@dataclass
class MatplotlibGraphic:
    """Vector/raster graphic backed by matplotlib.

    This adapter implements GraphicPort.

    Attributes:
        output_path: File the first (or only) page is written to
        width_cm: Physical width of a page
        height_cm: Physical height of a page
        clip: Region of the projected plane that maps onto the page
        file_format: 'pdf', 'png' or 'svg'
        dpi: Resolution used for raster output
    """

    output_path: Path
    width_cm: float
    height_cm: float
    clip: Rectangle
    file_format: str = "png"
    dpi: int = 300

    page_count: int = field(default=0, init=False)
    _figure: Optional[Figure] = field(default=None, init=False, repr=False)
    _axes: Optional[Axes] = field(default=None, init=False, repr=False)
    _pdf: Optional[PdfPages] = field(default=None, init=False, repr=False)
    _color: Color = field(default=KIT_BLACK, init=False, repr=False)
    _line_width: float = field(default=1.0, init=False, repr=False)
    _pending: List[Segment] = field(default_factory=list, init=False, repr=False)
    _zorder: int = field(default=0, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)
    _aborted: bool = field(default=False, init=False, repr=False)
    _written: List[Path] = field(default_factory=list, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.output_path = Path(self.output_path)
        self.file_format = self.file_format.lower()
        if self.clip.is_empty:
            raise RenderingError(
                "Cannot draw into an empty clip region",
                output_path=str(self.output_path),
                renderer_type=self.file_format,
            )
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            if self.file_format == "pdf":
                self._pdf = PdfPages(self.output_path)
                self._written.append(self.output_path)
        except OSError as e:
            raise RenderingError(
                f"Cannot create output file: {e}",
                output_path=str(self.output_path),
                renderer_type=self.file_format,
                cause=e,
            )
        self._start_page()

    def _start_page(self) -> None:
        self.page_count += 1
        figure = Figure(figsize=(self.width_cm / CM_PER_INCH, self.height_cm / CM_PER_INCH))
        axes = figure.add_axes((0, 0, 1, 1))
        axes.set_axis_off()

        sw, ne = self.clip.south_west, self.clip.north_east
        # A degenerate box (a single vertex, say) still needs a non-zero extent.
        pad_x = 0.5 if sw.x == ne.x else 0.0
        pad_y = 0.5 if sw.y == ne.y else 0.0
        axes.set_xlim(sw.x - pad_x, ne.x + pad_x)
        axes.set_ylim(sw.y - pad_y, ne.y + pad_y)
        axes.set_aspect("equal", adjustable="box")

        self._figure = figure
        self._axes = axes

    def page_path(self, page: int) -> Path:
        """Return the file page `page` (1-based) is written to."""
        if page == 1 or self.file_format == "pdf":
            return self.output_path
        return self.output_path.with_name(
            f"{self.output_path.stem}-{page}{self.output_path.suffix}"
        )

    def set_color(self, color: Color) -> None:
        if color != self._color:
            self._flush_lines()
            self._color = color

    def set_line_width(self, width: float) -> None:
        if width != self._line_width:
            self._flush_lines()
            self._line_width = width

    def draw_line(self, src: Point, dst: Point) -> None:
        self._pending.append(((src.x, src.y), (dst.x, dst.y)))

    def draw_polygon(self, points: Sequence[Point]) -> None:
        self._flush_lines()
        assert self._axes is not None
        self._zorder += 1
        self._axes.add_patch(
            PolygonPatch(
                [(p.x, p.y) for p in points],
                closed=True,
                fill=False,
                edgecolor=self._color.to_rgba(),
                linewidth=self._line_width,
                zorder=self._zorder,
            )
        )

    def _flush_lines(self) -> None:
        if not self._pending:
            return
        assert self._axes is not None
        self._zorder += 1
        self._axes.add_collection(
            LineCollection(
                self._pending,
                colors=[self._color.to_rgba()],
                linewidths=self._line_width,
                capstyle="round",
                zorder=self._zorder,
            )
        )
        self._pending = []

    def _finish_page(self) -> None:
        self._flush_lines()
        assert self._figure is not None
        path = self.page_path(self.page_count)
        try:
            if self._pdf is not None:
                self._pdf.savefig(self._figure)
            else:
                self._figure.savefig(path, format=self.file_format, dpi=self.dpi)
        except (OSError, ValueError) as e:
            raise RenderingError(
                f"Failed to write page {self.page_count}: {e}",
                output_path=str(path),
                renderer_type=self.file_format,
                cause=e,
            )
        if self._pdf is None:
            self._written.append(path)
        self._logger.debug(
            "Page written",
            extra={"page": self.page_count, "output_path": str(path)},
        )

    def new_page(self) -> None:
        self._finish_page()
        self._start_page()

    def _close_pdf(self) -> None:
        if self._pdf is not None:
            pdf, self._pdf = self._pdf, None
            pdf.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._finish_page()
        finally:
            self._close_pdf()
        self._logger.info(
            "Graphic written",
            extra={"output_path": str(self.output_path), "pages": self.page_count},
        )

    def abort(self) -> None:
        if self._aborted:
            return
        self._aborted = True
        self._closed = True
        self._pending = []
        try:
            self._close_pdf()
        finally:
            for path in self._written:
                path.unlink(missing_ok=True)
        self._logger.info(
            "Graphic discarded",
            extra={"output_path": str(self.output_path), "pages": self.page_count},
        )

    def __enter__(self) -> MatplotlibGraphic:
        return self

    def __exit__(self, exc_type: object, *exc_info: object) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()
