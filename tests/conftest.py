"""Shared fixtures: small networks on disk and a recording graphic."""

import os
import sys
from pathlib import Path
from typing import Any, List, Tuple

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from roadviz.config import AppConfig, ImportConfig, RenderConfig, reset_config


def write_network(directory: Path, vertices: str, edges: str) -> Path:
    """Write vertices.csv and edges.csv into `directory` and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "vertices.csv").write_text(vertices, encoding="utf-8")
    (directory / "edges.csv").write_text(edges, encoding="utf-8")
    return directory


THREE_VERTEX_VERTICES = """vert_id,xcoord,ycoord
10,48.70,9.10
11,48.71,9.12
12,48.72,9.14
"""

THREE_VERTEX_EDGES = """edge_tail,edge_head,length,capacity,speed
10,11,1000,100,50
11,12,500,50,30
"""


class RecordingGraphic:
    """A GraphicPort that records every call instead of drawing."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []
        self.closed = False
        self.aborted = False

    def set_color(self, color):
        self.calls.append(("set_color", color))

    def set_line_width(self, width):
        self.calls.append(("set_line_width", width))

    def draw_line(self, src, dst):
        self.calls.append(("draw_line", (src, dst)))

    def draw_polygon(self, points):
        self.calls.append(("draw_polygon", list(points)))

    def new_page(self):
        self.calls.append(("new_page", None))

    def close(self):
        self.closed = True

    def abort(self):
        self.aborted = True

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)

    def args(self, name: str) -> List[Any]:
        return [arg for n, arg in self.calls if n == name]


@pytest.fixture(autouse=True)
def fresh_config():
    """Make sure no cached configuration leaks between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        importer=ImportConfig(),
        render=RenderConfig(),
        output_dir=tmp_path,
    )


@pytest.fixture
def three_vertex_dir(tmp_path) -> Path:
    return write_network(tmp_path / "net", THREE_VERTEX_VERTICES, THREE_VERTEX_EDGES)


@pytest.fixture
def recording_graphic() -> RecordingGraphic:
    return RecordingGraphic()
