"""Tests for the network renderer, driven through a recording graphic."""

import pytest

from roadviz.adapters.importers import CsvGraphImporter
from roadviz.adapters.readers import OsmPolyArea
from roadviz.config import ImportConfig, RenderConfig
from roadviz.domain.attributes import CAPACITY, NUM_LANES, ROAD_GEOMETRY
from roadviz.domain.errors import DemandFileError, FlowFileCorruptError
from roadviz.domain.geometry import LatLng
from roadviz.domain.models import (
    KIT_BLACK,
    KIT_BLACK_15,
    REDS_9CLASS,
    FlowPatterns,
    ODPair,
)
from roadviz.network import load_network
from roadviz.services.congestion import CongestionClassifier
from roadviz.services.renderer import RENDER_ATTRIBUTES, NetworkRenderer


@pytest.fixture
def network(three_vertex_dir):
    importer = CsvGraphImporter(three_vertex_dir, config=ImportConfig())
    return load_network(importer, RENDER_ATTRIBUTES)


@pytest.fixture
def renderer():
    return NetworkRenderer(config=RenderConfig())


def two_iterations(flows_1, flows_2):
    return FlowPatterns(num_edges=len(flows_1), values=tuple(flows_1) + tuple(flows_2))


class TestStaticDrawing:
    """Test suite for drawing without flow patterns."""

    def test_three_vertex_network_draws_two_lines(self, renderer, network, recording_graphic):
        renderer.render(recording_graphic, network)

        assert recording_graphic.count("draw_line") == 2
        assert recording_graphic.count("new_page") == 0
        widths = recording_graphic.args("set_line_width")
        assert widths[:2] == [0.1, 0.1]
        assert widths[-1] == 0.25

    def test_line_width_is_proportional_to_lanes(self, renderer, network, recording_graphic):
        network.set_value(NUM_LANES, 1, 3)

        renderer.draw_static(recording_graphic, network)

        assert recording_graphic.args("set_line_width")[:2] == [0.1, pytest.approx(0.3)]

    def test_lines_connect_projected_endpoints(self, renderer, network, recording_graphic):
        renderer.draw_static(recording_graphic, network)

        src, dst = recording_graphic.args("draw_line")[0]
        assert src == LatLng(48.70, 9.10).web_mercator_projection()
        assert dst == LatLng(48.71, 9.12).web_mercator_projection()

    def test_edges_follow_road_geometry(self, renderer, network, recording_graphic):
        bends = [LatLng(48.705, 9.11), LatLng(48.708, 9.115)]
        network.set_value(ROAD_GEOMETRY, 0, bends)

        renderer.draw_static(recording_graphic, network)

        lines = recording_graphic.args("draw_line")
        assert len(lines) == 4
        assert lines[0][1] == bends[0].web_mercator_projection()
        assert lines[1] == (bends[0].web_mercator_projection(), bends[1].web_mercator_projection())
        assert lines[2][1] == LatLng(48.71, 9.12).web_mercator_projection()

    def test_overlays_dim_the_network(self, renderer, network, recording_graphic, tmp_path):
        poly = tmp_path / "b.poly"
        poly.write_text("b\n1\n 9.0 48.6\n 9.3 48.6\n 9.3 48.9\nEND\nEND\n", encoding="utf-8")
        boundary = OsmPolyArea.from_file(poly)

        renderer.draw_static(
            recording_graphic, network, boundary=boundary, demand=[ODPair(0, 2)]
        )

        colors = recording_graphic.args("set_color")
        assert colors[0] == KIT_BLACK_15
        assert KIT_BLACK in colors
        assert colors[-1].alpha == 3
        assert recording_graphic.count("draw_polygon") == 1
        assert recording_graphic.count("draw_line") == 3

    def test_demand_with_unknown_vertex_raises(self, renderer, network, recording_graphic):
        with pytest.raises(DemandFileError):
            renderer.draw_static(recording_graphic, network, demand=[ODPair(0, 9)])


class TestFlowDrawing:
    """Test suite for drawing flow patterns."""

    def test_first_and_last_iteration_make_two_pages(self, renderer, network, recording_graphic):
        flows = two_iterations([10, 20], [60, 90])

        renderer.render(recording_graphic, network, flows=flows)

        names = recording_graphic.names()
        assert names.count("new_page") == 1
        assert recording_graphic.count("draw_line") == 4
        assert names.index("new_page") == len(names) // 2

    def test_only_first_and_last_of_three_iterations(self, renderer, network, recording_graphic):
        flows = FlowPatterns(num_edges=2, values=(1, 1, 2, 2, 3, 3))

        renderer.draw_flows(recording_graphic, network, flows)

        assert recording_graphic.count("new_page") == 1
        assert recording_graphic.count("draw_line") == 4

    def test_draw_intermediates_draws_every_iteration(self, network, recording_graphic):
        renderer = NetworkRenderer(config=RenderConfig(draw_intermediates=True))
        flows = FlowPatterns(num_edges=2, values=(1, 1, 2, 2, 3, 3))

        renderer.draw_flows(recording_graphic, network, flows)

        assert recording_graphic.count("new_page") == 2
        assert recording_graphic.count("draw_line") == 6

    def test_single_iteration_has_no_page_break(self, renderer, network, recording_graphic):
        renderer.draw_flows(recording_graphic, network, FlowPatterns(2, (0.0, 0.0)))

        assert recording_graphic.count("new_page") == 0

    def test_bands_drawn_lightest_first_with_one_color_each(
        self, renderer, network, recording_graphic
    ):
        # Capacities are 100 and 50: ratios 1.5 and 0.1.
        renderer.draw_flows(recording_graphic, network, FlowPatterns(2, (150.0, 5.0)))

        assert recording_graphic.args("set_color") == list(REDS_9CLASS[1:])
        colors_of_lines = []
        color = None
        for name, arg in recording_graphic.calls:
            if name == "set_color":
                color = arg
            elif name == "draw_line":
                colors_of_lines.append(color)
        assert colors_of_lines == [REDS_9CLASS[1], REDS_9CLASS[8]]

    def test_capacity_is_scaled_by_period(self, network):
        renderer = NetworkRenderer(config=RenderConfig(period=2.5))
        network.set_value(CAPACITY, 1, 0)

        assert renderer.scaled_capacities(network) == [250, 1]

    def test_flow_for_missing_edge_id_raises(self, renderer, network, recording_graphic):
        with pytest.raises(FlowFileCorruptError):
            renderer.draw_flows(recording_graphic, network, FlowPatterns(1, (1.0,)))
        assert recording_graphic.calls == []

    def test_custom_classifier(self, network, recording_graphic):
        renderer = NetworkRenderer(
            config=RenderConfig(), classifier=CongestionClassifier(step_percent=50, num_bands=2)
        )

        renderer.draw_flows(recording_graphic, network, FlowPatterns(2, (0.0, 0.0)))

        assert recording_graphic.args("set_color") == list(REDS_9CLASS[1:3])


class TestViewport:
    """Test suite for viewport computation."""

    def test_viewport_covers_all_vertices(self, renderer, network):
        viewport = renderer.compute_viewport(network)

        for lat_lng in [LatLng(48.70, 9.10), LatLng(48.71, 9.12), LatLng(48.72, 9.14)]:
            assert viewport.contains(lat_lng.web_mercator_projection())
        assert viewport.south_west == LatLng(48.70, 9.10).web_mercator_projection()
        assert viewport.north_east == LatLng(48.72, 9.14).web_mercator_projection()

    def test_clip_area_outside_network_sets_viewport(self, renderer, network):
        area = OsmPolyArea.parse(
            ["far", "1", "20.0 50.0", "21.0 50.0", "21.0 51.0", "END", "END"]
        )

        viewport = renderer.compute_viewport(network, area)

        assert viewport.contains(LatLng(50.5, 20.5).web_mercator_projection())
        assert viewport.south_west == LatLng(50.0, 20.0).web_mercator_projection()
        assert viewport.north_east == LatLng(51.0, 21.0).web_mercator_projection()
