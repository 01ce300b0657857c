"""Tests for the flow, demand and OSM POLY readers."""

import pytest

from roadviz.adapters.readers import (
    CsvTable,
    OsmPolyArea,
    read_flow_patterns,
    read_od_pairs,
    validate_od_pairs,
)
from roadviz.domain.errors import (
    BoundaryFileError,
    DemandFileError,
    FlowFileCorruptError,
    InputFileNotFoundError,
    MalformedHeaderError,
)
from roadviz.domain.geometry import Point
from roadviz.domain.models import ODPair


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestReadFlowPatterns:
    """Test suite for read_flow_patterns."""

    def test_reads_iterations(self, tmp_path):
        path = write(
            tmp_path,
            "flow.csv",
            "# assignment output\niteration,edge_flow\n1,10\n1,20\n# second pass\n2,11.5\n2,0\n",
        )

        patterns = read_flow_patterns(path, num_edges=2)

        assert patterns.num_iterations == 2
        assert list(patterns.flows(1)) == [10.0, 20.0]
        assert patterns.flow(2, 0) == 11.5

    def test_row_count_not_multiple_of_edge_count_raises(self, tmp_path):
        path = write(tmp_path, "flow.csv", "iteration,edge_flow\n1,1\n1,2\n1,3\n")

        with pytest.raises(FlowFileCorruptError):
            read_flow_patterns(path, num_edges=2)

    def test_short_iteration_raises(self, tmp_path):
        path = write(tmp_path, "flow.csv", "iteration,edge_flow\n1,1\n2,1\n2,2\n")

        with pytest.raises(FlowFileCorruptError) as exc_info:
            read_flow_patterns(path, num_edges=2)
        assert exc_info.value.line == 3

    def test_iteration_gap_raises(self, tmp_path):
        path = write(tmp_path, "flow.csv", "iteration,edge_flow\n1,1\n3,1\n")

        with pytest.raises(FlowFileCorruptError):
            read_flow_patterns(path, num_edges=1)

    def test_first_iteration_must_be_one(self, tmp_path):
        path = write(tmp_path, "flow.csv", "iteration,edge_flow\n2,1\n")

        with pytest.raises(FlowFileCorruptError):
            read_flow_patterns(path, num_edges=1)

    @pytest.mark.parametrize("row", ["0,1", "-1,1", "1,-0.5", "1,lots"])
    def test_invalid_rows_raise(self, tmp_path, row):
        path = write(tmp_path, "flow.csv", f"iteration,edge_flow\n{row}\n")

        with pytest.raises(FlowFileCorruptError):
            read_flow_patterns(path, num_edges=1)

    def test_empty_table_raises(self, tmp_path):
        path = write(tmp_path, "flow.csv", "iteration,edge_flow\n")

        with pytest.raises(FlowFileCorruptError):
            read_flow_patterns(path, num_edges=1)

    def test_missing_column_raises(self, tmp_path):
        path = write(tmp_path, "flow.csv", "iteration,flow\n1,1\n")

        with pytest.raises(MalformedHeaderError):
            read_flow_patterns(path, num_edges=1)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(InputFileNotFoundError):
            read_flow_patterns(tmp_path / "missing.csv", num_edges=1)


class TestReadOdPairs:
    """Test suite for the demand reader."""

    def test_reads_pairs(self, tmp_path):
        path = write(tmp_path, "od.csv", "origin,destination\n0,2\n1,0\n")

        assert read_od_pairs(path) == [ODPair(0, 2), ODPair(1, 0)]

    def test_malformed_pair_raises(self, tmp_path):
        path = write(tmp_path, "od.csv", "origin,destination\n0,two\n")

        with pytest.raises(DemandFileError) as exc_info:
            read_od_pairs(path)
        assert exc_info.value.line == 2

    def test_validate_rejects_unknown_vertices(self):
        validate_od_pairs([ODPair(0, 2)], num_vertices=3)

        with pytest.raises(DemandFileError):
            validate_od_pairs([ODPair(0, 3)], num_vertices=3)
        with pytest.raises(DemandFileError):
            validate_od_pairs([ODPair(-1, 0)], num_vertices=3)


class TestCsvTable:
    """Test suite for CsvTable."""

    def test_trims_whitespace_and_skips_blank_lines(self, tmp_path):
        path = write(tmp_path, "t.csv", " a , b \n\n 1 , 2 \n")

        with CsvTable(path, ("a", "b")) as table:
            rows = list(table)

        assert rows == [(3, {"a": "1", "b": "2"})]

    def test_read_before_open_raises(self, tmp_path):
        table = CsvTable(write(tmp_path, "t.csv", "a\n"), ("a",))

        with pytest.raises(RuntimeError):
            table.read_row()


SAMPLE_POLY = """stuttgart
1
   9.0 48.6
   9.3 48.6
   9.3 48.9
   9.0 48.9
END
!2
   9.1 48.7
   9.2 48.7
   9.2 48.8
END
END
"""


class TestOsmPolyArea:
    """Test suite for OsmPolyArea."""

    def test_parses_rings_and_holes(self, tmp_path):
        area = OsmPolyArea.from_file(write(tmp_path, "s.poly", SAMPLE_POLY))

        assert area.name == "stuttgart"
        assert len(area.rings()) == 2
        assert area.faces[0].points[0] == Point(9.0, 48.6)
        assert not area.faces[0].is_hole
        assert area.faces[1].is_hole
        assert area.faces[1].name == "2"

    def test_bounding_box(self, tmp_path):
        area = OsmPolyArea.from_file(write(tmp_path, "s.poly", SAMPLE_POLY))

        box = area.bounding_box()

        assert box.south_west == Point(9.0, 48.6)
        assert box.north_east == Point(9.3, 48.9)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "name\n1\n 9 48\n 9.1 48\n 9.1 48.1\nEND\n",
            "name\n1\n 9 48\n 9.1 48\n",
            "name\n1\n 9 48 3\nEND\nEND\n",
            "name\n1\n 9 north\nEND\nEND\n",
            "name\n1\n 9 48\n 9.1 48\nEND\nEND\n",
            "name\nEND\n",
            "name\n1\n 9 48\n 9.3 95.0\n 9.1 48.1\nEND\nEND\n",
            "name\n1\n 181 48\n 9.1 48\n 9.1 48.1\nEND\nEND\n",
            "name\n1\n 9 inf\n 9.1 48\n 9.1 48.1\nEND\nEND\n",
        ],
    )
    def test_malformed_files_raise(self, text):
        with pytest.raises(BoundaryFileError):
            OsmPolyArea.parse(text.splitlines())

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(InputFileNotFoundError):
            OsmPolyArea.from_file(tmp_path / "missing.poly")
