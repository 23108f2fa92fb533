"""Tests for the wikirank CLI commands."""

import json

import pytest

from wikirank.cli import main
from wikirank.docno import DocnoMapping, build_docno_mapping
from wikirank.node import CompleteNode, MassNode, StructureNode, write_nodes


@pytest.fixture
def node_file(tmp_path):
    path = tmp_path / "nodes.bin"
    with open(path, "wb") as f:
        write_nodes(
            [
                StructureNode(1, [2, 3]),
                MassNode(2, 0.5),
                CompleteNode(3, 0.25, [1]),
            ],
            f,
        )
    return path


class TestIntersect:
    """Test the intersect command."""

    def test_prints_intersection(self, capsys):
        assert main(["intersect", "1,3,5,7", "3,4,5,9"]) == 0
        assert capsys.readouterr().out.strip() == "[3,5]"

    def test_disjoint(self, capsys):
        assert main(["intersect", "1,3", "2,4"]) == 0
        assert capsys.readouterr().out.strip() == "[]"

    def test_unsorted_input(self, capsys):
        assert main(["intersect", "5,1", "1,5"]) == 1


class TestNodes:
    """Test the nodes:inspect and nodes:stats commands."""

    def test_inspect(self, node_file, capsys):
        assert main(["nodes:inspect", str(node_file)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["{1 - {2, 3}}", "{2 0.5 {}}", "{3 0.25 {1}}"]

    def test_inspect_limit(self, node_file, capsys):
        assert main(["nodes:inspect", str(node_file), "--limit", "1"]) == 0
        assert capsys.readouterr().out.splitlines() == ["{1 - {2, 3}}"]

    def test_inspect_json(self, node_file, capsys):
        argv = ["nodes:inspect", str(node_file), "--output-format", "json"]
        assert main(argv) == 0
        records = [
            json.loads(line) for line in capsys.readouterr().out.splitlines()
        ]
        assert records[0] == {
            "variant": "structure",
            "node_id": 1,
            "score": None,
            "adjacency": [2, 3],
        }
        assert records[1]["adjacency"] is None

    def test_inspect_limit_stops_before_bad_record(self, tmp_path, capsys):
        path = tmp_path / "nodes.bin"
        path.write_bytes(MassNode(1, 0.5).encode() + b"\x09")
        assert main(["nodes:inspect", str(path), "--limit", "1"]) == 0
        captured = capsys.readouterr()
        assert captured.out.splitlines() == ["{1 0.5 {}}"]
        assert "error" not in captured.err

    def test_inspect_missing_file(self, tmp_path):
        assert main(["nodes:inspect", str(tmp_path / "nope.bin")]) == 1

    def test_inspect_corrupt_file(self, tmp_path):
        path = tmp_path / "bad.bin"
        path.write_bytes(b"\x07")
        assert main(["nodes:inspect", str(path)]) == 1

    def test_stats(self, node_file, capsys):
        assert main(["nodes:stats", str(node_file)]) == 0
        out = capsys.readouterr().out
        assert "records: 3" in out
        assert "edges: 3" in out
        assert "total mass: 0.75" in out


class TestDocno:
    """Test the docno:build and docno:lookup commands."""

    def test_build_and_lookup(self, tmp_path, capsys):
        ids = tmp_path / "ids.txt"
        ids.write_text("30\n10\n20\n")
        out = tmp_path / "docno.dat"

        assert main(["docno:build", str(ids), str(out)]) == 0
        assert len(DocnoMapping.load(out)) == 3
        capsys.readouterr()

        assert main(["docno:lookup", str(out), "20"]) == 0
        assert capsys.readouterr().out.strip() == "2"

    def test_lookup_unknown(self, tmp_path):
        out = tmp_path / "docno.dat"
        build_docno_mapping([1, 2]).write(out)
        assert main(["docno:lookup", str(out), "5"]) == 1
