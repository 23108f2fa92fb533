"""Tests for the per-vertex mass redistribution steps."""

from collections import defaultdict

import pytest

from wikirank.node import CompleteNode, MassNode, StructureNode
from wikirank.passes import combine, emit_mass, total_mass


def _group(records):
    grouped = defaultdict(list)
    for record in records:
        grouped[record.node_id].append(record)
    return grouped


class TestEmitMass:
    """Test spreading a vertex's mass over its neighbors."""

    def test_structure_first_then_mass(self):
        node = CompleteNode(1, 0.5, [2, 3])
        out = list(emit_mass(node))
        assert out[0] == StructureNode(1, [2, 3])
        assert out[1:] == [MassNode(2, 0.25), MassNode(3, 0.25)]

    def test_structure_input_emits_only_itself(self):
        out = list(emit_mass(StructureNode(1, [2, 3])))
        assert out == [StructureNode(1, [2, 3])]

    def test_dangling_node_emits_no_mass(self):
        out = list(emit_mass(CompleteNode(1, 0.5, [])))
        assert out == [StructureNode(1, [])]

    def test_structure_does_not_share_adjacency(self):
        node = CompleteNode(1, 0.5, [2])
        structure = next(emit_mass(node))
        structure.adjacency.append(9)
        assert node.adjacency.tolist() == [2]

    def test_mass_input_rejected(self):
        with pytest.raises(TypeError):
            list(emit_mass(MassNode(1, 0.5)))

    def test_mass_conserved(self):
        node = CompleteNode(1, 0.9, [2, 3, 4])
        out = list(emit_mass(node))
        assert total_mass(out) == pytest.approx(0.9, rel=1e-6)


class TestCombine:
    """Test folding the records for one vertex."""

    def test_structure_plus_mass(self):
        records = [MassNode(2, 0.25), StructureNode(2, [1]), MassNode(2, 0.5)]
        assert combine(2, records) == CompleteNode(2, 0.75, [1])

    def test_no_mass_stays_structure(self):
        result = combine(2, [StructureNode(2, [1])])
        assert result == StructureNode(2, [1])

    def test_mass_without_structure_is_dropped(self):
        assert combine(2, [MassNode(2, 0.5)]) is None

    def test_nothing(self):
        assert combine(2, []) is None

    def test_complete_contributes_score(self):
        records = [CompleteNode(2, 0.5, [1]), MassNode(2, 0.25)]
        assert combine(2, records) == CompleteNode(2, 0.75, [1])

    def test_duplicate_structure(self):
        with pytest.raises(ValueError):
            combine(2, [StructureNode(2, [1]), StructureNode(2, [3])])

    def test_wrong_id(self):
        with pytest.raises(ValueError):
            combine(2, [StructureNode(3, [1])])


class TestFullPass:
    """Test one whole pass over a small graph."""

    def test_three_node_cycle(self):
        # 1 -> 2 -> 3 -> 1, plus 1 -> 3
        nodes = [
            CompleteNode(1, 0.4, [2, 3]),
            CompleteNode(2, 0.3, [3]),
            CompleteNode(3, 0.3, [1]),
        ]
        emitted = [r for node in nodes for r in emit_mass(node)]
        grouped = _group(emitted)
        result = {
            node_id: combine(node_id, records)
            for node_id, records in grouped.items()
        }

        assert result[1] == CompleteNode(1, 0.3, [2, 3])
        assert result[2].score == pytest.approx(0.2)
        assert result[3].score == pytest.approx(0.5)
        assert total_mass(result.values()) == pytest.approx(1.0, rel=1e-6)


class TestTotalMass:
    """Test summing scores across nodes."""

    def test_ignores_structure(self):
        nodes = [
            StructureNode(1, [2]),
            MassNode(2, 0.5),
            CompleteNode(3, 1, []),
        ]
        assert total_mass(nodes) == pytest.approx(1.5)

    def test_empty(self):
        assert total_mass([]) == 0.0
