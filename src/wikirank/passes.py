"""Per-vertex steps of one rank-mass redistribution pass.

A pass runs in two halves:

    emit_mass:  CompleteNode -> StructureNode + one MassNode per neighbor
    combine:    all records for one vertex id -> CompleteNode

Routing records to the worker that owns a vertex, grouping them by id,
convergence checks and dangling-mass handling are left to the job harness.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np
import structlog

from wikirank.node import (
    CompleteNode,
    MassNode,
    NodeType,
    PageRankNode,
    StructureNode,
    with_variant,
)

logger = structlog.get_logger(__name__)


def emit_mass(node: PageRankNode) -> Iterator[PageRankNode]:
    """Strip a vertex's mass off and spread it over its neighbors.

    Yields the vertex's StructureNode first (so its adjacency survives into
    the next pass), then a MassNode of ``score / out_degree`` for every
    neighbor. A StructureNode input yields only itself. A vertex with no
    neighbors yields no mass.

    Raises:
        TypeError: node is a MassNode, which has no structure to carry.
    """
    if isinstance(node, MassNode):
        raise TypeError(
            f"cannot redistribute mass node {node.node_id}: no adjacency"
        )

    yield with_variant(node, NodeType.STRUCTURE)

    if isinstance(node, StructureNode):
        return

    out_degree = len(node.adjacency)
    if out_degree == 0:
        logger.debug("dangling_node", node_id=node.node_id, score=node.score)
        return

    share = float(np.float32(node.score) / np.float32(out_degree))
    for neighbor in node.adjacency:
        yield MassNode(neighbor, share)


def combine(
    node_id: int, records: Iterable[PageRankNode]
) -> StructureNode | CompleteNode | None:
    """Fold every record addressed to node_id into one vertex.

    MassNode scores are summed; a CompleteNode contributes both its
    structure and its score. With no incoming mass the vertex stays a
    StructureNode: absent mass is not the same as zero mass.

    Returns:
        The combined vertex, or None when mass arrived for an id with no
        structure record (the mass is logged and dropped).

    Raises:
        ValueError: more than one structure record for the vertex, or a
            record addressed to a different id.
    """
    structure: StructureNode | CompleteNode | None = None
    mass = np.float32(0.0)
    saw_mass = False

    for record in records:
        if record.node_id != node_id:
            raise ValueError(
                f"record for node {record.node_id} grouped under {node_id}"
            )
        if isinstance(record, (StructureNode, CompleteNode)):
            if structure is not None:
                raise ValueError(
                    f"multiple structure records for node {node_id}"
                )
            structure = record
        if isinstance(record, (MassNode, CompleteNode)):
            mass += np.float32(record.score)
            saw_mass = True

    if structure is None:
        if saw_mass:
            logger.warning(
                "missing_structure", node_id=node_id, mass=float(mass)
            )
        return None

    if not saw_mass:
        return StructureNode(node_id, structure.adjacency)

    return CompleteNode(node_id, float(mass), structure.adjacency)


def total_mass(nodes: Iterable[PageRankNode]) -> float:
    """Sum the scores of every node that carries one."""
    total = np.float64(0.0)
    for node in nodes:
        score = getattr(node, "score", None)
        if score is not None:
            total += score
    return float(total)
