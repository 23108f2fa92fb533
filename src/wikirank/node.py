"""Graph vertex records exchanged between PageRank passes.

A vertex travels in one of three shapes, picked to keep each pass's data
volume small:

    StructureNode   id + adjacency        (loaded once, persists)
    MassNode        id + score            (rank-mass message to a neighbor)
    CompleteNode    id + score + adjacency (seeds the next iteration)

Record format (big-endian, no padding):
    tag:        i8   1=structure, 2=mass, 3=complete
    node_id:    i64
    score:      f32  mass, complete only
    adjacency:  SortedLongList payload (i32 count + i64 * count),
                structure and complete only
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO, ClassVar, Union

import numpy as np
import structlog

from wikirank.errors import DecodeError, InvalidVariantError
from wikirank.longlist import SortedLongList
from wikirank.wire import (
    FLOAT,
    LONG,
    TAG,
    check_int64,
    read_float,
    read_long,
    read_tag,
)


logger = structlog.get_logger(__name__)


class NodeType(IntEnum):
    STRUCTURE = 1
    MASS = 2
    COMPLETE = 3


def coerce_node_type(tag: object) -> NodeType:
    """Validate a raw variant tag.

    Raises:
        InvalidVariantError: tag is not one of the NodeType values.
    """
    if isinstance(tag, NodeType):
        return tag
    if isinstance(tag, bool) or not isinstance(tag, (int, np.integer)):
        raise InvalidVariantError(tag)
    try:
        return NodeType(int(tag))
    except ValueError:
        raise InvalidVariantError(tag) from None


def _as_float32(score: float) -> float:
    # scores cross the wire as f32; keep the in-memory value identical
    return float(np.float32(score))


def _as_adjacency(adjacency: Iterable[int] | SortedLongList) -> SortedLongList:
    # every node owns its own list, even when built from another node's
    return SortedLongList(adjacency)


def _format_score(score: float | None) -> str:
    if score is None:
        return "-"
    return str(np.float32(score))


def _format_adjacency(adjacency: SortedLongList | None) -> str:
    if adjacency is None:
        return "{}"
    return "{" + ", ".join(str(v) for v in adjacency) + "}"


class _NodeCodec:
    """Encode helpers shared by the three node dataclasses."""

    variant: ClassVar[NodeType]

    def write(self, stream: BinaryIO) -> None:
        write_node(self, stream)  # type: ignore[arg-type]

    def encode(self) -> bytes:
        return encode_node(self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return format_node(self)  # type: ignore[arg-type]


@dataclass(eq=True, repr=True)
class StructureNode(_NodeCodec):
    """Vertex id plus outgoing neighbor ids; carries no score."""

    variant: ClassVar[NodeType] = NodeType.STRUCTURE

    node_id: int
    adjacency: SortedLongList = field(default_factory=SortedLongList)

    def __post_init__(self) -> None:
        check_int64(self.node_id, "node id")
        self.adjacency = _as_adjacency(self.adjacency)


@dataclass(eq=True, repr=True)
class MassNode(_NodeCodec):
    """Rank mass sent to a vertex; carries no adjacency."""

    variant: ClassVar[NodeType] = NodeType.MASS

    node_id: int
    score: float

    def __post_init__(self) -> None:
        check_int64(self.node_id, "node id")
        self.score = _as_float32(self.score)


@dataclass(eq=True, repr=True)
class CompleteNode(_NodeCodec):
    """Vertex with both its current score and its adjacency."""

    variant: ClassVar[NodeType] = NodeType.COMPLETE

    node_id: int
    score: float
    adjacency: SortedLongList = field(default_factory=SortedLongList)

    def __post_init__(self) -> None:
        check_int64(self.node_id, "node id")
        self.score = _as_float32(self.score)
        self.adjacency = _as_adjacency(self.adjacency)


PageRankNode = Union[StructureNode, MassNode, CompleteNode]


def with_variant(
    node: PageRankNode,
    tag: NodeType | int,
    *,
    score: float | None = None,
    adjacency: Iterable[int] | SortedLongList | None = None,
) -> PageRankNode:
    """Re-express node as another variant.

    Fields the target variant does not carry are dropped. Fields it needs
    come from ``score``/``adjacency`` when given, otherwise from node. The
    adjacency of the result is a fresh copy, as with every node constructor.

    Raises:
        InvalidVariantError: tag is not a recognized variant.
        ValueError: the target variant needs a field that is unavailable.
    """
    target = coerce_node_type(tag)

    if score is None:
        score = getattr(node, "score", None)
    if adjacency is None:
        adjacency = getattr(node, "adjacency", None)

    needs_score = target in (NodeType.MASS, NodeType.COMPLETE)
    needs_adjacency = target in (NodeType.STRUCTURE, NodeType.COMPLETE)

    if needs_score and score is None:
        raise ValueError(
            f"cannot make {target.name.lower()} node {node.node_id}: no score"
        )
    if needs_adjacency and adjacency is None:
        raise ValueError(
            f"cannot make {target.name.lower()} node {node.node_id}: "
            "no adjacency"
        )

    if target is NodeType.MASS:
        return MassNode(node.node_id, score)  # type: ignore[arg-type]

    if target is NodeType.STRUCTURE:
        return StructureNode(node.node_id, adjacency)  # type: ignore[arg-type]
    return CompleteNode(
        node.node_id, score, adjacency  # type: ignore[arg-type]
    )


# =============================================================================
# Codec
# =============================================================================


def write_node(node: PageRankNode, stream: BinaryIO) -> None:
    """Serialize one node record to stream."""
    if isinstance(node, StructureNode):
        stream.write(TAG.pack(NodeType.STRUCTURE))
        stream.write(LONG.pack(node.node_id))
        node.adjacency.write(stream)
    elif isinstance(node, MassNode):
        stream.write(TAG.pack(NodeType.MASS))
        stream.write(LONG.pack(node.node_id))
        stream.write(FLOAT.pack(node.score))
    elif isinstance(node, CompleteNode):
        stream.write(TAG.pack(NodeType.COMPLETE))
        stream.write(LONG.pack(node.node_id))
        stream.write(FLOAT.pack(node.score))
        node.adjacency.write(stream)
    else:
        raise TypeError(f"not a PageRank node: {type(node).__name__}")


def encode_node(node: PageRankNode) -> bytes:
    buf = io.BytesIO()
    write_node(node, buf)
    return buf.getvalue()


def _read_body(tag: NodeType, stream: BinaryIO) -> PageRankNode:
    node_id = read_long(stream, "node id")

    if tag is NodeType.MASS:
        return MassNode(node_id, read_float(stream, "score"))

    if tag is NodeType.COMPLETE:
        score = read_float(stream, "score")
        adjacency = SortedLongList.read_from(stream)
        return CompleteNode(node_id, score, adjacency)

    return StructureNode(node_id, SortedLongList.read_from(stream))


def _parse_tag(raw_tag: int) -> NodeType:
    try:
        return NodeType(raw_tag)
    except ValueError:
        raise DecodeError(f"unrecognized node variant tag: {raw_tag}") from None


def read_node(stream: BinaryIO) -> PageRankNode:
    """Decode exactly one node record from stream.

    The tag is validated before anything else is read, so an unknown tag
    consumes only its own byte. The node is built only once every field
    has been read.

    Raises:
        DecodeError: unknown tag or truncated record.
    """
    return _read_body(_parse_tag(read_tag(stream)), stream)


def decode_node(data: bytes) -> PageRankNode:
    """Decode a buffer holding exactly one node record."""
    stream = io.BytesIO(data)
    node = read_node(stream)
    leftover = len(data) - stream.tell()
    if leftover:
        raise DecodeError(f"{leftover} trailing bytes after node record")
    return node


def iter_nodes(stream: BinaryIO) -> Iterator[PageRankNode]:
    """Yield back-to-back node records until a clean end of stream.

    EOF in the middle of a record is a DecodeError.
    """
    count = 0
    while True:
        head = stream.read(TAG.size)
        if not head:
            break
        tag = _parse_tag(TAG.unpack(head)[0])
        yield _read_body(tag, stream)
        count += 1
    logger.debug("nodes_read", count=count)


def write_nodes(nodes: Iterable[PageRankNode], stream: BinaryIO) -> int:
    """Write nodes back-to-back; returns the number written."""
    count = 0
    for node in nodes:
        write_node(node, stream)
        count += 1
    logger.debug("nodes_written", count=count)
    return count


def format_node(node: PageRankNode) -> str:
    """Render as ``{id score {a, b, c}}``.

    An absent score prints as ``-`` and absent adjacency as ``{}``.
    """
    return (
        f"{{{node.node_id} {_format_score(getattr(node, 'score', None))} "
        f"{_format_adjacency(getattr(node, 'adjacency', None))}}}"
    )
