from wikirank.docno import DocnoMapping, build_docno_mapping
from wikirank.errors import DecodeError, InvalidVariantError, RangeError
from wikirank.longlist import SortedLongList
from wikirank.node import (
    CompleteNode,
    MassNode,
    NodeType,
    PageRankNode,
    StructureNode,
    coerce_node_type,
    decode_node,
    encode_node,
    format_node,
    iter_nodes,
    read_node,
    with_variant,
    write_node,
    write_nodes,
)
from wikirank.passes import combine, emit_mass, total_mass

__all__ = [
    "CompleteNode",
    "DecodeError",
    "DocnoMapping",
    "InvalidVariantError",
    "MassNode",
    "NodeType",
    "PageRankNode",
    "RangeError",
    "SortedLongList",
    "StructureNode",
    "build_docno_mapping",
    "coerce_node_type",
    "combine",
    "decode_node",
    "emit_mass",
    "encode_node",
    "format_node",
    "iter_nodes",
    "read_node",
    "total_mass",
    "with_variant",
    "write_node",
    "write_nodes",
]
