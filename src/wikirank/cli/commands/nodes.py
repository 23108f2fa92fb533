"""Node commands - inspect files of encoded PageRank node records."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable, Iterator
from itertools import islice
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import tyro

from wikirank import console
from wikirank.node import (
    CompleteNode,
    PageRankNode,
    StructureNode,
    iter_nodes,
)
from wikirank.passes import total_mass


@dataclass
class NodesInspect:
    """Print node records from a file of back-to-back encoded nodes."""

    path: tyro.conf.Positional[Path]
    limit: int | None = field(
        default=None,
        metadata={"help": "Stop after this many records"},
    )
    output_format: Literal["none", "json"] = field(
        default="none",
        metadata={"help": "Output format (none=text, json)"},
    )

    def run(self) -> int:
        """Execute the nodes:inspect command."""
        if not self.path.exists():
            console.error(f"no such file: {self.path}")
            return 1

        with open(self.path, "rb") as f:
            for node in islice(iter_nodes(f), self.limit):
                if self.output_format == "json":
                    print(
                        json.dumps(
                            {
                                "variant": node.variant.name.lower(),
                                "node_id": node.node_id,
                                "score": getattr(node, "score", None),
                                "adjacency": (
                                    node.adjacency.tolist()
                                    if hasattr(node, "adjacency")
                                    else None
                                ),
                            }
                        )
                    )
                else:
                    print(node)
        return 0


@dataclass
class NodesStats:
    """Summarize a file of encoded node records."""

    path: tyro.conf.Positional[Path]

    def run(self) -> int:
        """Execute the nodes:stats command."""
        if not self.path.exists():
            console.error(f"no such file: {self.path}")
            return 1

        variants: Counter[str] = Counter()
        edges = 0

        def tally(nodes: Iterable[PageRankNode]) -> Iterator[PageRankNode]:
            nonlocal edges
            for node in nodes:
                variants[node.variant.name.lower()] += 1
                if isinstance(node, (StructureNode, CompleteNode)):
                    edges += len(node.adjacency)
                yield node

        with open(self.path, "rb") as f:
            mass = total_mass(tally(iter_nodes(f)))

        console.header("Node Stats")
        console.key_value("records", sum(variants.values()))
        for name in ("structure", "mass", "complete"):
            console.key_value(name, variants[name], indent=2)
        console.key_value("edges", edges)
        console.key_value("total mass", f"{mass:.6g}")
        return 0
