"""Intersect command - intersect two ascending id lists."""

from __future__ import annotations

from dataclasses import dataclass

import tyro

from wikirank import console
from wikirank.longlist import SortedLongList


def parse_ids(text: str) -> SortedLongList:
    """Parse a comma-separated list of integer ids."""
    parts = [p.strip() for p in text.split(",")]
    return SortedLongList(int(p) for p in parts if p)


def _is_ascending(ids: SortedLongList) -> bool:
    values = ids.tolist()
    return all(a <= b for a, b in zip(values, values[1:]))


@dataclass
class Intersect:
    """Print the intersection of two ascending comma-separated id lists."""

    left: tyro.conf.Positional[str]
    right: tyro.conf.Positional[str]

    def run(self) -> int:
        """Execute the intersect command."""
        a, b = parse_ids(self.left), parse_ids(self.right)
        for name, ids in (("left", a), ("right", b)):
            if not _is_ascending(ids):
                console.error(f"{name} list is not sorted ascending: {ids}")
                return 1
        print(a.intersection(b))
        return 0
