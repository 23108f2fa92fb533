"""Docno commands - build and query docid/docno mappings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import tyro

from wikirank import console
from wikirank.docno import DocnoMapping, build_docno_mapping, read_docids


@dataclass
class DocnoBuild:
    """Number docids (one per line of INPUT) and write the mapping file."""

    input: tyro.conf.Positional[Path]
    output: tyro.conf.Positional[Path]

    def run(self) -> int:
        """Execute the docno:build command."""
        if not self.input.exists():
            console.error(f"no such file: {self.input}")
            return 1

        mapping = build_docno_mapping(read_docids(self.input))
        mapping.write(self.output)
        console.success(f"wrote {len(mapping)} docnos to {self.output}")
        return 0


@dataclass
class DocnoLookup:
    """Look up the docno assigned to a docid."""

    mapping: tyro.conf.Positional[Path]
    docid: tyro.conf.Positional[int]

    def run(self) -> int:
        """Execute the docno:lookup command."""
        docno = DocnoMapping.load(self.mapping).get_docno(self.docid)
        if docno < 0:
            console.error(f"docid {self.docid} is not mapped")
            return 1
        print(docno)
        return 0
