"""wikirank CLI - inspect node files, manage docno mappings.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

from typing import Annotated

import tyro

from wikirank.cli.commands.docno import DocnoBuild, DocnoLookup
from wikirank.cli.commands.intersect import Intersect
from wikirank.cli.commands.nodes import NodesInspect, NodesStats

_NodesInspect = Annotated[NodesInspect, tyro.conf.subcommand("nodes:inspect")]
_NodesStats = Annotated[NodesStats, tyro.conf.subcommand("nodes:stats")]
_DocnoBuild = Annotated[DocnoBuild, tyro.conf.subcommand("docno:build")]
_DocnoLookup = Annotated[DocnoLookup, tyro.conf.subcommand("docno:lookup")]
_Intersect = Annotated[Intersect, tyro.conf.subcommand("intersect")]

Command = _NodesInspect | _NodesStats | _DocnoBuild | _DocnoLookup | _Intersect


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    # configure structlog (respects WIKIRANK_DEBUG env var)
    from wikirank.logging_config import configure_logging

    configure_logging()

    try:
        cmd = tyro.cli(
            Command,
            prog="wikirank",
            description="Inspect PageRank node records and docno mappings.",
            args=argv,
        )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        from wikirank import console

        console.error(str(e))
        return 1
