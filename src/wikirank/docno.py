"""Mapping between native document ids (docids) and dense docnos.

Docnos are assigned by a count-then-number pass: every distinct docid is
collected, the set is sorted ascending, and docnos 1..n are handed out in
that order. Looking a docid up is a binary search over the sorted array.

Mapping file format (big-endian):
    count:   i32
    docids:  i32 * count   (ascending; docno = position + 1)
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import numpy as np
import structlog

from wikirank.errors import DecodeError
from wikirank.wire import INT

logger = structlog.get_logger(__name__)

_DOCID_DTYPE = np.dtype(">i4")
INT32_MAX = 2**31 - 1


class DocnoMapping:
    """Bidirectional docid <-> docno lookup over a sorted docid array."""

    def __init__(self, docids: np.ndarray) -> None:
        self._docids = np.asarray(docids, dtype=np.int32)

    def __len__(self) -> int:
        return len(self._docids)

    @property
    def docids(self) -> np.ndarray:
        return self._docids

    def get_docno(self, docid: int) -> int:
        """Return the docno for docid, or -1 if it is not mapped."""
        idx = int(np.searchsorted(self._docids, docid))
        if idx < len(self._docids) and int(self._docids[idx]) == docid:
            return idx + 1
        return -1

    def get_docid(self, docno: int) -> int:
        """Return the docid numbered docno (1-based)."""
        if not 1 <= docno <= len(self._docids):
            raise IndexError(
                f"docno {docno} out of range 1..{len(self._docids)}"
            )
        return int(self._docids[docno - 1])

    def write(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(INT.pack(len(self._docids)))
            f.write(self._docids.astype(_DOCID_DTYPE).tobytes())
        logger.info("docno_mapping_written", path=str(path), count=len(self))

    @classmethod
    def load(cls, path: Path) -> DocnoMapping:
        data = path.read_bytes()
        if len(data) < INT.size:
            raise DecodeError(f"docno mapping {path} is missing its header")
        (count,) = INT.unpack_from(data)
        if count < 0:
            raise DecodeError(f"negative docno count in {path}: {count}")

        expected = INT.size + count * _DOCID_DTYPE.itemsize
        if len(data) < expected:
            raise DecodeError(
                f"truncated docno mapping {path}: expected {expected} bytes, "
                f"got {len(data)}"
            )
        docids = np.frombuffer(
            data, dtype=_DOCID_DTYPE, count=count, offset=INT.size
        )
        logger.debug("docno_mapping_loaded", path=str(path), count=count)
        return cls(docids.astype(np.int32))


def build_docno_mapping(docids: Iterable[int]) -> DocnoMapping:
    """Number every distinct docid in ascending order, starting at 1."""
    total = 0
    distinct: set[int] = set()
    for docid in docids:
        docid = int(docid)
        if not 0 <= docid <= INT32_MAX:
            raise ValueError(f"docid {docid} does not fit in a 32-bit slot")
        distinct.add(docid)
        total += 1

    ordered = np.array(sorted(distinct), dtype=np.int32)
    logger.info(
        "docno_mapping_built",
        docids_seen=total,
        docnos_assigned=len(ordered),
    )
    return DocnoMapping(ordered)


def read_docids(path: Path) -> list[int]:
    """Read one integer docid per non-blank line of a text file."""
    docids = []
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                docids.append(int(line))
            except ValueError as e:
                raise ValueError(
                    f"{path}:{lineno}: not an integer docid: {line!r}"
                ) from e
    return docids
