"""Resizable list of 64-bit ids with a binary codec and sorted intersection.

Used for node adjacency lists and anywhere two ascending id sets need to be
intersected (posting-list style). Insertion order is whatever the caller
appends; nothing here sorts implicitly.

Wire format (big-endian, no padding):
    count:    i32
    values:   i64 * count
"""

from __future__ import annotations

import io
import operator
from collections.abc import Iterable, Iterator
from typing import BinaryIO

import numpy as np

from wikirank import config
from wikirank.errors import DecodeError, RangeError
from wikirank.wire import (
    INT,
    INT64_MAX,
    LONG,
    check_int64,
    read_exact,
    read_int,
)

_WIRE_DTYPE = np.dtype(">i8")


def _as_int64(value: object) -> int:
    # operator.index rejects floats instead of truncating them
    try:
        value = operator.index(value)  # type: ignore[arg-type]
    except TypeError:
        raise TypeError(
            f"SortedLongList values must be integers, got {value!r}"
        ) from None
    return check_int64(value)


def _int64_array(values: np.ndarray) -> np.ndarray:
    if values.size and not np.issubdtype(values.dtype, np.integer):
        raise TypeError(
            f"SortedLongList values must be integers, got dtype {values.dtype}"
        )
    if values.size and values.dtype == np.uint64 and values.max() > INT64_MAX:
        raise ValueError("value does not fit in a signed 64-bit int")
    return np.array(values, dtype=np.int64, copy=True)


class SortedLongList:
    """Ordered container of signed 64-bit integers.

    Backed by a numpy int64 buffer that grows geometrically, so append is
    amortized O(1). Methods that assume ascending order (``intersection``)
    document it; the container itself does not enforce it.
    """

    __slots__ = ("_data", "_size")

    def __init__(
        self,
        values: Iterable[int] | np.ndarray | SortedLongList | None = None,
        *,
        capacity: int | None = None,
    ) -> None:
        if capacity is None:
            capacity = config.DEFAULT_CAPACITY
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")

        if values is None:
            self._data = np.empty(capacity, dtype=np.int64)
            self._size = 0
            return

        if isinstance(values, SortedLongList):
            arr = values.to_array()
        elif isinstance(values, np.ndarray):
            arr = _int64_array(values)
        else:
            arr = np.fromiter(
                (_as_int64(v) for v in values), dtype=np.int64
            )

        if arr.ndim != 1:
            raise ValueError("SortedLongList values must be one-dimensional")

        self._data = np.empty(max(capacity, len(arr)), dtype=np.int64)
        self._data[: len(arr)] = arr
        self._size = len(arr)

    @classmethod
    def from_range(cls, first: int, last: int) -> SortedLongList:
        """Build the half-open ascending range [first, last)."""
        if last <= first:
            return cls()
        return cls(np.arange(first, last, dtype=np.int64))

    @classmethod
    def read_from(cls, stream: BinaryIO) -> SortedLongList:
        """Decode a new list from stream."""
        result = cls(capacity=0)
        result.read_fields(stream)
        return result

    @classmethod
    def from_bytes(cls, data: bytes) -> SortedLongList:
        """Decode a list from exactly one encoded payload."""
        stream = io.BytesIO(data)
        result = cls.read_from(stream)
        leftover = len(data) - stream.tell()
        if leftover:
            raise DecodeError(f"{leftover} trailing bytes after list payload")
        return result

    # -- size / access -------------------------------------------------

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def get(self, index: int) -> int:
        """Return the value at index (0 <= index < size)."""
        if not 0 <= index < self._size:
            raise IndexError(
                f"index {index} out of bounds for list of size {self._size}"
            )
        return int(self._data[index])

    def __getitem__(self, index: int) -> int:
        if index < 0:
            index += self._size
        return self.get(index)

    def __iter__(self) -> Iterator[int]:
        return iter(self.tolist())

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (int, np.integer)):
            return False
        return bool(np.any(self._data[: self._size] == value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortedLongList):
            return NotImplemented
        return self._size == other._size and bool(
            np.array_equal(self._data[: self._size], other._data[: other._size])
        )

    __hash__ = None  # type: ignore[assignment]

    def to_array(self) -> np.ndarray:
        """Return a copy of the contents as an int64 array."""
        return self._data[: self._size].copy()

    def tolist(self) -> list[int]:
        return self._data[: self._size].tolist()

    # -- mutation ------------------------------------------------------

    def _ensure_capacity(self, needed: int) -> None:
        if needed <= len(self._data):
            return
        new_cap = max(needed, int(len(self._data) * config.GROWTH_FACTOR) + 1)
        buf = np.empty(new_cap, dtype=np.int64)
        buf[: self._size] = self._data[: self._size]
        self._data = buf

    def append(self, value: int) -> None:
        """Append value without any ordering or duplicate check."""
        value = _as_int64(value)
        self._ensure_capacity(self._size + 1)
        self._data[self._size] = value
        self._size += 1

    def clear(self) -> None:
        self._size = 0

    def add_all_deduped(self, values: Iterable[int]) -> int:
        """Append each value not already present, keeping input order.

        Small lists use a linear membership scan per candidate; past
        ``config.DEDUP_SCAN_LIMIT`` elements a hash set of the current
        contents is used instead so bulk inserts stay linear.

        Returns:
            Number of values actually appended.
        """
        added = 0
        seen: set[int] | None = None
        for value in values:
            value = _as_int64(value)
            if seen is None and self._size > config.DEDUP_SCAN_LIMIT:
                seen = set(self.tolist())
            if seen is not None:
                if value in seen:
                    continue
                seen.add(value)
            elif value in self:
                continue
            self.append(value)
            added += 1
        return added

    # -- derived lists -------------------------------------------------

    def copy(self) -> SortedLongList:
        """Deep copy with identical contents and order."""
        return SortedLongList(self)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> SortedLongList:
        return self.copy()

    def slice(self, start: int, end: int) -> SortedLongList:
        """Return elements at positions start..end, both ends inclusive.

        The result holds ``end - start + 1`` values and shares nothing with
        this list.
        """
        if end < start:
            raise RangeError(f"slice end {end} is before start {start}")
        if start < 0 or end >= self._size:
            raise RangeError(
                f"slice [{start}, {end}] out of bounds for list of size "
                f"{self._size}"
            )
        return SortedLongList(self._data[start : end + 1])

    def intersection(self, other: SortedLongList) -> SortedLongList:
        """Intersect two ascending lists with a single forward merge.

        Both operands must already be sorted ascending; unsorted input
        gives silently wrong results. Runs in O(n + m) and never rescans.
        An empty overlap is returned as an empty list.
        """
        a = self._data[: self._size].tolist()
        b = other._data[: other._size].tolist()
        result = SortedLongList(capacity=min(len(a), len(b)))

        i = j = 0
        len_a, len_b = len(a), len(b)
        while i < len_a and j < len_b:
            x, y = a[i], b[j]
            if x < y:
                i += 1
            elif y < x:
                j += 1
            else:
                result.append(x)
                i += 1
                j += 1
        return result

    # -- codec ---------------------------------------------------------

    def write(self, stream: BinaryIO) -> None:
        """Serialize as an i32 count followed by i64 values."""
        stream.write(INT.pack(self._size))
        if self._size:
            stream.write(self._data[: self._size].astype(_WIRE_DTYPE).tobytes())

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.write(buf)
        return buf.getvalue()

    def encoded_size(self) -> int:
        return INT.size + LONG.size * self._size

    def read_fields(self, stream: BinaryIO) -> None:
        """Replace the contents with a list decoded from stream.

        The whole payload is read before anything is replaced, so a
        truncated stream raises DecodeError and leaves this list unchanged.
        """
        count = read_int(stream, "list count")
        if count < 0:
            raise DecodeError(f"negative list count: {count}")

        payload = read_exact(stream, count * LONG.size, "list values")
        values = np.frombuffer(payload, dtype=_WIRE_DTYPE).astype(np.int64)

        if len(self._data) < count:
            self._data = np.empty(count, dtype=np.int64)
        self._data[:count] = values
        self._size = count

    # -- formatting ----------------------------------------------------

    def __str__(self) -> str:
        return "[" + ",".join(str(v) for v in self.tolist()) + "]"

    def __repr__(self) -> str:
        return f"SortedLongList({self.tolist()!r})"
