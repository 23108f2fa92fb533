"""Big-endian primitives shared by the node and list codecs.

Every multi-byte field is written in network byte order with no padding:

    tag:    i8
    id:     i64
    score:  f32 (IEEE-754 single)
    count:  i32
    value:  i64
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from wikirank.errors import DecodeError

TAG = struct.Struct(">b")
LONG = struct.Struct(">q")
INT = struct.Struct(">i")
FLOAT = struct.Struct(">f")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def check_int64(value: int, what: str = "value") -> int:
    """Validate that value fits in a signed 64-bit slot."""
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{what} {value} does not fit in a signed 64-bit int")
    return value


def read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    """Read exactly size bytes or raise DecodeError."""
    data = stream.read(size)
    if data is None or len(data) < size:
        got = 0 if not data else len(data)
        raise DecodeError(f"truncated {what}: expected {size} bytes, got {got}")
    return data


def read_tag(stream: BinaryIO) -> int:
    return TAG.unpack(read_exact(stream, TAG.size, "variant tag"))[0]


def read_long(stream: BinaryIO, what: str = "long") -> int:
    return LONG.unpack(read_exact(stream, LONG.size, what))[0]


def read_int(stream: BinaryIO, what: str = "int") -> int:
    return INT.unpack(read_exact(stream, INT.size, what))[0]


def read_float(stream: BinaryIO, what: str = "float") -> float:
    return FLOAT.unpack(read_exact(stream, FLOAT.size, what))[0]
