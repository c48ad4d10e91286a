"""Little-endian primitive readers over a binary stream."""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from .constants import I32, I64
from .errors import E_ENCODING, E_NEGATIVE_FIELD, EncodingError, StructuralError, truncated

__all__ = [
    "read_exact",
    "read_i32",
    "read_i64",
    "read_length",
    "read_string",
    "stream_end",
]


def stream_end(stream: BinaryIO) -> int:
    """Absolute end offset of a seekable stream; the position is restored."""
    pos = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    stream.seek(pos)
    return end


def read_exact(stream: BinaryIO, size: int, label: str) -> bytes:
    offset = stream.tell()
    data = stream.read(size)
    if len(data) != size:
        raise truncated(label, size, len(data), offset)
    return data


def read_i32(stream: BinaryIO, label: str) -> int:
    return struct.unpack("<i", read_exact(stream, I32, label))[0]


def read_i64(stream: BinaryIO, label: str) -> int:
    return struct.unpack("<q", read_exact(stream, I64, label))[0]


def read_length(value: int, label: str) -> int:
    """Reject negative counts, sizes and offsets read from the stream."""
    if value < 0:
        raise StructuralError(
            code=E_NEGATIVE_FIELD,
            message=f"Negative {label}: {value}",
            context={"field": label, "value": value},
        )
    return value


def read_string(stream: BinaryIO, length: int, label: str) -> str:
    # lengths come from the stream; never allocate past what it holds
    offset = stream.tell()
    available = stream_end(stream) - offset
    if length > available:
        raise truncated(label, length, max(available, 0), offset)
    raw = read_exact(stream, length, label)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(
            code=E_ENCODING,
            message=f"Could not convert {label} from bytes: {e.reason}",
            context={"raw": raw.hex()},
        ) from e
