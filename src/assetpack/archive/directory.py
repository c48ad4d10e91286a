"""Directory entry codec.

Layout of one entry (little-endian)::

    int32   path length in bytes
    bytes   UTF-8 path
    int64   absolute payload offset
    int64   payload size
    16B     checksum slot (never validated, written as zeros)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from ..logging import get_logger
from .binary import read_exact, read_i32, read_i64, read_length, read_string
from .constants import CHECKSUM_SIZE, DIRECTORY_ENTRY_FIXED_SIZE, INT32_MAX
from .errors import E_ENCODE, ArchiveError, EncodeError
from .paths import split_archive_path

__all__ = ["DirectoryEntry", "read_directory_entry", "read_directory"]

_EMPTY_CHECKSUM = b"\x00" * CHECKSUM_SIZE


@dataclass(slots=True)
class DirectoryEntry:
    """One file record; ordering between entries is by ``offset``."""

    path: str
    size: int
    offset: int = 0
    checksum: bytes = field(default=_EMPTY_CHECKSUM, compare=False)
    namespace: str = field(default="", compare=False)
    raw_path: str = field(default="", compare=False)

    def encoded_size(self) -> int:
        return DIRECTORY_ENTRY_FIXED_SIZE + len(self.path.encode("utf-8"))

    def pack(self) -> bytes:
        path_bytes = self.path.encode("utf-8")
        if len(path_bytes) > INT32_MAX:
            raise EncodeError(
                code=E_ENCODE,
                message=f"Path too long for directory entry: {len(path_bytes)} bytes",
            )
        try:
            return (
                struct.pack("<i", len(path_bytes))
                + path_bytes
                + struct.pack("<qq", self.offset, self.size)
                + _EMPTY_CHECKSUM
            )
        except struct.error as e:
            raise EncodeError(
                code=E_ENCODE,
                message=f"Directory entry '{self.path}' does not fit its fields: {e}",
                context={"offset": self.offset, "size": self.size},
            ) from e


def read_directory_entry(stream: BinaryIO) -> DirectoryEntry:
    """Decode one entry, stripping ``res://packs/<pack-id>/`` from its path."""
    path_length = read_length(read_i32(stream, "path length"), "path length")
    raw_path = read_string(stream, path_length, "file path")
    offset = read_length(read_i64(stream, "file offset"), "file offset")
    size = read_length(read_i64(stream, "file size"), "file size")
    checksum = read_exact(stream, CHECKSUM_SIZE, "file checksum")

    namespace, path = split_archive_path(raw_path)
    get_logger().debug("File meta: %s (offset=%d size=%d)", path, offset, size)
    return DirectoryEntry(
        path=path,
        size=size,
        offset=offset,
        checksum=checksum,
        namespace=namespace,
        raw_path=raw_path,
    )


def read_directory(stream: BinaryIO, count: int) -> list[DirectoryEntry]:
    entries: list[DirectoryEntry] = []
    for i in range(count):
        try:
            entries.append(read_directory_entry(stream))
        except ArchiveError as e:
            e.context = {**(e.context or {}), "entry": i + 1, "entries": count}
            raise
    return entries
