"""Engine version record stored right after the magic marker."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from .binary import read_exact
from .constants import VERSION_RECORD_SIZE

__all__ = ["VersionRecord"]

_FORMAT = "<4i"


@dataclass(frozen=True, slots=True)
class VersionRecord:
    version: int
    major: int
    minor: int
    revision: int

    @classmethod
    def read(cls, stream: BinaryIO) -> "VersionRecord":
        raw = read_exact(stream, VERSION_RECORD_SIZE, "engine version")
        return cls(*struct.unpack(_FORMAT, raw))

    def pack(self) -> bytes:
        return struct.pack(
            _FORMAT, self.version, self.major, self.minor, self.revision
        )

    @staticmethod
    def size_in_bytes() -> int:
        return VERSION_RECORD_SIZE

    def to_dict(self) -> dict[str, int]:
        return {
            "version": self.version,
            "major": self.major,
            "minor": self.minor,
            "revision": self.revision,
        }

    def __str__(self) -> str:
        return f"{self.version}.{self.major}.{self.minor}.{self.revision}"
