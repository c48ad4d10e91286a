"""In-memory representation of a decoded archive."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .documents import PackMeta, TagIndex
from .version import VersionRecord

__all__ = ["AssetPack"]


@dataclass(slots=True)
class AssetPack:
    """A decoded archive.

    ``object_files`` holds payloads under ``textures/objects/``;
    ``other_files`` holds every remaining payload except the metadata
    document, its ``pack.json`` copy and the tag index. Keys are normalized
    relative paths.
    """

    version: VersionRecord
    meta: PackMeta
    tags: TagIndex = field(default_factory=TagIndex)
    object_files: Dict[str, bytes] = field(default_factory=dict)
    other_files: Dict[str, bytes] = field(default_factory=dict)

    @property
    def file_count(self) -> int:
        return len(self.object_files) + len(self.other_files)

    @property
    def total_bytes(self) -> int:
        return sum(len(b) for b in self.object_files.values()) + sum(
            len(b) for b in self.other_files.values()
        )
