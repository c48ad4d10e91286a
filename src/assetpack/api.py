"""High-level API for asset pack archives.

The codec core is three operations:

- :func:`read` decodes a seekable binary stream into an :class:`AssetPack`
- :func:`write` encodes an :class:`AssetPack` into a binary sink
- :func:`clean` removes dangling references from the pack's tag index

The remaining helpers wrap them for files on disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO

from .archive.cleaner import clean_tags
from .archive.documents import ColorOverrides, PackMeta, TagIndex
from .archive.errors import (
    ArchiveError,
    DecodeError,
    EncodeError,
    EncodingError,
    ExtractError,
    FormatError,
    SchemaError,
    StructuralError,
)
from .archive.inspector import (
    inspect_pack as _inspect_pack_impl,
    is_asset_pack,
    validate_pack as _validate_pack_impl,
)
from .archive.model import AssetPack
from .archive.reader import read_asset_pack
from .archive.version import VersionRecord
from .archive.writer import write_asset_pack
from .diff import diff_packs as _diff_packs_impl
from .extract import extract_pack as _extract_pack_impl
from .logging import get_logger

__all__ = [
    "AssetPack",
    "VersionRecord",
    "PackMeta",
    "ColorOverrides",
    "TagIndex",
    "ArchiveError",
    "DecodeError",
    "StructuralError",
    "SchemaError",
    "EncodingError",
    "FormatError",
    "EncodeError",
    "ExtractError",
    "read",
    "write",
    "clean",
    "read_pack",
    "write_pack",
    "clean_pack",
    "CleanResult",
    "inspect_pack",
    "validate_pack",
    "is_asset_pack",
    "extract_pack",
    "diff_packs",
]


def read(stream: BinaryIO) -> AssetPack:
    return read_asset_pack(stream)


def write(pack: AssetPack, sink: BinaryIO) -> int:
    return write_asset_pack(pack, sink)


def clean(pack: AssetPack) -> None:
    clean_tags(pack)


def read_pack(path: str | Path) -> AssetPack:
    p = Path(path)
    get_logger().info("Reading '%s'", p)
    with p.open("rb") as f:
        return read_asset_pack(f)


def write_pack(pack: AssetPack, path: str | Path) -> int:
    p = Path(path)
    get_logger().info("Writing '%s'", p)
    with p.open("wb") as f:
        return write_asset_pack(pack, f)


@dataclass(slots=True)
class CleanResult:
    output_file: Path
    bytes_written: int
    removed_tags: int
    removed_sets: int


def clean_pack(input_path: str | Path, output_path: str | Path) -> CleanResult:
    """Read ``input_path``, clean its tag index and write ``output_path``."""
    pack = read_pack(input_path)
    tags_before = len(pack.tags.tags)
    sets_before = len(pack.tags.sets)
    clean(pack)
    bytes_written = write_pack(pack, output_path)
    return CleanResult(
        output_file=Path(output_path),
        bytes_written=bytes_written,
        removed_tags=tags_before - len(pack.tags.tags),
        removed_sets=sets_before - len(pack.tags.sets),
    )


def inspect_pack(path: str | Path) -> dict[str, Any]:
    return _inspect_pack_impl(path)


def validate_pack(path: str | Path) -> list[str]:
    return _validate_pack_impl(_inspect_pack_impl(path))


def extract_pack(
    source: str | Path | AssetPack, dest: str | Path, *, force: bool = False
) -> list[Path]:
    pack = source if isinstance(source, AssetPack) else read_pack(source)
    return _extract_pack_impl(pack, dest, force=force)


def diff_packs(
    left: str | Path | AssetPack, right: str | Path | AssetPack
) -> dict[str, Any]:
    a = left if isinstance(left, AssetPack) else read_pack(left)
    b = right if isinstance(right, AssetPack) else read_pack(right)
    return _diff_packs_impl(a, b)
