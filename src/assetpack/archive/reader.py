"""Archive decoder.

Reads header and directory, then every payload in offset order, routing
each one by its normalized path:

* ``<pack-id>.json`` (no parent directory) -> pack metadata
* ``.../default.dungeondraft_tags`` -> tag index
* ``.../pack.json`` outside ``textures/objects/`` -> duplicate of the metadata, dropped
* ``textures/objects/...`` -> object files
* anything else -> other files
"""

from __future__ import annotations

from operator import attrgetter
from typing import BinaryIO, Optional

from ..logging import display_document, get_logger
from ..reporting import get_reporter, task
from .binary import read_exact, read_i32, read_length, stream_end
from .constants import MAGIC, RESERVED_SIZE
from .directory import DirectoryEntry, read_directory
from .documents import PackMeta, TagIndex, decode_text
from .errors import (
    E_DUPLICATE_METADATA,
    E_MISSING_METADATA,
    SchemaError,
    StructuralError,
    truncated,
)
from .model import AssetPack
from .paths import classify
from .version import VersionRecord

__all__ = ["read_asset_pack", "read_header"]


def read_header(stream: BinaryIO) -> tuple[bool, VersionRecord, int]:
    """Read magic, version record, reserved region and file count.

    Returns ``(magic_ok, version, file_count)``. A wrong magic marker is
    reported but never fatal.
    """
    logger = get_logger()
    start = stream.tell()
    magic = stream.read(len(MAGIC))
    magic_ok = magic == MAGIC
    if not magic_ok:
        logger.warning(
            "First bytes of file do not indicate this is an asset pack "
            "(got %s). Reading might not work correctly, attempting anyway.",
            magic.hex(),
        )
    stream.seek(start + len(MAGIC))

    version = VersionRecord.read(stream)
    # reserved words carry nothing we interpret
    read_exact(stream, RESERVED_SIZE, "reserved header space")
    count = read_length(read_i32(stream, "file count"), "file count")
    return magic_ok, version, count


def _read_payload(stream: BinaryIO, entry: DirectoryEntry, end: int) -> bytes:
    """Read one payload; ``end`` is the absolute end of the stream."""
    # sizes come from the directory; check before asking the stream for them
    if entry.offset + entry.size > end:
        available = max(0, end - entry.offset)
        err = truncated(f"file '{entry.path}'", entry.size, available, entry.offset)
        err.context = {**(err.context or {}), "path": entry.path}
        raise err
    stream.seek(entry.offset)
    return read_exact(stream, entry.size, f"file '{entry.path}'")


def _decode_document(entry: DirectoryEntry, raw: bytes, parse):
    text = decode_text(raw, entry.path)
    try:
        return parse(text)
    except SchemaError as e:
        display_document(text)
        e.context = {**(e.context or {}), "path": entry.path}
        raise


def read_asset_pack(stream: BinaryIO) -> AssetPack:
    """Decode a complete archive from a seekable binary stream."""
    logger = get_logger()
    rep = get_reporter()

    _, version, count = read_header(stream)
    end = stream_end(stream)
    entries = read_directory(stream, count)
    # payloads are laid out in offset order, not necessarily directory order
    entries.sort(key=attrgetter("offset"))

    meta: Optional[PackMeta] = None
    tags: Optional[TagIndex] = None
    object_files: dict[str, bytes] = {}
    other_files: dict[str, bytes] = {}
    skipped = 0
    total_bytes = 0

    with task("read.payloads", "Read payloads", total=len(entries)) as stats:
        for entry in entries:
            data = _read_payload(stream, entry, end)
            total_bytes += len(data)
            kind = classify(entry.path, entry.namespace)
            if kind == "metadata":
                if meta is not None:
                    raise StructuralError(
                        code=E_DUPLICATE_METADATA,
                        message=f"More than one pack metadata file: '{entry.path}'",
                        context={"path": entry.path},
                    )
                meta = _decode_document(entry, data, PackMeta.from_json)
            elif kind == "tags":
                tags = _decode_document(entry, data, TagIndex.from_json)
            elif kind == "metadata_copy":
                skipped += 1
            elif kind == "object":
                object_files[entry.path] = data
            else:
                other_files[entry.path] = data
            rep.advance("read.payloads", current_item=entry.path)
        stats.update(
            files=len(object_files) + len(other_files),
            skipped=skipped,
            bytes=total_bytes,
        )

    if meta is None:
        raise StructuralError(
            code=E_MISSING_METADATA,
            message="Archive does not contain a pack metadata file",
            context={"entries": len(entries)},
        )

    pack = AssetPack(
        version=version,
        meta=meta,
        # packs without object files also ship without a tags file
        tags=tags if tags is not None else TagIndex(),
        object_files=object_files,
        other_files=other_files,
    )
    logger.info("Engine version: %s", pack.version)
    logger.info(
        "Files in package: %d (%d objects)",
        pack.file_count,
        len(pack.object_files),
    )
    logger.info("Pack name: %s", meta.name)
    logger.info("Pack author: %s", meta.author)
    logger.info("Pack version: %s", meta.version)
    logger.info("Pack id: %s", meta.id)
    return pack
