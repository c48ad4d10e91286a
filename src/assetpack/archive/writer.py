"""Archive encoder.

The directory is re-synthesised from the decoded pack: the metadata
document is emitted twice (``<pack-id>.json`` and ``<pack-id>/pack.json``,
identical payloads), followed by the tag index and every object and other
file. Offsets are assigned sequentially after the directory, so payload
order always matches directory order.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, List, Tuple

from ..logging import get_logger
from ..reporting import get_reporter, task
from .constants import HEADER_SIZE, INT32_MAX, MAGIC, PACK_FILE_NAME, RESERVED_SIZE, TAGS_FILE_PATH
from .directory import DirectoryEntry
from .errors import E_ENCODE, E_WRITE_IO, EncodeError
from .model import AssetPack
from .paths import absolute_path, root_metadata_path

__all__ = ["plan_entries", "write_asset_pack"]

PlannedFile = Tuple[DirectoryEntry, bytes]


def plan_entries(pack: AssetPack) -> List[PlannedFile]:
    """Directory entries with final offsets, paired with their payloads."""
    pack_id = pack.meta.id
    meta_bytes = pack.meta.to_json()
    tags_bytes = pack.tags.to_json()

    files: List[PlannedFile] = [
        (DirectoryEntry(root_metadata_path(pack_id), len(meta_bytes)), meta_bytes),
        (
            DirectoryEntry(absolute_path(pack_id, PACK_FILE_NAME), len(meta_bytes)),
            meta_bytes,
        ),
        (
            DirectoryEntry(absolute_path(pack_id, TAGS_FILE_PATH), len(tags_bytes)),
            tags_bytes,
        ),
    ]
    for group in (pack.object_files, pack.other_files):
        for path in sorted(group):
            data = bytes(group[path])
            files.append(
                (DirectoryEntry(absolute_path(pack_id, path), len(data)), data)
            )

    offset = HEADER_SIZE + sum(entry.encoded_size() for entry, _ in files)
    for entry, _ in files:
        entry.offset = offset
        offset += entry.size
    return files


def _pack_header(pack: AssetPack, count: int) -> bytes:
    if count > INT32_MAX:
        raise EncodeError(
            code=E_ENCODE,
            message=f"Too many files for one archive: {count}",
        )
    try:
        version = pack.version.pack()
    except struct.error as e:
        raise EncodeError(
            code=E_ENCODE,
            message=f"Engine version {pack.version} does not fit int32 fields",
        ) from e
    return MAGIC + version + b"\x00" * RESERVED_SIZE + struct.pack("<i", count)


def _emit(sink: BinaryIO, data: bytes) -> None:
    try:
        sink.write(data)
    except OSError as e:
        raise EncodeError(
            code=E_WRITE_IO, message=f"Could not write archive: {e}"
        ) from e


def write_asset_pack(pack: AssetPack, sink: BinaryIO) -> int:
    """Encode ``pack`` into ``sink``; returns the number of bytes written."""
    logger = get_logger()
    rep = get_reporter()
    files = plan_entries(pack)

    header = _pack_header(pack, len(files))
    directory = b"".join(entry.pack() for entry, _ in files)
    _emit(sink, header)
    _emit(sink, directory)
    written = len(header) + len(directory)

    with task("write.payloads", "Write payloads", total=len(files)) as stats:
        for entry, data in files:
            if written != entry.offset:
                raise EncodeError(
                    code=E_ENCODE,
                    message=f"Writer position {written} does not match planned "
                    f"offset {entry.offset} for '{entry.path}'",
                )
            _emit(sink, data)
            written += len(data)
            rep.advance("write.payloads", current_item=entry.path)
        stats.update(files=len(files), bytes=written)

    logger.debug("Wrote %d directory entries, %d bytes", len(files), written)
    return written
