"""Format constants for asset pack archives."""

from __future__ import annotations

# "GDPC": Godot resource pack marker.
MAGIC = b"GDPC"

I32 = 4
I64 = 8

VERSION_RECORD_SIZE = 4 * I32
RESERVED_SIZE = 16 * I32
CHECKSUM_SIZE = 16

# magic + version + reserved + file count
HEADER_SIZE = len(MAGIC) + VERSION_RECORD_SIZE + RESERVED_SIZE + I32

# path length prefix + offset + size + checksum, path bytes excluded
DIRECTORY_ENTRY_FIXED_SIZE = I32 + I64 + I64 + CHECKSUM_SIZE

INT32_MAX = 2**31 - 1

RESOURCE_PATH_PREFIX = "res://"
ASSET_PACK_PREFIX = "packs/"

PACK_FILE_NAME = "pack.json"
TAGS_FILE_PATH = "data/default.dungeondraft_tags"
TAGS_FILE_NAME = "default.dungeondraft_tags"
OBJECT_FILES_PREFIX = "textures/objects/"

__all__ = [
    "MAGIC",
    "I32",
    "I64",
    "VERSION_RECORD_SIZE",
    "RESERVED_SIZE",
    "CHECKSUM_SIZE",
    "HEADER_SIZE",
    "DIRECTORY_ENTRY_FIXED_SIZE",
    "INT32_MAX",
    "RESOURCE_PATH_PREFIX",
    "ASSET_PACK_PREFIX",
    "PACK_FILE_NAME",
    "TAGS_FILE_PATH",
    "TAGS_FILE_NAME",
    "OBJECT_FILES_PREFIX",
]
