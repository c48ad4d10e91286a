"""Archive path normalization and classification.

Every absolute path inside an archive looks like
``res://packs/<pack-id>/<relative path>``; the metadata document is the one
exception and lives at ``res://packs/<pack-id>.json``. Decoded entries keep
only the relative part.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Tuple

from .constants import (
    ASSET_PACK_PREFIX,
    OBJECT_FILES_PREFIX,
    PACK_FILE_NAME,
    RESOURCE_PATH_PREFIX,
    TAGS_FILE_NAME,
)

__all__ = [
    "split_archive_path",
    "normalize_path",
    "absolute_path",
    "root_metadata_path",
    "is_root_json_file",
    "is_pack_file",
    "is_tags_file",
    "is_objects_file",
    "classify",
]


def split_archive_path(raw: str) -> Tuple[str, str]:
    """Return ``(namespace, path)`` for a raw directory path.

    Without a ``/`` after prefix stripping the namespace is empty and the
    remainder is the path.
    """
    stripped = raw.removeprefix(RESOURCE_PATH_PREFIX).removeprefix(
        ASSET_PACK_PREFIX
    )
    namespace, sep, rest = stripped.partition("/")
    if not sep:
        return "", stripped
    return namespace, rest


def normalize_path(raw: str) -> str:
    return split_archive_path(raw)[1]


def absolute_path(pack_id: str, path: str) -> str:
    return f"{RESOURCE_PATH_PREFIX}{ASSET_PACK_PREFIX}{pack_id}/{path}"


def root_metadata_path(pack_id: str) -> str:
    return f"{RESOURCE_PATH_PREFIX}{ASSET_PACK_PREFIX}{pack_id}.json"


def is_root_json_file(path: str) -> bool:
    """``<pack-id>.json`` without any parent directory."""
    p = PurePosixPath(path)
    return p.suffix == ".json" and "/" not in path


def is_pack_file(path: str) -> bool:
    """``pack.json``, regardless of parent directory."""
    return PurePosixPath(path).name == PACK_FILE_NAME


def is_tags_file(path: str) -> bool:
    return PurePosixPath(path).name == TAGS_FILE_NAME


def is_objects_file(path: str) -> bool:
    return path.startswith(OBJECT_FILES_PREFIX)


def classify(path: str, namespace: str = "") -> str:
    """Map a normalized path to its routing class.

    One of ``metadata``, ``metadata_copy``, ``tags``, ``object`` or
    ``other``. The metadata copy normalizes to a bare ``pack.json`` too, so
    the namespace it was stored under tells it apart from the root document;
    a ``.json`` file directly inside the namespace folder is not metadata.
    Object textures win over ``pack.json``, so one stored below
    ``textures/objects/`` is kept.
    """
    if is_root_json_file(path) and not namespace:
        return "metadata"
    if is_tags_file(path):
        return "tags"
    if is_objects_file(path):
        return "object"
    if is_pack_file(path):
        return "metadata_copy"
    return "other"
