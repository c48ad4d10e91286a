"""Structural archive inspection.

Public functions:
- is_asset_pack(path) -> bool
- inspect_pack(path) -> dict
- validate_pack(info) -> list[str]

Only the header and directory are parsed; embedded documents stay opaque
so a pack with broken JSON can still be looked at.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Dict, List

from .constants import MAGIC
from .directory import read_directory
from .paths import classify
from .reader import read_header

__all__ = ["is_asset_pack", "inspect_pack", "validate_pack"]


def is_asset_pack(path: str | Path) -> bool:
    with Path(path).open("rb") as f:
        return f.read(len(MAGIC)) == MAGIC


def inspect_pack(path: str | Path) -> Dict[str, Any]:
    data = Path(path).read_bytes()
    stream = io.BytesIO(data)
    magic_ok, version, count = read_header(stream)
    entries = []
    for entry in read_directory(stream, count):
        entries.append(
            {
                "raw_path": entry.raw_path,
                "path": entry.path,
                "namespace": entry.namespace,
                "offset": entry.offset,
                "size": entry.size,
                "kind": classify(entry.path, entry.namespace),
            }
        )
    return {
        "file_size": len(data),
        "header": {
            "magic_ok": magic_ok,
            "version": version.to_dict(),
            "version_string": str(version),
            "file_count": count,
        },
        "directory_end": stream.tell(),
        "entries": entries,
    }


def validate_pack(info: Dict[str, Any]) -> List[str]:
    issues: List[str] = []
    if not info["header"]["magic_ok"]:
        issues.append("Header magic mismatch")
    file_size = info["file_size"]
    entries = info.get("entries", [])

    for e in entries:
        if e["offset"] + e["size"] > file_size:
            issues.append(f"Payload '{e['raw_path']}' exceeds file size")
        elif e["size"] and e["offset"] < info["directory_end"]:
            issues.append(f"Payload '{e['raw_path']}' overlaps the directory")

    spans = sorted(
        (e["offset"], e["offset"] + e["size"], e["raw_path"])
        for e in entries
        if e["size"]
    )
    for (_, prev_end, prev_path), (start, _, path) in zip(spans, spans[1:]):
        if start < prev_end:
            issues.append(f"Payload '{path}' overlaps '{prev_path}'")

    kinds = [e["kind"] for e in entries]
    metadata = kinds.count("metadata")
    if metadata == 0:
        issues.append("Missing pack metadata file")
    elif metadata > 1:
        issues.append(f"Found {metadata} pack metadata files")
    if "metadata_copy" not in kinds:
        issues.append("Missing pack.json copy of the metadata")
    return issues
