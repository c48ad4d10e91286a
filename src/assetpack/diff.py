"""Structural diff between two decoded asset packs.

The result is JSON-serialisable with a stable shape::

    {
      "version": [...], "meta": [...],
      "tags": {"added": [...], "removed": [...], "changed": [...]},
      "sets": {...}, "object_files": {...}, "other_files": {...},
      "summary": {"count": N},
    }

Payloads are compared by SHA-256, never byte by byte in the output.
"""

from __future__ import annotations

import hashlib
from typing import Any, Dict, List, Mapping, Set

from .archive.model import AssetPack

__all__ = ["diff_packs"]


def _field_changes(left: Dict[str, Any], right: Dict[str, Any]) -> List[dict]:
    out = []
    for key in sorted(set(left) | set(right)):
        if left.get(key) != right.get(key):
            out.append({"field": key, "left": left.get(key), "right": right.get(key)})
    return out


def _graph_diff(left: Mapping[str, Set[str]], right: Mapping[str, Set[str]]):
    changed = []
    for name in sorted(set(left) & set(right)):
        if left[name] != right[name]:
            changed.append(
                {
                    "name": name,
                    "added": sorted(right[name] - left[name]),
                    "removed": sorted(left[name] - right[name]),
                }
            )
    return {
        "added": sorted(set(right) - set(left)),
        "removed": sorted(set(left) - set(right)),
        "changed": changed,
    }


def _files_diff(left: Mapping[str, bytes], right: Mapping[str, bytes]):
    changed = []
    for path in sorted(set(left) & set(right)):
        lh = hashlib.sha256(left[path]).hexdigest()
        rh = hashlib.sha256(right[path]).hexdigest()
        if lh != rh:
            changed.append(
                {
                    "path": path,
                    "left_sha256": lh,
                    "right_sha256": rh,
                    "left_size": len(left[path]),
                    "right_size": len(right[path]),
                }
            )
    return {
        "added": sorted(set(right) - set(left)),
        "removed": sorted(set(left) - set(right)),
        "changed": changed,
    }


def _count(section: Dict[str, list]) -> int:
    return sum(len(v) for v in section.values())


def diff_packs(left: AssetPack, right: AssetPack) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "version": _field_changes(left.version.to_dict(), right.version.to_dict()),
        "meta": _field_changes(left.meta.to_dict(), right.meta.to_dict()),
        "tags": _graph_diff(left.tags.tags, right.tags.tags),
        "sets": _graph_diff(left.tags.sets, right.tags.sets),
        "object_files": _files_diff(left.object_files, right.object_files),
        "other_files": _files_diff(left.other_files, right.other_files),
    }
    count = len(result["version"]) + len(result["meta"])
    for key in ("tags", "sets", "object_files", "other_files"):
        count += _count(result[key])
    result["summary"] = {"count": count}
    return result
