"""Embedded JSON documents: pack metadata and the object tag index.

Both documents are UTF-8. Decoding is JSON5 (comments, trailing commas,
unquoted keys); encoding always emits strict JSON. Decoding validates the
expected shape and raises :class:`SchemaError` carrying the raw text; the
caller decides where the text is surfaced.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

import json5

from .errors import E_ENCODE, E_ENCODING, E_SCHEMA, EncodeError, EncodingError, SchemaError

__all__ = [
    "ColorOverrides",
    "PackMeta",
    "TagIndex",
    "decode_text",
]


def decode_text(raw: bytes, path: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(
            code=E_ENCODING,
            message=f"Document '{path}' is not valid UTF-8: {e.reason}",
            context={"path": path},
        ) from e


def _schema_error(kind: str, reason: str, text: str) -> SchemaError:
    return SchemaError(
        code=E_SCHEMA,
        message=f"Could not parse {kind}: {reason}",
        context={"document": text},
    )


def _load_object(kind: str, text: str) -> Dict[str, Any]:
    try:
        data = json5.loads(text)
    except ValueError as e:
        raise _schema_error(kind, str(e), text) from e
    if not isinstance(data, dict):
        raise _schema_error(kind, "root must be an object", text)
    return data


def _require(data: Dict[str, Any], key: str, types, kind: str, text: str):
    if key not in data:
        raise _schema_error(kind, f"missing field '{key}'", text)
    value = data[key]
    # bool is an int subclass; JSON true/false never counts as a number here
    if isinstance(value, bool) and bool not in types:
        raise _schema_error(kind, f"field '{key}' has wrong type", text)
    if not isinstance(value, types):
        raise _schema_error(kind, f"field '{key}' has wrong type", text)
    return value


def _dumps(kind: str, data: Any) -> bytes:
    try:
        return json.dumps(data, indent="\t", ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(
            code=E_ENCODE, message=f"Could not serialise {kind}: {e}"
        ) from e


@dataclass(slots=True)
class ColorOverrides:
    enabled: bool = False
    min_redness: float = 0.0
    min_saturation: float = 0.0
    red_tolerance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "min_redness": self.min_redness,
            "min_saturation": self.min_saturation,
            "red_tolerance": self.red_tolerance,
        }


@dataclass(slots=True)
class PackMeta:
    name: str
    id: str
    version: str
    author: str
    custom_color_overrides: Optional[ColorOverrides] = None

    @classmethod
    def from_json(cls, text: str) -> "PackMeta":
        kind = "pack metadata file"
        data = _load_object(kind, text)
        overrides = None
        raw_overrides = data.get("custom_color_overrides")
        if raw_overrides is not None:
            if not isinstance(raw_overrides, dict):
                raise _schema_error(
                    kind, "field 'custom_color_overrides' has wrong type", text
                )
            overrides = ColorOverrides(
                enabled=_require(raw_overrides, "enabled", (bool,), kind, text),
                min_redness=float(
                    _require(raw_overrides, "min_redness", (int, float), kind, text)
                ),
                min_saturation=float(
                    _require(
                        raw_overrides, "min_saturation", (int, float), kind, text
                    )
                ),
                red_tolerance=float(
                    _require(
                        raw_overrides, "red_tolerance", (int, float), kind, text
                    )
                ),
            )
        return cls(
            name=_require(data, "name", (str,), kind, text),
            id=_require(data, "id", (str,), kind, text),
            version=_require(data, "version", (str,), kind, text),
            author=_require(data, "author", (str,), kind, text),
            custom_color_overrides=overrides,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "id": self.id,
            "version": self.version,
            "author": self.author,
        }
        if self.custom_color_overrides is not None:
            out["custom_color_overrides"] = self.custom_color_overrides.to_dict()
        return out

    def to_json(self) -> bytes:
        return _dumps("pack metadata", self.to_dict())


def _string_set_map(
    data: Dict[str, Any], key: str, kind: str, text: str
) -> Dict[str, Set[str]]:
    raw = _require(data, key, (dict,), kind, text)
    out: Dict[str, Set[str]] = {}
    for name, members in raw.items():
        if not isinstance(members, list) or not all(
            isinstance(m, str) for m in members
        ):
            raise _schema_error(
                kind, f"'{key}.{name}' must be a list of strings", text
            )
        out[name] = set(members)
    return out


@dataclass(slots=True)
class TagIndex:
    """Tag name -> object file paths, and set name -> tag names."""

    tags: Dict[str, Set[str]] = field(default_factory=dict)
    sets: Dict[str, Set[str]] = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> "TagIndex":
        kind = "object tags file"
        data = _load_object(kind, text)
        return cls(
            tags=_string_set_map(data, "tags", kind, text),
            sets=_string_set_map(data, "sets", kind, text),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tags": {k: sorted(v) for k, v in sorted(self.tags.items())},
            "sets": {k: sorted(v) for k, v in sorted(self.sets.items())},
        }

    def to_json(self) -> bytes:
        return _dumps("object tags", self.to_dict())

    def files_in_tag(self, tag: str) -> Optional[Set[str]]:
        return self.tags.get(tag)

    def describe(self) -> str:
        indent = "    "
        lines = ["Tag and tag sets:", "", f"{indent}Tags:"]
        for tag, files in sorted(self.tags.items()):
            members = ", ".join(f"'{f}'" for f in sorted(files))
            lines.append(f"{indent * 2}{tag}: [ {members} ]")
        lines += ["", f"{indent}Tag sets:"]
        for name, tags in sorted(self.sets.items()):
            lines.append(f"{indent * 2}{name}: [ {', '.join(sorted(tags))} ]")
        return "\n".join(lines)
