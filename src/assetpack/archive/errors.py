"""Error definitions for the archive codec."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_TRUNCATED = "E_TRUNCATED"
E_NEGATIVE_FIELD = "E_NEGATIVE_FIELD"
E_MISSING_METADATA = "E_MISSING_METADATA"
E_DUPLICATE_METADATA = "E_DUPLICATE_METADATA"
E_SCHEMA = "E_SCHEMA"
E_ENCODING = "E_ENCODING"
E_BAD_MAGIC = "E_BAD_MAGIC"
E_ENCODE = "E_ENCODE"
E_WRITE_IO = "E_WRITE_IO"
E_UNSAFE_PATH = "E_UNSAFE_PATH"


@dataclass
class ArchiveError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class DecodeError(ArchiveError):
    pass


class StructuralError(DecodeError):
    pass


class SchemaError(DecodeError):
    """A metadata or tag document does not match its expected shape.

    ``context["document"]`` keeps the offending text.
    """

    @property
    def document(self) -> str:
        return (self.context or {}).get("document", "")


class EncodingError(DecodeError):
    pass


class FormatError(ArchiveError):
    """Input is not an asset pack at all (no ``GDPC`` marker).

    The reader only warns about a wrong marker; commands that need a real
    pack raise this instead.
    """


class EncodeError(ArchiveError):
    pass


class ExtractError(ArchiveError):
    """A file cannot be written below the extraction directory."""


def truncated(
    what: str, expected: int, got: int, offset: Optional[int] = None
) -> StructuralError:
    ctx: Dict[str, Any] = {"expected": expected, "got": got}
    if offset is not None:
        ctx["offset"] = offset
    return StructuralError(
        code=E_TRUNCATED,
        message=f"Unexpected end of stream while reading {what}: "
        f"wanted {expected} bytes, got {got}",
        context=ctx,
    )


__all__ = [
    "ArchiveError",
    "DecodeError",
    "StructuralError",
    "SchemaError",
    "EncodingError",
    "FormatError",
    "EncodeError",
    "ExtractError",
    "truncated",
    "E_TRUNCATED",
    "E_NEGATIVE_FIELD",
    "E_MISSING_METADATA",
    "E_DUPLICATE_METADATA",
    "E_SCHEMA",
    "E_ENCODING",
    "E_BAD_MAGIC",
    "E_ENCODE",
    "E_WRITE_IO",
    "E_UNSAFE_PATH",
]
