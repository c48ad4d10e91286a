import io
import struct

import pytest

from assetpack.archive.directory import DirectoryEntry, read_directory, read_directory_entry
from assetpack.archive.errors import (
    E_NEGATIVE_FIELD,
    E_TRUNCATED,
    EncodingError,
    StructuralError,
)
from assetpack.archive.paths import normalize_path, split_archive_path

from pack_builder import entry_bytes


def test_packed_file_from_read():
    raw = entry_bytes("res://X3DLFK/test/bla.txt", 12, 987, checksum=bytes([12] * 16))
    entry = read_directory_entry(io.BytesIO(raw))

    assert entry.path == "test/bla.txt"
    assert entry.namespace == "X3DLFK"
    assert entry.offset == 12
    assert entry.size == 987
    assert entry.checksum == bytes([12] * 16)
    assert entry.raw_path == "res://X3DLFK/test/bla.txt"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("res://packs/abc/a/b.png", "a/b.png"),
        ("res://packs/ZZZ999/a/b.png", "a/b.png"),
        ("packs/abc/a/b.png", "a/b.png"),
        ("res://packs/abc.json", "abc.json"),
        ("plain.txt", "plain.txt"),
    ],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


def test_split_without_namespace():
    assert split_archive_path("res://packs/abc.json") == ("", "abc.json")
    assert split_archive_path("res://packs/abc/pack.json") == ("abc", "pack.json")


def test_prefixes_stripped_once():
    # a pack whose id is literally "packs" keeps it as the namespace
    assert split_archive_path("res://packs/packs/x/y") == ("packs", "x/y")


def test_encoded_size_counts_utf8_bytes():
    entry = DirectoryEntry(path="res://packs/id/é.png", size=3)
    assert entry.encoded_size() == 4 + len("res://packs/id/é.png".encode()) + 8 + 8 + 16
    assert len(entry.pack()) == entry.encoded_size()


def test_pack_writes_zero_checksum():
    entry = DirectoryEntry(path="x", size=5, offset=100, checksum=b"\xff" * 16)
    raw = entry.pack()
    assert raw[-16:] == b"\x00" * 16
    assert struct.unpack_from("<qq", raw, 4 + 1) == (100, 5)


def test_truncated_entry():
    raw = entry_bytes("res://packs/id/a.png", 0, 4)[:-3]
    with pytest.raises(StructuralError) as exc:
        read_directory_entry(io.BytesIO(raw))
    assert exc.value.code == E_TRUNCATED


def test_negative_size_rejected():
    raw = entry_bytes("res://packs/id/a.png", 0, -1)
    with pytest.raises(StructuralError) as exc:
        read_directory_entry(io.BytesIO(raw))
    assert exc.value.code == E_NEGATIVE_FIELD


def test_non_utf8_path():
    raw = struct.pack("<i", 2) + b"\xff\xfe" + struct.pack("<qq", 0, 0) + bytes(16)
    with pytest.raises(EncodingError):
        read_directory_entry(io.BytesIO(raw))


def test_read_directory_reports_entry_index():
    raw = entry_bytes("res://packs/id/a.png", 0, 1) + entry_bytes("res://packs/id/b.png", 1, 1)[:10]
    with pytest.raises(StructuralError) as exc:
        read_directory(io.BytesIO(raw), 2)
    assert exc.value.context["entry"] == 2
    assert exc.value.context["entries"] == 2
