import io
import json

import pytest

from assetpack.archive.documents import ColorOverrides, PackMeta, TagIndex
from assetpack.archive.errors import E_SCHEMA, SchemaError
from assetpack.archive.version import VersionRecord


def test_pack_meta_without_overrides():
    meta = PackMeta.from_json('{"name": "n", "id": "i", "version": "1", "author": "a"}')
    assert meta.custom_color_overrides is None
    assert "custom_color_overrides" not in json.loads(meta.to_json())


def test_pack_meta_ignores_unknown_fields():
    meta = PackMeta.from_json(
        '{"name": "n", "id": "i", "version": "1", "author": "a", "keywords": []}'
    )
    assert meta == PackMeta(name="n", id="i", version="1", author="a")


def test_pack_meta_rejects_wrong_types():
    with pytest.raises(SchemaError) as exc:
        PackMeta.from_json('{"name": 3, "id": "i", "version": "1", "author": "a"}')
    assert exc.value.code == E_SCHEMA

    with pytest.raises(SchemaError):
        PackMeta.from_json(
            '{"name": "n", "id": "i", "version": "1", "author": "a",'
            ' "custom_color_overrides": {"enabled": 1, "min_redness": 0,'
            ' "min_saturation": 0, "red_tolerance": 0}}'
        )


def test_pack_meta_rejects_non_object():
    with pytest.raises(SchemaError) as exc:
        PackMeta.from_json("[]")
    assert exc.value.document == "[]"


def test_color_overrides_integers_become_floats():
    meta = PackMeta.from_json(
        '{"name": "n", "id": "i", "version": "1", "author": "a",'
        ' "custom_color_overrides": {"enabled": true, "min_redness": 1,'
        ' "min_saturation": 0, "red_tolerance": 0.5}}'
    )
    assert meta.custom_color_overrides == ColorOverrides(True, 1.0, 0.0, 0.5)


def test_tag_index_requires_both_maps():
    with pytest.raises(SchemaError):
        TagIndex.from_json('{"tags": {}}')


def test_tag_index_json_is_sorted():
    index = TagIndex(tags={"b": {"z", "y"}, "a": {"x"}}, sets={"s": {"b", "a"}})
    data = json.loads(index.to_json())
    assert list(data["tags"]) == ["a", "b"]
    assert data["tags"]["b"] == ["y", "z"]
    assert data["sets"]["s"] == ["a", "b"]
    assert TagIndex.from_json(index.to_json().decode()) == index


def test_tag_index_describe():
    text = TagIndex(tags={"rocks": {"r.png"}}, sets={"S": {"rocks"}}).describe()
    assert "rocks: [ 'r.png' ]" in text
    assert "S: [ rocks ]" in text


def test_version_record():
    record = VersionRecord(1, 3, 2, 1)
    assert str(record) == "1.3.2.1"
    assert VersionRecord.read(io.BytesIO(record.pack())) == record
    assert VersionRecord.size_in_bytes() == 16
