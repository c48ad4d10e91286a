from assetpack.archive.paths import (
    absolute_path,
    classify,
    is_objects_file,
    is_pack_file,
    is_root_json_file,
    is_tags_file,
    root_metadata_path,
)


def test_is_root_json_file():
    assert is_root_json_file("8UWKyQPf.json")
    assert not is_root_json_file("bla/8UWKyQPf.json")
    assert not is_root_json_file("8UWKyQPf.txt")


def test_is_pack_file():
    assert is_pack_file("pack.json")
    assert is_pack_file("sub/pack.json")
    assert not is_pack_file("pack.json.bak")


def test_is_tags_file():
    assert is_tags_file("data/default.dungeondraft_tags")
    assert not is_tags_file("data/default.dungeondraft_tags.old")


def test_is_objects_file():
    assert is_objects_file("textures/objects/rock.png")
    assert not is_objects_file("textures/portals/door.png")


def test_classify():
    assert classify("12345678.json") == "metadata"
    assert classify("pack.json", "12345678") == "metadata_copy"
    assert classify("data/default.dungeondraft_tags", "12345678") == "tags"
    assert classify("textures/objects/rock.png", "12345678") == "object"
    assert classify("textures/walls/wall.png", "12345678") == "other"


def test_pack_json_below_objects_is_an_object():
    assert classify("textures/objects/foo/pack.json", "12345678") == "object"
    assert classify("data/pack.json", "12345678") == "metadata_copy"


def test_json_inside_namespace_is_not_metadata():
    assert classify("notes.json", "12345678") == "other"


def test_absolute_paths():
    assert root_metadata_path("abc") == "res://packs/abc.json"
    assert absolute_path("abc", "textures/objects/x.png") == "res://packs/abc/textures/objects/x.png"
