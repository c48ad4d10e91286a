import io
import json

from assetpack.api import read
from assetpack.cli import main

from pack_builder import PACK_ID, build_raw_pack, example_files, example_pack_bytes


def _example(tmp_path, name="example.dungeondraft_pack", **kwargs):
    p = tmp_path / name
    p.write_bytes(example_pack_bytes(**kwargs))
    return p


def test_clean_command(tmp_path, capsys):
    src = _example(tmp_path)
    out = tmp_path / "cleaned.dungeondraft_pack"
    assert main(["clean", str(src), str(out)]) == 0

    pack = read(io.BytesIO(out.read_bytes()))
    # "Colorable" points at a texture that is not in the pack
    assert pack.tags.tags == {"MyTag": {"textures/objects/random.png"}}
    assert pack.tags.sets == {"Example Set": {"MyTag"}}
    err = capsys.readouterr().err
    assert "removed_tags=1" in err


def test_clean_rejects_missing_input(tmp_path, capsys):
    assert main(["clean", str(tmp_path / "nope"), str(tmp_path / "out")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_clean_rejects_non_pack(tmp_path, capsys):
    src = tmp_path / "not_a_pack.txt"
    src.write_text("hello there")
    assert main(["clean", str(src), str(tmp_path / "out")]) == 1
    err = capsys.readouterr().err
    assert "E_BAD_MAGIC" in err
    assert "is not a dungeondraft asset pack" in err


def test_info_command(tmp_path, capsys):
    assert main(["info", str(_example(tmp_path))]) == 0
    err = capsys.readouterr().err
    assert "Engine version: 1.3.2.4" in err
    assert "Pack id: 12345678" in err


def test_inspect_command(tmp_path, capsys):
    assert main(["-r", "silent", "inspect", str(_example(tmp_path))]) == 0
    info = json.loads(capsys.readouterr().out)
    assert info["header"]["file_count"] == 5
    assert info["issues"] == []


def test_extract_command(tmp_path):
    dest = tmp_path / "unpacked"
    assert main(["-r", "silent", "extract", str(_example(tmp_path)), str(dest)]) == 0
    assert (dest / "textures/portals/door.png").exists()


def test_diff_command(tmp_path, capsys):
    a = _example(tmp_path, "a.dungeondraft_pack")
    b = _example(tmp_path, "b.dungeondraft_pack", version=(2, 0, 0, 0))
    assert main(["-r", "silent", "diff", str(a), str(a)]) == 0
    capsys.readouterr()
    assert main(["-r", "silent", "diff", str(a), str(b)]) == 1
    result = json.loads(capsys.readouterr().out)
    assert result["summary"]["count"] == 4


def test_decode_error_exit_code(tmp_path, capsys):
    src = tmp_path / "truncated.dungeondraft_pack"
    src.write_bytes(example_pack_bytes()[:100])
    assert main(["info", str(src)]) == 1
    assert "E_TRUNCATED" in capsys.readouterr().err


def test_json_reporter_events(tmp_path, capsys):
    assert main(["-r", "json", "info", str(_example(tmp_path))]) == 0
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    kinds = {e["event"] for e in events}
    assert {"task_start", "task_end", "status"} <= kinds
    end = next(e for e in events if e["event"] == "task_end")
    assert end["files"] == 2
    assert end["status"] == "success"


def test_extract_refuses_path_outside_dest(tmp_path, capsys):
    files = example_files() + [(f"res://packs/{PACK_ID}/../../evil.txt", b"evil")]
    src = tmp_path / "traversal.dungeondraft_pack"
    src.write_bytes(build_raw_pack(files))
    dest = tmp_path / "nested" / "out"
    assert main(["extract", str(src), str(dest)]) == 1
    assert "E_UNSAFE_PATH" in capsys.readouterr().err
    assert not (tmp_path / "evil.txt").exists()
