"""Command line interface for assetpack."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import (
    ArchiveError,
    clean_pack,
    diff_packs,
    extract_pack,
    inspect_pack,
    is_asset_pack,
    read_pack,
)
from .archive.errors import E_BAD_MAGIC, FormatError
from .archive.inspector import validate_pack
from .logging import configure_logging, get_logger, step
from .reporting import get_reporter, make_reporter, set_reporter, set_verbosity


def _require_pack(path: Path) -> bool:
    rep = get_reporter()
    if not path.exists():
        rep.error(f"Input file '{path}' does not exist.")
        return False
    if not is_asset_pack(path):
        raise FormatError(
            code=E_BAD_MAGIC,
            message=f"Input file '{path}' is not a dungeondraft asset pack.",
            context={"path": str(path)},
        )
    return True


def _info_cmd(args: argparse.Namespace) -> int:
    pack = read_pack(args.pack)
    rep = get_reporter()
    rep.section(pack.meta.name)
    rep.status(f"Engine version: {pack.version}")
    rep.status(f"Pack id: {pack.meta.id}")
    rep.status(f"Pack author: {pack.meta.author}")
    rep.status(f"Pack version: {pack.meta.version}")
    rep.status(
        f"Files: objects={len(pack.object_files)} other={len(pack.other_files)} "
        f"bytes={pack.total_bytes}"
    )
    overrides = pack.meta.custom_color_overrides
    if overrides is not None:
        rep.status(
            "Color overrides: "
            + " ".join(f"{k}={v}" for k, v in overrides.to_dict().items())
        )
    get_logger().debug("%s", pack.tags.describe())
    rep.status(f"Tags: {len(pack.tags.tags)} tags, {len(pack.tags.sets)} tag sets")
    return 0


def _inspect_cmd(args: argparse.Namespace) -> int:
    info = inspect_pack(args.pack)
    issues = validate_pack(info)
    info["issues"] = issues
    get_reporter().flush()
    print(json.dumps(info, indent=2, sort_keys=True))
    return 1 if issues else 0


def _clean_cmd(args: argparse.Namespace) -> int:
    if not _require_pack(args.input):
        return 1
    step(f"cleaning tags of '{args.input.name}'")
    result = clean_pack(args.input, args.output)
    get_reporter().status(
        f"Clean summary: file={result.output_file.name} bytes={result.bytes_written} "
        f"removed_tags={result.removed_tags} removed_sets={result.removed_sets}"
    )
    return 0


def _extract_cmd(args: argparse.Namespace) -> int:
    if not _require_pack(args.pack):
        return 1
    written = extract_pack(args.pack, args.dest, force=args.force)
    get_reporter().status(f"Extract summary: files={len(written)} dest={args.dest}")
    return 0


def _diff_cmd(args: argparse.Namespace) -> int:
    step("diffing asset packs")
    result = diff_packs(args.left, args.right)
    rep = get_reporter()
    rep.section("Diff results")
    diff_count = result["summary"]["count"]
    rep.status(
        f"Diff summary: count={diff_count} left={args.left.name} right={args.right.name}"
    )
    rep.flush()
    print(json.dumps(result, indent=2, sort_keys=True))
    return 1 if diff_count else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="assetpack",
        description="Read, clean and write Dungeondraft asset packs",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "json", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    i = sub.add_parser("info", help="Print pack metadata and counts")
    i.add_argument("pack", type=Path)
    i.set_defaults(func=_info_cmd)

    ins = sub.add_parser("inspect", help="Dump header and directory as JSON")
    ins.add_argument("pack", type=Path)
    ins.set_defaults(func=_inspect_cmd)

    c = sub.add_parser(
        "clean", help="Remove empty tags and tag sets, then write a new pack"
    )
    c.add_argument("input", type=Path)
    c.add_argument("output", type=Path)
    c.set_defaults(func=_clean_cmd)

    x = sub.add_parser("extract", help="Unpack every file into a directory")
    x.add_argument("pack", type=Path)
    x.add_argument("dest", type=Path)
    x.add_argument(
        "--force",
        action="store_true",
        help="Write into a non-empty destination directory",
    )
    x.set_defaults(func=_extract_cmd)

    d = sub.add_parser("diff", help="Diff two asset packs")
    d.add_argument("left", type=Path)
    d.add_argument("right", type=Path)
    d.set_defaults(func=_diff_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    set_reporter(make_reporter(args.reporter, tty=sys.stderr.isatty()))
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except ArchiveError as e:
        get_reporter().error(f"Something went wrong while processing the asset pack: {e}")
        return 1
    except OSError as e:
        get_reporter().error(str(e))
        return 1
    finally:
        get_reporter().flush()


if __name__ == "__main__":
    raise SystemExit(main())
