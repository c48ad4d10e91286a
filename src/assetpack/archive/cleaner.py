"""Tag index cleaning.

Four phases, each a pure function, run strictly in order:

1. drop file references that are not object files of the pack
2. drop tags left without files
3. drop set members that are no longer tags
4. drop sets left without tags

Phase 3 tests membership against the output of phase 2, so a tag emptied in
phase 1 disappears from every set too.
"""

from __future__ import annotations

from typing import AbstractSet, Dict, Set

from ..logging import get_logger
from .model import AssetPack

__all__ = [
    "prune_missing_files",
    "drop_empty",
    "prune_missing_tags",
    "clean_tags",
]

Graph = Dict[str, Set[str]]


def prune_missing_files(tags: Graph, known_files: AbstractSet[str]) -> Graph:
    logger = get_logger()
    known_files = set(known_files)
    out: Graph = {}
    for tag, files in tags.items():
        for missing in sorted(files - known_files):
            logger.debug(
                "Removing file '%s' from tag '%s' because it does not exist.",
                missing,
                tag,
            )
        out[tag] = files & known_files
    return out


def drop_empty(graph: Graph, kind: str) -> Graph:
    logger = get_logger()
    out: Graph = {}
    for name, members in graph.items():
        if members:
            out[name] = set(members)
        else:
            logger.debug("Removing %s '%s' because it is empty.", kind, name)
    return out


def prune_missing_tags(sets: Graph, known_tags: AbstractSet[str]) -> Graph:
    logger = get_logger()
    known_tags = set(known_tags)
    out: Graph = {}
    for name, tags in sets.items():
        for missing in sorted(tags - known_tags):
            logger.debug(
                "Removing tag '%s' from set '%s' because it does not exist.",
                missing,
                name,
            )
        out[name] = tags & known_tags
    return out


def clean_tags(pack: AssetPack) -> None:
    """Remove dangling references from ``pack.tags`` in place.

    ``pack.object_files`` is never modified.
    """
    logger = get_logger()
    logger.info("Cleaning empty tags and tag groups.")
    index = pack.tags

    tags = prune_missing_files(index.tags, pack.object_files.keys())
    tags = drop_empty(tags, "tag")
    sets = prune_missing_tags(index.sets, tags.keys())
    sets = drop_empty(sets, "set")

    removed_tags = len(index.tags) - len(tags)
    removed_sets = len(index.sets) - len(sets)
    index.tags = tags
    index.sets = sets
    logger.info(
        "Removed %d empty tags, and %d empty tag sets.", removed_tags, removed_sets
    )
