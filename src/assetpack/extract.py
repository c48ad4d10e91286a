"""Unpack a decoded asset pack into a directory tree."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .archive.constants import PACK_FILE_NAME, TAGS_FILE_PATH
from .archive.errors import E_UNSAFE_PATH, ExtractError
from .archive.model import AssetPack
from .logging import get_logger
from .reporting import get_reporter, task
from .utils.paths import is_dir_empty, safe_file_path

__all__ = ["extract_pack"]


def extract_pack(
    pack: AssetPack, dest: str | Path, *, force: bool = False
) -> List[Path]:
    """Write every file of ``pack`` below ``dest``.

    The metadata and tag documents are re-encoded from their decoded form.
    ``dest`` must be missing or empty unless ``force`` is set.
    """
    logger = get_logger()
    rep = get_reporter()
    root = Path(dest)
    if root.exists() and not force:
        if not root.is_dir():
            raise FileExistsError(f"Destination is not a directory: {root}")
        if not is_dir_empty(root):
            raise FileExistsError(f"Destination directory is not empty: {root}")

    files = {
        PACK_FILE_NAME: pack.meta.to_json(),
        TAGS_FILE_PATH: pack.tags.to_json(),
        **pack.object_files,
        **pack.other_files,
    }
    written: List[Path] = []
    with task("extract.files", "Extract files", total=len(files)) as stats:
        for rel, data in sorted(files.items()):
            try:
                target = safe_file_path(root, rel)
            except ValueError as e:
                raise ExtractError(
                    code=E_UNSAFE_PATH,
                    message=f"Refusing to write '{rel}' outside {root}",
                    context={"path": rel},
                ) from e
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
            written.append(target)
            rep.advance("extract.files", current_item=rel)
        stats.update(files=len(written), bytes=sum(len(d) for d in files.values()))
    logger.info("Extracted %d files to %s", len(written), root)
    return written
