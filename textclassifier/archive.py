"""Expansion of packed resource directories.

A model may be shipped as a single zip archive holding the lexicon and model
artifacts. The archive is expanded once into a directory named after its stem;
later calls reuse that directory unless the archive is newer.
"""

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path

from textclassifier.errors import ModelLoadError

logger = logging.getLogger(__name__)


def _target_dir(archive: Path, suffix: str, unpack_dir: Path | None) -> Path:
    name = archive.name[: -len(suffix)] if archive.name.endswith(suffix) else archive.stem
    parent = unpack_dir if unpack_dir is not None else archive.parent
    return parent / name


def unpack(archive: str | Path, *, suffix: str = ".zip", unpack_dir: Path | None = None) -> Path:
    """Expand ``archive`` and return the directory holding its contents.

    Args:
        archive: Path to the zip file.
        suffix: Archive suffix stripped to name the target directory.
        unpack_dir: Parent directory for the expansion. Defaults to the
            archive's own directory.

    Raises:
        ModelLoadError: If the archive is corrupt or a member would be written
            outside the target directory.
    """
    archive = Path(archive)
    target = _target_dir(archive, suffix, unpack_dir)

    if target.is_dir() and target.stat().st_mtime_ns >= archive.stat().st_mtime_ns:
        logger.debug("Reusing expanded archive at %s", target)
        return target

    root = target.resolve()
    try:
        with zipfile.ZipFile(archive) as zf:
            for member in zf.namelist():
                destination = (root / member).resolve()
                if destination != root and root not in destination.parents:
                    raise ModelLoadError(
                        f"Archive member {member!r} escapes {target}",
                        model_path=str(archive),
                    )
            target.mkdir(parents=True, exist_ok=True)
            zf.extractall(target)
    except zipfile.BadZipFile as e:
        raise ModelLoadError(
            f"Corrupt archive {archive}: {e}", model_path=str(archive), cause=e
        ) from e

    # extractall over an existing tree leaves the directory mtime untouched
    os.utime(target)

    logger.info("Expanded %s into %s", archive, target)
    return target


__all__ = ["unpack"]
