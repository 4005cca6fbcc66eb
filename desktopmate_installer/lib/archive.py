from __future__ import annotations

import logging
import re
import shutil
import zipfile
from pathlib import Path, PurePosixPath

from ..errors import InstallerError

logger = logging.getLogger(__name__)

_DRIVE = re.compile(r"^[A-Za-z]:")


def safe_member_path(name: str) -> PurePosixPath:
    """Turn an archive member name into a relative path that stays inside the
    extraction root: drive prefixes (``C:``, ``C:name``), leading slashes and
    ``..``/``.`` parts are dropped. A part that still carries a colon after
    that is dropped as well, since Windows would read it as a drive or an
    alternate data stream."""

    parts = []
    for part in name.replace("\\", "/").split("/"):
        part = _DRIVE.sub("", part)
        if part in ("", ".", "..") or ":" in part:
            continue
        parts.append(part)
    return PurePosixPath(*parts)


def extract_zip(zip_path: str | Path, dest: str | Path) -> int:
    """Extract every member of ``zip_path`` below ``dest``.

    Returns the number of files written. Raises InstallerError when the file
    is not a zip archive (e.g. an HTML error page served with status 200).
    """

    root = Path(dest)
    root.mkdir(parents=True, exist_ok=True)
    resolved_root = root.resolve()
    written = 0

    try:
        zf = zipfile.ZipFile(zip_path)
    except zipfile.BadZipFile as e:
        raise InstallerError(f"Not a zip archive: {zip_path}") from e

    with zf:
        for info in zf.infolist():
            rel = safe_member_path(info.filename)
            if not rel.parts:
                continue
            out = root.joinpath(*rel.parts)
            if not out.resolve().is_relative_to(resolved_root):
                raise InstallerError(f"Archive member escapes destination: {info.filename}")
            if info.is_dir():
                out.mkdir(parents=True, exist_ok=True)
                continue
            out.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, out.open("wb") as dst:
                shutil.copyfileobj(src, dst)
            written += 1

    logger.debug("Extracted %d files from %s into %s", written, zip_path, root)
    return written


def single_root(path: str | Path) -> Path:
    """Unwrap archives that put everything under one top-level folder."""
    p = Path(path)
    dirs = [c for c in p.iterdir() if c.is_dir()]
    if len(dirs) == 1:
        return dirs[0]
    return p


def reset_dir(path: str | Path) -> Path:
    p = Path(path)
    if p.exists():
        shutil.rmtree(p)
    p.mkdir(parents=True)
    return p
