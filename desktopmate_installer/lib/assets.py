from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(src: str | Path, dst: str | Path) -> int:
    """Merge ``src`` into ``dst``, overwriting files that already exist.

    Returns the number of files copied.
    """
    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(str(src))

    copied = 0
    d.mkdir(parents=True, exist_ok=True)
    for item in s.rglob("*"):
        out = d / item.relative_to(s)
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)
            copied += 1

    logger.debug("Copied %d files %s -> %s", copied, s, d)
    return copied


def read_version_marker(path: str | Path) -> str:
    p = Path(path)
    if not p.exists():
        return ""
    return p.read_text(encoding="utf-8").strip()


def write_version_marker(path: str | Path, version: str) -> None:
    Path(path).write_text(version, encoding="utf-8")
