from __future__ import annotations

import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path


def _base_dir() -> Path:
    # Frozen builds keep their data next to the executable.
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path.cwd()


@dataclass(frozen=True)
class Paths:
    base_dir: Path = field(default_factory=_base_dir)
    default_install_dir: str = r"C:\Games\DesktopMate"

    @property
    def state_default(self) -> Path:
        return self.base_dir / "DesktopMate_Install.state.json"

    @property
    def log_default(self) -> Path:
        return self.base_dir / "DesktopMate_Install.log"

    @property
    def depotdownloader_dir(self) -> Path:
        return self.base_dir / "DepotDownloader"

    @property
    def temp_dir(self) -> Path:
        return Path(tempfile.gettempdir())


PATHS = Paths()


def is_windows() -> bool:
    return sys.platform.startswith("win")
