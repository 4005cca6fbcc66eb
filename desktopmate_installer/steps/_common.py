from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, Dict

from ..errors import InstallerError
from ..lib.env import PATHS


def require_install_dir(state: Dict[str, Any]) -> Path:
    value = (state.get("config") or {}).get("install_dir")
    if not value:
        raise InstallerError("config.install_dir missing (run 10_prepare_target first)")
    return Path(value)


def unique_temp_zip(prefix: str) -> Path:
    return PATHS.temp_dir / f"{prefix}_{uuid.uuid4()}.zip"


def non_interactive(state: Dict[str, Any]) -> bool:
    return bool((state.get("config") or {}).get("non_interactive", False))
