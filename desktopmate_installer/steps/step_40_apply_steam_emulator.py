from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import InstallerError
from ..lib.archive import extract_zip, reset_dir
from ..lib.env import PATHS
from ..lib.net import download_file
from ._common import require_install_dir, unique_temp_zip

logger = logging.getLogger(__name__)

PATCH_DLL = Path("experimental") / "steam_api64.dll"


def target_dll(install_dir: Path) -> Path:
    return install_dir / "DesktopMate_Data" / "Plugins" / "x86_64" / "steam_api64.dll"


class ApplySteamEmulatorStep:
    """Drop in the Goldberg emulator's steam_api64.dll so the game starts
    without a running Steam client."""

    step_id = "40_apply_steam_emulator"

    def __init__(self, cfg: InstallerConfig):
        self.cfg = cfg

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        target = require_install_dir(state)

        zip_path = unique_temp_zip("goldberg")
        extract_path = PATHS.temp_dir / "goldberg_extracted"

        logger.info("Downloading Goldberg patch...")
        download_file(self.cfg.goldberg_url, zip_path, timeout=self.cfg.http_timeout, user_agent=self.cfg.user_agent)
        try:
            reset_dir(extract_path)
            extract_zip(zip_path, extract_path)
        finally:
            zip_path.unlink(missing_ok=True)

        try:
            patch = extract_path / PATCH_DLL
            if not patch.exists():
                raise InstallerError("steam_api64.dll not found in the patch archive!")

            dest = target_dll(target)
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(patch, dest)
        finally:
            shutil.rmtree(extract_path, ignore_errors=True)

        logger.info("Goldberg patch applied successfully.")
        return state
