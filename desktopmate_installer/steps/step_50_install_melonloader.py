from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.archive import extract_zip
from ..lib.assets import read_version_marker, write_version_marker
from ..lib.net import download_file
from ..state_store import record_installed
from ._common import require_install_dir, unique_temp_zip

logger = logging.getLogger(__name__)

VERSION_FILE = "MelonLoader.version"


class InstallMelonLoaderStep:
    step_id = "50_install_melonloader"
    always_run = True

    def __init__(self, cfg: InstallerConfig):
        self.cfg = cfg

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        target = require_install_dir(state)
        marker = target / VERSION_FILE
        desired = self.cfg.melonloader_version

        installed = read_version_marker(marker)
        if installed == desired:
            logger.info("MelonLoader is up-to-date (version %s).", installed)
            record_installed(state, "melonloader", installed)
            return state

        logger.warning("Installing MelonLoader %s...", desired)
        zip_path = unique_temp_zip("MelonLoader.x64")
        download_file(self.cfg.melonloader_url, zip_path, timeout=self.cfg.http_timeout, user_agent=self.cfg.user_agent)

        logger.info("Extracting MelonLoader contents to game directory...")
        try:
            extract_zip(zip_path, target)
        finally:
            zip_path.unlink(missing_ok=True)

        write_version_marker(marker, desired)
        record_installed(state, "melonloader", desired)
        logger.info("MelonLoader installed successfully.")
        return state
