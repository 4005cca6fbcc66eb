from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import InstallerError
from ..lib.archive import extract_zip
from ..lib.env import PATHS
from ..lib.net import download_file

logger = logging.getLogger(__name__)

EXE_NAME = "DepotDownloader.exe"


def depotdownloader_exe(cfg: InstallerConfig) -> Path:
    return Path(cfg.depotdownloader_dir) / EXE_NAME


class FetchDepotDownloaderStep:
    step_id = "20_fetch_depotdownloader"

    def __init__(self, cfg: InstallerConfig):
        self.cfg = cfg

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        exe = depotdownloader_exe(self.cfg)
        state.setdefault("execution", {}).setdefault("paths", {})["depotdownloader"] = str(exe)

        if exe.exists():
            logger.info("DepotDownloader found at %s", exe)
            return state

        logger.warning("%s not found! Downloading now...", EXE_NAME)
        zip_path = PATHS.temp_dir / "DepotDownloader.zip"
        download_file(
            self.cfg.depotdownloader_url,
            zip_path,
            timeout=self.cfg.http_timeout,
            user_agent=self.cfg.user_agent,
        )

        logger.info("Extracting DepotDownloader...")
        try:
            extract_zip(zip_path, exe.parent)
        finally:
            zip_path.unlink(missing_ok=True)

        if not exe.exists():
            raise InstallerError(f"{EXE_NAME} still not found after extraction!")

        logger.info("DepotDownloader downloaded and extracted successfully.")
        return state
