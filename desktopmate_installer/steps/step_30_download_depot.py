from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..config import InstallerConfig
from ..errors import InstallerError
from ..lib.command import stream_cmd
from ..lib.prompt import ask_password, ask_required
from ..state_store import record_installed
from ._common import non_interactive, require_install_dir
from .step_20_fetch_depotdownloader import depotdownloader_exe

logger = logging.getLogger(__name__)

GAME_DATA_DIR = "DesktopMate_Data"


def depot_args(cfg: InstallerConfig, *, username: str, password: str, target: str) -> List[str]:
    return [
        "-app", cfg.app_id,
        "-depot", cfg.depot_id,
        "-manifest", cfg.manifest_id,
        "-username", username,
        "-password", password,
        "-dir", target,
    ]


class DownloadDepotStep:
    step_id = "30_download_depot"

    def __init__(self, cfg: InstallerConfig):
        self.cfg = cfg

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        target = require_install_dir(state)

        if (target / GAME_DATA_DIR).exists():
            logger.warning("DesktopMate files already exist. Skipping depot download.")
            return state

        quiet = non_interactive(state)
        username = ask_required(
            "Enter your Steam username: ",
            label="Steam username",
            env_var="STEAM_USERNAME",
            non_interactive=quiet,
        )
        password = ask_password(
            "Enter your Steam password: ",
            label="Steam password",
            env_var="STEAM_PASSWORD",
            non_interactive=quiet,
        )
        logger.info("Steam credentials collected.")

        exe = depotdownloader_exe(self.cfg)
        if not exe.exists():
            raise InstallerError(f"DepotDownloader missing at {exe} (run 20_fetch_depotdownloader)")

        logger.info("Downloading DesktopMate depot (via DepotDownloader)...")
        argv = [str(exe)] + depot_args(self.cfg, username=username, password=password, target=str(target))
        code = stream_cmd(argv, tag="DD")
        if code != 0:
            raise InstallerError(f"DepotDownloader encountered an error. Exit code = {code}")

        logger.info("Depot download complete.")
        record_installed(state, "depot_manifest", self.cfg.manifest_id)
        return state
