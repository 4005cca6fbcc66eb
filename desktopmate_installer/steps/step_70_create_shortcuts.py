from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import InstallerError
from ..lib.env import is_windows
from ..lib.shortcuts import create_shortcut, desktop_dir
from ._common import require_install_dir

logger = logging.getLogger(__name__)

GAME_EXE = "DesktopMate.exe"

# (file name, launch arguments)
SHORTCUTS = (
    ("DesktopMate_Console.lnk", ""),
    ("DesktopMate_NoConsole.lnk", "melonloader.hideconsole"),
)


class CreateShortcutsStep:
    step_id = "70_create_shortcuts"

    def __init__(self, cfg: InstallerConfig):
        self.cfg = cfg

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        target = require_install_dir(state)

        if not is_windows():
            logger.warning("Desktop shortcuts need Windows (WScript.Shell); skipping.")
            return state

        logger.info("Creating desktop shortcuts...")
        desktop = desktop_dir(self.cfg.desktop_dir)
        if desktop is None:
            raise InstallerError("Cannot determine Desktop directory.")

        created = []
        for name, arguments in SHORTCUTS:
            link = desktop / name
            create_shortcut(link, target / GAME_EXE, target, arguments)
            created.append(str(link))

        state.setdefault("execution", {}).setdefault("paths", {})["shortcuts"] = created
        logger.info("Desktop shortcuts created successfully.")
        return state
