from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import InstallerError
from ._common import require_install_dir
from .step_40_apply_steam_emulator import target_dll
from .step_50_install_melonloader import VERSION_FILE as MELONLOADER_VERSION_FILE
from .step_70_create_shortcuts import GAME_EXE

logger = logging.getLogger(__name__)


class PostInstallChecksStep:
    step_id = "80_post_install_checks"
    always_run = True

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        target = require_install_dir(state)

        must_exist = [
            target / GAME_EXE,
            target_dll(target),
            target / MELONLOADER_VERSION_FILE,
        ]
        missing = [str(p) for p in must_exist if not p.exists()]
        if missing:
            raise InstallerError("Post-install check failed: missing " + ", ".join(missing))

        logger.info("Post-install checks passed")
        return state
