from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.prompt import ask_path
from ._common import non_interactive

logger = logging.getLogger(__name__)


class PrepareTargetStep:
    step_id = "10_prepare_target"
    always_run = True

    def __init__(self, cfg: InstallerConfig):
        self.cfg = cfg

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.setdefault("config", {})
        default = cfg.get("install_dir") or self.cfg.install_dir

        target = ask_path("Enter installation path", default, non_interactive=non_interactive(state))
        logger.info("Installation directory: %s", target)

        Path(target).mkdir(parents=True, exist_ok=True)
        cfg["install_dir"] = target
        return state
