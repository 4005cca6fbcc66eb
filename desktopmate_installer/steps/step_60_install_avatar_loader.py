from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import InstallerError
from ..lib.archive import extract_zip, reset_dir, single_root
from ..lib.assets import copy_tree, read_version_marker, write_version_marker
from ..lib.env import PATHS
from ..lib.net import ReleaseInfo, download_file, get_latest_release
from ..lib.prompt import ask_yes_no
from ..state_store import record_installed
from ._common import non_interactive, require_install_dir, unique_temp_zip

logger = logging.getLogger(__name__)

VERSION_FILE = "CustomAvatarLoader.version"
PAYLOAD_DIRS = ("Mods", "UserLibs")


class InstallAvatarLoaderStep:
    """Install or update the Custom Avatar Loader MelonLoader mod.

    The release archive is expected to carry ``Mods`` and/or ``UserLibs``
    (optionally wrapped in a single top-level folder); both are merged into
    the game directory.
    """

    step_id = "60_install_avatar_loader"
    always_run = True

    def __init__(self, cfg: InstallerConfig):
        self.cfg = cfg

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        target = require_install_dir(state)
        marker = target / VERSION_FILE
        installed = read_version_marker(marker)

        logger.info("Checking for Custom Avatar Loader mod updates...")
        owner, _, repo = self.cfg.avatar_loader_repo.partition("/")
        latest = get_latest_release(
            owner,
            repo,
            self.cfg.avatar_loader_asset,
            timeout=self.cfg.http_timeout,
            user_agent=self.cfg.user_agent,
        )
        if latest is None:
            logger.warning("Could not retrieve latest Custom Avatar Loader mod release info. Skipping update check.")
            return state

        if installed == latest.tag_name:
            logger.info("Custom Avatar Loader mod is up-to-date (version %s).", installed)
            record_installed(state, "custom_avatar_loader", installed)
            return state

        if not installed:
            logger.warning("Custom Avatar Loader mod not installed. Installing now...")
        else:
            logger.warning(
                "Custom Avatar Loader mod update available: Installed version: %s, Latest version: %s",
                installed,
                latest.tag_name,
            )
            # Unattended runs take updates.
            if not ask_yes_no(
                "Do you want to update Custom Avatar Loader mod?",
                non_interactive=non_interactive(state),
                default=True,
            ):
                logger.warning("Skipping Custom Avatar Loader mod update.")
                record_installed(state, "custom_avatar_loader", installed)
                return state

        self._install(latest, target)
        write_version_marker(marker, latest.tag_name)
        record_installed(state, "custom_avatar_loader", latest.tag_name)
        logger.info("Custom Avatar Loader mod installed/updated successfully.")
        return state

    def _install(self, release: ReleaseInfo, target: Path) -> None:
        if not release.download_url:
            raise InstallerError(
                f"Release {release.tag_name} has no {self.cfg.avatar_loader_asset} asset"
            )

        zip_path = unique_temp_zip("custom_avatar")
        extract_path = PATHS.temp_dir / "custom_avatar_loader_extracted"

        logger.info("Downloading Custom Avatar Loader mod from %s", release.download_url)
        download_file(release.download_url, zip_path, timeout=self.cfg.http_timeout, user_agent=self.cfg.user_agent)
        try:
            reset_dir(extract_path)
            extract_zip(zip_path, extract_path)
        finally:
            zip_path.unlink(missing_ok=True)

        try:
            root = extract_path
            if not any((root / n).is_dir() for n in PAYLOAD_DIRS):
                root = single_root(extract_path)
            copied = []
            for name in PAYLOAD_DIRS:
                src = root / name
                if src.is_dir():
                    copy_tree(src, target / name)
                    copied.append(name)
        finally:
            shutil.rmtree(extract_path, ignore_errors=True)

        if not copied:
            raise InstallerError("Neither 'Mods' nor 'UserLibs' directory found in the extracted archive!")
        logger.debug("Custom Avatar Loader payload copied: %s", ", ".join(copied))
