from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..errors import InstallerError
from .command import run_cmd
from .env import is_windows

logger = logging.getLogger(__name__)

SHELL_FOLDERS_KEY = r"Software\Microsoft\Windows\CurrentVersion\Explorer\User Shell Folders"


def _ps_quote(value: str) -> str:
    # PowerShell double-quoted strings escape with a backtick.
    return value.replace("`", "``").replace('"', '`"').replace("$", "`$")


def build_shortcut_script(
    shortcut: str | Path,
    target: str | Path,
    working_dir: str | Path,
    arguments: str = "",
) -> str:
    lines = [
        "$WshShell = New-Object -ComObject WScript.Shell;",
        f'$Shortcut = $WshShell.CreateShortcut("{_ps_quote(str(shortcut))}");',
        f'$Shortcut.TargetPath = "{_ps_quote(str(target))}";',
        f'$Shortcut.WorkingDirectory = "{_ps_quote(str(working_dir))}";',
    ]
    if arguments.strip():
        lines.append(f'$Shortcut.Arguments = "{_ps_quote(arguments)}";')
    lines.append("$Shortcut.Save();")
    return "\n".join(lines)


def create_shortcut(
    shortcut: str | Path,
    target: str | Path,
    working_dir: str | Path,
    arguments: str = "",
) -> None:
    script = build_shortcut_script(shortcut, target, working_dir, arguments)
    r = run_cmd(["powershell", "-NoProfile", "-Command", script], check=False)
    if r.returncode != 0:
        raise InstallerError(f"Failed to create shortcut: {shortcut}")
    logger.debug("Shortcut written: %s", shortcut)


def _registry_desktop() -> Optional[Path]:
    """Desktop as Explorer sees it; follows OneDrive/GPO redirection."""
    if not is_windows():
        return None

    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, SHELL_FOLDERS_KEY) as key:
            value, _ = winreg.QueryValueEx(key, "Desktop")
    except OSError as e:
        logger.debug("User Shell Folders lookup failed: %s", e)
        return None
    return Path(os.path.expandvars(str(value)))


def desktop_dir(override: Optional[str] = None) -> Optional[Path]:
    if override:
        return Path(override)

    candidates = [_registry_desktop()]
    onedrive = os.environ.get("OneDrive")
    if onedrive:
        candidates.append(Path(onedrive) / "Desktop")
    profile = os.environ.get("USERPROFILE") or os.environ.get("HOME")
    if profile:
        candidates.append(Path(profile) / "OneDrive" / "Desktop")
        candidates.append(Path(profile) / "Desktop")

    for desktop in candidates:
        if desktop is not None and desktop.is_dir():
            return desktop
    return None
