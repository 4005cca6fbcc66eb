from __future__ import annotations

import getpass
import logging
import os
from typing import Optional

from ..errors import InstallerError, UserAborted

logger = logging.getLogger(__name__)


def _input(prompt: str) -> str:
    try:
        return input(prompt)
    except (EOFError, KeyboardInterrupt) as e:
        print()
        raise UserAborted("Input cancelled") from e


def _from_env(env_var: Optional[str]) -> Optional[str]:
    if env_var and os.environ.get(env_var):
        logger.debug("Using %s from environment", env_var)
        return os.environ[env_var]
    return None


def ask_path(prompt: str, default: str, *, non_interactive: bool = False) -> str:
    if non_interactive:
        return default
    answer = _input(f"{prompt} (default: {default}): ").strip()
    return answer or default


def ask_required(
    prompt: str,
    *,
    label: str = "A value",
    env_var: Optional[str] = None,
    non_interactive: bool = False,
) -> str:
    """Ask until a non-empty answer is given. ``env_var`` pre-answers."""

    preset = _from_env(env_var)
    if preset is not None:
        return preset.strip()
    if non_interactive:
        raise InstallerError(f"{label} is required (set {env_var})")

    while True:
        answer = _input(prompt).strip()
        if answer:
            return answer
        print(f"{label} is required.")


def ask_password(
    prompt: str,
    *,
    label: str = "Password",
    env_var: Optional[str] = None,
    non_interactive: bool = False,
) -> str:
    preset = _from_env(env_var)
    if preset is not None:
        return preset
    if non_interactive:
        raise InstallerError(f"{label} is required (set {env_var})")
    try:
        return getpass.getpass(prompt)
    except (EOFError, KeyboardInterrupt) as e:
        print()
        raise UserAborted("Input cancelled") from e


def ask_yes_no(prompt: str, *, non_interactive: bool = False, default: bool = False) -> bool:
    """Only an explicit Y answers yes."""
    if non_interactive:
        return default
    return _input(f"{prompt} (Y/N): ").strip().upper() == "Y"


def pause(message: str = "Press Enter to exit...") -> None:
    try:
        input(message)
    except (EOFError, KeyboardInterrupt):
        print()
