from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from .lib.env import PATHS

DEFAULT_LOG_PATH = str(PATHS.log_default)

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# The console shows the installer's own messages; timestamps stay in the file.
CONSOLE_FORMAT = "%(message)s"


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    """Open the install log, appending across runs.

    The log lives next to the installer executable so users can attach it to
    bug reports. If that directory is read-only (e.g. the installer was
    unpacked into Program Files) the same file name is used in the current
    working directory instead.
    """
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, encoding="utf-8"), log_path
    except OSError:
        fallback = str(Path.cwd() / Path(log_path).name)
        return logging.FileHandler(fallback, encoding="utf-8"), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Attach the install log (and optionally the console) to the root logger.

    Safe to call more than once: later calls return the path chosen by the
    first one. Returns the actual file path being used.
    """

    root = logging.getLogger()
    if getattr(root, "_desktopmate_log_path", None):
        return root._desktopmate_log_path  # type: ignore[attr-defined]

    root.setLevel(level)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console)

    root._desktopmate_log_path = chosen_path  # type: ignore[attr-defined]

    log = logging.getLogger(__name__)
    log.info("-" * 60)
    log.info("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path
