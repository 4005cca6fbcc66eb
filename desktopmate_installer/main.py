from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from . import __version__
from .config import InstallerConfig, load_config
from .errors import InstallerError
from .lib.env import PATHS
from .lib.prompt import pause
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .state_store import ensure_defaults, load_state, save_state
from .steps import (
    ApplySteamEmulatorStep,
    CreateShortcutsStep,
    DownloadDepotStep,
    FetchDepotDownloaderStep,
    InstallAvatarLoaderStep,
    InstallMelonLoaderStep,
    PostInstallChecksStep,
    PrepareTargetStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = str(PATHS.state_default)
BANNER_WIDTH = 45
TITLE = "DesktopMate Installer"


def build_steps(cfg: InstallerConfig):
    return [
        PrepareTargetStep(cfg),
        FetchDepotDownloaderStep(cfg),
        DownloadDepotStep(cfg),
        ApplySteamEmulatorStep(cfg),
        InstallMelonLoaderStep(cfg),
        InstallAvatarLoaderStep(cfg),
        CreateShortcutsStep(cfg),
        PostInstallChecksStep(),
    ]


def banner() -> str:
    line = "=" * BANNER_WIDTH
    return "\n".join([line, TITLE.center(BANNER_WIDTH).rstrip(), line])


def run(
    *,
    cfg: Optional[InstallerConfig] = None,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
) -> Dict[str, Any]:
    """Run the installer pipeline, persisting state for resume."""

    cfg = cfg or InstallerConfig()
    actual_log_path = configure_logging(log_path=log_path)
    logger.info("Starting %s %s", TITLE, __version__)

    state = ensure_defaults(load_state(state_path))
    paths = state["execution"].setdefault("paths", {})
    paths["log_path_requested"] = log_path
    paths["log_path_actual"] = actual_log_path

    # Explicit choices for this run win over what a previous run recorded.
    if "install_dir" in cfg.raw:
        state["config"]["install_dir"] = cfg.install_dir
    state["config"]["non_interactive"] = cfg.non_interactive

    steps = build_steps(cfg)

    try:
        result = run_pipeline(
            state=state,
            steps=steps,
            start_at=start_at,
            stop_after=stop_after,
            force=force,
        )
        state = result.state
        summary = state["execution"].setdefault("summary", {})
        summary["ran_steps"] = result.ran_steps
        summary["skipped_steps"] = result.skipped_steps
        return state
    except Exception as e:
        logger.exception("Installer failed")
        state["execution"]["errors"].append(
            {
                "step": state["execution"].get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        save_state(state_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="desktopmate-installer", description=TITLE)
    p.add_argument("--install-dir", default=None, help="Game directory (skips the prompt default)")
    p.add_argument("--config", default=None, help="Optional YAML config file")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to installer state (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 50_install_melonloader)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--force", action="store_true", help="Re-run steps even if marked completed")
    p.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never prompt; credentials come from STEAM_USERNAME/STEAM_PASSWORD",
    )
    p.add_argument("--no-pause", action="store_true", help="Exit without waiting for Enter")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = p.parse_args(argv)

    print(banner())
    print()

    cfg = load_config(args.config).with_overrides(
        install_dir=args.install_dir,
        non_interactive=True if args.non_interactive else None,
    )

    step_ids = [s.step_id for s in build_steps(cfg)]
    for flag, value in (("--start-at", args.start_at), ("--stop-after", args.stop_after)):
        if value is not None and value not in step_ids:
            p.error(f"{flag}: unknown step {value!r} (choose from {', '.join(step_ids)})")

    code = 0
    try:
        run(
            cfg=cfg,
            state_path=args.state,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            force=args.force,
        )
        print("Installation complete.")
    except InstallerError as e:
        print(f"ERROR: {e}")
        code = 1
    except Exception as e:
        # run() has already logged the traceback.
        print(f"ERROR: {type(e).__name__}: {e}")
        print(f"See {args.log} for details.")
        code = 1

    if not (args.no_pause or cfg.non_interactive):
        pause()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
