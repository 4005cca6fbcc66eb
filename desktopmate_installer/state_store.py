from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from . import __version__

logger = logging.getLogger(__name__)

# Never persisted, even if a caller stashes them in state["config"].
SECRET_KEYS = frozenset({"steam_password"})


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    return "json"


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    text = p.read_text(encoding="utf-8")
    if _detect_format(p) == "yaml":
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def _scrub(state: Dict[str, Any]) -> Dict[str, Any]:
    cfg = state.get("config") or {}
    if not any(k in cfg for k in SECRET_KEYS):
        return state
    clean = dict(state)
    clean["config"] = {k: v for k, v in cfg.items() if k not in SECRET_KEYS}
    return clean


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    data = _scrub(state)
    if _detect_format(p) == "yaml":
        p.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.debug("State saved to %s", p)


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with defaults (without overriding user values)."""

    state.setdefault("version", __version__)
    state.setdefault("config", {})
    state.setdefault("installed", {})
    state.setdefault("execution", {})

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])

    return state


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def is_step_completed(state: Dict[str, Any], step_id: str) -> bool:
    exe = state.get("execution") or {}
    completed = exe.get("completed_steps") or []
    return step_id in completed


def record_installed(state: Dict[str, Any], component: str, version: str) -> None:
    state.setdefault("installed", {})[component] = version
