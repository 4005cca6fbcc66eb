from __future__ import annotations

import json

import pytest

from desktopmate_installer.state_store import (
    ensure_defaults,
    is_step_completed,
    load_state,
    mark_step_completed,
    record_installed,
    save_state,
)


def test_missing_state_file_is_empty(tmp_path):
    assert load_state(str(tmp_path / "nope.json")) == {}


def test_ensure_defaults_keeps_existing_values():
    state = ensure_defaults({"config": {"install_dir": "D:/Games"}, "execution": {"completed_steps": ["10_x"]}})

    assert state["config"]["install_dir"] == "D:/Games"
    assert state["execution"]["completed_steps"] == ["10_x"]
    assert state["execution"]["errors"] == []
    assert state["installed"] == {}


@pytest.mark.parametrize("name", ["state.json", "state.yaml"])
def test_save_and_load(tmp_path, name):
    path = str(tmp_path / name)
    state = ensure_defaults({})
    mark_step_completed(state, "10_prepare_target")
    record_installed(state, "melonloader", "v0.6.6")

    save_state(path, state)
    loaded = load_state(path)

    assert is_step_completed(loaded, "10_prepare_target")
    assert loaded["installed"]["melonloader"] == "v0.6.6"


def test_password_never_written(tmp_path):
    path = tmp_path / "state.json"
    state = ensure_defaults({})
    state["config"]["steam_password"] = "hunter2"

    save_state(str(path), state)

    assert "hunter2" not in path.read_text(encoding="utf-8")
    assert state["config"]["steam_password"] == "hunter2"


def test_non_mapping_state_rejected(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_state(str(path))


def test_mark_step_completed_is_idempotent():
    state = {}
    mark_step_completed(state, "20_x")
    mark_step_completed(state, "20_x")
    assert state["execution"]["completed_steps"] == ["20_x"]
