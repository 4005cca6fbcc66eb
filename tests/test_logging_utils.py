from __future__ import annotations

import logging

import pytest

from desktopmate_installer import logging_utils


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
            root.removeHandler(h)
    root.setLevel(level)
    if hasattr(root, "_desktopmate_log_path"):
        del root._desktopmate_log_path


def test_configure_logging_writes_file_once(tmp_path, clean_root_logger):
    log_path = str(tmp_path / "logs" / "DesktopMate_Install.log")

    assert logging_utils.configure_logging(log_path, also_console=False) == log_path
    assert logging_utils.configure_logging(str(tmp_path / "other.log"), also_console=False) == log_path

    logging.getLogger("desktopmate_installer.test").info("hello install log")
    for h in clean_root_logger.handlers:
        h.flush()

    text = (tmp_path / "logs" / "DesktopMate_Install.log").read_text(encoding="utf-8")
    assert "hello install log" in text
    assert text.count("Logging initialized") == 1
    assert not (tmp_path / "other.log").exists()


def test_unwritable_log_dir_falls_back_to_cwd(tmp_path, monkeypatch, clean_root_logger):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    chosen = logging_utils.configure_logging(str(blocker / "DesktopMate_Install.log"), also_console=False)

    assert chosen == str(tmp_path / "DesktopMate_Install.log")
