from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Dict

import pytest

from desktopmate_installer.config import InstallerConfig
from desktopmate_installer.state_store import ensure_defaults

from .helpers import write_zip


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path, monkeypatch):
    tmp = tmp_path / "tmp"
    tmp.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(tmp))
    monkeypatch.delenv("STEAM_USERNAME", raising=False)
    monkeypatch.delenv("STEAM_PASSWORD", raising=False)
    return tmp


@pytest.fixture
def install_dir(tmp_path) -> Path:
    d = tmp_path / "DesktopMate"
    d.mkdir()
    return d


@pytest.fixture
def state(install_dir):
    s = ensure_defaults({})
    s["config"]["install_dir"] = str(install_dir)
    s["config"]["non_interactive"] = True
    return s


@pytest.fixture
def cfg(tmp_path) -> InstallerConfig:
    return InstallerConfig(raw={"depotdownloader": {"dir": str(tmp_path / "DepotDownloader")}})


class FakeDownloads:
    """Serves zip archives by URL in place of lib.net.download_file."""

    def __init__(self):
        self.archives: Dict[str, Dict[str, bytes]] = {}
        self.requested: list[str] = []

    def add(self, url: str, members: Dict[str, bytes]) -> None:
        self.archives[url] = members

    def __call__(self, url, dest, **kwargs):
        self.requested.append(url)
        return write_zip(Path(dest), self.archives[url])


@pytest.fixture
def downloads():
    return FakeDownloads()
