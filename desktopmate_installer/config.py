from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .lib.env import PATHS

DEPOTDOWNLOADER_URL = (
    "https://github.com/SteamRE/DepotDownloader/releases/latest/download/"
    "DepotDownloader-windows-x64.zip"
)
GOLDBERG_URL = "https://gitlab.com/Mr_Goldberg/goldberg_emulator/-/jobs/4247811310/artifacts/download"
MELONLOADER_URL = "https://github.com/LavaGang/MelonLoader/releases/download/{version}/MelonLoader.x64.zip"


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def install_dir(self) -> str:
        return str(self.raw.get("install_dir") or PATHS.default_install_dir)

    @property
    def non_interactive(self) -> bool:
        return bool(self.raw.get("non_interactive", False))

    @property
    def desktop_dir(self) -> Optional[str]:
        value = self.raw.get("desktop_dir")
        return str(value) if value else None

    @property
    def http_timeout(self) -> float:
        return float(self._section("http").get("timeout") or 60)

    @property
    def user_agent(self) -> str:
        return str(self._section("http").get("user_agent") or "DesktopMateInstaller")

    @property
    def app_id(self) -> str:
        return str(self._section("depot").get("app_id") or "3301060")

    @property
    def depot_id(self) -> str:
        return str(self._section("depot").get("depot_id") or "3301061")

    @property
    def manifest_id(self) -> str:
        return str(self._section("depot").get("manifest_id") or "2467897585300615012")

    @property
    def depotdownloader_url(self) -> str:
        return str(self._section("depotdownloader").get("url") or DEPOTDOWNLOADER_URL)

    @property
    def depotdownloader_dir(self) -> str:
        return str(self._section("depotdownloader").get("dir") or PATHS.depotdownloader_dir)

    @property
    def goldberg_url(self) -> str:
        return str(self._section("steam_emulator").get("url") or GOLDBERG_URL)

    @property
    def melonloader_version(self) -> str:
        return str(self._section("melonloader").get("version") or "v0.6.6")

    @property
    def melonloader_url(self) -> str:
        template = str(self._section("melonloader").get("url") or MELONLOADER_URL)
        return template.format(version=self.melonloader_version)

    @property
    def avatar_loader_repo(self) -> str:
        return str(
            self._section("avatar_loader").get("repo") or "YusufOzmen01/desktopmate-custom-avatar-loader"
        )

    @property
    def avatar_loader_asset(self) -> str:
        return str(self._section("avatar_loader").get("asset") or "CustomAvatarLoader.zip")

    def with_overrides(self, **overrides: Any) -> "InstallerConfig":
        """Return a copy with top-level keys replaced; ``None`` values are ignored."""
        raw = dict(self.raw)
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return replace(self, raw=raw)


def load_config(path: Optional[str]) -> InstallerConfig:
    if not path:
        return InstallerConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("installer config must contain a mapping/object")

    return InstallerConfig(raw=raw)
