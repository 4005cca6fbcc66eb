from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from ..errors import DownloadError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "DesktopMateInstaller"
DEFAULT_TIMEOUT = 60.0
GITHUB_API = "https://api.github.com"
MELONLOADER_FALLBACK_URL = "https://github.com/LavaGang/MelonLoader/releases/latest/download/MelonLoader.x64.zip"


@dataclass(frozen=True)
class ReleaseInfo:
    tag_name: str
    download_url: str


def download_file(
    url: str,
    dest: str | Path,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> Path:
    """Stream ``url`` into ``dest``.

    Raises DownloadError on connection failures and non-2xx responses; a
    partially written file is removed.
    """

    out = Path(dest)
    out.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("GET %s -> %s", url, out)

    try:
        with requests.get(url, stream=True, timeout=timeout, headers={"User-Agent": user_agent}) as resp:
            if not resp.ok:
                raise DownloadError(f"HTTP error: {resp.status_code} {resp.reason} ({url})")
            with out.open("wb") as f:
                for chunk in resp.iter_content(chunk_size=64 * 1024):
                    if chunk:
                        f.write(chunk)
    except requests.RequestException as e:
        out.unlink(missing_ok=True)
        raise DownloadError(f"Download failed: {url}: {e}") from e
    except DownloadError:
        out.unlink(missing_ok=True)
        raise

    logger.debug("Downloaded %s (%d bytes)", out.name, out.stat().st_size)
    return out


def select_asset_url(assets: List[Dict[str, Any]], asset_name: Optional[str] = None) -> str:
    """Pick a download URL from a GitHub release's asset list.

    With ``asset_name`` the first case-insensitive name match wins; without
    it, the first ``.zip`` asset. Returns "" when nothing matches.
    """
    for asset in assets:
        name = str(asset.get("name") or "")
        if asset_name is not None:
            if name.lower() == asset_name.lower():
                return str(asset.get("browser_download_url") or "")
        elif name.lower().endswith(".zip"):
            return str(asset.get("browser_download_url") or "")
    return ""


def get_latest_release(
    owner: str,
    repo: str,
    asset_name: Optional[str] = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> Optional[ReleaseInfo]:
    """Look up the latest GitHub release of ``owner/repo``.

    Any failure yields None; callers treat that as "update check unavailable".
    """

    url = f"{GITHUB_API}/repos/{owner}/{repo}/releases/latest"
    try:
        resp = requests.get(
            url,
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/vnd.github+json"},
        )
        if not resp.ok:
            logger.warning("GitHub API returned %s for %s/%s", resp.status_code, owner, repo)
            return None
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Could not query latest release of %s/%s: %s", owner, repo, e)
        return None

    if not isinstance(data, dict) or not data.get("tag_name"):
        logger.warning("Unexpected release payload for %s/%s", owner, repo)
        return None

    download_url = select_asset_url(data.get("assets") or [], asset_name)
    if not download_url and repo.lower() == "melonloader":
        download_url = MELONLOADER_FALLBACK_URL

    return ReleaseInfo(tag_name=str(data["tag_name"]), download_url=download_url)
