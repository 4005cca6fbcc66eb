from .step_10_prepare_target import PrepareTargetStep
from .step_20_fetch_depotdownloader import FetchDepotDownloaderStep
from .step_30_download_depot import DownloadDepotStep
from .step_40_apply_steam_emulator import ApplySteamEmulatorStep
from .step_50_install_melonloader import InstallMelonLoaderStep
from .step_60_install_avatar_loader import InstallAvatarLoaderStep
from .step_70_create_shortcuts import CreateShortcutsStep
from .step_80_post_install_checks import PostInstallChecksStep

__all__ = [
    "PrepareTargetStep",
    "FetchDepotDownloaderStep",
    "DownloadDepotStep",
    "ApplySteamEmulatorStep",
    "InstallMelonLoaderStep",
    "InstallAvatarLoaderStep",
    "CreateShortcutsStep",
    "PostInstallChecksStep",
]
