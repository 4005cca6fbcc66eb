from __future__ import annotations


class InstallerError(RuntimeError):
    """A failure the installer reports to the user and stops on."""


class DownloadError(InstallerError):
    pass


class UserAborted(InstallerError):
    pass
