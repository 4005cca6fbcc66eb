"""DesktopMate installer (state-driven, resumable).

Core design goals:
- Idempotent steps, safe to re-run for updates
- Version markers on disk decide mod loader installs
- External tools (DepotDownloader, PowerShell) are driven, never reimplemented
- Centralized logging
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
