"""
Pending Releases - Banner release reconciliation tool.

Reads the ESM release catalog and up to three Banner databases and reports,
per product, the releases that have not been installed yet.

Usage:
    # CLI (recommended)
    python main.py check --all

    # Programmatic
    from pendingreleases import PendingReleaseService
    from pendingreleases.infrastructure import ConfigLoader

    loader = ConfigLoader("config")
    matrix = PendingReleaseService(loader.load_config()).compare(loader.load_catalog())
"""

__version__ = "1.3.0"
__author__ = "Pending Releases Team"

from pendingreleases.application.release_service import PendingReleaseService

__all__ = ["PendingReleaseService", "__version__"]
