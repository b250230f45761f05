"""
Application layer package.

Use cases that tie the domain logic to the infrastructure.
"""

from pendingreleases.application.release_service import PendingReleaseService

__all__ = ["PendingReleaseService"]
