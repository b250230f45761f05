"""
Error types for Pending Releases.

Every error raised by the reconciliation core is fatal for the run.
They propagate to the CLI, which prints a single diagnostic line and exits 1.
"""


class PendingReleasesError(Exception):
    """Base class for all application errors."""


class ConfigurationError(PendingReleasesError):
    """Missing, malformed or partial configuration."""


class DatabaseConnectionError(PendingReleasesError):
    """A data source could not be reached (or the attempt timed out)."""

    def __init__(self, source: str, message: str, timed_out: bool = False):
        self.source = source
        self.timed_out = timed_out
        super().__init__(message)


class SourceUnavailableError(PendingReleasesError):
    """A query against a connected source failed mid-run."""

    def __init__(self, source: str, product_key: str, message: str):
        self.source = source
        self.product_key = product_key
        super().__init__(message)


class MalformedPatchIdError(PendingReleasesError, ValueError):
    """A patch identifier does not have the pcr-<n>_<key><digits> shape."""

    def __init__(
        self,
        raw_patch_id: str,
        reason: str,
        source: str | None = None,
        product: str | None = None,
    ):
        self.raw_patch_id = raw_patch_id
        self.reason = reason
        self.source = source
        self.product = product

        message = f"Malformed patch identifier {raw_patch_id!r}"
        if source or product:
            message += f" in {source or 'patch log'} for {product or 'unknown product'}"
        super().__init__(f"{message}: {reason}")
