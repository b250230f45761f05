"""
Domain layer package.

Pure reconciliation logic and data models with no I/O:
- Product catalog
- Patch identifier decoding
- Release reconciliation and instance reports
- Side-by-side comparison matrix
- Configuration models and error types
"""

from pendingreleases.domain.catalog import DEFAULT_CATALOG, ProductCatalog, ProductDescriptor
from pendingreleases.domain.comparison import (
    ComparisonMatrix,
    MatrixRow,
    build_comparison_matrix,
)
from pendingreleases.domain.config import AppConfig, CatalogConnection, ConnectionDetails, Dialect
from pendingreleases.domain.errors import (
    ConfigurationError,
    DatabaseConnectionError,
    MalformedPatchIdError,
    PendingReleasesError,
    SourceUnavailableError,
)
from pendingreleases.domain.patch_decoder import decode_patch_id
from pendingreleases.domain.reconciliation import (
    InstanceReport,
    InstanceSources,
    ReleaseSource,
    build_instance_report,
    reconcile,
    reconcile_product,
)

__all__ = [
    # Catalog
    "DEFAULT_CATALOG",
    "ProductCatalog",
    "ProductDescriptor",
    # Reconciliation
    "decode_patch_id",
    "reconcile",
    "reconcile_product",
    "build_instance_report",
    "InstanceReport",
    "InstanceSources",
    "ReleaseSource",
    # Comparison
    "ComparisonMatrix",
    "MatrixRow",
    "build_comparison_matrix",
    # Config
    "AppConfig",
    "CatalogConnection",
    "ConnectionDetails",
    "Dialect",
    # Errors
    "PendingReleasesError",
    "ConfigurationError",
    "DatabaseConnectionError",
    "SourceUnavailableError",
    "MalformedPatchIdError",
]
