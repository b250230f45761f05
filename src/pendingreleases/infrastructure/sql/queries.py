"""
Release queries.

Closed set of named queries used to read release information. Values are
bound as ODBC parameters ("?"); only the legacy *VERS table name has to be
interpolated, and it is checked against SQL_IDENTIFIER first.
"""

from __future__ import annotations

from enum import Enum

from pendingreleases.domain.catalog import SQL_IDENTIFIER
from pendingreleases.domain.errors import ConfigurationError


class ReleaseQuery(Enum):
    """Query variants, tagged by the source they read."""

    CATALOG_GA_ONLY = (
        "RELEASE",
        "SELECT RELEASE_VERSION FROM RELEASE WHERE STATUS = 'GA' AND PRODUCT_ID = ?",
    )
    CATALOG_NOT_OBSOLETE = (
        "RELEASE",
        "SELECT RELEASE_VERSION FROM RELEASE WHERE STATUS != 'OBSOLETE' AND PRODUCT_ID = ?",
    )
    DEPLOYED_DATABASE = (
        "GURWADB",
        "SELECT GURWADB_RELEASE FROM GURWADB WHERE GURWADB_APPLICATION_NAME = ?",
    )
    DEPLOYED_APPLICATION = (
        "GURWAPP",
        "SELECT GURWAPP_RELEASE FROM GURWAPP WHERE GURWAPP_APPLICATION_NAME = ?",
    )
    PATCH_LOG = (
        "GURPOST",
        "SELECT GURPOST_PATCH FROM GURPOST WHERE GURPOST_PATCH LIKE ?",
    )
    VERSION_TABLE = (
        "*VERS",
        "SELECT {table}_RELEASE FROM {table}",
    )

    def __init__(self, table: str, template: str):
        self.table = table
        self.template = template

    def build(self, product_key: str) -> tuple[str, tuple[str, ...]]:
        """
        Build the SQL text and parameters for one product.

        Args:
            product_key: Source-specific product identifier

        Returns:
            (sql, params) ready for cursor.execute
        """
        if self is ReleaseQuery.VERSION_TABLE:
            if not SQL_IDENTIFIER.match(product_key):
                raise ConfigurationError(f"Invalid version table name: {product_key!r}")
            return self.template.format(table=product_key), ()

        if self is ReleaseQuery.PATCH_LOG:
            return self.template, (f"pcr-%_{product_key}%",)

        return self.template, (product_key,)


def catalog_query(ga_releases_only: bool) -> ReleaseQuery:
    """Pick the catalog variant: GA releases only, or everything not obsolete."""
    if ga_releases_only:
        return ReleaseQuery.CATALOG_GA_ONLY
    return ReleaseQuery.CATALOG_NOT_OBSOLETE
