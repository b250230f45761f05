"""
Release sources backed by ODBC connections.

Each source runs one ReleaseQuery against one connection and returns the
raw version strings (or raw GURPOST patch identifiers) for a product key.
"""

import logging

from pendingreleases.domain.errors import SourceUnavailableError
from pendingreleases.domain.reconciliation import InstanceSources
from pendingreleases.infrastructure.sql.connector import SqlConnector
from pendingreleases.infrastructure.sql.queries import ReleaseQuery, catalog_query

logger = logging.getLogger(__name__)


class QueryReleaseSource:
    """A ReleaseSource that runs a fixed query variant over a connector."""

    def __init__(self, connector: SqlConnector, query: ReleaseQuery):
        self.connector = connector
        self.query = query
        self.name = f"{query.table}@{connector.source_name}"

    def fetch(self, product_key: str) -> list[str]:
        """
        Fetch the values this source holds for a product.

        Raises:
            SourceUnavailableError: If the query fails
        """
        sql, params = self.query.build(product_key)
        try:
            values = self.connector.fetch_column(sql, params)
        except SourceUnavailableError as e:
            raise SourceUnavailableError(
                self.name, product_key, f"Query on {self.name} failed for '{product_key}': {e}"
            ) from e

        logger.debug("%s returned %d row(s) for %s", self.name, len(values), product_key)
        return values

    def __repr__(self) -> str:
        return f"QueryReleaseSource({self.query.name}, {self.connector.source_name!r})"


def catalog_source(connector: SqlConnector, ga_releases_only: bool) -> QueryReleaseSource:
    """Master catalog source using the configured query variant."""
    return QueryReleaseSource(connector, catalog_query(ga_releases_only))


def instance_sources(connector: SqlConnector) -> InstanceSources:
    """The four applied-release sources of a Banner instance, sharing one connection."""
    return InstanceSources(
        deployed_database=QueryReleaseSource(connector, ReleaseQuery.DEPLOYED_DATABASE),
        deployed_application=QueryReleaseSource(connector, ReleaseQuery.DEPLOYED_APPLICATION),
        patch_log=QueryReleaseSource(connector, ReleaseQuery.PATCH_LOG),
        version_table=QueryReleaseSource(connector, ReleaseQuery.VERSION_TABLE),
    )
