"""
Pending release service - orchestrates one reconciliation run.

1. Connect to the ESM release catalog
2. Connect to every configured Banner instance (in configured order)
3. Build one InstanceReport per instance for the selected products
4. Close all connections, on success and on failure
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Callable, Iterable

from pendingreleases.domain.catalog import ProductDescriptor
from pendingreleases.domain.comparison import ComparisonMatrix, build_comparison_matrix
from pendingreleases.domain.config import AppConfig, ConnectionDetails
from pendingreleases.domain.reconciliation import InstanceReport, build_instance_report
from pendingreleases.infrastructure.sources import catalog_source, instance_sources
from pendingreleases.infrastructure.sql.connector import SqlConnector

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[ConnectionDetails, str], SqlConnector]


class PendingReleaseService:
    """
    Runs the release reconciliation against live databases.

    Usage:
        service = PendingReleaseService(config)
        matrix = service.compare(catalog)

    Everything runs sequentially on the calling thread. Any error is fatal:
    open connections are closed and the error propagates to the caller.
    """

    def __init__(self, config: AppConfig, connector_factory: ConnectorFactory = SqlConnector):
        """
        Initialize the service.

        Args:
            config: Validated configuration
            connector_factory: Creates a connector from connection details and
                a source name (override in tests)
        """
        self.config = config
        self.connector_factory = connector_factory

    def collect_reports(self, products: Iterable[ProductDescriptor]) -> list[InstanceReport]:
        """
        Build one InstanceReport per active instance.

        Args:
            products: Products to reconcile, in display order

        Returns:
            Reports in configured instance order

        Raises:
            DatabaseConnectionError: If any source cannot be reached
            SourceUnavailableError: If any query fails
            MalformedPatchIdError: If a GURPOST row cannot be decoded
        """
        products = list(products)
        instances = self.config.active_instances()

        with ExitStack() as stack:
            catalog_connector = self.connector_factory(self.config.catalog, "ESM release catalog")
            catalog_connector.connect()
            stack.callback(catalog_connector.close)

            connectors = []
            for details in instances:
                connector = self.connector_factory(details, details.display_name)
                connector.connect()
                stack.callback(connector.close)
                connectors.append(connector)

            master = catalog_source(catalog_connector, self.config.ga_releases_only)
            logger.info(
                "Reconciling %d product(s) across %d instance(s) (catalog query: %s)",
                len(products), len(connectors), master.query.name,
            )

            reports = []
            for details, connector in zip(instances, connectors):
                reports.append(
                    build_instance_report(
                        details.display_name,
                        products,
                        master,
                        instance_sources(connector),
                    )
                )

        return reports

    def compare(self, products: Iterable[ProductDescriptor]) -> ComparisonMatrix:
        """Collect all instance reports and combine them side by side."""
        return build_comparison_matrix(self.collect_reports(products))
