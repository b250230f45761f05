"""
Infrastructure layer package.

Contains all I/O and external system integrations:
- ODBC connectivity and release queries (sql/)
- Release sources backed by those queries
- Configuration file loading
- Logging setup
"""

from pendingreleases.infrastructure.config_loader import ConfigLoader
from pendingreleases.infrastructure.logging_config import setup_logging
from pendingreleases.infrastructure.sources import (
    QueryReleaseSource,
    catalog_source,
    instance_sources,
)
from pendingreleases.infrastructure.sql import ReleaseQuery, SqlConnector, catalog_query

__all__ = [
    # Config
    "ConfigLoader",
    # Logging
    "setup_logging",
    # SQL
    "SqlConnector",
    "ReleaseQuery",
    "catalog_query",
    # Sources
    "QueryReleaseSource",
    "catalog_source",
    "instance_sources",
]
