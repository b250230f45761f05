"""
SQL package.

ODBC connectivity and the release query variants.
"""

from pendingreleases.infrastructure.sql.connector import SqlConnector
from pendingreleases.infrastructure.sql.queries import ReleaseQuery, catalog_query

__all__ = ["SqlConnector", "ReleaseQuery", "catalog_query"]
