"""
ODBC connection and query execution module.

Handles:
- ODBC driver detection per dialect (Oracle for Banner, PostgreSQL wire
  protocol for the ESM H2 server)
- Connection string building
- Single-column query execution
- Mapping pyodbc errors to application errors
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from pendingreleases.domain.config import ConnectionDetails, Dialect
from pendingreleases.domain.errors import DatabaseConnectionError, SourceUnavailableError

logger = logging.getLogger(__name__)

# SQLSTATEs reported by ODBC drivers for login/connection timeouts
TIMEOUT_SQLSTATES = ("HYT00", "HYT01")

PREFERRED_DRIVERS = {
    Dialect.ORACLE: [
        "Oracle in instantclient_23",
        "Oracle in instantclient_21",
        "Oracle in instantclient_19",
        "Oracle in OraClient19Home1",
    ],
    Dialect.PGWIRE: [
        "PostgreSQL Unicode",
        "PostgreSQL ANSI",
        "PostgreSQL",
    ],
}

FALLBACK_DRIVER_PATTERNS = {
    Dialect.ORACLE: re.compile(r"oracle", re.IGNORECASE),
    Dialect.PGWIRE: re.compile(r"postgres", re.IGNORECASE),
}


def _load_pyodbc():
    # Importing pyodbc loads the system ODBC manager; keep it out of module import
    import pyodbc
    return pyodbc


def _odbc_value(value: Any) -> str:
    """Brace-quote a connection string value when it contains separators."""
    text = str(value)
    if any(ch in text for ch in ";{}=") or text != text.strip():
        return "{" + text.replace("}", "}}") + "}"
    return text


class SqlConnector:
    """
    ODBC connection to one release source database.

    One connection and one cursor are held for the whole run. Use as a
    context manager or call connect() / close() explicitly.
    """

    def __init__(self, details: ConnectionDetails, source_name: str | None = None):
        """
        Initialize connector.

        Args:
            details: Complete connection details
            source_name: Name used in messages (defaults to the database name)
        """
        self.details = details
        self.source_name = source_name or details.display_name
        self._connection = None
        self._cursor = None
        self._connection_string: str | None = None

        logger.debug(
            "SqlConnector initialized for %s (%s:%s/%s, dialect=%s)",
            self.source_name, details.host, details.port, details.name, details.dialect.value,
        )

    def _detect_odbc_driver(self) -> str:
        """
        Detect the best available ODBC driver for this dialect.

        Returns:
            ODBC driver name

        Raises:
            DatabaseConnectionError: If no suitable driver is installed
        """
        if self.details.driver:
            return self.details.driver

        drivers = _load_pyodbc().drivers()
        logger.debug("Available ODBC drivers: %s", drivers)

        for driver in PREFERRED_DRIVERS[self.details.dialect]:
            if driver in drivers:
                logger.info("Using ODBC driver: %s", driver)
                return driver

        pattern = FALLBACK_DRIVER_PATTERNS[self.details.dialect]
        for driver in drivers:
            if pattern.search(driver):
                logger.warning("Using fallback ODBC driver: %s", driver)
                return driver

        raise DatabaseConnectionError(
            self.source_name,
            f"No {self.details.dialect.value} ODBC driver found for {self.source_name}. "
            "Install one or set 'driver' in the config.",
        )

    def build_connection_string(self) -> str:
        """Build the ODBC connection string."""
        if self._connection_string:
            return self._connection_string

        d = self.details
        driver = self._detect_odbc_driver()
        password = d.password.get_secret_value() if d.password else ""

        if d.dialect is Dialect.ORACLE:
            parts = [
                f"DRIVER={{{driver}}}",
                f"DBQ={d.host}:{d.port}/{d.name}",
            ]
        else:
            parts = [
                f"DRIVER={{{driver}}}",
                f"SERVER={d.host}",
                f"PORT={d.port}",
                f"DATABASE={_odbc_value(d.name)}",
            ]
        parts.append(f"UID={_odbc_value(d.user)}")
        parts.append(f"PWD={_odbc_value(password)}")

        self._connection_string = ";".join(parts)
        logger.debug("Connection string built (credentials masked)")
        return self._connection_string

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """
        Open the connection.

        Raises:
            DatabaseConnectionError: If the database cannot be reached
        """
        try:
            pyodbc = _load_pyodbc()
        except ImportError as e:
            raise DatabaseConnectionError(
                self.source_name, f"ODBC support is not available: {e}"
            ) from e

        conn_str = self.build_connection_string()
        try:
            self._connection = pyodbc.connect(conn_str, timeout=self.details.connect_timeout)
            self._cursor = self._connection.cursor()
        except pyodbc.Error as e:
            # cursor() can fail after the connection itself was opened
            if self._connection is not None:
                try:
                    self._connection.close()
                except pyodbc.Error as close_error:
                    logger.warning("Error while closing %s: %s", self.source_name, close_error)
            self._connection = None
            self._cursor = None
            sqlstate = e.args[0] if e.args else ""
            logger.error("Connection to %s failed: %s", self.source_name, e)
            if sqlstate in TIMEOUT_SQLSTATES:
                raise DatabaseConnectionError(
                    self.source_name,
                    f"Timed out while connecting to {self.source_name}. "
                    "Please check the database and try again.",
                    timed_out=True,
                ) from e
            raise DatabaseConnectionError(
                self.source_name,
                f"Failed to connect to {self.source_name}. "
                "Please check the connection details and try again.",
            ) from e

        logger.info("Connected to %s as %s", self.source_name, self.details.user)

    def close(self) -> None:
        """Close cursor and connection. Safe to call more than once."""
        if self._connection is None:
            return

        pyodbc = _load_pyodbc()
        try:
            if self._cursor is not None:
                self._cursor.close()
            self._connection.close()
        except pyodbc.Error as e:
            logger.warning("Error while closing %s: %s", self.source_name, e)
        finally:
            self._cursor = None
            self._connection = None
        logger.debug("Closed connection to %s", self.source_name)

    def __enter__(self) -> SqlConnector:
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_column(self, query: str, params: Sequence[Any] = ()) -> list[str]:
        """
        Execute a query and return the first column of every row.

        NULL values are skipped; everything else is returned as str.

        Raises:
            SourceUnavailableError: If not connected or the query fails
        """
        if self._cursor is None:
            raise SourceUnavailableError(
                self.source_name, "", f"Not connected to {self.source_name}"
            )

        pyodbc = _load_pyodbc()
        try:
            self._cursor.execute(query, *params)
            rows = self._cursor.fetchall()
        except pyodbc.Error as e:
            logger.error("Query against %s failed: %s", self.source_name, e)
            raise SourceUnavailableError(self.source_name, "", str(e)) from e

        values = [str(row[0]) for row in rows if row[0] is not None]
        logger.debug("Query returned %d rows from %s", len(values), self.source_name)
        return values
