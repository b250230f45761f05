"""
Tests for the ODBC connector, with pyodbc replaced by a mock module.
"""

from unittest.mock import MagicMock, patch

import pytest

from pendingreleases.domain.config import ConnectionDetails, Dialect
from pendingreleases.domain.errors import DatabaseConnectionError, SourceUnavailableError
from pendingreleases.infrastructure.sql.connector import SqlConnector

LOADER = "pendingreleases.infrastructure.sql.connector._load_pyodbc"


class FakeOdbcError(Exception):
    """Stand-in for pyodbc.Error."""


@pytest.fixture
def fake_pyodbc():
    """Mock pyodbc module with an Oracle and a PostgreSQL driver installed."""
    module = MagicMock()
    module.Error = FakeOdbcError
    module.drivers.return_value = ["PostgreSQL Unicode", "Oracle in instantclient_21"]
    with patch(LOADER, return_value=module):
        yield module


@pytest.fixture
def oracle_details():
    return ConnectionDetails(
        host="prod.example.edu", port=1521, name="PROD", user="baninst1", password="secret"
    )


class TestDriverDetection:
    """Tests for ODBC driver selection."""

    def test_preferred_oracle_driver(self, fake_pyodbc, oracle_details):
        """Test that a known Oracle driver is picked."""
        assert SqlConnector(oracle_details)._detect_odbc_driver() == "Oracle in instantclient_21"

    def test_preferred_pgwire_driver(self, fake_pyodbc, oracle_details):
        """Test that the catalog dialect picks the PostgreSQL driver."""
        details = oracle_details.model_copy(update={"dialect": Dialect.PGWIRE})
        assert SqlConnector(details)._detect_odbc_driver() == "PostgreSQL Unicode"

    def test_fallback_driver(self, fake_pyodbc, oracle_details):
        """Test that any driver with a matching name is used as fallback."""
        fake_pyodbc.drivers.return_value = ["Oracle 12c ODBC driver"]
        assert SqlConnector(oracle_details)._detect_odbc_driver() == "Oracle 12c ODBC driver"

    def test_explicit_driver(self, fake_pyodbc, oracle_details):
        """Test that a configured driver wins without detection."""
        details = oracle_details.model_copy(update={"driver": "My Oracle"})
        assert SqlConnector(details)._detect_odbc_driver() == "My Oracle"
        fake_pyodbc.drivers.assert_not_called()

    def test_no_driver(self, fake_pyodbc, oracle_details):
        """Test that a missing driver is a connection error."""
        fake_pyodbc.drivers.return_value = ["SQLite3"]
        with pytest.raises(DatabaseConnectionError, match="No oracle ODBC driver"):
            SqlConnector(oracle_details)._detect_odbc_driver()


class TestConnectionString:
    """Tests for connection string building."""

    def test_oracle(self, fake_pyodbc, oracle_details):
        """Test the Oracle connection string."""
        conn_str = SqlConnector(oracle_details).build_connection_string()
        assert conn_str == (
            "DRIVER={Oracle in instantclient_21};DBQ=prod.example.edu:1521/PROD;"
            "UID=baninst1;PWD=secret"
        )

    def test_pgwire(self, fake_pyodbc, oracle_details):
        """Test the PostgreSQL wire protocol connection string."""
        details = oracle_details.model_copy(update={"dialect": Dialect.PGWIRE, "name": "esm"})
        conn_str = SqlConnector(details).build_connection_string()
        assert conn_str == (
            "DRIVER={PostgreSQL Unicode};SERVER=prod.example.edu;PORT=1521;DATABASE=esm;"
            "UID=baninst1;PWD=secret"
        )

    def test_password_with_separator_is_quoted(self, fake_pyodbc):
        """Test that special characters in passwords are brace-quoted."""
        details = ConnectionDetails(host="h", port=1, name="n", user="u", password="a;b}c")
        conn_str = SqlConnector(details).build_connection_string()
        assert conn_str.endswith("PWD={a;b}}c}")


class TestConnect:
    """Tests for opening and closing connections."""

    def test_connect_and_close(self, fake_pyodbc, oracle_details):
        """Test the connection lifecycle."""
        connector = SqlConnector(oracle_details)
        connector.connect()

        assert connector.is_connected
        fake_pyodbc.connect.assert_called_once()
        assert fake_pyodbc.connect.call_args.kwargs["timeout"] == 30

        connection = fake_pyodbc.connect.return_value
        connector.close()
        connector.close()

        assert not connector.is_connected
        connection.close.assert_called_once()

    def test_context_manager(self, fake_pyodbc, oracle_details):
        """Test use as a context manager."""
        with SqlConnector(oracle_details) as connector:
            assert connector.is_connected
        assert not connector.is_connected

    def test_connect_failure(self, fake_pyodbc, oracle_details):
        """Test that a driver error becomes DatabaseConnectionError."""
        fake_pyodbc.connect.side_effect = FakeOdbcError("08001", "[08001] cannot connect")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            SqlConnector(oracle_details).connect()

        assert exc_info.value.source == "PROD"
        assert exc_info.value.timed_out is False
        assert "Failed to connect to PROD" in str(exc_info.value)

    def test_cursor_failure_closes_connection(self, fake_pyodbc, oracle_details):
        """Test that a connection opened before cursor() fails is released."""
        connection = fake_pyodbc.connect.return_value
        connection.cursor.side_effect = FakeOdbcError("HY000", "[HY000] cursor failed")
        connector = SqlConnector(oracle_details)

        with pytest.raises(DatabaseConnectionError):
            connector.connect()

        connection.close.assert_called_once()
        assert not connector.is_connected

        connector.close()
        connection.close.assert_called_once()

    def test_connect_timeout(self, fake_pyodbc, oracle_details):
        """Test that a login timeout is reported as such."""
        fake_pyodbc.connect.side_effect = FakeOdbcError("HYT00", "[HYT00] Login timeout expired")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            SqlConnector(oracle_details).connect()

        assert exc_info.value.timed_out is True
        assert "Timed out" in str(exc_info.value)

    def test_pyodbc_unavailable(self, oracle_details):
        """Test that a broken ODBC installation is a connection error."""
        with patch(LOADER, side_effect=ImportError("libodbc.so.2")):
            with pytest.raises(DatabaseConnectionError, match="ODBC support"):
                SqlConnector(oracle_details).connect()


class TestFetchColumn:
    """Tests for query execution."""

    def test_returns_first_column(self, fake_pyodbc, oracle_details):
        """Test that values are returned as strings with NULLs skipped."""
        cursor = fake_pyodbc.connect.return_value.cursor.return_value
        cursor.fetchall.return_value = [("9.1",), (None,), (9.2,)]

        with SqlConnector(oracle_details) as connector:
            values = connector.fetch_column("SELECT X FROM T WHERE A = ?", ("BNR_GEN",))

        assert values == ["9.1", "9.2"]
        cursor.execute.assert_called_once_with("SELECT X FROM T WHERE A = ?", "BNR_GEN")

    def test_query_failure(self, fake_pyodbc, oracle_details):
        """Test that a query error becomes SourceUnavailableError."""
        cursor = fake_pyodbc.connect.return_value.cursor.return_value
        cursor.execute.side_effect = FakeOdbcError("42S02", "table or view does not exist")

        with SqlConnector(oracle_details) as connector:
            with pytest.raises(SourceUnavailableError):
                connector.fetch_column("SELECT X FROM MISSING")

    def test_not_connected(self, fake_pyodbc, oracle_details):
        """Test that querying before connect fails cleanly."""
        with pytest.raises(SourceUnavailableError, match="Not connected"):
            SqlConnector(oracle_details).fetch_column("SELECT 1 FROM DUAL")
