"""
Pytest configuration and fixtures for Pending Releases tests.
"""

import json

import pytest

from pendingreleases.domain.catalog import ProductCatalog, ProductDescriptor
from pendingreleases.domain.reconciliation import InstanceSources


class FakeSource:
    """In-memory release source: product key -> rows."""

    def __init__(self, name, data=None):
        self.name = name
        self.data = data or {}
        self.calls = []

    def fetch(self, product_key):
        self.calls.append(product_key)
        return list(self.data.get(product_key, []))


class FakeConnector:
    """
    Stand-in for SqlConnector.

    Rows are looked up by (table after FROM, first parameter). Every
    connect/close/query is appended to a shared event log.
    """

    def __init__(self, details, source_name, rows=None, events=None,
                 fail_connect=None, fail_query=None):
        self.details = details
        self.source_name = source_name
        self.rows = rows or {}
        self.events = events if events is not None else []
        self.fail_connect = fail_connect
        self.fail_query = fail_query

    def connect(self):
        self.events.append(("connect", self.source_name))
        if self.fail_connect is not None:
            raise self.fail_connect

    def close(self):
        self.events.append(("close", self.source_name))

    def fetch_column(self, sql, params=()):
        table = sql.split(" FROM ")[1].split()[0]
        key = params[0] if params else ""
        self.events.append(("query", self.source_name, table, key))
        if self.fail_query is not None:
            raise self.fail_query
        return list(self.rows.get((table, key), []))


@pytest.fixture
def fake_source():
    """Factory for FakeSource objects."""
    return FakeSource


@pytest.fixture
def empty_instance_sources():
    """Instance sources that hold nothing."""
    return InstanceSources(
        deployed_database=FakeSource("GURWADB"),
        deployed_application=FakeSource("GURWAPP"),
        patch_log=FakeSource("GURPOST"),
        version_table=FakeSource("*VERS"),
    )


@pytest.fixture
def small_catalog():
    """Two-product catalog."""
    return ProductCatalog([
        ProductDescriptor("Banner General", "BNR_GEN", "gen", "", "General", "GURVERS"),
        ProductDescriptor("Banner Student", "BNR_STU", "stu", "", "Student", "SURVERS"),
    ])


@pytest.fixture
def sample_config():
    """Configuration with a catalog and two Banner instances."""
    return {
        "ga_releases_only": False,
        "catalog": {
            "host": "esm.example.edu",
            "port": 5435,
            "name": "esm",
            "user": "admin",
            "password": "secret",
        },
        "instances": [
            {
                "host": "prod.example.edu",
                "port": 1521,
                "name": "PROD",
                "user": "baninst1",
                "password": "secret",
            },
            {
                "host": "test.example.edu",
                "port": 1521,
                "name": "TEST",
                "user": "baninst1",
                "password": "secret",
            },
        ],
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to tmp_path and return its path."""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
