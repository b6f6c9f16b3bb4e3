"""
Shared pytest fixtures for store-rethinkdb tests.

The ``rethinkdb`` query builder is replaced by a ``MagicMock`` so every test
can assert which ReQL calls an adapter method makes.  Because ``MagicMock``
returns the same child for every call of a method, ``fake_r.table.return_value``
is *the* table for the whole test.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure store_rethinkdb package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from store_rethinkdb.adapters import rethinkdb as rethinkdb_module
from store_rethinkdb.adapters.rethinkdb import RethinkDBAdapter
from store_rethinkdb.service import ServiceSchema, ServiceSettings, StoreService


@pytest.fixture
def fake_r(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Module-level ``r`` replaced by a mock with empty db/table listings."""
    fake = MagicMock(name="r")
    fake.db_list.return_value.run.return_value = []
    fake.db.return_value.table_list.return_value.run.return_value = []
    monkeypatch.setattr(rethinkdb_module, "r", fake)
    return fake


@pytest.fixture
def fake_table(fake_r: MagicMock) -> MagicMock:
    return fake_r.table.return_value


@pytest.fixture
def schema() -> ServiceSchema:
    return ServiceSchema(
        name="store",
        database="posts",
        table="posts",
        settings=ServiceSettings(id_field="_id"),
    )


@pytest.fixture
def adapter(fake_r: MagicMock, schema: ServiceSchema) -> RethinkDBAdapter:
    """Adapter bound to a ``posts`` service, not yet connected."""
    adapter = RethinkDBAdapter(host="localhost", port=29015)
    service = StoreService(schema, adapter)
    adapter.init(None, service)
    return adapter


@pytest.fixture
def connected(adapter: RethinkDBAdapter) -> RethinkDBAdapter:
    adapter.connect()
    return adapter
