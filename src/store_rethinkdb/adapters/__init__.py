"""Store adapters -- the CRUD surface a store service talks to.

Architecture::

    StoreAdapter (base.py)           Abstract base: init/connect/CRUD surface
        |-- RethinkDBAdapter         rethinkdb driver (ReQL)

    AdapterRegistry (registry.py)    name -> adapter class, get_adapter()
    FindParams / SortSpec (types.py) Framework filter objects
    ConnectionOptions (types.py)     Driver connection parameters

Modules
-------
base            Abstract StoreAdapter base class
types           Filter objects and connection options
rethinkdb       RethinkDB adapter
registry        AdapterRegistry singleton + get_adapter() factory

Tags:
    store-rethinkdb, adapters, registry-pattern, rethinkdb
"""

from .base import StoreAdapter
from .registry import AdapterRegistry, adapter_registry, get_adapter
from .rethinkdb import RethinkDBAdapter
from .types import ConnectionOptions, FindParams, SortDirection, SortSpec

__all__ = [
    # Types
    "ConnectionOptions",
    "FindParams",
    "SortDirection",
    "SortSpec",
    # Base class
    "StoreAdapter",
    # Implementations
    "RethinkDBAdapter",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
