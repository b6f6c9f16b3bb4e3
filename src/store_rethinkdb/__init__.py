"""
store_rethinkdb - RethinkDB adapter for generic store services.

Translates store filter objects (query, sort, limit, offset, search) into
ReQL and hands plain records back to the service.
"""

__version__ = "0.1.0"

from store_rethinkdb.adapters import (
    AdapterRegistry,
    ConnectionOptions,
    FindParams,
    RethinkDBAdapter,
    SortDirection,
    SortSpec,
    StoreAdapter,
    adapter_registry,
    get_adapter,
)
from store_rethinkdb.errors import (
    ConfigError,
    DatabaseError,
    InvalidConfigError,
    MissingConfigError,
    StoreError,
    ValidationError,
    WriteError,
)
from store_rethinkdb.service import ServiceSchema, ServiceSettings, StoreService

__all__ = [
    "__version__",
    # Adapters
    "StoreAdapter",
    "RethinkDBAdapter",
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
    # Filter objects
    "FindParams",
    "SortSpec",
    "SortDirection",
    "ConnectionOptions",
    # Host contract
    "ServiceSchema",
    "ServiceSettings",
    "StoreService",
    # Errors
    "StoreError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "ValidationError",
    "DatabaseError",
    "WriteError",
]
