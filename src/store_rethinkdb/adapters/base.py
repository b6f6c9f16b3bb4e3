"""Store adapter base class.

Manifesto:
    A store service performs CRUD without knowing which database sits behind
    it.  The abstract base class fixes the method surface the service relies
    on and owns the parts every adapter shares: binding to the host service,
    validating its schema and the connection-lifecycle protocol.

Features:
    - Abstract CRUD surface (``find``, ``count``, ``insert``, ``update_by_id``...)
    - ``init(broker, service)`` with ``database`` / ``table`` validation
    - Property-based connection-state introspection
    - Context-manager protocol for connection lifecycle

Tags:
    store-rethinkdb, database, abstract-base, adapter-pattern
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from store_rethinkdb.errors import MissingConfigError


class StoreAdapter(ABC):
    """
    Abstract base class for store adapters.

    The host calls :meth:`init` with its broker and service, then
    :meth:`connect` when the service starts and :meth:`disconnect` when it
    stops.  The service's ``schema`` must expose ``database`` and ``table``.
    """

    def __init__(self) -> None:
        self.broker: Any = None
        self.service: Any = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        """Whether adapter is connected."""
        return self._connected

    @property
    def database(self) -> str:
        return self.service.schema.database

    @property
    def table(self) -> str:
        return self.service.schema.table

    def init(self, broker: Any, service: Any) -> None:
        """Bind the adapter to its host service and validate the schema."""
        self.broker = broker
        self.service = service

        if not getattr(service.schema, "database", None):
            raise MissingConfigError(
                "database", "Missing `database` definition in schema of service!"
            )

        if not getattr(service.schema, "table", None):
            raise MissingConfigError(
                "table", "Missing `table` definition in schema of service!"
            )

    # -- Lifecycle ---------------------------------------------------------

    @abstractmethod
    def connect(self) -> bool:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    # -- Reads -------------------------------------------------------------

    @abstractmethod
    def find(self, params: Any = None) -> list[dict[str, Any]]:
        """Records matching a filter object."""
        ...

    @abstractmethod
    def find_one(self, query: Any) -> dict[str, Any] | None:
        """First record matching a query, or None."""
        ...

    @abstractmethod
    def find_by_id(self, id: Any) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def find_by_ids(self, ids: list[Any]) -> list[dict[str, Any]]:
        ...

    @abstractmethod
    def count(self, params: Any = None) -> int:
        """Number of records matching a filter object."""
        ...

    # -- Writes ------------------------------------------------------------

    @abstractmethod
    def insert(self, entity: dict[str, Any]) -> dict[str, Any]:
        """Insert one entity and return the stored record."""
        ...

    @abstractmethod
    def insert_many(self, entities: list[dict[str, Any]]) -> list[dict[str, Any]]:
        ...

    @abstractmethod
    def update_many(self, query: Any, update: Any) -> dict[str, Any]:
        ...

    @abstractmethod
    def update_by_id(self, id: Any, update: Any) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def remove_many(self, query: Any) -> dict[str, Any]:
        ...

    @abstractmethod
    def remove_by_id(self, id: Any) -> dict[str, Any]:
        ...

    @abstractmethod
    def clear(self) -> dict[str, Any]:
        """Remove every record of the table."""
        ...

    # -- Entity shaping ----------------------------------------------------

    def entity_to_object(self, entity: dict[str, Any]) -> dict[str, Any]:
        """Convert a driver record to a plain dict."""
        return dict(entity)

    @abstractmethod
    def before_save_transform_id(self, entity: dict[str, Any], id_field: str) -> dict[str, Any]:
        ...

    @abstractmethod
    def after_retrieve_transform_id(self, entity: dict[str, Any], id_field: str) -> dict[str, Any]:
        ...

    def __enter__(self) -> StoreAdapter:
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()


__all__ = [
    "StoreAdapter",
]
