"""Minimal store-service host for adapters.

The adapter is meant to be driven by a microservice framework's generic store
service.  :class:`StoreService` is the smallest host that honours that
contract: it owns a schema (``database``, ``table``, ``settings.id_field``),
runs the adapter lifecycle and exposes CRUD actions that map the service's
identifier field to and from the database's.

Example::

    service = StoreService(
        ServiceSchema(name="posts", database="blog", table="posts"),
        adapter=RethinkDBAdapter(host="localhost"),
        after_connected=lambda svc: svc.adapter.clear(),
    )
    service.start()
    post = service.create({"title": "Hello"})
    service.update(post["_id"], {"$set": {"title": "Hello again"}})
    service.stop()
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from store_rethinkdb.adapters.base import StoreAdapter
from store_rethinkdb.logging import LogContext, get_logger

logger = get_logger(__name__)


@dataclass
class ServiceSettings:
    """Service-level settings the adapter reads."""

    id_field: str = "_id"


@dataclass
class ServiceSchema:
    """What the adapter needs to know about its host service."""

    name: str
    database: str | None = None
    table: str | None = None
    settings: ServiceSettings = field(default_factory=ServiceSettings)


class StoreService:
    """Generic CRUD service backed by a :class:`StoreAdapter`."""

    def __init__(
        self,
        schema: ServiceSchema,
        adapter: StoreAdapter,
        *,
        broker: Any = None,
        after_connected: Callable[[StoreService], Any] | None = None,
    ):
        self.schema = schema
        self.adapter = adapter
        self.broker = broker
        self.after_connected = after_connected

    @property
    def name(self) -> str:
        return self.schema.name

    @property
    def settings(self) -> ServiceSettings:
        return self.schema.settings

    # -- Lifecycle ---------------------------------------------------------

    def start(self) -> None:
        """Initialize and connect the adapter, then run ``after_connected``."""
        with LogContext(service=self.name):
            self.adapter.init(self.broker, self)
            self.adapter.connect()
            logger.info("store_service_started", database=self.schema.database, table=self.schema.table)
            if self.after_connected is not None:
                self.after_connected(self)

    def stop(self) -> None:
        with LogContext(service=self.name):
            self.adapter.disconnect()
            logger.info("store_service_stopped")

    # -- Actions -----------------------------------------------------------

    def find(self, params: Any = None) -> list[dict[str, Any]]:
        return [self._to_record(entity) for entity in self.adapter.find(params)]

    def count(self, params: Any = None) -> int:
        return self.adapter.count(params)

    def get(self, id: Any) -> Any:
        """One record for a single id, a list of records for a list of ids."""
        if isinstance(id, list | tuple):
            return [self._to_record(entity) for entity in self.adapter.find_by_ids(list(id))]
        return self._to_record(self.adapter.find_by_id(id))

    def create(self, entity: dict[str, Any]) -> dict[str, Any]:
        entity = self.adapter.before_save_transform_id(entity, self.settings.id_field)
        return self._to_record(self.adapter.insert(entity))

    def insert(self, entities: list[dict[str, Any]]) -> list[dict[str, Any]]:
        entities = [
            self.adapter.before_save_transform_id(entity, self.settings.id_field)
            for entity in entities
        ]
        return [self._to_record(entity) for entity in self.adapter.insert_many(entities)]

    def update(self, id: Any, changes: Any) -> dict[str, Any] | None:
        return self._to_record(self.adapter.update_by_id(id, changes))

    def remove(self, id: Any) -> dict[str, Any]:
        return self._to_record(self.adapter.remove_by_id(id))

    def _to_record(self, entity: dict[str, Any] | None) -> dict[str, Any] | None:
        if entity is None:
            return None
        return self.adapter.after_retrieve_transform_id(
            self.adapter.entity_to_object(entity), self.settings.id_field
        )


__all__ = [
    "ServiceSettings",
    "ServiceSchema",
    "StoreService",
]
