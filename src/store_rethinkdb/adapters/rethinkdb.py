"""RethinkDB store adapter.

Forwards every store operation to the ``rethinkdb`` driver's query builder
(ReQL) over a single connection and shapes the result into plain records.

Driver exceptions (``rethinkdb.errors.ReqlError`` and subclasses) are not
caught; they reach the caller unchanged.  The only errors raised here are
schema checks from :meth:`StoreAdapter.init` and :class:`WriteError` when a
write summary reports failures that the driver itself does not raise.

Usage:
    >>> adapter = RethinkDBAdapter(host="localhost", port=28015)
    >>> adapter.init(broker, service)          # schema.database / schema.table
    >>> adapter.connect()
    >>> adapter.insert({"title": "Hello", "votes": 3})
    {'id': '5f0c...', 'title': 'Hello', 'votes': 3}
    >>> adapter.find({"query": r.row["votes"].gt(2), "sort": "-votes", "limit": 10})
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from rethinkdb import r

from store_rethinkdb.errors import ConfigError, WriteError
from store_rethinkdb.logging import get_logger

from .base import StoreAdapter
from .types import ConnectionOptions, FindParams, SortDirection

if TYPE_CHECKING:
    from store_rethinkdb.settings import RethinkDBSettings

logger = get_logger(__name__)

# RethinkDB primary key
PRIMARY_KEY = "id"


class RethinkDBAdapter(StoreAdapter):
    """
    RethinkDB adapter for the generic store service.

    Opens one connection on :meth:`connect`, switches it to the service's
    database and creates the database and table when they do not exist yet.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 28015,
        *,
        user: str | None = None,
        password: str | None = None,
        timeout: int | None = None,
        ssl: dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__()
        self.opts = ConnectionOptions(
            host=host,
            port=port,
            user=user,
            password=password,
            timeout=timeout,
            ssl=ssl,
            options=kwargs,
        )
        self.client: Any = None

    @classmethod
    def from_settings(cls, settings: RethinkDBSettings) -> RethinkDBAdapter:
        """Build an adapter from environment-driven settings."""
        opts = settings.to_connection_options()
        return cls(
            host=opts.host,
            port=opts.port,
            user=opts.user,
            password=opts.password,
            timeout=opts.timeout,
            ssl=opts.ssl,
            **opts.options,
        )

    # -- Lifecycle ---------------------------------------------------------

    def connect(self) -> bool:
        """Connect, then create the database and table if they are missing."""
        if self.service is None:
            raise ConfigError("Adapter is not initialized. Call init() first.")

        if self.client is not None:
            return True

        database, table = self.database, self.table
        log = logger.bind(database=database, table=table)

        self.client = r.connect(**self.opts.to_connect_kwargs())
        self.client.use(database)
        self._connected = True
        log.info("rethinkdb_connected", host=self.opts.host, port=self.opts.port)

        if database not in r.db_list().run(self.client):
            r.db_create(database).run(self.client)
            log.info("rethinkdb_database_created")

        if table not in r.db(database).table_list().run(self.client):
            r.db(database).table_create(table).run(self.client)
            log.info("rethinkdb_table_created")

        return True

    def disconnect(self) -> None:
        """Close the connection."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self._connected = False
            logger.info("rethinkdb_disconnected")

    def get_connection(self) -> Any:
        """Get the open connection, connecting first if needed."""
        if self.client is None:
            self.connect()
        return self.client

    # -- Query building ----------------------------------------------------

    def create_cursor(self, params: Any = None, is_counting: bool = False) -> Any:
        """
        Translate a filter object into a ReQL query on the service table.

        Steps are applied in order: filter, search, order_by, skip, limit and
        finally count when ``is_counting`` is set.
        """
        params = FindParams.from_value(params)
        q = r.table(self.table)

        if params.query is not None:
            q = q.filter(params.query)

        if params.search:
            q = q.filter(_search_predicate(params.search, params.search_fields))

        if params.sort is not None:
            order = r.desc if params.sort.dir is SortDirection.DESC else r.asc
            q = q.order_by(order(params.sort.key))

        if params.offset:
            q = q.skip(params.offset)

        if params.limit:
            q = q.limit(params.limit)

        if is_counting:
            return q.count()
        return q

    def _run(self, query: Any, operation: str) -> Any:
        logger.debug(f"rethinkdb_{operation}", table=self.table)
        return query.run(self.get_connection())

    def _check_write(self, result: Any, operation: str) -> Any:
        if isinstance(result, dict) and result.get("errors"):
            raise WriteError(
                result.get("first_error") or f"{operation} reported {result['errors']} error(s)",
                summary=result,
            ).with_context(database=self.database, table=self.table, operation=operation)
        return result

    # -- Reads -------------------------------------------------------------

    def find(self, params: Any = None) -> list[dict[str, Any]]:
        """Records matching a filter object."""
        return list(self._run(self.create_cursor(params, False), "find"))

    def find_one(self, query: Any) -> dict[str, Any] | None:
        """First record matching ``query``, or None."""
        rows = list(self._run(r.table(self.table).filter(query).limit(1), "find_one"))
        return rows[0] if rows else None

    def find_by_id(self, id: Any) -> dict[str, Any] | None:
        return self._run(r.table(self.table).get(id), "find_by_id")

    def find_by_ids(self, ids: list[Any]) -> list[dict[str, Any]]:
        return list(self._run(r.table(self.table).get_all(r.args(list(ids))), "find_by_ids"))

    def count(self, params: Any = None) -> int:
        """Number of records matching a filter object."""
        return int(self._run(self.create_cursor(params, True), "count"))

    # -- Writes ------------------------------------------------------------

    def insert(self, entity: dict[str, Any]) -> dict[str, Any]:
        """Insert one entity, then re-read it by its (generated) key."""
        result = self._check_write(self._run(r.table(self.table).insert(entity), "insert"), "insert")
        key = _inserted_keys([entity], result)[0]
        return self._run(r.table(self.table).get(key), "find_by_id")

    def insert_many(self, entities: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert entities in one call, then re-read them by key."""
        entities = list(entities)
        result = self._check_write(
            self._run(r.table(self.table).insert(entities), "insert_many"), "insert_many"
        )
        keys = _inserted_keys(entities, result)
        return list(self._run(r.table(self.table).get_all(r.args(keys)), "find_by_ids"))

    def update_many(self, query: Any, update: Any) -> dict[str, Any]:
        """Update every record matching ``query``; returns the write summary."""
        result = self._run(
            r.table(self.table).filter(query).update(_unwrap_update(update)), "update_many"
        )
        return self._check_write(result, "update_many")

    def update_by_id(self, id: Any, update: Any) -> dict[str, Any] | None:
        """Update one record, then re-read it."""
        result = self._run(r.table(self.table).get(id).update(_unwrap_update(update)), "update_by_id")
        self._check_write(result, "update_by_id")
        return self._run(r.table(self.table).get(id), "find_by_id")

    def remove_many(self, query: Any) -> dict[str, Any]:
        """Delete every record matching ``query``; returns the write summary."""
        return self._check_write(
            self._run(r.table(self.table).filter(query).delete(), "remove_many"), "remove_many"
        )

    def remove_by_id(self, id: Any) -> dict[str, Any]:
        self._check_write(
            self._run(r.table(self.table).get(id).delete(), "remove_by_id"), "remove_by_id"
        )
        return {PRIMARY_KEY: id}

    def clear(self) -> dict[str, Any]:
        """Delete every record of the table; returns the write summary."""
        return self._check_write(self._run(r.table(self.table).delete(), "clear"), "clear")

    # -- Entity shaping ----------------------------------------------------

    def before_save_transform_id(self, entity: dict[str, Any], id_field: str) -> dict[str, Any]:
        """Move the service's ``id_field`` value to RethinkDB's ``id``."""
        entity = dict(entity)
        if id_field != PRIMARY_KEY and id_field in entity:
            entity[PRIMARY_KEY] = entity.pop(id_field)
        return entity

    def after_retrieve_transform_id(self, entity: dict[str, Any], id_field: str) -> dict[str, Any]:
        """Move RethinkDB's ``id`` to the service's ``id_field``."""
        entity = dict(entity)
        if id_field != PRIMARY_KEY and PRIMARY_KEY in entity:
            entity[id_field] = entity.pop(PRIMARY_KEY)
        return entity


def _unwrap_update(update: Any) -> Any:
    """Strip a ``{"$set": {...}}`` envelope; ReQL expressions pass through."""
    if isinstance(update, dict) and "$set" in update:
        return update["$set"]
    return update


def _inserted_keys(entities: list[dict[str, Any]], result: dict[str, Any]) -> list[Any]:
    """Keys of inserted entities: their own ``id`` or the next generated key."""
    generated = iter(result.get("generated_keys") or [])
    keys = []
    for entity in entities:
        if entity.get(PRIMARY_KEY) is not None:
            keys.append(entity[PRIMARY_KEY])
        else:
            keys.append(next(generated, None))
    return keys


def _search_predicate(search: str, fields: list[str]) -> Any:
    """Case-insensitive substring match on ``fields``, or on every value."""
    pattern = "(?i)" + re.escape(search)

    if fields:
        return lambda doc: r.or_(
            *[doc[f].default("").coerce_to("string").match(pattern).ne(None) for f in fields]
        )
    return lambda doc: doc.values().contains(
        lambda value: value.coerce_to("string").match(pattern).ne(None)
    )


__all__ = [
    "RethinkDBAdapter",
]
