#!/usr/bin/env python3
"""CRUD walkthrough against a live RethinkDB server.

Starts a ``posts`` store service, clears its table, then runs every adapter
operation in order and checks the result of each step.

Run (server on localhost:28015, override with ``RETHINKDB_*`` env vars)::

    python examples/simple.py
"""

from datetime import datetime, timezone

from rethinkdb import r

from store_rethinkdb import RethinkDBAdapter, ServiceSchema, StoreService
from store_rethinkdb.adapters import get_adapter
from store_rethinkdb.logging import configure_logging, get_logger
from store_rethinkdb.settings import RethinkDBSettings

logger = get_logger("examples.simple")


def run_checks(adapter: RethinkDBAdapter) -> tuple[int, int]:
    ids: list = []
    checks = []

    def check(name, ok):
        checks.append(bool(ok))
        logger.info("check", name=name, ok=bool(ok))

    check("COUNT", adapter.count() == 0)

    doc = adapter.insert({
        "title": "Hello",
        "content": "Post content",
        "votes": 3,
        "status": True,
        "createdAt": datetime.now(timezone.utc),
    })
    ids.append(doc["id"])
    check("INSERT", doc["title"] == "Hello")

    rows = adapter.find({})
    check("FIND", len(rows) == 1 and rows[0]["id"] == ids[0])
    check("GET", adapter.find_by_id(ids[0])["id"] == ids[0])
    check("COUNT", adapter.count() == 1)

    docs = adapter.insert_many([
        {"title": "Second", "content": "Second post content", "votes": 8, "status": True},
        {"title": "Last", "content": "Last document", "votes": 1, "status": False},
    ])
    ids.extend(d["id"] for d in docs)
    check("INSERT MANY", len(docs) == 2)
    check("COUNT", adapter.count() == 3)

    check("FIND by query", len(adapter.find({"query": {"title": "Last"}})) == 1)
    rows = adapter.find({"limit": 1, "offset": 1, "sort": {"key": "title", "dir": "desc"}})
    check("FIND by limit, sort, offset", len(rows) == 1 and rows[0]["title"] == "Last")
    check("FIND by search", len(adapter.find({"search": "second", "search_fields": ["title"]})) == 1)
    check("FIND by query (gt)", len(adapter.find({"query": r.row["votes"].gt(2)})) == 2)
    check("COUNT by query (gt)", adapter.count({"query": r.row["votes"].gt(2)}) == 2)
    check("GET BY IDS", len(adapter.find_by_ids([ids[0], ids[2]])) == 2)

    doc = adapter.update_by_id(ids[2], {"$set": {"title": "Last 2", "status": True}})
    check("UPDATE", doc["title"] == "Last 2")

    summary = adapter.update_many(r.row["votes"].lt(5), {"status": False})
    check("UPDATE BY QUERY", summary["replaced"] == 2)

    summary = adapter.remove_many(r.row["votes"].lt(5))
    check("REMOVE BY QUERY", summary["deleted"] == 2)
    check("COUNT", adapter.count() == 1)

    check("REMOVE BY ID", adapter.remove_by_id(ids[1])["id"] == ids[1])
    check("COUNT", adapter.count() == 0)

    adapter.clear()
    return sum(checks), len(checks)


def main() -> None:
    settings = RethinkDBSettings()
    configure_logging(level=settings.log_level, json_format=settings.log_json, service="posts")

    service = StoreService(
        ServiceSchema(
            name="posts",
            database=settings.database or "posts",
            table=settings.table or "posts",
        ),
        adapter=get_adapter("rethinkdb", settings=settings),
        after_connected=lambda svc: svc.adapter.clear(),
    )
    service.start()
    try:
        passed, total = run_checks(service.adapter)
        logger.info("checks_finished", passed=passed, total=total)
    finally:
        service.stop()


if __name__ == "__main__":
    main()
