#!/usr/bin/env python3
"""Vote counters updated with ReQL expressions.

``update_by_id`` forwards the update payload untouched, so a ReQL expression
such as ``r.row["votes"] + 1`` is evaluated by the server atomically.

Run (server on localhost:28015)::

    python examples/vote.py
"""

from rethinkdb import r

from store_rethinkdb import ServiceSchema, StoreService
from store_rethinkdb.adapters import get_adapter
from store_rethinkdb.logging import configure_logging, get_logger
from store_rethinkdb.settings import RethinkDBSettings

logger = get_logger("examples.vote")


def vote(service: StoreService, id):
    return service.update(id, {"votes": r.row["votes"] + 1})


def unvote(service: StoreService, id):
    return service.update(id, {"votes": r.row["votes"] - 1})


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
        post = service.create({"title": "Hello", "votes": 0})
        post_id = post["_id"]

        vote(service, post_id)
        post = vote(service, post_id)
        logger.info("voted", id=post_id, votes=post["votes"])

        post = unvote(service, post_id)
        logger.info("unvoted", id=post_id, votes=post["votes"])

        logger.info("removed", result=service.remove(post_id))
    finally:
        service.stop()


if __name__ == "__main__":
    main()
