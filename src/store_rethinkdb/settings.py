"""Environment-driven settings for the RethinkDB store adapter.

Every field can be set through a ``RETHINKDB_``-prefixed environment variable
or a ``.env`` file.

Examples:
    >>> import os
    >>> os.environ["RETHINKDB_HOST"] = "db.internal"
    >>> RethinkDBSettings().host
    'db.internal'
    >>> adapter = RethinkDBAdapter.from_settings(RethinkDBSettings())

Tags:
    settings, configuration, pydantic, environment, store-rethinkdb
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from store_rethinkdb.adapters.types import ConnectionOptions


class RethinkDBSettings(BaseSettings):
    """Connection and logging settings.

    Fields
    ──────
    host, port         : RethinkDB server address
    user, password     : Credentials (driver defaults apply when unset)
    timeout            : Connect timeout in seconds
    ssl_ca_certs       : CA bundle path; enables TLS when set
    database, table    : Defaults for hosts that build their schema from env
    log_level          : Structlog log level
    log_json           : JSON output (None = auto, JSON when not a TTY)
    """

    model_config = SettingsConfigDict(
        env_prefix="RETHINKDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Connection ───────────────────────────────────────────────
    host: str = "localhost"
    port: int = Field(default=28015, ge=1, le=65535)
    user: str = "admin"
    password: str = ""
    timeout: int = Field(default=20, ge=1)
    ssl_ca_certs: str | None = None

    # ── Schema defaults ──────────────────────────────────────────
    database: str = ""
    table: str = ""

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    def to_connection_options(self) -> ConnectionOptions:
        """Connection options for ``r.connect()``."""
        return ConnectionOptions(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            timeout=self.timeout,
            ssl={"ca_certs": self.ssl_ca_certs} if self.ssl_ca_certs else None,
        )


__all__ = [
    "RethinkDBSettings",
]
