"""Filter objects and connection options."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from store_rethinkdb.errors import ValidationError


class SortDirection(str, Enum):
    """Sort direction of a ``SortSpec``."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> SortDirection:
        """Accept ``asc``/``desc``, their long forms, ``1``/``-1`` or an enum member."""
        if isinstance(value, SortDirection):
            return value
        if value is None:
            return cls.ASC
        normalized = str(value).strip().lower()
        match normalized:
            case "asc" | "ascending" | "1":
                return cls.ASC
            case "desc" | "descending" | "-1":
                return cls.DESC
            case _:
                raise ValidationError(f"Invalid sort direction: {value!r}", field="sort.dir")


@dataclass(frozen=True)
class SortSpec:
    """Single-key ordering."""

    key: str
    dir: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, value: Any) -> SortSpec:
        """
        Build a SortSpec from the shapes callers send.

        ``{"key": "title", "dir": "desc"}``, ``"title"`` and ``"-title"``
        (descending) are all accepted.
        """
        if isinstance(value, SortSpec):
            return value
        if isinstance(value, dict):
            key = value.get("key")
            if not key:
                raise ValidationError("Sort object requires a `key`", field="sort.key")
            return cls(key=key, dir=SortDirection.parse(value.get("dir")))
        if isinstance(value, str) and value.strip():
            key = value.strip()
            if key.startswith("-"):
                key = key[1:].strip()
                if not key:
                    raise ValidationError("Sort string `-` names no field", field="sort")
                return cls(key=key, dir=SortDirection.DESC)
            return cls(key=key)
        raise ValidationError(f"Unsupported sort value: {value!r}", field="sort")


def _non_negative(name: str, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ValidationError(f"`{name}` must be an integer, got {value!r}", field=name)
    try:
        number = int(value)
    except ValueError:
        raise ValidationError(f"`{name}` must be an integer, got {value!r}", field=name) from None
    if number < 0:
        raise ValidationError(f"`{name}` must not be negative", field=name)
    return number


@dataclass
class FindParams:
    """
    Framework filter object translated into a ReQL query.

    ``query`` is handed to ``table.filter()`` untouched, so it may be a dict of
    field equalities or any ReQL predicate (``r.row["votes"].gt(2)``).
    """

    query: Any = None
    sort: SortSpec | None = None
    limit: int | None = None
    offset: int | None = None
    search: str | None = None
    search_fields: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.sort is not None:
            self.sort = SortSpec.parse(self.sort)
        self.limit = _non_negative("limit", self.limit)
        self.offset = _non_negative("offset", self.offset)
        if self.search is not None and not isinstance(self.search, str):
            if isinstance(self.search, bool) or not isinstance(self.search, int | float):
                raise ValidationError(
                    f"`search` must be a string, got {self.search!r}", field="search"
                )
            self.search = str(self.search)
        if isinstance(self.search_fields, str):
            self.search_fields = self.search_fields.split()
        else:
            self.search_fields = list(self.search_fields or [])

    @classmethod
    def from_value(cls, value: Any) -> FindParams:
        """Normalize ``None``, a dict or a FindParams into a FindParams."""
        if value is None:
            return cls()
        if isinstance(value, FindParams):
            return value
        if isinstance(value, dict):
            return cls(
                query=value.get("query"),
                sort=value.get("sort"),
                limit=value.get("limit"),
                offset=value.get("offset"),
                search=value.get("search"),
                search_fields=value.get("search_fields") or value.get("searchFields") or [],
            )
        raise ValidationError(f"Unsupported filter object: {type(value).__name__}")


@dataclass
class ConnectionOptions:
    """
    Driver connection options.

    Values that are ``None`` are left out so the driver applies its own
    defaults.
    """

    host: str = "localhost"
    port: int = 28015
    user: str | None = None
    password: str | None = None
    timeout: int | None = None
    ssl: dict[str, Any] | None = None

    # Extra options (driver-specific)
    options: dict[str, Any] = field(default_factory=dict)

    def to_connect_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``r.connect()``."""
        kwargs: dict[str, Any] = {"host": self.host, "port": self.port}
        for key in ("user", "password", "timeout", "ssl"):
            value = getattr(self, key)
            if value is not None:
                kwargs[key] = value
        kwargs.update(self.options)
        return kwargs


__all__ = [
    "SortDirection",
    "SortSpec",
    "FindParams",
    "ConnectionOptions",
]
