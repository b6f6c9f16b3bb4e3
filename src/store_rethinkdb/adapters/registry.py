"""Store adapter registry and factory.

Hosts pick an adapter by name from configuration instead of importing a
concrete class.  ``get_adapter()`` creates an unconnected instance; the host
still calls ``init()`` and ``connect()``.

Tags:
    store-rethinkdb, database, registry, factory
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from store_rethinkdb.errors import ConfigError

from .base import StoreAdapter
from .rethinkdb import RethinkDBAdapter

if TYPE_CHECKING:
    from store_rethinkdb.settings import RethinkDBSettings


class AdapterRegistry:
    """
    Registry for store adapter classes.

    Pre-registered adapters:
    - ``rethinkdb`` / ``rethink``: :class:`RethinkDBAdapter`
    """

    def __init__(self):
        self._factories: dict[str, type[StoreAdapter]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default adapters."""
        self._factories["rethinkdb"] = RethinkDBAdapter
        self._factories["rethink"] = RethinkDBAdapter  # Alias

    def register(self, name: str, adapter_class: type[StoreAdapter]) -> None:
        """Register an adapter class."""
        self._factories[name.lower()] = adapter_class

    def create(
        self, name: str, settings: RethinkDBSettings | None = None, **kwargs: Any
    ) -> StoreAdapter:
        """Create an adapter by name, from settings when given, else from kwargs."""
        name = name.lower()
        if name not in self._factories:
            raise ConfigError(f"Unknown store adapter: {name}")
        adapter_class = self._factories[name]
        if settings is not None:
            return adapter_class.from_settings(settings)
        return adapter_class(**kwargs)

    def list_adapters(self) -> list[str]:
        """List registered adapter names."""
        return sorted(self._factories.keys())


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(
    name: str = "rethinkdb", settings: RethinkDBSettings | None = None, **kwargs: Any
) -> StoreAdapter:
    """
    Get a store adapter by name.

    Usage:
        adapter = get_adapter("rethinkdb", host="db.internal", port=28015)
        adapter = get_adapter("rethinkdb", settings=RethinkDBSettings())
    """
    return adapter_registry.create(name, settings, **kwargs)


__all__ = [
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
