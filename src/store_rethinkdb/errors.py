"""
Structured error types for the RethinkDB store adapter.

Errors raised by the adapter itself carry a category, a structured context
(database, table, operation) and an optional chained cause.  Exceptions raised
by the ``rethinkdb`` driver are never wrapped: they reach the caller unchanged.

Architecture:
    ::

        ┌───────────────────────────────────────────────────────┐
        │                      StoreError                        │
        │            (category, context, cause)                  │
        ├───────────────────────────────────────────────────────┤
        │  ConfigError           ValidationError   DatabaseError │
        │  (CONFIG)              (VALIDATION)      (DATABASE)    │
        │      │                                        │        │
        │  MissingConfigError                      WriteError    │
        │  InvalidConfigError                                    │
        └───────────────────────────────────────────────────────┘

Examples:
    >>> error = MissingConfigError("table")
    >>> error.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> WriteError("Duplicate primary key").with_context(table="posts").context.table
    'posts'

Guardrails:
    ❌ DON'T: Wrap ``ReqlError`` from the driver
    ✅ DO: Let driver errors propagate, raise StoreError only for adapter checks

Tags:
    error-handling, exception-hierarchy, error-context, store-rethinkdb
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification and routing."""

    DATABASE = "DATABASE"         # Write summary errors
    CONFIG = "CONFIG"             # Missing schema, unknown adapter
    VALIDATION = "VALIDATION"     # Malformed filter objects
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a StoreError.

    Only the fields that are set end up in :meth:`to_dict`; anything without a
    dedicated field goes to ``metadata``.
    """

    database: str | None = None
    table: str | None = None
    operation: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["database", "table", "operation"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class StoreError(Exception):
    """
    Base exception for all errors raised by the adapter.

    Subclasses set ``default_category``; callers can override it per instance.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> StoreError:
        """
        Add context to this error (fluent API).

        Usage:
            raise WriteError("insert failed").with_context(
                table="posts",
                operation="insert",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }

        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(StoreError):
    """Configuration error: missing schema fields, unknown adapters."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """A required configuration value is missing."""

    def __init__(self, key: str, message: str | None = None):
        super().__init__(message or f"Missing required configuration: {key}")
        self.key = key


class InvalidConfigError(ConfigError):
    """A configuration value is present but unusable."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")
        self.key = key
        self.value = value


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(StoreError):
    """A filter object could not be translated into a query."""

    default_category = ErrorCategory.VALIDATION

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field is not None:
            result["field"] = self.field
        return result


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(StoreError):
    """Database-level failure detected by the adapter."""

    default_category = ErrorCategory.DATABASE


class WriteError(DatabaseError):
    """A write summary reported errors (``errors > 0``)."""

    def __init__(self, message: str, *, summary: dict[str, Any] | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.summary = summary or {}


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "StoreError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "ValidationError",
    "DatabaseError",
    "WriteError",
]
